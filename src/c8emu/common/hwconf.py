# Memory
MEMORY_SIZE = 0xFFF
ROM_BASE = 0x200
MAX_ROM_SIZE = MEMORY_SIZE - ROM_BASE
OPCODE_SIZE = 2

# Registers
GP_REGS = 16
FLAG_REG = 0xF
STACK_DEPTH = 16

# Timers
TIMER_HZ = 60
TIMER_PERIOD = 1.0 / TIMER_HZ

# Display
SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32

# Keypad
KEY_COUNT = 16
KEY_WAIT_TIMEOUT = 0.05

# Built-in hex glyphs, 0..F
GLYPH_BASE = 0x000
GLYPH_SIZE = 5

GLYPHS = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])
