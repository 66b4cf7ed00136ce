import struct
import logging as lg
from pathlib import Path

from c8emu.common.hwconf import (
    MEMORY_SIZE, ROM_BASE, MAX_ROM_SIZE, OPCODE_SIZE, GLYPHS, GLYPH_BASE
)
from c8emu.common.errors import AddressError, LoadError


class Memory:
    ''' Flat RAM with the hex glyphs resident at GLYPH_BASE '''

    def __init__(self, size: int = MEMORY_SIZE):
        self.data = bytearray(size)
        self.data[GLYPH_BASE:GLYPH_BASE + len(GLYPHS)] = GLYPHS

    def __len__(self) -> int:
        return len(self.data)

    def check(self, addr: int, length: int = 1):
        if addr < 0 or addr + length > len(self.data):
            raise AddressError(addr, length)

    def read(self, addr: int, length: int = 1) -> bytes:
        self.check(addr, length)
        return bytes(self.data[addr:addr + length])

    def write(self, addr: int, buf: bytes | bytearray | list[int]):
        self.check(addr, len(buf))
        self.data[addr:addr + len(buf)] = bytes(buf)

    def fetch(self, addr: int) -> int:
        self.check(addr, OPCODE_SIZE)
        (opcode,) = struct.unpack('>H', self.data[addr:addr + OPCODE_SIZE])
        return opcode

    def load(self, rom: bytes):
        if len(rom) > MAX_ROM_SIZE:
            raise LoadError(
                f'Cartridge is {len(rom)} bytes, at most {MAX_ROM_SIZE} fit'
            )

        self.data[ROM_BASE:ROM_BASE + len(rom)] = rom
        lg.debug(f'Loaded {len(rom)} bytes @ 0x{ROM_BASE:X}')


def read_cartridge(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise LoadError(f'Could not open file `{path}`: {e}') from e
