class EmulatorError(Exception):
    ''' Base of all fatal emulator conditions '''
    pass


class DecodeError(EmulatorError):
    def __init__(self, opcode: int):
        super().__init__(f'Unrecognized opcode 0x{opcode:04X}')
        self.opcode = opcode


class StackError(EmulatorError):
    pass


class InvalidKeyCode(EmulatorError):
    def __init__(self, value: int, reg: int):
        super().__init__(f'Invalid key value {value} in register V{reg:X}')
        self.value = value
        self.reg = reg


class InvalidSpriteIndex(EmulatorError):
    def __init__(self, value: int):
        super().__init__(f'No glyph sprite for 0x{value:X}')
        self.value = value


class AddressError(EmulatorError):
    def __init__(self, addr: int, length: int = 1):
        super().__init__(f'Memory access out of range: 0x{addr:X} (+{length})')
        self.addr = addr
        self.length = length


class LoadError(EmulatorError):
    pass


class AssemblyError(EmulatorError):
    pass
