''' CHIP-8 instruction set '''

from dataclasses import dataclass
from typing import ClassVar, TypeAlias


@dataclass(frozen=True)
class Reg:
    index: int

    def __str__(self) -> str:
        return f'V{self.index:X}'


Operand: TypeAlias = Reg | int


def fmt_operand(operand: Operand) -> str:
    if isinstance(operand, Reg):
        return str(operand)

    return f'0x{operand:02X}'


class Instruction:
    ''' Decoded instruction; every variant encodes back into its opcode '''

    def encode(self) -> int:
        raise NotImplementedError()


# - Bare - #

@dataclass(frozen=True)
class Bare(Instruction):
    CODE: ClassVar[int]
    MNEMONIC: ClassVar[str]

    def encode(self) -> int:
        return self.CODE

    def __str__(self) -> str:
        return self.MNEMONIC


@dataclass(frozen=True)
class Cls(Bare):
    CODE = 0x00E0
    MNEMONIC = 'CLS'


@dataclass(frozen=True)
class Ret(Bare):
    CODE = 0x00EE
    MNEMONIC = 'RET'


# - 12-bit address - #

@dataclass(frozen=True)
class Addressed(Instruction):
    addr: int

    CODE: ClassVar[int]
    FORMAT: ClassVar[str]

    def encode(self) -> int:
        return self.CODE | (self.addr & 0x0FFF)

    def __str__(self) -> str:
        return self.FORMAT.format(addr=f'0x{self.addr:03X}')


@dataclass(frozen=True)
class Sys(Addressed):
    CODE = 0x0000
    FORMAT = 'SYS {addr}'


@dataclass(frozen=True)
class Jp(Addressed):
    CODE = 0x1000
    FORMAT = 'JP {addr}'


@dataclass(frozen=True)
class Call(Addressed):
    CODE = 0x2000
    FORMAT = 'CALL {addr}'


@dataclass(frozen=True)
class LdI(Addressed):
    CODE = 0xA000
    FORMAT = 'LD I, {addr}'


@dataclass(frozen=True)
class JpV0(Addressed):
    CODE = 0xB000
    FORMAT = 'JP V0, {addr}'


# - Register, register-or-byte - #

@dataclass(frozen=True)
class RegOrByte(Instruction):
    x: Reg
    y: Operand

    IMM_CODE: ClassVar[int]
    REG_CODE: ClassVar[int]
    MNEMONIC: ClassVar[str]

    def encode(self) -> int:
        if isinstance(self.y, Reg):
            return self.REG_CODE | self.x.index << 8 | self.y.index << 4

        return self.IMM_CODE | self.x.index << 8 | (self.y & 0xFF)

    def __str__(self) -> str:
        return f'{self.MNEMONIC} {self.x}, {fmt_operand(self.y)}'


@dataclass(frozen=True)
class Se(RegOrByte):
    IMM_CODE = 0x3000
    REG_CODE = 0x5000
    MNEMONIC = 'SE'


@dataclass(frozen=True)
class Sne(RegOrByte):
    IMM_CODE = 0x4000
    REG_CODE = 0x9000
    MNEMONIC = 'SNE'


@dataclass(frozen=True)
class Ld(RegOrByte):
    IMM_CODE = 0x6000
    REG_CODE = 0x8000
    MNEMONIC = 'LD'


@dataclass(frozen=True)
class Add(RegOrByte):
    IMM_CODE = 0x7000
    REG_CODE = 0x8004
    MNEMONIC = 'ADD'


# - Register pair (8xyN) - #

@dataclass(frozen=True)
class RegPair(Instruction):
    x: Reg
    y: Reg

    CODE: ClassVar[int]
    MNEMONIC: ClassVar[str]

    def encode(self) -> int:
        return self.CODE | self.x.index << 8 | self.y.index << 4

    def __str__(self) -> str:
        return f'{self.MNEMONIC} {self.x}, {self.y}'


@dataclass(frozen=True)
class Or(RegPair):
    CODE = 0x8001
    MNEMONIC = 'OR'


@dataclass(frozen=True)
class And(RegPair):
    CODE = 0x8002
    MNEMONIC = 'AND'


@dataclass(frozen=True)
class Xor(RegPair):
    CODE = 0x8003
    MNEMONIC = 'XOR'


@dataclass(frozen=True)
class Sub(RegPair):
    CODE = 0x8005
    MNEMONIC = 'SUB'


@dataclass(frozen=True)
class Subn(RegPair):
    CODE = 0x8007
    MNEMONIC = 'SUBN'


# - Single register - #

@dataclass(frozen=True)
class RegOnly(Instruction):
    x: Reg

    CODE: ClassVar[int]
    FORMAT: ClassVar[str]

    def encode(self) -> int:
        return self.CODE | self.x.index << 8

    def __str__(self) -> str:
        return self.FORMAT.format(x=self.x)


@dataclass(frozen=True)
class Shr(RegOnly):
    CODE = 0x8006
    FORMAT = 'SHR {x}'


@dataclass(frozen=True)
class Shl(RegOnly):
    CODE = 0x800E
    FORMAT = 'SHL {x}'


@dataclass(frozen=True)
class Skp(RegOnly):
    CODE = 0xE09E
    FORMAT = 'SKP {x}'


@dataclass(frozen=True)
class Sknp(RegOnly):
    CODE = 0xE0A1
    FORMAT = 'SKNP {x}'


@dataclass(frozen=True)
class LdVxDt(RegOnly):
    CODE = 0xF007
    FORMAT = 'LD {x}, DT'


@dataclass(frozen=True)
class LdVxK(RegOnly):
    CODE = 0xF00A
    FORMAT = 'LD {x}, K'


@dataclass(frozen=True)
class LdDtVx(RegOnly):
    CODE = 0xF015
    FORMAT = 'LD DT, {x}'


@dataclass(frozen=True)
class LdStVx(RegOnly):
    CODE = 0xF018
    FORMAT = 'LD ST, {x}'


@dataclass(frozen=True)
class AddI(RegOnly):
    CODE = 0xF01E
    FORMAT = 'ADD I, {x}'


@dataclass(frozen=True)
class LdF(RegOnly):
    CODE = 0xF029
    FORMAT = 'LD F, {x}'


@dataclass(frozen=True)
class LdB(RegOnly):
    CODE = 0xF033
    FORMAT = 'LD B, {x}'


@dataclass(frozen=True)
class LdIVx(RegOnly):
    CODE = 0xF055
    FORMAT = 'LD [I], {x}'


@dataclass(frozen=True)
class LdVxI(RegOnly):
    CODE = 0xF065
    FORMAT = 'LD {x}, [I]'


# - Odd shapes - #

@dataclass(frozen=True)
class Rnd(Instruction):
    x: Reg
    byte: int

    def encode(self) -> int:
        return 0xC000 | self.x.index << 8 | (self.byte & 0xFF)

    def __str__(self) -> str:
        return f'RND {self.x}, 0x{self.byte:02X}'


@dataclass(frozen=True)
class Drw(Instruction):
    x: Reg
    y: Reg
    n: int

    def encode(self) -> int:
        return 0xD000 | self.x.index << 8 | self.y.index << 4 | (self.n & 0xF)

    def __str__(self) -> str:
        return f'DRW {self.x}, {self.y}, {self.n}'


# Instructions that set PC themselves
JUMPS = (Jp, JpV0, Call)
