''' Opcode word -> instruction '''

from typing import Callable, Dict, TypeAlias

import c8emu.common.ops as ops
from c8emu.common.errors import DecodeError


# - Field extraction - #

def get_first(opcode: int) -> int:
    return opcode >> 12


def get_addr(opcode: int) -> int:
    return opcode & 0x0FFF


def get_x(opcode: int) -> ops.Reg:
    return ops.Reg((opcode & 0x0F00) >> 8)


def get_y(opcode: int) -> ops.Reg:
    return ops.Reg((opcode & 0x00F0) >> 4)


def get_nibble(opcode: int) -> int:
    return opcode & 0x000F


def get_byte(opcode: int) -> int:
    return opcode & 0x00FF


# - Families - #

Decoder: TypeAlias = Callable[[int], ops.Instruction]


def decode_system(opcode: int) -> ops.Instruction:
    if opcode == ops.Cls.CODE:
        return ops.Cls()

    if opcode == ops.Ret.CODE:
        return ops.Ret()

    return ops.Sys(get_addr(opcode))


ARITHMETIC: Dict[int, Decoder] = {
    0x0: lambda o: ops.Ld(get_x(o), get_y(o)),
    0x1: lambda o: ops.Or(get_x(o), get_y(o)),
    0x2: lambda o: ops.And(get_x(o), get_y(o)),
    0x3: lambda o: ops.Xor(get_x(o), get_y(o)),
    0x4: lambda o: ops.Add(get_x(o), get_y(o)),
    0x5: lambda o: ops.Sub(get_x(o), get_y(o)),
    0x6: lambda o: ops.Shr(get_x(o)),
    0x7: lambda o: ops.Subn(get_x(o), get_y(o)),
    0xE: lambda o: ops.Shl(get_x(o)),
}

KEYS: Dict[int, Decoder] = {
    0x9E: lambda o: ops.Skp(get_x(o)),
    0xA1: lambda o: ops.Sknp(get_x(o)),
}

MISC: Dict[int, Decoder] = {
    0x07: lambda o: ops.LdVxDt(get_x(o)),
    0x0A: lambda o: ops.LdVxK(get_x(o)),
    0x15: lambda o: ops.LdDtVx(get_x(o)),
    0x18: lambda o: ops.LdStVx(get_x(o)),
    0x1E: lambda o: ops.AddI(get_x(o)),
    0x29: lambda o: ops.LdF(get_x(o)),
    0x33: lambda o: ops.LdB(get_x(o)),
    0x55: lambda o: ops.LdIVx(get_x(o)),
    0x65: lambda o: ops.LdVxI(get_x(o)),
}


def sub_table(table: Dict[int, Decoder], selector: Callable[[int], int]) -> Decoder:
    def decode_family(opcode: int) -> ops.Instruction:
        decoder = table.get(selector(opcode))

        if decoder is None:
            raise DecodeError(opcode)

        return decoder(opcode)

    return decode_family


FAMILIES: Dict[int, Decoder] = {
    0x0: decode_system,
    0x1: lambda o: ops.Jp(get_addr(o)),
    0x2: lambda o: ops.Call(get_addr(o)),
    0x3: lambda o: ops.Se(get_x(o), get_byte(o)),
    0x4: lambda o: ops.Sne(get_x(o), get_byte(o)),
    0x5: lambda o: ops.Se(get_x(o), get_y(o)),
    0x6: lambda o: ops.Ld(get_x(o), get_byte(o)),
    0x7: lambda o: ops.Add(get_x(o), get_byte(o)),
    0x8: sub_table(ARITHMETIC, get_nibble),
    0x9: lambda o: ops.Sne(get_x(o), get_y(o)),
    0xA: lambda o: ops.LdI(get_addr(o)),
    0xB: lambda o: ops.JpV0(get_addr(o)),
    0xC: lambda o: ops.Rnd(get_x(o), get_byte(o)),
    0xD: lambda o: ops.Drw(get_x(o), get_y(o), get_nibble(o)),
    0xE: sub_table(KEYS, get_byte),
    0xF: sub_table(MISC, get_byte),
}


def decode(opcode: int) -> ops.Instruction:
    if not 0 <= opcode <= 0xFFFF:
        raise DecodeError(opcode)

    return FAMILIES[get_first(opcode)](opcode)
