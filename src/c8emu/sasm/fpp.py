import struct
import logging as lg
from typing import Any, Callable, Dict, List, Tuple

import c8emu.common.ops as ops
from c8emu.common.hwconf import ROM_BASE, OPCODE_SIZE
from c8emu.common.errors import AssemblyError

Tokens = List[Any]
AddrFactory = Callable[[int], ops.Instruction]
Command = Tuple[str, bytes | Tuple[AddrFactory, str]]


class FPP:
    ''' First pass processor '''
    cmd_list: List[Command]
    label_dict: Dict[str, int]

    def __init__(self, base: int = ROM_BASE):
        self.cmd_list = list()
        self.base = base
        self.offset = 0
        self.label_dict = dict()

    def address(self) -> int:
        return self.base + self.offset

    # Handlers
    def issue_bytes(self, bytestr: bytes):
        self.cmd_list.append(('bytes', bytestr))
        self.offset += len(bytestr)

    def issue_instruction(self, instr: ops.Instruction):
        lg.debug(f'Issuing {instr} @ 0x{self.address():03X}')
        self.issue_bytes(struct.pack('>H', instr.encode()))

    def issue_ref(self, ref: Tuple[AddrFactory, str]):
        lg.debug(f'Ref {ref[1]} @ 0x{self.address():03X}')
        self.cmd_list.append(('ref', ref))
        self.offset += OPCODE_SIZE  # placeholder-bytes

    def issue_db(self, values: Tokens):
        self.issue_bytes(bytes(values))

    def issue_dw(self, values: Tokens):
        self.issue_bytes(b''.join(struct.pack('>H', v) for v in values))

    def on_label(self, labelname: str):
        if labelname in self.label_dict:
            raise AssemblyError(f'Duplicate label {labelname}')

        self.label_dict[labelname] = self.address()
        lg.debug(f'Label {labelname} @ 0x{self.address():03X}')

    def on_fail(self, rest: str):
        raise AssemblyError(f'Unknown command {rest}')

    # Second pass
    def resolve(self, labelname: str) -> int:
        if labelname not in self.label_dict:
            raise AssemblyError(f'Undefined label {labelname}')

        return self.label_dict[labelname]

    def link(self) -> bytes:
        bytestr = bytearray()

        for (t, d) in self.cmd_list:
            if t == 'bytes':
                assert isinstance(d, bytes)
                bytestr += d

            if t == 'ref':
                assert isinstance(d, tuple)
                (factory, labelname) = d
                instr = factory(self.resolve(labelname))
                bytestr += struct.pack('>H', instr.encode())

        return bytes(bytestr)
