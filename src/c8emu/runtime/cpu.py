import random
import logging as lg
from enum import Enum
from typing import Callable, Dict

import c8emu.common.ops as ops
from c8emu.common.hwconf import OPCODE_SIZE, GLYPH_BASE, GLYPH_SIZE, KEY_COUNT, KEY_WAIT_TIMEOUT
from c8emu.common.errors import EmulatorError, InvalidKeyCode, InvalidSpriteIndex
from c8emu.runtime.decoder import decode
from c8emu.runtime.memory import Memory
from c8emu.runtime.registers import Registers
from c8emu.runtime.stack import CallStack
from c8emu.runtime.surface import Surface


class State(Enum):
    RUNNING = 'running'
    HALTED = 'halted'


def to_bcd(value: int) -> list[int]:
    return [value // 100, (value // 10) % 10, value % 10]


class CPU():
    memory: Memory
    regs: Registers
    stack: CallStack
    surface: Surface
    state: State

    def __init__(
        self,
        memory: Memory,
        regs: Registers,
        surface: Surface,
        rng: random.Random | None = None
    ):
        self.memory = memory        # Ref. to memory
        self.regs = regs            # Ref. to register file (owns timers)
        self.surface = surface      # Ref. to display/input
        self.stack = CallStack()
        self.rng = rng if rng is not None else random.Random()
        self.state = State.HALTED
        self.cycles = 0

    # - Helpers - #

    def operand(self, value: ops.Operand) -> int:
        if isinstance(value, ops.Reg):
            return self.regs.get(value.index)

        return value

    def skip_if(self, condition: bool):
        if condition:
            self.regs.pc += OPCODE_SIZE

    def key_code(self, reg: ops.Reg) -> int:
        value = self.regs.get(reg.index)

        if value >= KEY_COUNT:
            raise InvalidKeyCode(value, reg.index)

        return value

    def arithm_pair(self, instr: ops.RegPair, op: Callable[[int, int], int]):
        a = self.regs.get(instr.x.index)
        b = self.regs.get(instr.y.index)
        self.regs.set(instr.x.index, op(a, b))

    def subtract(self, x: ops.Reg, y: ops.Reg):
        a = self.regs.get(x.index)
        b = self.regs.get(y.index)
        self.regs.set(x.index, a - b)
        self.regs.set_flag(a >= b)

    # - Operations - #

    def sys(self, instr: ops.Sys):
        pass

    def cls(self, instr: ops.Cls):
        self.surface.clear_frame()
        self.surface.publish_frame()

    def ret(self, instr: ops.Ret):
        self.regs.pc = self.stack.pop()
        self.regs.sp = len(self.stack)

    def jp(self, instr: ops.Jp):
        self.regs.pc = instr.addr

    def jp_v0(self, instr: ops.JpV0):
        self.regs.pc = instr.addr + self.regs.get(0)

    def call(self, instr: ops.Call):
        self.stack.push(self.regs.pc)
        self.regs.sp = len(self.stack)
        self.regs.pc = instr.addr

    def se(self, instr: ops.Se):
        self.skip_if(self.regs.get(instr.x.index) == self.operand(instr.y))

    def sne(self, instr: ops.Sne):
        self.skip_if(self.regs.get(instr.x.index) != self.operand(instr.y))

    def ld(self, instr: ops.Ld):
        self.regs.set(instr.x.index, self.operand(instr.y))

    def add(self, instr: ops.Add):
        total = self.regs.get(instr.x.index) + self.operand(instr.y)
        self.regs.set(instr.x.index, total)
        self.regs.set_flag(total > 0xFF)

    def add_i(self, instr: ops.AddI):
        self.regs.set_i(self.regs.get_i() + self.regs.get(instr.x.index))

    def bor(self, instr: ops.Or):
        self.arithm_pair(instr, lambda a, b: a | b)

    def band(self, instr: ops.And):
        self.arithm_pair(instr, lambda a, b: a & b)

    def xor(self, instr: ops.Xor):
        self.arithm_pair(instr, lambda a, b: a ^ b)

    def sub(self, instr: ops.Sub):
        self.subtract(instr.x, instr.y)

    def subn(self, instr: ops.Subn):
        self.subtract(instr.y, instr.x)

    def shr(self, instr: ops.Shr):
        value = self.regs.get(instr.x.index)
        self.regs.set(instr.x.index, value >> 1)
        self.regs.set_flag(value & 0x01)

    def shl(self, instr: ops.Shl):
        value = self.regs.get(instr.x.index)
        self.regs.set(instr.x.index, value << 1)
        self.regs.set_flag(value & 0x80)

    def rnd(self, instr: ops.Rnd):
        self.regs.set(instr.x.index, self.rng.randint(0, 0xFF) & instr.byte)

    def drw(self, instr: ops.Drw):
        sprite = self.memory.read(self.regs.get_i(), instr.n)
        collision = self.surface.draw(
            self.regs.get(instr.x.index),
            self.regs.get(instr.y.index),
            sprite
        )
        self.surface.publish_frame()
        self.regs.set_flag(collision)

    def skp(self, instr: ops.Skp):
        self.skip_if(self.surface.key_down(self.key_code(instr.x)))

    def sknp(self, instr: ops.Sknp):
        self.skip_if(not self.surface.key_down(self.key_code(instr.x)))

    def ld_i(self, instr: ops.LdI):
        self.regs.set_i(instr.addr)

    def ld_vx_dt(self, instr: ops.LdVxDt):
        self.regs.set(instr.x.index, self.regs.get_dt())

    def ld_vx_k(self, instr: ops.LdVxK):
        lg.debug(f'Waiting for key into {instr.x}')
        self.surface.clear_press()

        while self.surface.is_running():
            key = self.surface.poll_pressed_key()

            if key is not None:
                if not 0 <= key < KEY_COUNT:
                    raise InvalidKeyCode(key, instr.x.index)

                self.regs.set(instr.x.index, key)
                return

            self.surface.wait_input(KEY_WAIT_TIMEOUT)

        lg.debug('Key wait interrupted by shutdown')

    def ld_dt_vx(self, instr: ops.LdDtVx):
        self.regs.set_dt(self.regs.get(instr.x.index))

    def ld_st_vx(self, instr: ops.LdStVx):
        self.regs.set_st(self.regs.get(instr.x.index))

    def ld_f(self, instr: ops.LdF):
        value = self.regs.get(instr.x.index)

        if value > 0xF:
            raise InvalidSpriteIndex(value)

        self.regs.set_i(GLYPH_BASE + value * GLYPH_SIZE)

    def ld_b(self, instr: ops.LdB):
        self.memory.write(self.regs.get_i(), to_bcd(self.regs.get(instr.x.index)))

    def ld_i_vx(self, instr: ops.LdIVx):
        count = instr.x.index + 1
        self.memory.write(self.regs.get_i(), self.regs.v[:count])

    def ld_vx_i(self, instr: ops.LdVxI):
        count = instr.x.index + 1

        for n, value in enumerate(self.memory.read(self.regs.get_i(), count)):
            self.regs.set(n, value)

    HANDLERS: Dict[type, Callable] = {
        ops.Sys: sys,
        ops.Cls: cls,
        ops.Ret: ret,
        ops.Jp: jp,
        ops.JpV0: jp_v0,
        ops.Call: call,
        ops.Se: se,
        ops.Sne: sne,
        ops.Ld: ld,
        ops.Add: add,
        ops.AddI: add_i,
        ops.Or: bor,
        ops.And: band,
        ops.Xor: xor,
        ops.Sub: sub,
        ops.Subn: subn,
        ops.Shr: shr,
        ops.Shl: shl,
        ops.Rnd: rnd,
        ops.Drw: drw,
        ops.Skp: skp,
        ops.Sknp: sknp,
        ops.LdI: ld_i,
        ops.LdVxDt: ld_vx_dt,
        ops.LdVxK: ld_vx_k,
        ops.LdDtVx: ld_dt_vx,
        ops.LdStVx: ld_st_vx,
        ops.LdF: ld_f,
        ops.LdB: ld_b,
        ops.LdIVx: ld_i_vx,
        ops.LdVxI: ld_vx_i,
    }

    # -- Implementation -- #

    def execute(self, instr: ops.Instruction):
        handler = self.HANDLERS[type(instr)]
        handler(self, instr)

        if not isinstance(instr, ops.JUMPS):
            self.regs.pc += OPCODE_SIZE

    def exec_next(self):
        pc = self.regs.pc
        instr = decode(self.memory.fetch(pc))
        lg.debug(f'{pc:03X}: {instr}')
        self.execute(instr)
        self.cycles += 1

    def can_fetch(self) -> bool:
        return 0 <= self.regs.pc and self.regs.pc + OPCODE_SIZE <= len(self.memory)

    def run(self, cycles: int | None = None):
        self.state = State.RUNNING
        budget = cycles

        try:
            while self.surface.is_running() and self.can_fetch():
                if budget is not None:
                    if budget == 0:
                        break

                    budget -= 1

                self.exec_next()

        except EmulatorError as e:
            lg.error(f'Execution halted at 0x{self.regs.pc:03X}: {e}')
            self.regs.debug_dump()
            raise

        finally:
            self.state = State.HALTED

        lg.info(f'Execution halted after {self.cycles} cycles')
