import pytest

import c8emu.common.ops as ops
from c8emu.common.hwconf import ROM_BASE
from c8emu.common.errors import DecodeError, StackError
from c8emu.runtime.cpu import CPU, State

from unit_utils import V, encode, make_cpu
from fixtures import surface, machine  # noqa: F401


ADVANCING = [
    ops.Sys(0x123),
    ops.Cls(),
    ops.Se(V(1), 0x01),
    ops.Sne(V(1), 0x00),
    ops.Ld(V(1), 0x10),
    ops.Ld(V(1), V(2)),
    ops.Add(V(1), 0x10),
    ops.Add(V(1), V(2)),
    ops.AddI(V(1)),
    ops.Or(V(1), V(2)),
    ops.And(V(1), V(2)),
    ops.Xor(V(1), V(2)),
    ops.Sub(V(1), V(2)),
    ops.Subn(V(1), V(2)),
    ops.Shr(V(1)),
    ops.Shl(V(1)),
    ops.Rnd(V(1), 0xFF),
    ops.Drw(V(0), V(0), 1),
    ops.LdI(0x300),
    ops.LdVxDt(V(1)),
    ops.LdDtVx(V(1)),
    ops.LdStVx(V(1)),
    ops.LdF(V(1)),
    ops.LdB(V(1)),
    ops.LdIVx(V(3)),
    ops.LdVxI(V(3)),
]

# PC checks for these live with their own tests
COVERED_ELSEWHERE = {ops.Ret, ops.Skp, ops.Sknp, ops.LdVxK}


def test_every_non_jump_is_checked():
    checked = {type(instr) for instr in ADVANCING} | COVERED_ELSEWHERE
    assert checked == set(CPU.HANDLERS) - set(ops.JUMPS)


@pytest.mark.parametrize('instr', ADVANCING, ids=str)
def test_advances_pc_by_two(machine, instr):  # noqa: F811
    machine.execute(instr)
    assert machine.regs.pc == ROM_BASE + 2


def test_jumps_set_pc(machine):  # noqa: F811
    machine.execute(ops.Jp(0x345))
    assert machine.regs.pc == 0x345

    machine.regs.set(0, 0x10)
    machine.execute(ops.JpV0(0x300))
    assert machine.regs.pc == 0x310

    machine.execute(ops.Call(0x400))
    assert machine.regs.pc == 0x400


@pytest.mark.parametrize('instr, skipped', [
    (ops.Se(V(1), 0x05), True),
    (ops.Se(V(1), 0x06), False),
    (ops.Se(V(1), V(2)), True),
    (ops.Sne(V(1), 0x05), False),
    (ops.Sne(V(1), 0x06), True),
    (ops.Sne(V(1), V(3)), True),
])
def test_skips(machine, instr, skipped):  # noqa: F811
    machine.regs.set(1, 5)
    machine.regs.set(2, 5)
    machine.regs.set(3, 6)
    machine.execute(instr)

    assert machine.regs.pc == ROM_BASE + (4 if skipped else 2)


def test_call_and_return(machine):  # noqa: F811
    machine.execute(ops.Call(0x300))
    assert (machine.regs.pc, machine.regs.sp) == (0x300, 1)

    machine.execute(ops.Ret())
    assert (machine.regs.pc, machine.regs.sp) == (ROM_BASE + 2, 0)


def test_sixteen_nested_calls(machine):  # noqa: F811
    for _ in range(16):
        machine.execute(ops.Call(machine.regs.pc + 2))

    assert machine.regs.sp == 16

    with pytest.raises(StackError):
        machine.execute(ops.Call(0x300))


def test_return_on_empty_stack(machine):  # noqa: F811
    with pytest.raises(StackError):
        machine.execute(ops.Ret())


def test_run_stops_when_surface_closes(surface):  # noqa: F811
    proc = make_cpu(encode([ops.Jp(ROM_BASE)]), surface)
    surface.close()
    proc.run()

    assert proc.state == State.HALTED
    assert proc.cycles == 0


def test_run_stops_past_memory():
    proc = make_cpu(encode([ops.Jp(0xFFE)]))
    proc.run()

    assert proc.state == State.HALTED
    assert proc.cycles == 1
    assert proc.regs.pc == 0xFFE


def test_empty_cartridge_runs_off_the_end():
    proc = make_cpu()
    proc.run()

    assert proc.regs.pc == 0xFFE
    assert proc.cycles == (0xFFE - ROM_BASE) // 2


def test_run_budget():
    proc = make_cpu(encode([ops.Add(V(1), 1), ops.Jp(ROM_BASE)]))
    proc.run(10)

    assert proc.cycles == 10
    assert proc.regs.get(1) == 5


def test_fatal_error_halts():
    proc = make_cpu(encode([ops.Ld(V(1), 1), ops.Ld(V(1), 2)]) + b'\xFF\xFF')

    with pytest.raises(DecodeError):
        proc.run()

    assert proc.state == State.HALTED
    assert proc.regs.pc == ROM_BASE + 4
    assert proc.regs.get(1) == 2
