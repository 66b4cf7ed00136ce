import sys

import pytest

import c8emu.common.ops as ops
from c8emu.common.hwconf import ROM_BASE
from c8emu.runtime.cpu import State
from c8emu.runtime.screen import PygameSurface, KEYMAP

from unit_utils import V, encode, make_cpu


def test_not_running_before_start():
    assert not PygameSurface().is_running()


def test_keymap_covers_keypad():
    assert sorted(KEYMAP.values()) == list(range(16))


def test_on_key():
    surface = PygameSurface()
    surface.on_key('q', True)
    surface.on_key('p', True)

    assert surface.key_down(0x4)
    assert surface.poll_pressed_key() == 0x4

    surface.on_key('q', False)
    assert not surface.key_down(0x4)


@pytest.mark.filterwarnings('ignore::pytest.PytestUnhandledThreadExceptionWarning')
def test_missing_pygame_stops_surface(monkeypatch):
    monkeypatch.setitem(sys.modules, 'pygame', None)

    surface = PygameSurface()
    surface.start()

    try:
        assert not surface.is_running()

        proc = make_cpu(encode([ops.Add(V(1), 1), ops.Jp(ROM_BASE)]), surface)
        proc.run()

        assert proc.state == State.HALTED
        assert proc.cycles == 0
    finally:
        surface.stop()
