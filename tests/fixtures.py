# type: ignore
import pytest

from c8emu.runtime.surface import HeadlessSurface

from unit_utils import make_cpu


@pytest.fixture
def surface():
    surface = HeadlessSurface()
    yield surface
    surface.close()


@pytest.fixture
def machine(surface):
    proc = make_cpu(surface=surface)
    yield proc
    proc.regs.stop()
