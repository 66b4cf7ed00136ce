import sys
from pathlib import Path
import logging as lg
import traceback

import click

from c8emu.common.errors import EmulatorError, LoadError
from c8emu.runtime.memory import Memory, read_cartridge
from c8emu.runtime.registers import Registers
from c8emu.runtime.surface import Surface, HeadlessSurface
from c8emu.runtime.cpu import CPU


EXIT_HALT = 0
EXIT_LOAD_ERROR = 1
EXIT_KEYBOARD = 3
EXIT_EXEC_ERROR = 100


def load_memory(rom: bytes) -> Memory:
    memory = Memory()
    memory.load(rom)
    return memory


def execute(memory: Memory, surface: Surface, cycles: int | None = None) -> CPU:
    regs = Registers()

    try:
        proc = CPU(memory, regs, surface)
        proc.run(cycles)
        return proc

    finally:
        regs.stop()


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--scale', type=click.IntRange(min=1), default=10, show_default=True, help='Window pixels per CHIP-8 pixel')
@click.option('--headless', is_flag=True, help='Run without a window')
@click.option('--cycles', type=click.IntRange(min=0), default=None, help='Stop after this many instructions')
@click.argument('cartridge', type=Path)
def run(verbose: bool, scale: int, headless: bool, cycles: int | None, cartridge: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('CHIP-8')

    try:
        memory = load_memory(read_cartridge(cartridge))
    except LoadError as e:
        click.echo(str(e), err=True)
        sys.exit(EXIT_LOAD_ERROR)

    if headless:
        surface = HeadlessSurface()
    else:
        from c8emu.runtime.screen import PygameSurface
        surface = PygameSurface(scale=scale)
        surface.start()

    try:
        execute(memory, surface, cycles)

        if isinstance(surface, HeadlessSurface):
            lg.debug('Final frame:\n' + surface.render_text())

        sys.exit(EXIT_HALT)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    except EmulatorError as e:
        lg.info(f'Execution halted on emulation error {e}')
        sys.exit(EXIT_EXEC_ERROR)

    except Exception as e:
        lg.info(f'Execution halted on general error {e}')
        traceback.print_exc()
        sys.exit(EXIT_EXEC_ERROR)

    finally:
        if not headless:
            surface.stop()


if __name__ == '__main__':
    run()
