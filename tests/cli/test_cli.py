import pytest
from click.testing import CliRunner

import c8emu.runtime.emulator as emulator
import c8emu.sasm.asm as asm
from c8emu.common.hwconf import MAX_ROM_SIZE

from unit_utils import find_file


def test_missing_cartridge(tmp_path):
    result = CliRunner().invoke(emulator.run, ['--headless', str(tmp_path / 'nothing.ch8')])

    assert result.exit_code == emulator.EXIT_LOAD_ERROR
    assert 'Could not open file' in result.output


def test_oversized_cartridge(tmp_path):
    rom = tmp_path / 'big.ch8'
    rom.write_bytes(b'\x00' * (MAX_ROM_SIZE + 2))
    result = CliRunner().invoke(emulator.run, ['--headless', str(rom)])

    assert result.exit_code == emulator.EXIT_LOAD_ERROR


def test_headless_run(tmp_path):
    rom = tmp_path / 'digits.ch8'
    rom.write_bytes(asm.compile_file(find_file('testdata/sasm/digits.c8s')))
    result = CliRunner().invoke(emulator.run, ['--headless', '--cycles', '100', str(rom)])

    assert result.exit_code == emulator.EXIT_HALT


def test_headless_run_off_the_end(tmp_path):
    rom = tmp_path / 'empty.ch8'
    rom.write_bytes(b'')
    result = CliRunner().invoke(emulator.run, ['--headless', str(rom)])

    assert result.exit_code == emulator.EXIT_HALT


def test_fatal_error_exit_code(tmp_path):
    rom = tmp_path / 'bad.ch8'
    rom.write_bytes(b'\xFF\xFF')
    result = CliRunner().invoke(emulator.run, ['--headless', str(rom)])

    assert result.exit_code == emulator.EXIT_EXEC_ERROR


def test_assembler_cli(tmp_path):
    source = tmp_path / 'prog.c8s'
    source.write_text('CLS\nend: JP end\n')
    binary = tmp_path / 'out' / 'prog.ch8'

    result = CliRunner().invoke(asm.compile, [str(source), str(binary)])

    assert result.exit_code == 0
    assert binary.read_bytes() == b'\x00\xE0\x12\x02'


@pytest.mark.parametrize('option', [
    ['--cycles', '-1'],
    ['--scale', '0'],
])
def test_rejects_out_of_range_options(tmp_path, option):
    rom = tmp_path / 'empty.ch8'
    rom.write_bytes(b'')
    result = CliRunner().invoke(emulator.run, ['--headless', *option, str(rom)])

    assert result.exit_code == 2
