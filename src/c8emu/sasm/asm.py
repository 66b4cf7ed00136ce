from pathlib import Path
import logging as lg

import click

import c8emu.sasm.grammar as grammar
from c8emu.sasm.fpp import FPP


def compile_source(contents: str) -> bytes:
    # First pass
    first_pass = FPP()
    actions = grammar.program.parse_string(contents, parse_all=True)

    for (func, arg) in actions:  # type: ignore
        func(first_pass, arg)

    # Second pass
    return first_pass.link()


def compile_file(filepath: str | Path) -> bytes:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Compiling file {filepath}')
    return compile_source(filepath.read_text())


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.argument('source', type=Path)
@click.argument('binary', type=Path)
def compile(verbose: bool, source: Path, binary: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('CHIP-8 ASM')

    bytestr = compile_file(source)
    binary.parent.mkdir(parents=True, exist_ok=True)
    binary.write_bytes(bytestr)
    lg.info(f'Wrote {len(bytestr)} bytes to {binary}')


if __name__ == '__main__':
    compile()
