import pytest

from c8emu.common.errors import AssemblyError
from c8emu.runtime.decoder import decode
import c8emu.sasm.asm as asm


def words(*opcodes: int) -> bytes:
    return b''.join(op.to_bytes(2, 'big') for op in opcodes)


@pytest.mark.parametrize('source, opcode', [
    ('CLS', 0x00E0),
    ('RET', 0x00EE),
    ('SYS 0x123', 0x0123),
    ('JP 0x234', 0x1234),
    ('CALL 0x345', 0x2345),
    ('SE VA, 0x12', 0x3A12),
    ('SNE VA, 18', 0x4A12),
    ('SE V1, V2', 0x5120),
    ('LD VB, 0b101', 0x6B05),
    ('ADD VC, 0x10', 0x7C10),
    ('LD V1, V2', 0x8120),
    ('OR V1, V2', 0x8121),
    ('AND V1, V2', 0x8122),
    ('XOR V1, V2', 0x8123),
    ('ADD V1, V2', 0x8124),
    ('SUB V1, V2', 0x8125),
    ('SHR V1', 0x8106),
    ('SHR V1, V2', 0x8106),
    ('SUBN V1, V2', 0x8127),
    ('SHL V1', 0x810E),
    ('SNE V1, V2', 0x9120),
    ('LD I, 0x123', 0xA123),
    ('JP V0, 0x123', 0xB123),
    ('RND V1, 0xFF', 0xC1FF),
    ('DRW V1, V2, 3', 0xD123),
    ('SKP V1', 0xE19E),
    ('SKNP V1', 0xE1A1),
    ('LD V1, DT', 0xF107),
    ('LD V1, K', 0xF10A),
    ('LD DT, V1', 0xF115),
    ('LD ST, V1', 0xF118),
    ('ADD I, V1', 0xF11E),
    ('LD F, V1', 0xF129),
    ('LD B, V1', 0xF133),
    ('LD [I], V1', 0xF155),
    ('LD V1, [I]', 0xF165),
    ('ld v1, [i]', 0xF165),
])
def test_mnemonic(source, opcode):
    assert asm.compile_source(source) == words(opcode)


@pytest.mark.parametrize('opcode', [0x00E0, 0x1234, 0x3A12, 0x8127, 0xB123, 0xD123, 0xF155, 0xF10A])
def test_disassembly_reassembles(opcode):
    assert asm.compile_source(str(decode(opcode))) == words(opcode)


def test_labels_resolve_to_absolute_addresses():
    source = '''
    start:  CALL sub        ; forward reference
            JP start
    sub:    RET
            LD I, sprite
    sprite: DB 0xF0, 0x90
    '''

    assert asm.compile_source(source) == words(0x2204, 0x1200, 0x00EE, 0xA208) + b'\xF0\x90'


def test_data_directives():
    assert asm.compile_source('DB 1, 2, 3\nDW 0x1234') == b'\x01\x02\x03\x12\x34'


def test_comments_and_blank_lines():
    assert asm.compile_source('; header\n\nCLS ; clear\n\n') == words(0x00E0)


def test_unknown_command():
    with pytest.raises(AssemblyError, match='Unknown command'):
        asm.compile_source('CLS\nMOV V1, V2')


def test_undefined_label():
    with pytest.raises(AssemblyError, match='Undefined label'):
        asm.compile_source('JP nowhere')


def test_duplicate_label():
    with pytest.raises(AssemblyError, match='Duplicate label'):
        asm.compile_source('here: CLS\nhere: RET')


@pytest.mark.parametrize('source', ['LD V1, 0x100', 'DRW V1, V2, 16', 'JP 0x1000'])
def test_operand_out_of_range(source):
    with pytest.raises(AssemblyError, match='out of range'):
        asm.compile_source(source)
