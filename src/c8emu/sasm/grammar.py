# type: ignore
''' CHIP-8 mnemonic grammar '''

import pyparsing as pp

import c8emu.common.ops as ops
from c8emu.common.errors import AssemblyError
from c8emu.sasm.fpp import FPP


def kw(literal):
    return pp.CaselessKeyword(literal).suppress()


def ranged(expr, limit, what):
    def check(r):
        if not 0 <= r[0] <= limit:
            raise AssemblyError(f'{what} {r[0]} out of range')

        return r[0]

    return expr.copy().add_parse_action(check)


def emit(factory):
    return lambda r: (FPP.issue_instruction, factory(*r))


def emit_addr(factory):
    def action(r):
        target = r[0]

        if isinstance(target, str):
            return (FPP.issue_ref, (factory, target))

        return (FPP.issue_instruction, factory(target))

    return action


comment = pp.Suppress(';' + pp.rest_of_line)
comma = pp.Suppress(',')

id = pp.Word(pp.alphas + '_', pp.alphanums + '_')

hex_const = pp.Regex('0[xX][0-9A-Fa-f]+').set_parse_action(lambda r: int(r[0], 16))
bin_const = pp.Regex('0[bB][01]+').set_parse_action(lambda r: int(r[0][2:], 2))
dec_const = pp.Regex('[0-9]+').set_parse_action(lambda r: int(r[0]))
number = hex_const | bin_const | dec_const

byte = ranged(number, 0xFF, 'Byte')
word = ranged(number, 0xFFFF, 'Word')
nibble = ranged(number, 0xF, 'Nibble')
address = ranged(number, 0xFFF, 'Address') | id

reg = pp.Regex(r'[Vv][0-9A-Fa-f]\b').set_parse_action(lambda r: ops.Reg(int(r[0][1], 16)))
v0 = pp.Regex(r'[Vv]0\b').suppress()
at_i = pp.Suppress(pp.Literal('[') + pp.CaselessLiteral('I') + pp.Literal(']'))

label = (id + pp.Suppress(':')).set_parse_action(lambda r: (FPP.on_label, r[0]))


def g_bare(literal, factory):
    return pp.CaselessKeyword(literal).set_parse_action(lambda r: (FPP.issue_instruction, factory()))


def g_addr(literal, factory):
    return (kw(literal) + address).set_parse_action(emit_addr(factory))


def g_reg(literal, factory):
    return (kw(literal) + reg).set_parse_action(emit(factory))


def g_pair(literal, factory):
    return (kw(literal) + reg + comma + reg).set_parse_action(emit(factory))


def g_reg_or_byte(literal, factory):
    return (kw(literal) + reg + comma + (reg | byte)).set_parse_action(emit(factory))


def g_shift(literal, factory):
    # Optional second register is accepted and ignored
    return (kw(literal) + reg + pp.Optional(comma + reg).suppress()).set_parse_action(emit(factory))


# Flow
cls_cmd = g_bare('CLS', ops.Cls)
ret_cmd = g_bare('RET', ops.Ret)
sys_cmd = g_addr('SYS', ops.Sys)
call_cmd = g_addr('CALL', ops.Call)
jp_cmd = (kw('JP') + v0 + comma + address).set_parse_action(emit_addr(ops.JpV0)) \
    | g_addr('JP', ops.Jp)

# Skips
se_cmd = g_reg_or_byte('SE', ops.Se)
sne_cmd = g_reg_or_byte('SNE', ops.Sne)
skp_cmd = g_reg('SKP', ops.Skp)
sknp_cmd = g_reg('SKNP', ops.Sknp)

# Arithmetic
add_cmd = (kw('ADD') + kw('I') + comma + reg).set_parse_action(emit(ops.AddI)) \
    | g_reg_or_byte('ADD', ops.Add)
or_cmd = g_pair('OR', ops.Or)
and_cmd = g_pair('AND', ops.And)
xor_cmd = g_pair('XOR', ops.Xor)
sub_cmd = g_pair('SUB', ops.Sub)
subn_cmd = g_pair('SUBN', ops.Subn)
shr_cmd = g_shift('SHR', ops.Shr)
shl_cmd = g_shift('SHL', ops.Shl)
rnd_cmd = (kw('RND') + reg + comma + byte).set_parse_action(emit(ops.Rnd))

# Display
drw_cmd = (kw('DRW') + reg + comma + reg + comma + nibble).set_parse_action(emit(ops.Drw))

# Loads, most specific first
ld_cmd = (kw('LD') + kw('I') + comma + address).set_parse_action(emit_addr(ops.LdI)) \
    | (kw('LD') + kw('DT') + comma + reg).set_parse_action(emit(ops.LdDtVx)) \
    | (kw('LD') + kw('ST') + comma + reg).set_parse_action(emit(ops.LdStVx)) \
    | (kw('LD') + kw('F') + comma + reg).set_parse_action(emit(ops.LdF)) \
    | (kw('LD') + kw('B') + comma + reg).set_parse_action(emit(ops.LdB)) \
    | (kw('LD') + at_i + comma + reg).set_parse_action(emit(ops.LdIVx)) \
    | (kw('LD') + reg + comma + kw('DT')).set_parse_action(emit(ops.LdVxDt)) \
    | (kw('LD') + reg + comma + kw('K')).set_parse_action(emit(ops.LdVxK)) \
    | (kw('LD') + reg + comma + at_i).set_parse_action(emit(ops.LdVxI)) \
    | g_reg_or_byte('LD', ops.Ld)

# Data
db_cmd = (kw('DB') + byte + pp.ZeroOrMore(comma + byte)) \
    .set_parse_action(lambda r: (FPP.issue_db, list(r)))
dw_cmd = (kw('DW') + word + pp.ZeroOrMore(comma + word)) \
    .set_parse_action(lambda r: (FPP.issue_dw, list(r)))

asm_cmd = cls_cmd \
    | ret_cmd \
    | sys_cmd \
    | call_cmd \
    | jp_cmd \
    | se_cmd \
    | sne_cmd \
    | skp_cmd \
    | sknp_cmd \
    | add_cmd \
    | or_cmd \
    | and_cmd \
    | xor_cmd \
    | subn_cmd \
    | sub_cmd \
    | shr_cmd \
    | shl_cmd \
    | rnd_cmd \
    | drw_cmd \
    | ld_cmd \
    | db_cmd \
    | dw_cmd

unknown = pp.Regex(r'\S.*').set_parse_action(lambda r: (FPP.on_fail, r[0]))

statement = label | asm_cmd

program = pp.ZeroOrMore(statement | unknown)
program.ignore(comment)
