import pytest

import asmvm.common.ops as ops
import asmvm.runtime.instructions as ins
import asmvm.sasm.asm as asm
from asmvm.common.errors import ParseError


def test_decode_program():
    program = asm.assemble(
        "mov a, 5\n"
        "add a, b\n"
        "jnz a, -1\n"
        "cmp a, 3\n"
        "jle done\n"
        "call sub\n"
        "done:\n"
        "msg 'a=', a\n"
        "label sub\n"
        "ret\n"
        "end\n"
    )

    assert program == (
        ins.Mov('a', ins.Value('5')),
        ins.Arith(ops.ADD, 'a', ins.Value('b')),
        ins.Jnz(ins.Value('a'), ins.Value('-1')),
        ins.Cmp(ins.Value('a'), ins.Value('3')),
        ins.CondJump(ops.Flag.LESS_OR_EQUAL, 'done'),
        ins.Call('sub'),
        ins.Label('done'),
        ins.Msg((ins.Text('a='), ins.Value('a'))),
        ins.Label('sub'),
        ins.Ret(),
        ins.End()
    )


def test_conditional_jump_flags():
    program = asm.assemble_lines(['je x', 'jne x', 'jg x', 'jge x', 'jl x', 'jle x'])

    assert [instruction.flag for instruction in program] == [  # type: ignore
        ops.Flag.EQUAL,
        ops.Flag.NOT_EQUAL,
        ops.Flag.GREATER,
        ops.Flag.GREATER_OR_EQUAL,
        ops.Flag.LESS,
        ops.Flag.LESS_OR_EQUAL
    ]


def test_unknown_opcode():
    with pytest.raises(ParseError) as e:
        asm.assemble('mov a, 1\njmp a\n')

    assert e.value.lineno == 2


def test_operand_count():
    with pytest.raises(ParseError):
        asm.assemble_lines(['mov a'])

    with pytest.raises(ParseError):
        asm.assemble_lines(['ret 1'])


def test_literal_is_not_a_target():
    with pytest.raises(ParseError):
        asm.assemble_lines(['mov 5 5'])

    with pytest.raises(ParseError):
        asm.assemble_lines(['inc 1'])


def test_malformed_literal_rejected_before_run():
    with pytest.raises(ParseError):
        asm.assemble_lines(['mov a 5', 'add a 1-2'])

    with pytest.raises(ParseError):
        asm.assemble_lines(['mov a 99999999999'])


def test_text_only_in_msg():
    with pytest.raises(ParseError):
        asm.assemble("mov a, 'five'")


def test_label_definition_forms():
    with pytest.raises(ParseError):
        asm.assemble_lines(['name: inc a'])

    with pytest.raises(ParseError):
        asm.assemble_lines([':'])

    assert asm.assemble_lines(['loop:']) == asm.assemble_lines(['label loop'])
