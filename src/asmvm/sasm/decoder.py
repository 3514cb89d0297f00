''' Opcode name to instruction decoding '''

from typing import Iterable

import asmvm.common.ops as ops
import asmvm.runtime.instructions as ins
import asmvm.runtime.resolver as resolver
from asmvm.common.conf import LABEL_SUFFIX
from asmvm.common.errors import ParseError
from asmvm.sasm.sanitizer import SourceLine


def parse_error(line: SourceLine, message: str):
    return ParseError(f'{line.opcode}: {message}', line.lineno)


def check_value(line: SourceLine, operand: ins.Operand) -> ins.Value:
    if not isinstance(operand, ins.Value):
        raise parse_error(line, f'text {operand} is not a value')

    if not resolver.is_register(operand.token):
        try:
            resolver.parse_literal(operand.token)
        except ParseError as e:
            raise parse_error(line, str(e)) from e

    return operand


def values(line: SourceLine, count: int) -> list[ins.Value]:
    if len(line.operands) != count:
        raise parse_error(line, f'expects {count} operand(s), got {len(line.operands)}')

    return [check_value(line, operand) for operand in line.operands]


def register(line: SourceLine, value: ins.Value) -> str:
    if not resolver.is_register(value.token):
        raise parse_error(line, f'expected a register, got {value.token}')

    return value.token


def label(line: SourceLine) -> str:
    operand = line.operands[0] if len(line.operands) == 1 else None

    if not isinstance(operand, ins.Value):
        raise parse_error(line, 'expects a single label name')

    return operand.token


def decode(line: SourceLine) -> ins.Instruction:
    opcode = line.opcode

    # 'name:' is the short form of 'label name'
    if opcode.endswith(LABEL_SUFFIX):
        name = opcode[:-len(LABEL_SUFFIX)]

        if not name or line.operands:
            raise parse_error(line, 'malformed label definition')

        return ins.Label(name)

    match opcode:
        case ops.MOV:
            reg, value = values(line, 2)
            return ins.Mov(register(line, reg), value)

        case ops.INC:
            (reg,) = values(line, 1)
            return ins.Inc(register(line, reg))

        case ops.DEC:
            (reg,) = values(line, 1)
            return ins.Dec(register(line, reg))

        case ops.ADD | ops.SUB | ops.MUL | ops.DIV:
            reg, value = values(line, 2)
            return ins.Arith(opcode, register(line, reg), value)

        case ops.JNZ:
            value, offset = values(line, 2)
            return ins.Jnz(value, offset)

        case ops.CMP:
            lhs, rhs = values(line, 2)
            return ins.Cmp(lhs, rhs)

        case ops.JE | ops.JNE | ops.JG | ops.JGE | ops.JL | ops.JLE:
            return ins.CondJump(ops.JUMP_FLAGS[opcode], label(line))

        case ops.CALL:
            return ins.Call(label(line))

        case ops.RET:
            values(line, 0)
            return ins.Ret()

        case ops.MSG:
            args = [
                operand if isinstance(operand, ins.Text) else check_value(line, operand)
                for operand in line.operands
            ]

            return ins.Msg(tuple(args))

        case ops.LABEL:
            return ins.Label(label(line))

        case ops.END:
            values(line, 0)
            return ins.End()

        case _:
            raise ParseError(f'Unknown instruction {opcode}', line.lineno)


def decode_all(lines: Iterable[SourceLine]) -> ins.Program:
    return tuple(decode(line) for line in lines)
