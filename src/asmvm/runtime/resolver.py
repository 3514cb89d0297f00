import re
from typing import TypeAlias

from asmvm.common.conf import INT32_MIN, INT32_MAX, INT32_MASK
from asmvm.common.errors import ParseError, UndefinedRegister


Registers: TypeAlias = dict[str, int]

LITERAL = re.compile(r'[+-]?[0-9]+')


def is_register(token: str) -> bool:
    return any(c.isalpha() for c in token)


def parse_literal(token: str) -> int:
    if LITERAL.fullmatch(token) is None:
        raise ParseError(f'Malformed integer literal {token!r}')

    value = int(token)

    if value < INT32_MIN or value > INT32_MAX:
        raise ParseError(f'Integer literal {token} out of range')

    return value


def read_register(name: str, registers: Registers) -> int:
    try:
        return registers[name]
    except KeyError:
        raise UndefinedRegister(name) from None


def resolve(token: str, registers: Registers) -> int:
    if is_register(token):
        return read_register(token, registers)

    return parse_literal(token)


def to_int32(value: int) -> int:
    # Two's complement wrap-around
    value &= INT32_MASK

    if value > INT32_MAX:
        value -= INT32_MASK + 1

    return value
