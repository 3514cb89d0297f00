''' Closed instruction set '''

from dataclasses import dataclass
from typing import TypeAlias

import asmvm.common.ops as ops


@dataclass(frozen=True)
class Value:
    ''' Register name or integer literal, resolved on execution '''
    token: str

    def __str__(self) -> str:
        return self.token


@dataclass(frozen=True)
class Text:
    ''' Quoted free text, quotes stripped '''
    text: str

    def __str__(self) -> str:
        return f"'{self.text}'"


Operand: TypeAlias = Value | Text
Operands: TypeAlias = tuple[Operand, ...]


class Instruction:
    pass


@dataclass(frozen=True)
class Mov(Instruction):
    reg: str
    value: Value


@dataclass(frozen=True)
class Inc(Instruction):
    reg: str


@dataclass(frozen=True)
class Dec(Instruction):
    reg: str


@dataclass(frozen=True)
class Arith(Instruction):
    op: str  # one of ops.ARITHMETIC
    reg: str
    value: Value


@dataclass(frozen=True)
class Jnz(Instruction):
    value: Value
    offset: Value


@dataclass(frozen=True)
class Cmp(Instruction):
    lhs: Value
    rhs: Value


@dataclass(frozen=True)
class CondJump(Instruction):
    flag: ops.Flag
    label: str


@dataclass(frozen=True)
class Call(Instruction):
    label: str


@dataclass(frozen=True)
class Ret(Instruction):
    pass


@dataclass(frozen=True)
class Msg(Instruction):
    args: Operands


@dataclass(frozen=True)
class Label(Instruction):
    name: str


@dataclass(frozen=True)
class End(Instruction):
    pass


Program: TypeAlias = tuple[Instruction, ...]
