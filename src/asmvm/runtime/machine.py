import io
import logging as lg
from typing import Callable, Sequence

import asmvm.common.ops as ops
import asmvm.runtime.instructions as ins
import asmvm.runtime.resolver as resolver
from asmvm.common.conf import RunSettings
from asmvm.common.errors import (
    MachineError, DivisionByZero, StackUnderflow, UndefinedLabel,
    MachineHalted, StepLimitExceeded
)


class Halt(Exception):
    pass


def truncated_div(a: int, b: int) -> int:
    if b == 0:
        raise DivisionByZero(f'Division of {a} by zero')

    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


ARITHMETIC: dict[str, Callable[[int, int], int]] = {
    ops.ADD: lambda a, b: a + b,
    ops.SUB: lambda a, b: a - b,
    ops.MUL: lambda a, b: a * b,
    ops.DIV: truncated_div
}


class Machine():
    program: ins.Program
    labels: dict[str, int]      # Label -> index of the following instruction
    regs: resolver.Registers
    pc: int                     # Program counter
    flags: ops.Flag             # Comparison status register
    stack: list[int]            # Return addresses
    halted: bool
    ended: bool                 # Halted by 'end'
    steps: int

    def __init__(self, settings: RunSettings | None = None):
        self.settings = settings if settings is not None else RunSettings()
        self.load(())

    # - Helpers - #

    def debug_dump(self):
        state = [f'PC:{self.pc}', f'FL:{self.flags.value:06b}', f'SD:{len(self.stack)}']
        state.extend([f'{k}:{v}' for k, v in self.regs.items()])
        lg.debug(' '.join(state))

    def resolve(self, value: ins.Value) -> int:
        return resolver.resolve(value.token, self.regs)

    def get_register(self, name: str) -> int:
        return resolver.read_register(name, self.regs)

    def set_register(self, name: str, value: int):
        self.regs[name] = resolver.to_int32(value)

    def render(self, arg: ins.Operand) -> str:
        if isinstance(arg, ins.Text):
            return arg.text

        return str(self.resolve(arg))

    def registers(self) -> resolver.Registers:
        return dict(self.regs)

    def output(self) -> str:
        return self.out.getvalue()

    # - Loading - #

    def load(self, program: Sequence[ins.Instruction]):
        self.program = tuple(program)
        self.labels = dict()
        self.regs = dict()
        self.flags = ops.INVALID
        self.stack = []
        self.out = io.StringIO()
        self.ended = False
        self.steps = 0

        self.pre_run()

        self.pc = 0
        self.halted = not self.program

    def pre_run(self):
        for index, instruction in enumerate(self.program):
            if isinstance(instruction, ins.Label):
                self.add_label(instruction.name, index + 1)

    def add_label(self, name: str, index: int):
        if name in self.labels:
            lg.warning(f'Label {name} redefined @ {index}')

        self.labels[name] = index
        lg.debug(f'Label {name} @ {index}')

    # - Control primitives - #

    def advance(self, offset: int):
        target = self.pc + offset

        # Reaching len(program) is a regular halt
        if 0 <= target <= len(self.program):
            self.pc = target
        else:
            lg.debug(f'Jump target {target} out of bounds, stepping over')
            self.pc += 1

    def label_index(self, label: str) -> int:
        try:
            return self.labels[label]
        except KeyError:
            raise UndefinedLabel(label) from None

    def jump_to(self, label: str):
        self.pc = self.label_index(label)

    def push_return(self):
        self.stack.append(self.pc + 1)

    def pop_return(self):
        if not self.stack:
            raise StackUnderflow(f'ret @ {self.pc} with empty call stack')

        self.pc = self.stack.pop()

    def set_flags(self, lhs: int, rhs: int):
        self.flags = ops.INVALID

        if lhs == rhs:
            self.flags |= ops.Flag.EQUAL | ops.Flag.LESS_OR_EQUAL | ops.Flag.GREATER_OR_EQUAL
        elif lhs < rhs:
            self.flags |= ops.Flag.NOT_EQUAL | ops.Flag.LESS | ops.Flag.LESS_OR_EQUAL
        else:
            self.flags |= ops.Flag.NOT_EQUAL | ops.Flag.GREATER | ops.Flag.GREATER_OR_EQUAL

    def write(self, text: str):
        self.out.write(text)

    def halt(self):
        raise Halt()

    # - Execution - #

    def execute(self, instruction: ins.Instruction):
        match instruction:
            case ins.Mov(reg, value):
                self.set_register(reg, self.resolve(value))

            case ins.Inc(reg):
                self.set_register(reg, self.get_register(reg) + 1)

            case ins.Dec(reg):
                self.set_register(reg, self.get_register(reg) - 1)

            case ins.Arith(op, reg, value):
                a = self.get_register(reg)
                b = self.resolve(value)
                self.set_register(reg, ARITHMETIC[op](a, b))

            case ins.Jnz(value, offset):
                if self.resolve(value) != 0:
                    self.advance(self.resolve(offset))
                    return

            case ins.Cmp(lhs, rhs):
                self.set_flags(self.resolve(lhs), self.resolve(rhs))

            case ins.CondJump(flag, label):
                if self.flags & flag:
                    self.jump_to(label)
                    return

            case ins.Call(label):
                target = self.label_index(label)
                self.push_return()
                self.pc = target
                return

            case ins.Ret():
                self.pop_return()
                return

            case ins.Msg(args):
                self.write(''.join(self.render(arg) for arg in args))

            case ins.Label():
                pass

            case ins.End():
                self.halt()

            case _:
                raise MachineError(f'Unsupported instruction {instruction}')

        self.pc += 1

    def step(self):
        if self.halted:
            raise MachineHalted(f'Machine halted @ {self.pc}')

        instruction = self.program[self.pc]
        self.steps += 1

        try:
            self.execute(instruction)
        except Halt:
            lg.debug(f'End @ {self.pc}')
            self.ended = True
            self.halted = True
            return

        if self.pc >= len(self.program):
            lg.debug('Execution fell off the end of the program')
            self.halted = True

    def run(self):
        # No step cap unless the caller asks for one
        max_steps = self.settings.max_steps

        while not self.halted:
            if max_steps is not None and self.steps >= max_steps:
                raise StepLimitExceeded(max_steps)

            self.step()

            if self.settings.verbose:
                self.debug_dump()

        return self
