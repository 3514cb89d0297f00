import sys
from pathlib import Path
import logging as lg
import traceback
from typing import Sequence

import click

import asmvm.runtime.instructions as ins
import asmvm.runtime.resolver as resolver
import asmvm.sasm.asm as asm
from asmvm.common.conf import RunSettings, NO_RESULT
from asmvm.common.errors import MachineError, StepLimitExceeded
from asmvm.runtime.machine import Machine


EXIT_HALT = 0
EXIT_NO_RESULT = 1
EXIT_STEP_LIMIT = 2
EXIT_KEYBOARD = 3
EXIT_MACHINE_ERROR = 4
EXIT_EXEC_ERROR = 100


def execute(program: ins.Program, settings: RunSettings | None = None) -> Machine:
    machine = Machine(settings)
    machine.load(program)
    return machine.run()


def text_result(machine: Machine) -> str:
    if not machine.ended:
        lg.info('Program never reached end, output discarded')
        return NO_RESULT

    return machine.output()


def run_register_program(
    lines: Sequence[str],
    settings: RunSettings | None = None
) -> resolver.Registers:
    machine = execute(asm.assemble_lines(lines), settings)
    return machine.registers()


def run_text_program(raw: str, settings: RunSettings | None = None) -> str:
    machine = execute(asm.assemble(raw), settings)
    return text_result(machine)


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('-r', '--registers', 'register_mode', is_flag=True,
              help='One instruction per line, print the final registers')
@click.option('--max-steps', type=click.IntRange(min=1), default=None,
              help='Abort after this many executed instructions')
@click.argument('program_filename', type=Path)
def run(verbose: bool, register_mode: bool, max_steps: int | None, program_filename: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('ASMVM')

    settings = RunSettings().update(verbose=verbose, max_steps=max_steps)

    try:
        source = program_filename.read_text()

        if register_mode:
            registers = run_register_program(source.splitlines(), settings)

            for name, value in registers.items():
                click.echo(f'{name}={value}')

            sys.exit(EXIT_HALT)

        machine = execute(asm.assemble(source), settings)
        click.echo(text_result(machine))
        sys.exit(EXIT_HALT if machine.ended else EXIT_NO_RESULT)

    except StepLimitExceeded as e:
        lg.info(f'Execution stopped: {e}')
        sys.exit(EXIT_STEP_LIMIT)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    except MachineError as e:
        lg.error(f'Execution halted on error: {e}')
        sys.exit(EXIT_MACHINE_ERROR)

    except Exception as e:
        lg.info(f'Execution halted on general error {e}')
        traceback.print_exc()
        sys.exit(EXIT_EXEC_ERROR)


if __name__ == '__main__':
    run()
