import pytest

import asmvm.runtime.instructions as ins
import asmvm.sasm.asm as asm
from asmvm.common.conf import RunSettings
from asmvm.common.errors import MachineHalted, StepLimitExceeded
from asmvm.runtime.machine import Machine

from fixtures import machine, settings  # noqa: F401


def asm_machine(lines, run_settings):
    proc = Machine(run_settings)
    proc.load(asm.assemble_lines(lines))
    return proc


def test_empty_machine_is_halted(machine):  # noqa: F811
    assert machine.halted
    assert not machine.ended

    with pytest.raises(MachineHalted):
        machine.step()


def test_labels_built_before_run(machine):  # noqa: F811
    machine.load(asm.assemble('call f\nend\nf:\nret\nlabel g\n'))

    assert machine.labels == {'f': 3, 'g': 5}
    assert machine.pc == 0
    assert not machine.halted


def test_redefined_label_last_wins(machine):  # noqa: F811
    machine.load(asm.assemble_lines(['label a', 'inc x', 'label a']))
    assert machine.labels == {'a': 3}


def test_step_by_step(machine):  # noqa: F811
    machine.load(asm.assemble_lines(['mov a 1', 'inc a', 'end', 'inc a']))

    machine.step()
    assert machine.pc == 1
    assert machine.registers() == {'a': 1}

    machine.step()
    machine.step()
    assert machine.halted
    assert machine.ended
    assert machine.registers() == {'a': 2}

    with pytest.raises(MachineHalted):
        machine.step()


def test_falling_off_the_end(machine):  # noqa: F811
    machine.load(asm.assemble_lines(['mov a 1']))
    machine.run()

    assert machine.halted
    assert not machine.ended
    assert machine.steps == 1


def test_call_pushes_next_index(machine):  # noqa: F811
    machine.load((ins.Call('f'), ins.End(), ins.Label('f'), ins.Ret()))

    machine.step()
    assert machine.stack == [1]
    assert machine.pc == 3

    machine.step()
    assert machine.stack == []
    assert machine.pc == 1


def test_registers_are_a_copy(machine):  # noqa: F811
    machine.load(asm.assemble_lines(['mov a 1']))
    machine.run()

    registers = machine.registers()
    registers['a'] = 100
    assert machine.registers() == {'a': 1}


def test_reload_resets_state(machine):  # noqa: F811
    machine.load(asm.assemble("mov a, 1\ncmp a, 1\ncall f\nf:\nmsg 'x'\nend"))
    machine.run()
    assert machine.output() == 'x'

    machine.load(asm.assemble_lines(['mov b 2']))
    assert machine.output() == ''
    assert machine.stack == []
    assert machine.registers() == {}
    assert not machine.ended


def test_step_limit():
    proc = asm_machine(['mov a 1', 'jnz a 0'], RunSettings().update(max_steps=50))

    with pytest.raises(StepLimitExceeded):
        proc.run()

    assert proc.steps == 50


def test_step_limit_is_inclusive():
    proc = asm_machine(['mov a 3', 'dec a', 'jnz a -1'], RunSettings().update(max_steps=7))
    proc.run()

    assert proc.registers() == {'a': 0}
