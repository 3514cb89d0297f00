# type: ignore
import pytest

from asmvm.common.conf import RunSettings
from asmvm.runtime.machine import Machine


@pytest.fixture
def settings():
    yield RunSettings().update(verbose=True)


@pytest.fixture
def guarded(settings):
    yield settings.update(max_steps=10_000)


@pytest.fixture
def machine(settings):
    yield Machine(settings)
