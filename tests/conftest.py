import pytest

from monkey.interpreter import Interpreter
from monkey.types.environment import Environment


@pytest.fixture
def env():
    return Environment()


@pytest.fixture
def interp():
    return Interpreter()


@pytest.fixture(autouse=True)
def _clean_monkey_env(monkeypatch):
    # Keep tests independent of the caller's shell settings.
    for var in ("MONKEY_MAX_CALL_DEPTH", "MONKEY_PROMPT", "MONKEY_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
