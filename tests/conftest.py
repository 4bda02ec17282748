"""
Shared fixtures for deskbind tests.
"""

import subprocess
from typing import Any, Callable, Dict, List, Tuple, Union

import pytest

from deskbind.config.settings import Settings, get_settings
from deskbind.core.interfaces import NativeBackend
from deskbind.core.types import NativeResult

Outcome = Union[NativeResult, Callable[..., NativeResult]]


class FakeBackend(NativeBackend):
    """In-memory stand-in for AutoItX3 that records every call."""

    def __init__(self) -> None:
        self.call_results: Dict[str, Outcome] = {"WinExists": NativeResult(1)}
        self.read_results: Dict[str, Outcome] = {}
        self.log: List[Tuple[str, Tuple[Any, ...]]] = []
        self.options: Dict[str, int] = {}

    def call(self, capability: str, *args: Any) -> NativeResult:
        self.log.append((capability, args))
        outcome = self.call_results.get(capability, NativeResult(1))
        return outcome(*args) if callable(outcome) else outcome

    def read(self, capability: str, *args: Any) -> NativeResult:
        self.log.append((capability, args))
        outcome = self.read_results.get(capability, NativeResult(""))
        return outcome(*args) if callable(outcome) else outcome

    def set_option(self, name: str, value: int) -> int:
        previous = self.options.get(name, 0)
        self.options[name] = value
        return previous

    def count(self, capability: str) -> int:
        return sum(1 for name, _ in self.log if name == capability)

    def names(self) -> List[str]:
        return [name for name, _ in self.log]


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Keep cached settings from leaking between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings()


def completed(stdout: str = "", returncode: int = 0, stderr: str = "") -> subprocess.CompletedProcess:
    """Build a CompletedProcess as returned by subprocess.run(text=True)."""
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def make_completed() -> Callable[..., subprocess.CompletedProcess]:
    return completed
