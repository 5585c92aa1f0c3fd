"""Environment source protocol, the live ``os.environ`` adapter and a fake for tests."""

from __future__ import annotations

import os
from typing import Mapping, Protocol, runtime_checkable


@runtime_checkable
class Environment(Protocol):
    """Abstraction over where environment variables come from."""

    def lookup(self, key: str) -> str | None:
        """Return the variable's value, or ``None`` when it is unset."""
        ...


class OsEnvironment:
    """Reads variables from the process environment."""

    def lookup(self, key: str) -> str | None:
        return os.environ.get(key)


class FakeEnvironment:
    """Dict-backed environment for tests.

    >>> env = FakeEnvironment({"PROG_DEBUG": "1"})
    >>> env.lookup("PROG_DEBUG")
    '1'
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: dict[str, str] = dict(env or {})

    # -- Protocol methods ---------------------------------------------------

    def lookup(self, key: str) -> str | None:
        return self._env.get(key)

    # -- Mutation helpers for test setup ------------------------------------

    def set(self, key: str, value: str) -> None:
        self._env[key] = value

    def unset(self, key: str) -> None:
        self._env.pop(key, None)
