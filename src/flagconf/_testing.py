"""Test utilities for flagconf."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from ._environment import FakeEnvironment
from ._loader import get_environment, set_environment


@contextmanager
def override_environment(env: dict[str, str] | None = None) -> Iterator[FakeEnvironment]:
    """Temporarily replace the environment source with a ``FakeEnvironment``.

    Usage::

        with override_environment({"PROG_PASSWORD": "yyy"}) as fake:
            load(cfg, args=[], flagset=FlagSet("prog"))
            fake.set("PROG_DEBUG", "1")  # mutate inside context
    """
    previous = get_environment()
    fake = FakeEnvironment(env)
    set_environment(fake)
    try:
        yield fake
    finally:
        set_environment(previous)
