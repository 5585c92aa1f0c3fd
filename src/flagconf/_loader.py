"""Core ``load()`` function — binds a model to flags and environment variables.

Value precedence, lowest first:
1. The field's value when ``load`` is called
2. Environment variable (``<PROGRAM>_<OPTION_PATH>`` in SCREAMING_SNAKE_CASE)
3. Command-line flag (``-option-path=value``)

Loading is all or nothing: an invalid environment value stops the sequence
before the command line is parsed.
"""

from __future__ import annotations

import logging
import sys
from typing import Sequence

import click
from pydantic import BaseModel

from ._casing import envify
from ._environment import Environment, OsEnvironment
from ._flagset import FlagSet
from ._types import (
    HelpRequested,
    InvalidEnvironmentValueError,
    NotARecordError,
    OperatorInputError,
    kind_name,
)
from ._walker import walk_fields

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Module-level environment management
# ---------------------------------------------------------------------------

_active_environment: Environment | None = None


def set_environment(environment: Environment | None) -> None:
    """Set the module-level environment source."""
    global _active_environment
    _active_environment = environment


def get_environment() -> Environment | None:
    """Return the current module-level environment source (may be ``None``)."""
    return _active_environment


def _auto_environment() -> Environment:
    """Lazily create an ``OsEnvironment`` if none is set."""
    global _active_environment
    if _active_environment is None:
        _active_environment = OsEnvironment()
    return _active_environment


# ---------------------------------------------------------------------------
# Binding
# ---------------------------------------------------------------------------


def bind_flags(flagset: FlagSet, model: BaseModel) -> None:
    """Register one option per bindable field of *model*, default = current value."""
    for descriptor in walk_fields(model):
        flagset.register(
            descriptor.path,
            descriptor.kind,
            descriptor.owner,
            descriptor.attr,
            descriptor.usage,
        )


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


def env_var_name(flagset: FlagSet, name: str) -> str:
    """Environment variable read for option *name*: ``<PROGRAM>_<NAME>`` envified."""
    return envify(f"{flagset.base_name}_{name}")


def annotate_env(flagset: FlagSet) -> None:
    """Append ``(env var NAME)`` to the usage of every option."""
    for option in flagset:
        option.env_name = env_var_name(flagset, option.name)
        if option.usage:
            option.usage += " "
        option.usage += f"(env var {option.env_name})"


def apply_env(flagset: FlagSet, environment: Environment) -> None:
    """Assign options from their environment variables, when set.

    An empty value counts as set. The first value that fails to parse raises
    ``InvalidEnvironmentValueError``.
    """
    for option in flagset:
        name = env_var_name(flagset, option.name)
        raw = environment.lookup(name)
        if raw is None:
            continue
        try:
            option.set(raw)
        except ValueError as exc:
            raise InvalidEnvironmentValueError(name, raw, exc) from exc
        logger.debug("Set option %r from env var %s", option.name, name)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load(
    model: BaseModel,
    *,
    args: Sequence[str] | None = None,
    flagset: FlagSet | None = None,
    environment: Environment | None = None,
) -> FlagSet:
    """Populate *model* in place from environment variables and command-line args.

    Parameters
    ----------
    model:
        Model instance to fill. Fields take part when tagged with ``Conf``;
        nested models are walked recursively.
    args:
        Command-line arguments without the program name. Defaults to
        ``sys.argv[1:]``.
    flagset:
        Registry to bind into. Defaults to a new ``FlagSet`` named after
        ``sys.argv[0]``; the base of its name prefixes environment variables.
    environment:
        Per-call environment override. Falls back to the module-level source
        (or auto-creates an ``OsEnvironment``).

    Returns the flag set; positional arguments left after the options are in
    ``flagset.args``.
    """
    if not isinstance(model, BaseModel):
        raise NotARecordError(kind_name(model), operation="load")

    if flagset is None:
        flagset = FlagSet(sys.argv[0])
    if args is None:
        args = sys.argv[1:]
    active_env = environment or _auto_environment()

    bind_flags(flagset, model)
    annotate_env(flagset)
    apply_env(flagset, active_env)
    flagset.parse(args)
    logger.debug("Loaded %d options for %s", len(flagset), flagset.base_name)
    return flagset


def load_or_exit(
    model: BaseModel,
    *,
    args: Sequence[str] | None = None,
    flagset: FlagSet | None = None,
    environment: Environment | None = None,
) -> FlagSet:
    """Like ``load``, but report operator mistakes with usage and exit.

    ``-h`` prints usage and exits 0; an invalid value or unknown flag prints
    the error and usage to stderr and exits 2. Errors in the model itself
    propagate.
    """
    if flagset is None:
        flagset = FlagSet(sys.argv[0])
    try:
        return load(model, args=args, flagset=flagset, environment=environment)
    except HelpRequested:
        click.echo(flagset.usage())
        sys.exit(0)
    except OperatorInputError as exc:
        click.echo(f"Error: {exc}", err=True)
        click.echo(flagset.usage(), err=True)
        sys.exit(2)
