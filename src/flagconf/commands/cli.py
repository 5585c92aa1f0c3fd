"""CLI for inspecting the flags and environment variables a model exposes."""

from __future__ import annotations

import importlib
import sys

import click
from pydantic import BaseModel

from .._flagset import FlagSet
from .._loader import annotate_env, bind_flags, env_var_name
from .._types import ConfigError


def _import_model(target: str) -> type[BaseModel]:
    """Resolve ``package.module:ClassName`` to a model class."""
    module_name, sep, class_name = target.partition(":")
    if not sep or not module_name or not class_name:
        raise ValueError(f"expected MODULE:CLASS, got {target!r}")
    module = importlib.import_module(module_name)
    model = getattr(module, class_name, None)
    if not (isinstance(model, type) and issubclass(model, BaseModel)):
        raise ValueError(f"{target} is not a pydantic model class")
    return model


def usage_command(target: str, *, prog: str | None = None) -> None:
    """Print the usage text ``load`` would show for a model's defaults.

    Args:
        target: ``module:Class`` path of the model
        prog: Program name used for env var prefixes (default: class name)
    """
    try:
        model_cls = _import_model(target)
        flagset = FlagSet(prog or model_cls.__name__.lower())
        bind_flags(flagset, model_cls())
        annotate_env(flagset)
    except (ImportError, ValueError, ConfigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    print(flagset.usage())


@click.group("flagconf")
def flagconf_group():
    """flagconf commands."""
    pass


@flagconf_group.command("env-name")
@click.argument("program")
@click.argument("paths", nargs=-1, required=True)
def env_name_cli(program: str, paths: tuple[str, ...]) -> None:
    """Print the environment variable read for each option path.

    Examples:\n
        flagconf env-name ./bin/server db-dsn http-Timeout\n
    """
    flagset = FlagSet(program)
    for path in paths:
        click.echo(env_var_name(flagset, path))


@flagconf_group.command("usage")
@click.argument("target")
@click.option("--prog", default=None, help="Program name used to derive env var names")
def usage_cli(target: str, prog: str | None) -> None:
    """Show the flags and env vars of the model at MODULE:CLASS.

    Examples:\n
        flagconf usage myapp.settings:Settings --prog myapp\n
    """
    usage_command(target, prog=prog)
