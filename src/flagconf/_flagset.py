"""Named, typed option registry backed by click.

A ``FlagSet`` owns one ``Option`` per bound model field. Options write straight
into the field they were registered for, so parsing a value mutates the
configuration model in place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any, Callable, Iterator, Sequence

import click
from click.core import ParameterSource

from ._casters import PrimitiveKind
from ._types import (
    ArgumentError,
    HelpRequested,
    InvalidArgumentValueError,
    InvalidOptionNameError,
    Kind,
    OptionRedefinedError,
    _quote,
)

logger = logging.getLogger(__name__)

_HELP_NAMES = ("h", "help")
_LEFTOVER = "leftover"


@dataclass
class Option:
    """A registered option bound to ``owner.<attr>``."""

    name: str
    kind: PrimitiveKind
    owner: Any
    attr: str
    usage: str = ""
    default: Any = field(init=False)
    env_name: str = field(default="", init=False)

    def __post_init__(self) -> None:
        self.default = getattr(self.owner, self.attr)

    @property
    def value(self) -> Any:
        return getattr(self.owner, self.attr)

    @property
    def is_bool(self) -> bool:
        return self.kind.kind is Kind.BOOL

    @property
    def default_text(self) -> str:
        return self.kind.format(self.default)

    def set(self, raw: str) -> None:
        """Parse *raw* with the option's kind and store it. Raises ``ValueError``."""
        self.assign(self.kind.parse(raw))

    def assign(self, value: Any) -> None:
        setattr(self.owner, self.attr, value)


class _OptionType(click.ParamType):
    """Converts command-line strings with the option's own parser."""

    def __init__(self, option: Option) -> None:
        self.option = option
        self.name = option.kind.metavar

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> Any:
        if not isinstance(value, str):
            return value
        try:
            return self.option.kind.parse(value)
        except ValueError as exc:
            raise InvalidArgumentValueError(self.option.name, value, exc) from exc


def _check_name(name: str) -> None:
    if not name:
        raise InvalidOptionNameError(name, "empty name")
    if name.startswith("-"):
        raise InvalidOptionNameError(name, "begins with -")
    if "=" in name:
        raise InvalidOptionNameError(name, "contains =")
    if "/" in name:
        raise InvalidOptionNameError(name, "contains /")


def _help_text(option: Option) -> str:
    """Usage plus a ``(default X)`` suffix when the default is not the zero value."""
    if option.default == option.kind.zero:
        return option.usage
    shown = option.default_text
    if option.kind.kind is Kind.STRING:
        shown = _quote(shown)
    suffix = f"(default {shown})"
    return f"{option.usage} {suffix}" if option.usage else suffix


class FlagSet:
    """Registry of options for one program.

    ``name`` is the program's invocation name (usually ``sys.argv[0]``); its
    base name prefixes every derived environment variable.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.args: list[str] = []
        self.parsed = False
        self._options: dict[str, Option] = {}

    @property
    def base_name(self) -> str:
        return PurePath(self.name).name or "."

    # -- Registration -------------------------------------------------------

    def register(
        self,
        name: str,
        kind: PrimitiveKind,
        owner: Any,
        attr: str,
        usage: str = "",
    ) -> Option:
        """Add an option writing into ``owner.<attr>``; its default is the current value."""
        _check_name(name)
        if name in self._options:
            raise OptionRedefinedError(name, self.base_name)
        option = Option(name, kind, owner, attr, usage)
        self._options[name] = option
        logger.debug("Registered %s option %r on %s", kind.metavar, name, self.base_name)
        return option

    def lookup(self, name: str) -> Option | None:
        return self._options.get(name)

    def __iter__(self) -> Iterator[Option]:
        """Options in lexicographical order of their names."""
        for name in sorted(self._options):
            yield self._options[name]

    def __len__(self) -> int:
        return len(self._options)

    def __contains__(self, name: object) -> bool:
        return name in self._options

    def visit_all(self, fn: Callable[[Option], None]) -> None:
        for option in self:
            fn(option)

    # -- Parsing ------------------------------------------------------------

    def parse(self, args: Sequence[str]) -> None:
        """Assign every option given in *args*; the rest land in ``self.args``.

        Options that do not appear keep whatever value their field holds now.
        Parsing stops at the first non-option token or at ``--``.
        """
        tokens = self._canonical_tokens(list(args))
        command, bindings = self._command()
        try:
            ctx = command.make_context(self.base_name, tokens)
        except click.UsageError as exc:
            raise ArgumentError(exc.format_message()) from exc

        for param_name, option in bindings.items():
            if ctx.get_parameter_source(param_name) is ParameterSource.COMMANDLINE:
                option.assign(ctx.params[param_name])
                logger.debug("Set option %r from the command line", option.name)

        self.args = list(ctx.params[_LEFTOVER])
        self.parsed = True

    def _canonical_tokens(self, args: list[str]) -> list[str]:
        """Rewrite option tokens as ``--name=value`` and fence off positionals.

        A bare boolean option means ``true``. Every other option takes the next
        token as its value unless one is attached with ``=``.
        """
        tokens: list[str] = []
        index = 0
        while index < len(args):
            token = args[index]
            if token == "--":
                index += 1
                break
            if len(token) < 2 or not token.startswith("-"):
                break
            index += 1

            body = token[2:] if token.startswith("--") else token[1:]
            if not body or body[0] in "-=":
                raise ArgumentError(f"bad flag syntax: {token}")
            name, has_value, value = body.partition("=")

            option = self._options.get(name)
            if option is None:
                if name in _HELP_NAMES:
                    raise HelpRequested()
                raise ArgumentError(f"flag provided but not defined: -{name}")

            if not has_value:
                if option.is_bool:
                    value = "true"
                elif index < len(args):
                    value = args[index]
                    index += 1
                else:
                    raise ArgumentError(f"flag needs an argument: -{name}")
            tokens.append(f"--{name}={value}")

        return [*tokens, "--", *args[index:]]

    # -- Click command ------------------------------------------------------

    def _command(self) -> tuple[click.Command, dict[str, Option]]:
        params: list[click.Parameter] = []
        bindings: dict[str, Option] = {}
        for index, option in enumerate(self):
            param_name = f"option_{index}"
            bindings[param_name] = option
            params.append(
                click.Option(
                    [f"-{option.name}", f"--{option.name}", param_name],
                    type=_OptionType(option),
                    metavar=option.kind.metavar,
                    help=_help_text(option),
                )
            )
        params.append(click.Argument([_LEFTOVER], nargs=-1, metavar="[ARGS]..."))
        command = click.Command(self.base_name, params=params, add_help_option=False)
        return command, bindings

    def usage(self) -> str:
        """Render the help text for every registered option."""
        command, _ = self._command()
        with click.Context(command, info_name=self.base_name) as ctx:
            return command.get_help(ctx)
