"""Foundation types for flagconf.

Provides the exception hierarchy, the primitive ``Kind`` enumeration with its
integer-width aliases, and the ``Conf`` marker that tags model fields.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any

from annotated_types import Ge, Le
from pydantic import BaseModel
from pydantic.fields import FieldInfo

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


class ConfigError(Exception):
    """Base exception for flagconf errors."""


class ConfigurationAuthorError(ConfigError):
    """The model or flag set is declared wrongly. Never an operator mistake."""


class InvalidOptionNameError(ConfigurationAuthorError):
    """Raised when a derived option name cannot be registered."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"invalid option name {_quote(name)}: {reason}")


class OptionRedefinedError(ConfigurationAuthorError):
    """Raised when two fields map to the same option name."""

    def __init__(self, name: str, flagset: str) -> None:
        self.name = name
        self.flagset = flagset
        super().__init__(f"{flagset} flag redefined: {name}")


class NotARecordError(ConfigurationAuthorError):
    """Raised when a non-model value is passed where a model is required."""

    def __init__(self, kind: str, operation: str = "redact") -> None:
        self.kind = kind
        self.operation = operation
        super().__init__(f"{operation} called on {kind} (only records are acceptable)")


class OperatorInputError(ConfigError):
    """A value supplied at runtime (env var or argument) is unusable."""


class InvalidEnvironmentValueError(OperatorInputError):
    """Raised when an environment variable does not parse as its option's kind."""

    def __init__(self, env_name: str, value: str, cause: Exception) -> None:
        self.env_name = env_name
        self.value = value
        self.cause = cause
        super().__init__(f"invalid value {_quote(value)} for env var {env_name}: {cause}")


class ArgumentError(OperatorInputError):
    """Raised when the command line cannot be parsed."""


class InvalidArgumentValueError(ArgumentError):
    """Raised when a command-line value does not parse as its option's kind."""

    def __init__(self, flag: str, value: str, cause: Exception) -> None:
        self.flag = flag
        self.value = value
        self.cause = cause
        super().__init__(f"invalid value {_quote(value)} for flag -{flag}: {cause}")


class HelpRequested(ConfigError):
    """Raised when ``-h`` or ``-help`` is given and no such option exists."""

    def __init__(self) -> None:
        super().__init__("help requested")


# ---------------------------------------------------------------------------
# Kinds
# ---------------------------------------------------------------------------


class Kind(Enum):
    """Primitive kinds an option can hold."""

    BOOL = "bool"
    INT = "int"
    INT64 = "int64"
    UINT = "uint"
    UINT64 = "uint64"
    FLOAT64 = "float64"
    STRING = "string"
    DURATION = "duration"


INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1

Int64 = Annotated[int, Kind.INT64, Ge(INT64_MIN), Le(INT64_MAX)]
Uint = Annotated[int, Kind.UINT, Ge(0), Le(UINT64_MAX)]
Uint64 = Annotated[int, Kind.UINT64, Ge(0), Le(UINT64_MAX)]


# ---------------------------------------------------------------------------
# Conf marker
# ---------------------------------------------------------------------------


def parse_conf_tag(tag: str) -> tuple[str, bool]:
    """Split a ``name[,noredact]`` tag into ``(name, noredact)``.

    Only the first comma separates; the field is kept on redaction when the
    remainder is exactly ``noredact``.
    """
    name, sep, rest = tag.partition(",")
    if not sep:
        return name, False
    return name, rest == "noredact"


@dataclass(frozen=True)
class Conf:
    """Marks a model field for binding and redaction.

    Place it in the field's ``Annotated`` metadata::

        class Settings(BaseModel):
            username: Annotated[str, Conf("name,noredact", usage="who to log in as")] = "jdoe"
            password: Annotated[str, Conf("password")] = ""
    """

    tag: str = ""
    usage: str = ""

    @property
    def name(self) -> str:
        return parse_conf_tag(self.tag)[0]

    @property
    def noredact(self) -> bool:
        return parse_conf_tag(self.tag)[1]


def field_conf(info: FieldInfo) -> Conf | None:
    """Return the ``Conf`` marker attached to a pydantic field, if any."""
    for item in info.metadata:
        if isinstance(item, Conf):
            return item
    return None


def is_record_type(annotation: Any) -> bool:
    """True when *annotation* is a pydantic model class."""
    try:
        return isinstance(annotation, type) and issubclass(annotation, BaseModel)
    except TypeError:  # list[int] passes isinstance(..., type) on 3.10
        return False


def kind_name(value: Any) -> str:
    """Describe the kind of a value for error messages."""
    if isinstance(value, type):
        return "type"
    return type(value).__name__
