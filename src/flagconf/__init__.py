"""Bind pydantic config models to command-line flags and environment variables.

Tag fields with ``Conf`` and call ``load`` once at startup; every tagged field
becomes a flag and an environment variable. ``redact`` copies a model with all
fields not marked ``noredact`` zeroed, for safe logging.
"""

from ._casing import envify
from ._environment import Environment, FakeEnvironment, OsEnvironment
from ._flagset import FlagSet, Option
from ._loader import (
    annotate_env,
    apply_env,
    bind_flags,
    env_var_name,
    get_environment,
    load,
    load_or_exit,
    set_environment,
)
from ._redact import redact
from ._testing import override_environment
from ._types import (
    ArgumentError,
    Conf,
    ConfigError,
    ConfigurationAuthorError,
    HelpRequested,
    Int64,
    InvalidArgumentValueError,
    InvalidEnvironmentValueError,
    InvalidOptionNameError,
    Kind,
    NotARecordError,
    OperatorInputError,
    OptionRedefinedError,
    Uint,
    Uint64,
    parse_conf_tag,
)
from ._version import __version__
from ._walker import FieldDescriptor, walk_fields

__all__ = [
    "__version__",
    # Core
    "load",
    "load_or_exit",
    "redact",
    "Conf",
    "FlagSet",
    "Option",
    # Steps
    "bind_flags",
    "annotate_env",
    "apply_env",
    "env_var_name",
    "envify",
    "walk_fields",
    "FieldDescriptor",
    "parse_conf_tag",
    # Types
    "Kind",
    "Int64",
    "Uint",
    "Uint64",
    # Environment
    "Environment",
    "OsEnvironment",
    "get_environment",
    "set_environment",
    # Errors
    "ConfigError",
    "ConfigurationAuthorError",
    "InvalidOptionNameError",
    "OptionRedefinedError",
    "NotARecordError",
    "OperatorInputError",
    "InvalidEnvironmentValueError",
    "ArgumentError",
    "InvalidArgumentValueError",
    "HelpRequested",
    # Testing
    "override_environment",
    "FakeEnvironment",
]
