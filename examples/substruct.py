"""Nested settings: two database blocks sharing one model.

    python examples/substruct.py -primary-db-dsn postgres://a -secondary-db-timeout 5s
    SUBSTRUCT_PRIMARY_DB_DSN=postgres://b python examples/substruct.py

Neither ``primary-db`` nor ``secondary-db`` is marked ``noredact``, so the
redacted copy drops both blocks entirely, timeouts included.
"""

from datetime import timedelta
from typing import Annotated

from pydantic import BaseModel, Field

from flagconf import Conf, FlagSet, load_or_exit, redact


class DBConfig(BaseModel):
    dsn: Annotated[str, Conf("dsn")] = ""
    timeout: Annotated[timedelta, Conf("timeout,noredact")] = timedelta(seconds=30)


class Config(BaseModel):
    primary_db: Annotated[DBConfig, Conf("primary-db")] = Field(default_factory=DBConfig)
    secondary_db: Annotated[DBConfig, Conf("secondary-db")] = Field(default_factory=DBConfig)


if __name__ == "__main__":
    config = Config()
    load_or_exit(config, flagset=FlagSet("substruct"))
    print("raw config", config)
    print("redacted config", redact(config))
