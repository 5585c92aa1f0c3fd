"""Minimal program: one public and one secret setting.

    python examples/hello_world.py -name alice
    HELLO_WORLD_PASSWORD=hunter2 python examples/hello_world.py
"""

from typing import Annotated

from pydantic import BaseModel

from flagconf import Conf, FlagSet, load_or_exit, redact


class Config(BaseModel):
    username: Annotated[str, Conf("name,noredact", usage="who to log in as")] = "jdoe"
    password: Annotated[str, Conf("password")] = ""


if __name__ == "__main__":
    config = Config()
    # argv[0] would be "hello_world.py"
    load_or_exit(config, flagset=FlagSet("hello_world"))
    print("raw config", config)
    print("redacted config", redact(config))
