"""Tests for commands/cli.py — the flagconf command group."""

import sys
import textwrap

import pytest
from click.testing import CliRunner

from flagconf._flagset import FlagSet
from flagconf._loader import env_var_name
from flagconf.commands.cli import _import_model, flagconf_group

SETTINGS_MODULE = textwrap.dedent(
    """
    from datetime import timedelta
    from typing import Annotated

    from pydantic import BaseModel, Field

    from flagconf import Conf


    class HTTPConfig(BaseModel):
        timeout: Annotated[timedelta, Conf("Timeout,noredact")] = timedelta(hours=1)


    class Settings(BaseModel):
        dsn: Annotated[str, Conf("db-dsn", usage="database address")] = ""
        http: Annotated[HTTPConfig, Conf("http,noredact")] = Field(default_factory=HTTPConfig)


    NOT_A_MODEL = 42
    """
)


@pytest.fixture
def settings_module(tmp_path, monkeypatch):
    (tmp_path / "cli_settings.py").write_text(SETTINGS_MODULE)
    monkeypatch.syspath_prepend(str(tmp_path))
    yield "cli_settings"
    sys.modules.pop("cli_settings", None)


class TestEnvName:
    def test_paths(self):
        result = CliRunner().invoke(
            flagconf_group, ["env-name", "./bin/server", "db-dsn", "http-Timeout"]
        )
        assert result.exit_code == 0
        assert result.output.splitlines() == ["SERVER_DB_DSN", "SERVER_HTTP_TIMEOUT"]

    @pytest.mark.parametrize("program", [".", "", "some/path/to/cmd"])
    def test_matches_names_read_by_load(self, program):
        result = CliRunner().invoke(flagconf_group, ["env-name", program, "x"])
        assert result.exit_code == 0
        assert result.output.splitlines() == [env_var_name(FlagSet(program), "x")]

    def test_dot_program_keeps_dot(self):
        result = CliRunner().invoke(flagconf_group, ["env-name", ".", "x"])
        assert result.output == "._X\n"

    def test_path_required(self):
        result = CliRunner().invoke(flagconf_group, ["env-name", "server"])
        assert result.exit_code == 2


class TestUsage:
    def test_prints_flags_and_env_vars(self, settings_module):
        result = CliRunner().invoke(
            flagconf_group, ["usage", f"{settings_module}:Settings", "--prog", "myapp"]
        )
        assert result.exit_code == 0
        # help text is wrapped to the terminal width
        output = " ".join(result.output.split())
        assert "-db-dsn" in output
        assert "database address" in output
        assert "MYAPP_DB_DSN" in output
        assert "(default 1h0m0s)" in output

    def test_prog_defaults_to_class_name(self, settings_module):
        result = CliRunner().invoke(flagconf_group, ["usage", f"{settings_module}:Settings"])
        assert result.exit_code == 0
        assert "SETTINGS_DB_DSN" in result.output

    def test_not_a_model(self, settings_module):
        result = CliRunner().invoke(flagconf_group, ["usage", f"{settings_module}:NOT_A_MODEL"])
        assert result.exit_code == 1

    def test_missing_module(self):
        result = CliRunner().invoke(flagconf_group, ["usage", "no_such_module_xyz:Settings"])
        assert result.exit_code == 1


class TestImportModel:
    @pytest.mark.parametrize("target", ["module", ":Class", "module:"])
    def test_bad_target(self, target):
        with pytest.raises(ValueError, match="expected MODULE:CLASS"):
            _import_model(target)
