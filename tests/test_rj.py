# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from click.testing import CliRunner

from rj_lib import __version__
from rj_lib.rj import cli


def test_cli_version():
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_lists_commands():
    result = CliRunner().invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "submit" in result.output
    assert "launch" in result.output


def test_cli_passes_qsub_flags_to_submit():
    result = CliRunner().invoke(cli, ["submit", "-help"])

    assert result.exit_code == 0
    assert "qsub options" in result.output
