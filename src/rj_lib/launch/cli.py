# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import sys
from typing import NoReturn

import click

from rj_lib.core.click_format import GNUHelpColorsCommand
from rj_lib.core.config import CFG
from rj_lib.core.error import RJError
from rj_lib.core.logger import get_logger
from rj_lib.launch.launcher import Launcher
from rj_lib.options import OptionParser
from rj_lib.options.help import flag_sections

logger = get_logger(__name__)


@click.command(
    short_help="Start a notebook server on the cluster and connect to it.",
    help=f"""
Start a Jupyter server on the cluster and open a tunnel to it from this machine.

Runs `{CFG.binary_name} submit` on the head node of the cluster over ssh, waits for the
server to start, and opens a login shell on the head node with the local port
forwarded to the server. The server stays reachable as long as the shell is open.

All options are checked locally before connecting and then passed to
`{CFG.binary_name} submit`. Options use a single dash, as in qsub.
""",
    cls=GNUHelpColorsCommand,
    help_options_color="bright_blue",
    flag_sections=flag_sections(launch=True),
    options_metavar="",
    context_settings={
        "ignore_unknown_options": True,
        "help_option_names": ["--help"],
    },
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED, metavar="[OPTIONS]")
@click.pass_context
def launch(ctx: click.Context, args: tuple[str, ...]) -> NoReturn:
    """
    Start a notebook server on the cluster and connect to it.
    """
    try:
        parsed = OptionParser(list(args), accept_remote=True).parse()
    except RJError as e:
        logger.error(e)
        click.echo(ctx.get_help(), err=True)
        sys.exit(CFG.exit_codes.default)

    if parsed.help:
        click.echo(ctx.get_help())
        sys.exit(0)

    try:
        Launcher(parsed).launch()
        sys.exit(0)
    except RJError as e:
        logger.error(e)
        sys.exit(e.exit_code)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)
