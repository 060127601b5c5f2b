# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import sys
from typing import NoReturn

import click

from rj_lib.batch.interface import BatchMeta
from rj_lib.core.click_format import GNUHelpColorsCommand
from rj_lib.core.config import CFG
from rj_lib.core.error import RJError
from rj_lib.core.logger import get_logger
from rj_lib.options import OptionParser
from rj_lib.options.help import flag_sections
from rj_lib.submit.submitter import Submitter

logger = get_logger(__name__)


@click.command(
    short_help="Submit a notebook server job and report how to reach it.",
    help=f"""
Submit a Jupyter server job to Grid Engine and wait until it is ready.

The job name is derived from `-N` and from the runtime limit, parallel environment,
and project requested on the command line. If an unfinished job with the same name
exists, it is reused instead of submitting a new one.

When the server is ready, prints JOB_ID, PORT, NODE, and URL to the standard output.
Exits with {CFG.exit_codes.not_ready} if the job does not start or the server does not load in time;
running the same command again later continues waiting for the same job.

Options use a single dash, as in qsub.
""",
    cls=GNUHelpColorsCommand,
    help_options_color="bright_blue",
    flag_sections=flag_sections(),
    options_metavar="",
    context_settings={
        "ignore_unknown_options": True,
        "help_option_names": ["--help"],
    },
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED, metavar="[OPTIONS]")
@click.pass_context
def submit(ctx: click.Context, args: tuple[str, ...]) -> NoReturn:
    """
    Submit a notebook server job and report how to reach it.
    """
    try:
        parsed = OptionParser(list(args)).parse()
    except RJError as e:
        logger.error(e)
        click.echo(ctx.get_help(), err=True)
        sys.exit(CFG.exit_codes.default)

    if parsed.help:
        click.echo(ctx.get_help())
        sys.exit(0)

    try:
        submitter = Submitter(BatchMeta.fromEnvVarOrGuess(), parsed)
        info = submitter.run()
        print(info.toText())
        sys.exit(0)
    except RJError as e:
        logger.error(e)
        sys.exit(e.exit_code)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)
