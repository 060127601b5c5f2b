# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import click

from rj_lib.core.config import CFG

from .job_options import FlagArity
from .parser import SCHEDULER_FLAGS

_TOOL_FLAG_HELP = [
    ("-help", "Print this help and exit."),
    ("-port <n>", f"Port of the notebook server. Defaults to {CFG.defaults.port}."),
    (
        "-@ <file>",
        f"File with default qsub options. Defaults to '{CFG.defaults.defaults_file}'.\n"
        "Created if it does not exist. Its options are not part of the job name.",
    ),
    (
        "-o <path>",
        "Log file of the notebook server. If a directory is given,\n"
        "the log file is named '<job name>.o<job id>'.",
    ),
    ("-N <name>", f"Base of the job name. Defaults to '{CFG.defaults.name}'."),
]

_LAUNCH_FLAG_HELP = [
    (
        "-remote <host>",
        f"Head node of the cluster to connect to. Defaults to '{CFG.launch.remote}'.",
    ),
]

_ARITY_HELP = {
    FlagArity.NONE: "Flags without a value.",
    FlagArity.SINGLE: "Flags with a value. A repeated flag replaces the earlier value.",
    FlagArity.MULTI: "Flags with a value. Repeated values are joined by commas.",
    FlagArity.PAIR: "Parallel environment and its slots, e.g. '-pe smp 4'.",
}


def flag_sections(launch: bool = False) -> list[tuple[str, list[tuple[str, str]]]]:
    """
    Describe the command line flags for the help page of an rj command.

    Args:
        launch (bool): Include the flags accepted only by `rj launch`.

    Returns:
        list[tuple[str, list[tuple[str, str]]]]: Pairs of section headings and rows.
    """
    tool_rows = _TOOL_FLAG_HELP + (_LAUNCH_FLAG_HELP if launch else [])

    qsub_rows = []
    for arity in FlagArity:
        flags = [flag for flag, a in SCHEDULER_FLAGS.items() if a == arity]
        qsub_rows.append((" ".join(flags), _ARITY_HELP[arity]))

    return [
        (click.style("rj options", fg="yellow"), tool_rows),
        (click.style("qsub options", fg="yellow"), qsub_rows),
    ]
