# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Deterministic naming of rj jobs.

The job name doubles as the key used to find an already running notebook
server with the same configuration, so it must depend only on the base name
and on the runtime limit, parallel environment, and project requested on the
command line, never on the order in which the options were given.
"""

import re

from rj_lib.core.config import CFG
from rj_lib.core.logger import get_logger

from .job_options import FlagArity, JobOptions

logger = get_logger(__name__)

# qsub resource holding the hard runtime limit
RUNTIME_RESOURCE = "h_rt"

# unit suffixes of runtime fields, from the last field to the first
RUNTIME_UNITS = ["s", "m", "h", "d"]

# characters not allowed in Grid Engine job names
FORBIDDEN_CHARACTERS = re.compile(r"[\n\t\r/:@\\*?]")

# characters separating fragments of the job name
SEPARATORS = "._"


def abbreviate_runtime(runtime: str) -> str:
    """
    Abbreviate a colon-separated runtime, e.g. '9:0:0' -> '9h', '1:2:3:4' -> '1d2h3m4s'.

    Fields are labelled from the right (seconds, minutes, hours, days) and
    zero-valued fields are dropped. Empty fields count as zero, as in qsub.

    Args:
        runtime (str): Runtime in the `[[[d:]h:]m:]s` format.

    Returns:
        str: The abbreviated runtime. Values that are not in the expected
        format are returned unchanged.
    """
    runtime_fields = runtime.strip().split(":")
    if len(runtime_fields) > len(RUNTIME_UNITS) or not all(
        f == "" or f.isdigit() for f in runtime_fields
    ):
        logger.debug(f"Runtime '{runtime}' could not be abbreviated.")
        return runtime

    parts = [
        f"{int(value)}{unit}"
        for value, unit in zip(reversed(runtime_fields), RUNTIME_UNITS)
        if value and int(value) != 0
    ]

    return "".join(reversed(parts)) or f"0{RUNTIME_UNITS[0]}"


def sanitize_job_name(name: str) -> str:
    """
    Make a string usable as (a part of) a Grid Engine job name.

    Forbidden characters are replaced with dots, spaces with underscores,
    and leading and trailing separators are removed.
    """
    name = FORBIDDEN_CHARACTERS.sub(".", name).replace(" ", "_")
    return name.strip(SEPARATORS)


def resources_to_fragments(resources: str) -> list[str]:
    """
    Convert a comma-joined `-l` value into job name fragments.

    The runtime limit is abbreviated and placed first; other resources
    follow unchanged in their original order.
    """
    runtime, others = [], []
    for resource in resources.split(","):
        if not (resource := resource.strip()):
            continue

        key, _, value = resource.partition("=")
        if key.strip() == RUNTIME_RESOURCE:
            runtime.append(abbreviate_runtime(value))
        else:
            others.append(resource)

    return runtime + others


def construct_job_name(
    base: str,
    resources: str | None = None,
    parallel_environment: str | None = None,
    project: str | None = None,
    no_parallelism: str = CFG.defaults.no_parallelism,
) -> str:
    """
    Construct the name of an rj job.

    Args:
        base (str): Base of the job name (the `-N` value).
        resources (str | None): Comma-joined `-l` values.
        parallel_environment (str | None): The `-pe` value, e.g. 'smp 4'.
        project (str | None): The `-P` value.
        no_parallelism (str): `-pe` value that is not included in the name.

    Returns:
        str: The job name, e.g. 'jupyter.9h.smp_4.myproject'.
    """
    fragments = resources_to_fragments(resources) if resources else []

    if parallel_environment and parallel_environment.strip() != no_parallelism:
        fragments.append(parallel_environment)

    if project:
        fragments.append(project)

    if not (suffix := sanitize_job_name(".".join(fragments))):
        return base

    return f"{base}.{suffix}"


def job_name_from_options(base: str, options: JobOptions) -> str:
    """Construct the name of an rj job from the options given on the command line."""
    return construct_job_name(
        base,
        resources=options.get("-l"),
        parallel_environment=options.get("-pe"),
        project=options.get("-P"),
    )


def has_runtime_limit(resources: str | None) -> bool:
    """Check whether a comma-joined `-l` value contains the runtime limit."""
    if not resources:
        return False

    return any(
        r.partition("=")[0].strip() == RUNTIME_RESOURCE for r in resources.split(",")
    )


def ensure_runtime_limit(
    options: JobOptions, defaults_set_runtime: bool, runtime: str = CFG.defaults.runtime
) -> bool:
    """
    Add the default runtime limit unless one is already requested.

    Args:
        options (JobOptions): Options from the command line. Modified in place.
        defaults_set_runtime (bool): Whether the defaults file sets a runtime limit.
        runtime (str): The runtime limit to add.

    Returns:
        bool: True if the default runtime limit was added.
    """
    if has_runtime_limit(options.get("-l")) or defaults_set_runtime:
        return False

    logger.debug(f"No runtime limit requested. Using the default of '{runtime}'.")
    options.add("-l", FlagArity.MULTI, f"{RUNTIME_RESOURCE}={runtime}")
    return True
