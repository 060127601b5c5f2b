# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import re

from rj_lib.core.logger import get_logger

logger = get_logger(__name__)

# first line of a job in the output of `qstat -r`:
# job-ID prior name user state submit/start-at (date time) [queue] slots [ja-task-ID]
_JOB_ROW = re.compile(
    r"^\s*(?P<id>\d+)\s+(?P<prior>\S+)\s+(?P<name>\S+)\s+(?P<user>\S+)\s+"
    r"(?P<state>\S+)\s+(?P<date>\S+\s+\S+)\s*(?P<rest>.*)$"
)

# additional line with the untruncated job name
_FULL_NAME = re.compile(r"^\s+Full jobname:\s*(?P<name>.*?)\s*$")


def parse_qstat_listing(text: str) -> list[dict[str, str]]:
    """
    Parse the output of `qstat -r` into a list of dictionaries, one per job.

    Every dictionary contains the keys 'id', 'name', 'user', 'state',
    'queue' (empty for jobs without an assigned queue instance), and 'row'
    (the raw lines describing the job). The job name is taken from the
    'Full jobname' line if present, since the name column is truncated.

    Args:
        text (str): Output of `qstat -r`.

    Returns:
        list[dict[str, str]]: Parsed jobs in the order of the listing.
    """
    jobs: list[dict[str, str]] = []
    current: dict[str, str] | None = None

    for line in text.splitlines():
        if m := _JOB_ROW.match(line):
            rest = m.group("rest").split()
            current = {
                "id": m.group("id"),
                "name": m.group("name"),
                "user": m.group("user"),
                "state": m.group("state"),
                "queue": rest[0] if rest and "@" in rest[0] else "",
                "row": line.rstrip(),
            }
            jobs.append(current)
            continue

        # lines before the first job (header, separator) are ignored
        if current is None or not line.strip():
            continue

        if m := _FULL_NAME.match(line):
            current["name"] = m.group("name")
        current["row"] += "\n" + line.rstrip()

    logger.debug(f"Parsed {len(jobs)} job(s) from qstat listing.")
    return jobs


def parse_qstat_description(text: str) -> dict[str, str]:
    """
    Parse the output of `qstat -j <job_id>` into a dictionary.

    Lines are expected in the 'key: value' format; other lines are ignored.

    Returns:
        dict[str, str]: Dictionary mapping keys to values.
    """
    result: dict[str, str] = {}

    for raw_line in text.splitlines():
        line = raw_line.rstrip()
        if ":" not in line or line.startswith((" ", "\t", "=")):
            continue

        key, value = line.split(":", 1)
        result[key.strip()] = value.strip()

    return result


def parse_path_list(path_list: str) -> str | None:
    """
    Extract the path from a Grid Engine path list such as 'NONE:/home/user/log'.

    Only the first element of the list is considered. Returns None if the
    list does not contain a path.
    """
    first = path_list.split(",", 1)[0].strip()
    if not first:
        return None

    # elements have the format [[hostname]:]path
    path = first.rsplit(":", 1)[-1].strip()
    return path or None
