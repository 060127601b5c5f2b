# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import re
from pathlib import Path

from rj_lib.core.error import RJError
from rj_lib.core.logger import get_logger

logger = get_logger(__name__)

DEFAULTS_HEADER = """\
# Default qsub options used by `rj submit`.
#
# Write one option per line, e.g.
#   -l mem_free=4G
#   -q interactive.q
#
# Options given on the command line take precedence over this file.
# Options from this file are not part of the job name.
"""

# uncommented request of the runtime limit, e.g. '-l h_rt=12:0:0' or '-l mem=1G,h_rt=1::'
_RUNTIME_LINE = re.compile(r"(?:^|[\s,])h_rt\s*=")


class DefaultsFile:
    """
    Per-user file with default qsub options.

    The file is handed over to qsub using `-@`; rj itself only inspects it
    to find out whether it requests a runtime limit.
    """

    def __init__(self, path: Path):
        self._path = path.expanduser()
        self._text: str | None = None

    def getPath(self) -> Path:
        """Get the path to the defaults file."""
        return self._path

    def ensureExists(self) -> None:
        """
        Create the defaults file with an explanatory header if it does not exist.

        Raises:
            RJError: If the file cannot be created.
        """
        if self._path.exists():
            return

        try:
            self._path.write_text(DEFAULTS_HEADER)
            logger.info(f"Created a file for default qsub options: '{self._path}'.")
        except OSError as e:
            raise RJError(
                f"Could not create the defaults file '{self._path}': {e}."
            ) from e

    def read(self) -> str:
        """
        Return the content of the defaults file. The file is read only once.

        Raises:
            RJError: If the file exists but cannot be read.
        """
        if self._text is None:
            if not self._path.is_file():
                logger.debug(f"Defaults file '{self._path}' does not exist.")
                self._text = ""
            else:
                try:
                    self._text = self._path.read_text()
                except OSError as e:
                    raise RJError(
                        f"Could not read the defaults file '{self._path}': {e}."
                    ) from e

        return self._text

    def getOptionLines(self) -> list[str]:
        """Return the meaningful lines of the file with comments removed."""
        lines = []
        for line in self.read().splitlines():
            if content := line.split("#", 1)[0].strip():
                lines.append(content)
        return lines

    def setsRuntimeLimit(self) -> bool:
        """Check whether an uncommented line of the file requests a runtime limit."""
        return any(_RUNTIME_LINE.search(line) for line in self.getOptionLines())
