# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import re
from dataclasses import dataclass
from typing import Self
from urllib.parse import urlsplit, urlunsplit

from rj_lib.core.error import RJError

# labels of the lines printed by `rj submit`, in the order they are printed
LABELS = ["JOB_ID", "PORT", "NODE", "URL"]


@dataclass
class ConnectionInfo:
    """
    Information needed to connect to a running notebook server.
    Handed over from `rj submit` to `rj launch` as 'LABEL=value' lines.
    """

    job_id: str
    port: int
    node: str
    url: str

    def toText(self) -> str:
        """
        Serialize the information into labeled lines.

        Returns:
            str: Four 'LABEL=value' lines.
        """
        values = [self.job_id, str(self.port), self.node, self.url]
        return "\n".join(f"{label}={value}" for label, value in zip(LABELS, values))

    @classmethod
    def fromText(cls, text: str) -> Self:
        """
        Extract the information from arbitrary output containing the labeled lines.

        Other lines (e.g. log messages) are ignored. If a label occurs
        multiple times, the last occurrence is used.

        Args:
            text (str): Output of `rj submit`.

        Returns:
            ConnectionInfo: The parsed information.

        Raises:
            RJError: If the NODE line is missing or the other values are missing or invalid.
        """
        values = {}
        for label in LABELS:
            if matches := re.findall(rf"^\s*{label}=(.*?)\s*$", text, re.MULTILINE):
                values[label] = matches[-1]

        if not values.get("NODE"):
            raise RJError("Could not find the compute node in the output.")

        missing = [label for label in LABELS if not values.get(label)]
        if missing:
            raise RJError(f"Missing {', '.join(missing)} in the output.")

        try:
            port = int(values["PORT"])
        except ValueError as e:
            raise RJError(f"Invalid port '{values['PORT']}' in the output.") from e

        return cls(values["JOB_ID"], port, values["NODE"], values["URL"])

    def getLocalUrl(self, local_port: int) -> str:
        """
        Return the URL of the server as seen through a tunnel ending at `local_port`.

        Args:
            local_port (int): Local end of the tunnel.

        Returns:
            str: The URL with the host replaced by 'localhost:<local_port>'.
        """
        parts = urlsplit(self.url)
        return urlunsplit(parts._replace(netloc=f"localhost:{local_port}"))
