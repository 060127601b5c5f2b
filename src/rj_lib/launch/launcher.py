# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import shlex
import socket
import subprocess

from rj_lib.core.config import CFG
from rj_lib.core.error import RJError, RJNotReadyError
from rj_lib.core.logger import get_logger
from rj_lib.options import ParsedArgs
from rj_lib.properties.connection import ConnectionInfo

logger = get_logger(__name__)


class Launcher:
    """
    Runs `rj submit` on the head node of the cluster and opens an SSH
    session forwarding a local port to the notebook server.
    """

    # exit code of ssh if connection fails
    SSH_FAIL = 255

    def __init__(self, args: ParsedArgs, hostname: str | None = None):
        """
        Initialize the launcher.

        Args:
            args (ParsedArgs): Parsed command line of `rj launch`.
            hostname (str | None): Name of the local machine. Detected if not given.
        """
        self._args = args
        self._remote = args.getRemote()
        self._local_port = args.getPort()
        self._hostname = hostname or socket.gethostname()

    def launch(self) -> ConnectionInfo:
        """
        Submit the notebook server job remotely and open the tunnel.

        Blocks until the user leaves the remote shell.

        Returns:
            ConnectionInfo: Information about the notebook server.

        Raises:
            RJError: If running on the remote host itself, if the remote output
                cannot be parsed, or if the connection fails.
            RJNotReadyError: If the job is not ready yet.
        """
        self.ensureNotOnRemote()

        info = self.submitRemotely()
        logger.info(
            f"Job '{info.job_id}' is running on '{info.node}'. "
            f"Open {info.getLocalUrl(self._local_port)} in your browser."
        )

        self.openTunnel(info)
        return info

    def ensureNotOnRemote(self) -> None:
        """
        Refuse to run on the remote host, where `rj launch` would connect to itself.

        Raises:
            RJError: If the local hostname contains the name of the remote host.
        """
        if self._remote in self._hostname:
            raise RJError(
                f"Already running on '{self._hostname}'. "
                f"Use '{CFG.binary_name} submit' on the remote host '{self._remote}'."
            )

    def submitRemotely(self) -> ConnectionInfo:
        """
        Run `rj submit` on the remote host and parse its output.

        Raises:
            RJNotReadyError: If the remote command reports that the job is not ready yet.
            RJError: If the output does not contain the connection information.
        """
        command = self._translateSubmitCommand()
        logger.debug(f"Using ssh: '{shlex.join(command)}'")

        result = subprocess.run(
            command,
            text=True,
            check=False,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            errors="replace",
        )
        output = result.stdout.strip()

        if result.returncode == CFG.exit_codes.not_ready:
            raise RJNotReadyError(
                f"The notebook server on '{self._remote}' is not ready yet. Try again later.\n{output}"
            )

        try:
            return ConnectionInfo.fromText(output)
        except RJError as e:
            raise RJError(
                f"{e} Output of '{CFG.launch.remote_command}' on '{self._remote}' "
                f"(exit code {result.returncode}):\n{output}"
            ) from e

    def openTunnel(self, info: ConnectionInfo) -> None:
        """
        Open an interactive login shell on the remote host with the local port
        forwarded to the notebook server.

        Raises:
            RJError: If ssh cannot connect to the remote host.
        """
        command = self._translateTunnelCommand(info)
        logger.debug(f"Using ssh: '{shlex.join(command)}'")
        result = subprocess.run(command)

        # exit codes of the commands run by the user in the shell are ignored
        if result.returncode == Launcher.SSH_FAIL:
            raise RJError(f"Could not open a tunnel through '{self._remote}'.")

    def _translateSubmitCommand(self) -> list[str]:
        """
        Construct the ssh command running `rj submit` remotely.

        The flags are re-serialized from the parsed arguments, not copied
        from the original command line.
        """
        tokens = self._args.toTokens()
        return [
            "ssh",
            self._remote,
            f"{CFG.launch.remote_command} {shlex.join(tokens)}".strip(),
        ]

    def _translateTunnelCommand(self, info: ConnectionInfo) -> list[str]:
        """
        Construct the ssh command forwarding the local port and opening a login shell.
        """
        return [
            "ssh",
            "-L",
            f"{self._local_port}:{info.node}:{info.port}",
            "-t",
            self._remote,
            f"export {CFG.env_vars.session_marker}={shlex.quote(info.job_id)}; "
            f"exec {CFG.launch.login_shell}",
        ]
