# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import dataclass, field
from pathlib import Path

from rj_lib.core.config import CFG
from rj_lib.core.error import RJError
from rj_lib.core.logger import get_logger

from .job_options import FlagArity, JobOptions

logger = get_logger(__name__)

# qsub flags passed through to the scheduler
SCHEDULER_FLAGS: dict[str, FlagArity] = {
    # flags without a value
    "-cwd": FlagArity.NONE,
    "-V": FlagArity.NONE,
    "-notify": FlagArity.NONE,
    "-clear": FlagArity.NONE,
    # flags with a single value
    "-a": FlagArity.SINGLE,
    "-A": FlagArity.SINGLE,
    "-ar": FlagArity.SINGLE,
    "-b": FlagArity.SINGLE,
    "-ckpt": FlagArity.SINGLE,
    "-dl": FlagArity.SINGLE,
    "-e": FlagArity.SINGLE,
    "-j": FlagArity.SINGLE,
    "-js": FlagArity.SINGLE,
    "-m": FlagArity.SINGLE,
    "-now": FlagArity.SINGLE,
    "-p": FlagArity.SINGLE,
    "-P": FlagArity.SINGLE,
    "-r": FlagArity.SINGLE,
    "-R": FlagArity.SINGLE,
    "-S": FlagArity.SINGLE,
    "-wd": FlagArity.SINGLE,
    # flags with comma-joined values
    "-ac": FlagArity.MULTI,
    "-hold_jid": FlagArity.MULTI,
    "-l": FlagArity.MULTI,
    "-M": FlagArity.MULTI,
    "-masterq": FlagArity.MULTI,
    "-q": FlagArity.MULTI,
    "-sc": FlagArity.MULTI,
    "-v": FlagArity.MULTI,
    # parallel environment: name and slot range
    "-pe": FlagArity.PAIR,
}

# flags interpreted by rj itself
TOOL_FLAGS: dict[str, FlagArity] = {
    "-help": FlagArity.NONE,
    "-port": FlagArity.SINGLE,
    "-@": FlagArity.SINGLE,
    "-o": FlagArity.SINGLE,
    "-N": FlagArity.SINGLE,
}

# additional flags interpreted by `rj launch`
LAUNCH_FLAGS: dict[str, FlagArity] = {
    "-remote": FlagArity.SINGLE,
}


@dataclass
class ParsedArgs:
    """
    Result of parsing the rj command line.

    Tool settings that were not given on the command line are None;
    the getters fall back to the configured defaults.
    """

    options: JobOptions = field(default_factory=JobOptions)
    port: int | None = None
    name: str | None = None
    output: str | None = None
    defaults_file: str | None = None
    remote: str | None = None
    help: bool = False

    def getPort(self) -> int:
        """Get the port of the notebook server."""
        return self.port if self.port is not None else CFG.defaults.port

    def getName(self) -> str:
        """Get the base of the job name."""
        return self.name or CFG.defaults.name

    def getDefaultsFile(self) -> Path:
        """Get the path to the file with default qsub options."""
        return Path(self.defaults_file or CFG.defaults.defaults_file).expanduser()

    def getRemote(self) -> str:
        """Get the name of the remote head node."""
        return self.remote or CFG.launch.remote

    def toTokens(self) -> list[str]:
        """
        Serialize the parsed flags back into command line tokens.

        `-remote` and `-help` are never included: they only make sense locally.

        Returns:
            list[str]: Tokens accepted by `OptionParser`.
        """
        tokens = []
        if self.port is not None:
            tokens.extend(["-port", str(self.port)])
        if self.defaults_file is not None:
            tokens.extend(["-@", self.defaults_file])
        if self.output is not None:
            tokens.extend(["-o", self.output])
        if self.name is not None:
            tokens.extend(["-N", self.name])

        for entry in self.options.entries():
            if entry.arity == FlagArity.MULTI:
                # split accumulated values so that each token stays readable
                for value in entry.value.split(","):
                    tokens.extend([entry.flag, value])
            else:
                tokens.extend(entry.toArgs())

        return tokens


class OptionParser:
    """
    Parser for the single-dash, qsub-style command line of rj.
    """

    def __init__(self, tokens: list[str], accept_remote: bool = False):
        """
        Initialize the parser.

        Args:
            tokens (list[str]): Command line tokens in the order they were given.
            accept_remote (bool): Whether `-remote` is a valid flag.
        """
        self._tokens = list(tokens)
        self._tool_flags = dict(TOOL_FLAGS)
        if accept_remote:
            self._tool_flags.update(LAUNCH_FLAGS)

    def parse(self) -> ParsedArgs:
        """
        Parse the command line.

        Returns:
            ParsedArgs: Parsed tool settings and qsub options.

        Raises:
            RJError: If an unknown flag is encountered, a flag is missing
                its value, or the port is not a valid port number.
        """
        parsed = ParsedArgs()
        position = 0

        while position < len(self._tokens):
            flag = self._tokens[position]
            arity = self._tool_flags.get(flag) or SCHEDULER_FLAGS.get(flag)
            if arity is None:
                raise RJError(f"Unrecognized option '{flag}'.")

            nargs = arity.nargs()
            values = self._tokens[position + 1 : position + 1 + nargs]
            if len(values) < nargs:
                raise RJError(
                    f"Option '{flag}' requires {nargs} argument{'s' if nargs > 1 else ''}."
                )
            position += 1 + nargs

            for value in values:
                if not value.strip():
                    logger.warning(f"Argument of option '{flag}' looks blank.")

            if flag == "-help":
                parsed.help = True
                return parsed

            if flag in self._tool_flags:
                self._setToolFlag(parsed, flag, values[0])
            else:
                parsed.options.add(flag, arity, " ".join(values))

        logger.debug(f"Parsed command line: {parsed}.")
        return parsed

    @staticmethod
    def _setToolFlag(parsed: ParsedArgs, flag: str, value: str) -> None:
        match flag:
            case "-port":
                parsed.port = OptionParser._parsePort(value)
            case "-@":
                parsed.defaults_file = value
            case "-o":
                parsed.output = value
            case "-N":
                parsed.name = value
            case "-remote":
                parsed.remote = value

    @staticmethod
    def _parsePort(value: str) -> int:
        try:
            port = int(value)
        except ValueError as e:
            raise RJError(f"Invalid port '{value}': not an integer.") from e

        if not 0 < port < 65536:
            raise RJError(f"Invalid port '{value}': out of range.")

        return port
