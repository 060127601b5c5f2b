# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Configuration system for rj.

This module defines dataclasses representing all configurable aspects of rj,
including environment variables, polling budgets, job defaults, scheduler
commands, the notebook server command line, and exit codes.

The `Config` class loads user configuration from a TOML file (if available)
and provides a globally accessible `CFG` instance.
"""

import os
import tomllib
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Self


@dataclass
class EnvironmentVariables:
    """Environment variable names used by rj."""

    # Enables rj debug mode.
    debug_mode: str = "RJ_DEBUG"
    # Selects the batch system backend by name.
    batch_system: str = "RJ_BATCH_SYSTEM"
    # Exported in the login shell opened by `rj launch`.
    session_marker: str = "RJ_JUPYTER_SESSION"


@dataclass
class PollSettings:
    """Settings for the bounded polling loops of `rj submit`."""

    # Maximum number of attempts when waiting for the job to start running.
    run_tries: int = 40
    # Maximum number of attempts when waiting for the server to write its URL.
    load_tries: int = 40
    # Wait time (in seconds) between two attempts.
    wait_seconds: float = 1.5


@dataclass
class JobDefaults:
    """Built-in values used when the command line does not specify them."""

    # Base of the job name.
    name: str = "jupyter"
    # Port of the notebook server (and of the local end of the tunnel).
    port: int = 7777
    # Runtime limit injected when neither the command line nor the defaults file sets one.
    runtime: str = "9:0:0"
    # Value of -pe meaning "no parallelism"; it is not added to the job name.
    no_parallelism: str = "smp 1"
    # Per-user file with default qsub options.
    defaults_file: str = "~/.run_jupyter.qsub_option_defaults"
    # Template of the log file used when -o is not given.
    output: str = "~/.run_jupyter.{job_name}.log"


@dataclass
class SchedulerSettings:
    """Commands and flags used to talk to Grid Engine."""

    # Submission command.
    submit: str = "qsub"
    # Status listing / description command.
    status: str = "qstat"
    # qsub options always placed in front of the defaults file.
    builtin_options: list[str] = field(
        default_factory=lambda: ["-j", "y", "-S", "/bin/bash"]
    )


@dataclass
class NotebookSettings:
    """How the notebook server is started inside the job."""

    # Executable (and subcommand) of the notebook server.
    command: str = "jupyter lab"
    # Pattern identifying the log line announcing the server URL.
    ready_pattern: str = r"\] (?:or )?([a-zA-Z][a-zA-Z0-9+.-]*://\S+)"


@dataclass
class LaunchSettings:
    """Settings for `rj launch`."""

    # Host running the scheduler's head node.
    remote: str = "grid"
    # Command used to run `rj submit` on the remote host.
    remote_command: str = "rj submit"
    # Shell started on the remote host after the tunnel is established.
    login_shell: str = "bash -l"


@dataclass
class DateFormats:
    """Date and time format strings."""

    # Standard date format used by rj.
    standard: str = "%Y-%m-%d %H:%M:%S"


@dataclass
class ExitCodes:
    """Exit codes used for various errors."""

    # Default error code: invalid option, submission error, duplicate jobs.
    default: int = 1
    # The job is not running yet or the server has not started yet. Safe to retry.
    not_ready: int = 2
    # Returned on an unexpected or unhandled error.
    unexpected_error: int = 1


@dataclass
class Config:
    """Main configuration for rj."""

    env_vars: EnvironmentVariables = field(default_factory=EnvironmentVariables)
    poll: PollSettings = field(default_factory=PollSettings)
    defaults: JobDefaults = field(default_factory=JobDefaults)
    scheduler: SchedulerSettings = field(default_factory=SchedulerSettings)
    notebook: NotebookSettings = field(default_factory=NotebookSettings)
    launch: LaunchSettings = field(default_factory=LaunchSettings)
    date_formats: DateFormats = field(default_factory=DateFormats)
    exit_codes: ExitCodes = field(default_factory=ExitCodes)

    # Name of the rj binary.
    binary_name: str = "rj"

    @classmethod
    def load(cls, config_path: Path | None = None) -> Self:
        """
        Load configuration from TOML file or use defaults.

        Args:
            config_path: Explicit path to config file. If None, searches standard locations.

        Returns:
            Config instance with loaded or default values.
        """
        if config_path is None:
            config_path = Config._get_config_path()

        try:
            if config_path and config_path.exists():
                with config_path.open("rb") as f:
                    config_data = tomllib.load(f)
                return _dict_to_dataclass(cls, config_data)
        except Exception as e:
            raise ValueError(f"Could not read rj config '{config_path}': {e}.")

        # no config found - use defaults
        return cls()

    @staticmethod
    def _get_config_path() -> Path | None:
        """
        Search for config file in standard locations (XDG compliant).
        Returns the first existing config file, or None.
        """
        config_locations: list[Path | None] = [
            Path(env_path) if (env_path := os.getenv("RJ_CONFIG")) else None,
            Path.cwd() / "rj_config.toml",
            Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
            / "rj"
            / "config.toml",
        ]

        for path in config_locations:
            if path and path.is_file():
                return path

        return None


def _dict_to_dataclass(cls, data: dict[str, Any]):
    """
    Recursively convert a dictionary to a dataclass instance.
    Handles nested dataclasses properly.
    """
    if not is_dataclass(cls):
        return data

    field_values = {}
    for field_info in fields(cls):
        if field_info.name not in data:
            continue

        value = data[field_info.name]
        if is_dataclass(field_info.type) and isinstance(value, dict):
            value = _dict_to_dataclass(field_info.type, value)
        field_values[field_info.name] = value

    return cls(**field_values)


# Global configuration for rj.
CFG = Config.load()
