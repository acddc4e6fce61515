"""
Running the PostgreSQL client programs.

Argument vectors are built here and the clients are run synchronously with
stderr folded into stdout. The password never appears on the command line;
it travels in PGPASSWORD so it stays out of the process list.
"""

import os
import shutil
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dbdumper.config import ConnectionConfig
from dbdumper.constants import PASSWORD_ENV_VAR
from dbdumper.exceptions import CommandFailedError, ExecutableNotFoundError
from dbdumper.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CommandOutput:
    """Combined stdout/stderr and exit status of a finished client."""

    output: str
    exit_status: int

    @property
    def ok(self) -> bool:
        return self.exit_status == 0


def find_executable(program: str) -> str:
    """
    Locate a program on the PATH.

    Raises:
        ExecutableNotFoundError: If the program cannot be found
    """
    path = shutil.which(program)
    if path is None:
        raise ExecutableNotFoundError(program)
    return path


def password_env(config: ConnectionConfig) -> dict[str, str]:
    """Environment overrides that hand the password to the client."""
    return {PASSWORD_ENV_VAR: config.password or ""}


def _port_args(config: ConnectionConfig) -> list[str]:
    return ["-p", str(config.port)] if config.port else []


def build_dump_args(config: ConnectionConfig, filename: str) -> list[str]:
    """Arguments for pg_dump writing a plain SQL dump to ``filename``."""
    return [
        "-h",
        config.host,
        "-U",
        config.user,
        "-f",
        filename,
        "--no-owner",
        "--no-privileges",
        *_port_args(config),
        config.dbname,
    ]


def build_load_args(config: ConnectionConfig, file: str) -> list[str]:
    """Arguments for psql replaying ``file`` into the target database."""
    return [
        "-h",
        config.host,
        "-U",
        config.user,
        *_port_args(config),
        "-d",
        config.dbname,
        "-f",
        file,
    ]


def run_command(
    executable: str, args: list[str], env: Mapping[str, str] | None = None
) -> CommandOutput:
    """
    Run a program to completion and capture its combined output.

    There is no timeout; a hung client blocks the caller.

    Args:
        executable: Path or name of the program
        args: Arguments passed after the program name
        env: Variables added on top of the current environment

    Raises:
        CommandFailedError: If the program cannot be started (exit status -1)
    """
    full_env = {**os.environ, **(env or {})}
    logger.debug("Running command", executable=executable, args=" ".join(args))

    try:
        result = subprocess.run(
            [executable, *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            env=full_env,
            text=True,
            errors="replace",
            check=False,
        )
    except OSError as e:
        logger.debug("Command could not be started", executable=executable, error=str(e))
        raise CommandFailedError(Path(executable).name, -1, str(e)) from e

    logger.debug("Command finished", executable=executable, exit_status=result.returncode)
    return CommandOutput(output=result.stdout or "", exit_status=result.returncode)


def check_output(program: str, output: CommandOutput) -> None:
    """
    Raise if a client exited unsuccessfully.

    Raises:
        CommandFailedError: Carrying the exit status and captured output
    """
    if not output.ok:
        raise CommandFailedError(program, output.exit_status, output.output)
