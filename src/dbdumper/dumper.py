"""
Dump and load operations.

Both operations follow the same sequence: locate the client program, resolve
and validate connection settings, print the redacted URL, then run the client
under a spinner. Every dbdumper error is returned as a Failure rather than
raised, so callers branch on ``result.ok``.
"""

import os
from collections.abc import Mapping
from pathlib import Path

from rich.console import Console

from dbdumper.config import ConnectionConfig, resolve
from dbdumper.constants import ENV_FILE, PG_DUMP_PROGRAM, PSQL_PROGRAM
from dbdumper.exceptions import DbdumperError, MissingFileError, SQLFileNotFoundError
from dbdumper.filename import build_filename
from dbdumper.logging import get_logger
from dbdumper.models import Failure, OperationResult, Success
from dbdumper.process import (
    build_dump_args,
    build_load_args,
    check_output,
    find_executable,
    password_env,
    run_command,
)
from dbdumper.spinner import Spinner
from dbdumper.validation import check_required

logger = get_logger(__name__)

__all__ = ["dump", "load"]


def _prepare(
    program: str, params: Mapping[str, str | None], environ: Mapping[str, str]
) -> tuple[str, ConnectionConfig]:
    """Locate the client first, then resolve and validate the connection."""
    executable = find_executable(program)
    config = resolve(params, environ)
    check_required(config)
    return executable, config


def _resolve_sql_file(params: Mapping[str, str | None], environ: Mapping[str, str]) -> str:
    file = params.get("file")
    if file is None:
        file = environ.get(ENV_FILE)

    if not file:
        raise MissingFileError()
    if not Path(file).exists():
        raise SQLFileNotFoundError(file)
    return file


def _run_dump(
    params: Mapping[str, str | None], environ: Mapping[str, str], console: Console
) -> str:
    pg_dump, config = _prepare(PG_DUMP_PROGRAM, params, environ)

    console.print(config.redacted_url, markup=False, highlight=False)

    spinner = Spinner(console.file).start()
    try:
        filename = build_filename(config.dbname)
        output = run_command(pg_dump, build_dump_args(config, filename), password_env(config))
    finally:
        spinner.stop()

    check_output(PG_DUMP_PROGRAM, output)
    return filename


def _run_load(
    params: Mapping[str, str | None], environ: Mapping[str, str], console: Console
) -> None:
    psql, config = _prepare(PSQL_PROGRAM, params, environ)
    file = _resolve_sql_file(params, environ)

    console.print(
        f"Starting database load from file. Using DB URL: {config.redacted_url}",
        markup=False,
        highlight=False,
    )

    spinner = Spinner(console.file, prefix="Loading database...").start()
    try:
        output = run_command(psql, build_load_args(config, file), password_env(config))
    finally:
        spinner.stop()

    check_output(PSQL_PROGRAM, output)


def dump(
    params: Mapping[str, str | None] | None = None,
    environ: Mapping[str, str] | None = None,
    console: Console | None = None,
) -> OperationResult:
    """
    Dump a database to a timestamped ``.sql`` file in the current directory.

    Args:
        params: Explicit settings: url (overrides the rest), host, user,
            password, dbname
        environ: Environment for DB_* fallbacks (defaults to os.environ)
        console: Console for the redacted URL and spinner

    Returns:
        Success with the dump filename, or Failure with the error
    """
    environ = os.environ if environ is None else environ
    console = console or Console()
    op_logger = logger.with_context(operation="dump")
    try:
        filename = _run_dump(params or {}, environ, console)
    except DbdumperError as e:
        op_logger.debug("Operation failed", error=str(e), kind=type(e).__name__)
        return Failure(e)

    op_logger.debug("Operation complete", filename=filename)
    return Success(filename)


def load(
    params: Mapping[str, str | None] | None = None,
    environ: Mapping[str, str] | None = None,
    console: Console | None = None,
) -> OperationResult:
    """
    Replay a ``.sql`` file into a database with psql.

    Takes the same settings as :func:`dump` plus ``file`` (or DB_FILE).

    Returns:
        Success with value None, or Failure with the error
    """
    environ = os.environ if environ is None else environ
    console = console or Console()
    op_logger = logger.with_context(operation="load")
    try:
        _run_load(params or {}, environ, console)
    except DbdumperError as e:
        op_logger.debug("Operation failed", error=str(e), kind=type(e).__name__)
        return Failure(e)

    op_logger.debug("Operation complete")
    return Success(None)
