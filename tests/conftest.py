"""Shared pytest fixtures for dbdumper tests."""

import io
import logging
import shutil
import subprocess
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

DB_ENV_VARS = ("DB_URL", "DB_HOST", "DB_USER", "DB_PASSWORD", "DB_NAME", "DB_FILE")


class FakeRun:
    """
    Stand-in for subprocess.run that records calls and replays canned results.

    Results are keyed by program basename and are either (stdout, returncode)
    or an exception instance to raise.
    """

    def __init__(self):
        self.calls: list[tuple[list[str], dict[str, Any]]] = []
        self.results: dict[str, Any] = {"hostname": ("mock-host\n", 0)}

    def __call__(self, args, **kwargs):
        args = list(args)
        self.calls.append((args, kwargs))
        outcome = self.results.get(Path(args[0]).name, ("", 0))
        if isinstance(outcome, BaseException):
            raise outcome
        stdout, returncode = outcome
        return subprocess.CompletedProcess(args, returncode, stdout=stdout, stderr=None)

    def programs(self) -> list[str]:
        return [Path(args[0]).name for args, _ in self.calls]

    def call_for(self, program: str) -> tuple[list[str], dict[str, Any]]:
        for args, kwargs in self.calls:
            if Path(args[0]).name == program:
                return args, kwargs
        raise AssertionError(f"{program} was not run")


class ExplodingEnviron(Mapping):
    """Environment that fails the test if anything reads from it."""

    def __getitem__(self, key):
        raise AssertionError(f"environment was consulted for {key}")

    def __iter__(self) -> Iterator[str]:
        raise AssertionError("environment was iterated")

    def __len__(self) -> int:
        raise AssertionError("environment was inspected")


@pytest.fixture(autouse=True)
def clean_db_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's DB_* variables out of every test."""
    for name in DB_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop handlers installed by the CLI so they never outlive a test's streams."""
    yield
    logging.getLogger("dbdumper").handlers.clear()


@pytest.fixture
def fake_run(monkeypatch: pytest.MonkeyPatch) -> FakeRun:
    fake = FakeRun()
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


@pytest.fixture
def installed(monkeypatch: pytest.MonkeyPatch) -> set[str]:
    """
    Programs visible on the PATH. Tests add or remove names to control
    what shutil.which finds.
    """
    programs = {"pg_dump", "psql", "hostname"}

    def which(name, *args, **kwargs):
        return f"/usr/local/bin/{name}" if name in programs else None

    monkeypatch.setattr(shutil, "which", which)
    return programs


@pytest.fixture
def console() -> Console:
    """Console writing into a buffer; read it back with console.file.getvalue()."""
    return Console(file=io.StringIO(), width=200)


@pytest.fixture
def sql_file(tmp_path: Path) -> Path:
    path = tmp_path / "test_load.sql"
    path.write_text("SELECT 1;\n")
    return path


@pytest.fixture
def connection_params() -> dict[str, str]:
    return {
        "host": "localhost",
        "user": "postgres",
        "password": "secret",
        "dbname": "test_db",
    }


@pytest.fixture
def exploding_environ() -> ExplodingEnviron:
    return ExplodingEnviron()
