__all__ = [
    "DbdumperError",
    "ExecutableNotFoundError",
    "MissingFieldError",
    "MissingFileError",
    "SQLFileNotFoundError",
    "CommandFailedError",
    "ConfigFileError",
]


class DbdumperError(Exception):
    """Base exception for all dbdumper errors."""

    pass


class ExecutableNotFoundError(DbdumperError):
    """A required PostgreSQL client program is not on the PATH."""

    def __init__(self, program: str):
        self.program = program
        super().__init__(f"`{program}` not found on your PATH.")


class MissingFieldError(DbdumperError):
    """A required connection setting is absent after resolution."""

    LABELS = {
        "host": "database host",
        "user": "database user",
        "password": "database password",
        "dbname": "database name",
    }

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing {self.LABELS.get(field, field)}")


class MissingFileError(DbdumperError):
    """No SQL file was given to load."""

    def __init__(self):
        super().__init__("Missing SQL file to load")


class SQLFileNotFoundError(DbdumperError):
    """The SQL file to load does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"SQL file '{path}' does not exist")


class CommandFailedError(DbdumperError):
    """An external client program exited with a nonzero status or could not start."""

    def __init__(self, program: str, exit_status: int, output: str):
        self.program = program
        self.exit_status = exit_status
        self.output = output
        super().__init__(f"{program} failed with exit code {exit_status}")


class ConfigFileError(DbdumperError):
    """Error loading or parsing configuration file."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load config from '{path}': {reason}")
