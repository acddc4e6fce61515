from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from dbdumper.exceptions import ConfigFileError
from dbdumper.logging import get_logger

logger = get_logger(__name__)

__all__ = [
    "DbdumperConfig",
    "ConfigFileError",
    "load_config",
    "merge_params",
]


@dataclass
class DbdumperConfig:
    """
    Connection settings loaded from the ``database`` section of a YAML file.

    Example file:

        database:
          host: localhost
          user: postgres
          password: secret
          dbname: my_db
          file: dumps/latest.sql

    These act as explicit parameters with lower priority than CLI arguments,
    so a ``url`` here still overrides individual values given on the CLI.
    """

    url: str | None = None
    host: str | None = None
    user: str | None = None
    password: str | None = None
    dbname: str | None = None
    port: str | None = None
    file: str | None = None

    @classmethod
    def from_yaml(cls, path: str | Path) -> "DbdumperConfig":
        """
        Load configuration from a YAML file.

        Raises:
            ConfigFileError: If file cannot be read or parsed
        """
        path = Path(path)

        if not path.exists():
            raise ConfigFileError(str(path), "File does not exist")

        if not path.is_file():
            raise ConfigFileError(str(path), "Path is not a file")

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigFileError(str(path), f"Invalid YAML: {e}")
        except OSError as e:
            raise ConfigFileError(str(path), f"Cannot read file: {e}")

        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ConfigFileError(str(path), "Config file must contain a YAML mapping (dictionary)")

        logger.info("Loaded config file", path=str(path))

        try:
            return cls._from_dict(data)
        except (ValueError, TypeError) as e:
            raise ConfigFileError(str(path), f"Invalid configuration: {e}")

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "DbdumperConfig":
        database_data = data.get("database", {})
        if database_data is None:
            database_data = {}
        if not isinstance(database_data, dict):
            raise ValueError("'database' section must be a mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(database_data) - known)
        if unknown:
            raise ValueError(f"Unknown keys in 'database' section: {', '.join(unknown)}")

        values = {}
        for key, value in database_data.items():
            if value is None:
                continue
            if isinstance(value, (dict, list)):
                raise ValueError(f"'database.{key}' must be a scalar value")
            # YAML reads ports and numeric names as ints; the clients want strings
            values[key] = str(value)

        return cls(**values)

    def to_params(self) -> dict[str, str]:
        """Settings that are present, keyed the same way as CLI arguments."""
        return {
            f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None
        }


def merge_params(
    cli_params: Mapping[str, str], config: DbdumperConfig | None = None
) -> dict[str, str]:
    """Combine config file values with CLI arguments; the CLI wins per key."""
    merged = config.to_params() if config else {}
    merged.update(cli_params)

    logger.debug(
        "Merged config with CLI args",
        cli_keys=",".join(sorted(cli_params)) or "-",
        config_keys=",".join(sorted(config.to_params())) if config else "-",
    )
    return merged


def load_config(path: str | Path) -> DbdumperConfig:
    """
    Load configuration from a YAML file.

    Raises:
        ConfigFileError: If file cannot be read or parsed
    """
    return DbdumperConfig.from_yaml(path)
