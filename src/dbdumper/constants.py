PG_DUMP_PROGRAM = "pg_dump"
"""External program used to export a database."""

PSQL_PROGRAM = "psql"
"""External program used to replay a dump into a database."""

HOSTNAME_PROGRAM = "hostname"
"""Utility used to label dump files with the local machine name."""

UNKNOWN_HOSTNAME = "unknown"
"""Hostname used in dump filenames when the lookup fails."""

PASSWORD_ENV_VAR = "PGPASSWORD"
"""Environment variable the PostgreSQL clients read the password from."""

PASSWORD_MASK = "*****"
"""Replacement for the password in displayed connection URLs."""

REDACTED_URL_SCHEME = "postgres"
"""Scheme used when rendering a redacted connection URL."""

ENV_URL = "DB_URL"
ENV_HOST = "DB_HOST"
ENV_USER = "DB_USER"
ENV_PASSWORD = "DB_PASSWORD"
ENV_NAME = "DB_NAME"
ENV_FILE = "DB_FILE"

SPINNER_FRAMES = ("|", "/", "-", "\\")
"""Glyphs cycled by the progress spinner."""

SPINNER_INTERVAL = 0.15
"""Seconds between spinner frames."""
