"""Completeness checks run on a resolved ConnectionConfig before any client starts."""

from dbdumper.config import ConnectionConfig
from dbdumper.exceptions import MissingFieldError

REQUIRED_FIELDS = ("host", "user", "password", "dbname")
"""Checked in this order; the first missing one is reported."""


def check_required(config: ConnectionConfig) -> None:
    """
    Ensure host, user, password and dbname are all set.

    Empty strings count as missing. Port is optional and never checked.

    Raises:
        MissingFieldError: For the first missing field in REQUIRED_FIELDS order
    """
    for field in REQUIRED_FIELDS:
        if not getattr(config, field):
            raise MissingFieldError(field)
