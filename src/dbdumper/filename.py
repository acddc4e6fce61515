import subprocess
from datetime import datetime, timezone

from dbdumper.constants import HOSTNAME_PROGRAM, UNKNOWN_HOSTNAME
from dbdumper.logging import get_logger

logger = get_logger(__name__)


def get_hostname() -> str:
    """Name of the local machine as reported by ``hostname``, or "unknown"."""
    try:
        result = subprocess.run(
            [HOSTNAME_PROGRAM],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        logger.debug("Hostname lookup failed", error=str(e))
        return UNKNOWN_HOSTNAME

    hostname = (result.stdout or "").strip()
    if result.returncode != 0 or not hostname:
        logger.debug("Hostname lookup failed", exit_status=result.returncode)
        return UNKNOWN_HOSTNAME
    return hostname


def build_filename(dbname: str, now: datetime | None = None) -> str:
    """
    Build a dump filename like ``20250215-140925-myhost-mydb.sql``.

    Args:
        dbname: Database being dumped
        now: Timestamp to use (defaults to the current UTC time)
    """
    if now is None:
        now = datetime.now(timezone.utc)
    timestamp = now.replace(microsecond=0).strftime("%Y%m%d-%H%M%S")
    return f"{timestamp}-{get_hostname()}-{dbname}.sql"
