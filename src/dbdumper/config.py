import os
from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import unquote, urlparse

from dbdumper.constants import (
    ENV_HOST,
    ENV_NAME,
    ENV_PASSWORD,
    ENV_URL,
    ENV_USER,
    PASSWORD_MASK,
    REDACTED_URL_SCHEME,
)
from dbdumper.logging import get_logger

logger = get_logger(__name__)

__all__ = [
    "ConnectionConfig",
    "UrlMode",
    "IndividualMode",
    "ConnectionSource",
    "select_source",
    "parse_connection_url",
    "resolve",
]


@dataclass(frozen=True, repr=False)
class ConnectionConfig:
    """Resolved connection settings for a single dump or load."""

    host: str | None = None
    user: str | None = None
    password: str | None = None
    dbname: str | None = None
    port: int | None = None

    def __repr__(self) -> str:
        masked_pw = PASSWORD_MASK if self.password else None
        return (
            f"ConnectionConfig(host={self.host!r}, user={self.user!r}, "
            f"password={masked_pw!r}, dbname={self.dbname!r}, port={self.port!r})"
        )

    @property
    def redacted_url(self) -> str:
        """Connection URL with the password replaced by a fixed mask."""
        url = f"{REDACTED_URL_SCHEME}://{self.user or ''}:{PASSWORD_MASK}@{self.host or ''}"
        if self.port:
            url += f":{self.port}"
        return f"{url}/{self.dbname or ''}"


@dataclass(frozen=True)
class UrlMode:
    """Connection settings come from a single URL; nothing else is consulted."""

    url: str


@dataclass(frozen=True)
class IndividualMode:
    """Connection settings come from separate values (explicit or environment)."""

    host: str | None = None
    user: str | None = None
    password: str | None = None
    dbname: str | None = None


ConnectionSource = UrlMode | IndividualMode


def select_source(
    params: Mapping[str, str | None], environ: Mapping[str, str]
) -> ConnectionSource:
    """
    Decide where connection settings come from.

    A URL (explicit ``url`` first, then ``DB_URL``) overrides every individual
    value. Otherwise each field takes the explicit value when given, falling
    back to its environment variable.
    """
    url = params.get("url")
    if url is None:
        url = environ.get(ENV_URL)
    if url is not None:
        return UrlMode(url=url)

    def pick(key: str, env_var: str) -> str | None:
        value = params.get(key)
        return value if value is not None else environ.get(env_var)

    if params.get("port") is not None:
        logger.debug("Ignoring port outside of a connection URL", port=params["port"])

    return IndividualMode(
        host=pick("host", ENV_HOST),
        user=pick("user", ENV_USER),
        password=pick("password", ENV_PASSWORD),
        dbname=pick("dbname", ENV_NAME),
    )


def _host_from_netloc(netloc: str) -> str | None:
    # urlparse lowercases .hostname; keep the host as written
    hostinfo = netloc.rpartition("@")[2]
    if hostinfo.startswith("["):
        host = hostinfo[1:].partition("]")[0]
    else:
        host = hostinfo.partition(":")[0]
    return host or None


def parse_connection_url(url: str) -> ConnectionConfig:
    """
    Parse ``scheme://[user[:password]@]host[:port]/dbname``.

    Fields missing from the URL are left as None; a malformed port is
    dropped rather than rejected so the validator reports what is missing.
    """
    parsed = urlparse(url)

    user = unquote(parsed.username) if parsed.username is not None else None
    password = unquote(parsed.password) if parsed.password is not None else None

    try:
        port = parsed.port
    except ValueError:
        logger.warning("Ignoring invalid port in connection URL")
        port = None

    dbname = parsed.path.lstrip("/") or None

    return ConnectionConfig(
        host=_host_from_netloc(parsed.netloc),
        user=user,
        password=password,
        dbname=dbname,
        port=port,
    )


def resolve(
    params: Mapping[str, str | None], environ: Mapping[str, str] | None = None
) -> ConnectionConfig:
    """
    Merge explicit parameters and environment variables into a ConnectionConfig.

    Args:
        params: Explicit settings keyed by url/host/user/password/dbname/port
        environ: Environment to fall back on (defaults to os.environ)

    Returns:
        ConnectionConfig; absent fields are None and left to validation
    """
    if environ is None:
        environ = os.environ

    source = select_source(params, environ)

    if isinstance(source, UrlMode):
        config = parse_connection_url(source.url)
        logger.debug("Resolved connection from URL", url=config.redacted_url)
        return config

    config = ConnectionConfig(
        host=source.host,
        user=source.user,
        password=source.password,
        dbname=source.dbname,
    )
    logger.debug("Resolved connection from individual settings", url=config.redacted_url)
    return config
