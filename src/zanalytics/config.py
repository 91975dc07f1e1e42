from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from .errors import ConfigError

logger = logging.getLogger(__name__)

CLIENT_VERSION = "2.6.0"
USER_AGENT = f"zanalytics Python Client v{CLIENT_VERSION}"

DEFAULT_ANALYTICS_HOST = "analyticsapi.zoho.com"
DEFAULT_ACCOUNTS_HOST = "accounts.zoho.com"

CLIENT_ID_ENV = "ZOHO_CLIENT_ID"
CLIENT_SECRET_ENV = "ZOHO_CLIENT_SECRET"
REFRESH_TOKEN_ENV = "ZOHO_REFRESH_TOKEN"
ACCESS_TOKEN_ENV = "ZOHO_ACCESS_TOKEN"
ANALYTICS_HOST_ENV = "ZOHO_ANALYTICS_HOST"
ACCOUNTS_HOST_ENV = "ZOHO_ACCOUNTS_HOST"
DEBUG_ENV = "ZANALYTICS_DEBUG"

_REQUIRED_ENV = (REFRESH_TOKEN_ENV, CLIENT_ID_ENV, CLIENT_SECRET_ENV)


@dataclass(frozen=True)
class Credentials:
    client_id: str
    client_secret: str
    refresh_token: str

    def __repr__(self) -> str:
        return f"Credentials(client_id={self.client_id!r}, client_secret='***', refresh_token='***')"


def _environ(environ: Mapping[str, str] | None) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def load_credentials(environ: Mapping[str, str] | None = None) -> Credentials:
    """Read OAuth client credentials from the process environment.

    Raises:
        ConfigError: If any of ``ZOHO_REFRESH_TOKEN``, ``ZOHO_CLIENT_ID`` or
            ``ZOHO_CLIENT_SECRET`` is missing or blank.
    """

    env = _environ(environ)
    missing = [name for name in _REQUIRED_ENV if not (env.get(name) or "").strip()]
    if missing:
        raise ConfigError(
            "Missing one or more required environment variables: " + ", ".join(missing)
        )
    return Credentials(
        client_id=env[CLIENT_ID_ENV].strip(),
        client_secret=env[CLIENT_SECRET_ENV].strip(),
        refresh_token=env[REFRESH_TOKEN_ENV].strip(),
    )


def initial_access_token(environ: Mapping[str, str] | None = None) -> str | None:
    token = (_environ(environ).get(ACCESS_TOKEN_ENV) or "").strip()
    return token or None


def _host(environ: Mapping[str, str] | None, name: str, default: str) -> str:
    host = (_environ(environ).get(name) or "").strip() or default
    if host.startswith(("http://", "https://")):
        return host.rstrip("/")
    return f"https://{host.rstrip('/')}"


def analytics_base_url(environ: Mapping[str, str] | None = None) -> str:
    return _host(environ, ANALYTICS_HOST_ENV, DEFAULT_ANALYTICS_HOST)


def accounts_token_url(environ: Mapping[str, str] | None = None) -> str:
    return f"{_host(environ, ACCOUNTS_HOST_ENV, DEFAULT_ACCOUNTS_HOST)}/oauth/v2/token"


def debug_enabled(environ: Mapping[str, str] | None = None) -> bool:
    value = (_environ(environ).get(DEBUG_ENV) or "").strip().lower()
    return value not in {"", "0", "false", "no"}


def configure_logging(level: int | str = logging.INFO) -> None:
    """Install a basic stderr handler for command-line and relay entry points."""

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug("Logging configured at level %s", level)
