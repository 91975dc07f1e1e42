from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

import httpx

from ..config import USER_AGENT, Credentials, accounts_token_url
from ..errors import AuthError, TransportError
from .base import TokenProvider

logger = logging.getLogger(__name__)


class RefreshTokenManager(TokenProvider):
    """Owns the access token minted from a long-lived OAuth refresh token.

    The token is fetched lazily on first use and replaced wholesale whenever
    :meth:`force_refresh` is called. There is no expiry timer: staleness is only
    discovered when the API rejects the token. Concurrent callers may refresh
    redundantly; each exchange simply overwrites the cached value.
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        token_url: str | None = None,
        access_token: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.credentials = credentials
        self.token_url = token_url or accounts_token_url()
        self._access_token = access_token
        self._client = httpx.Client(timeout=timeout)

    @property
    def access_token(self) -> str | None:
        return self._access_token

    def get_token(self) -> str:
        token = self._access_token
        if token:
            return token
        logger.debug("No cached access token; performing refresh exchange")
        return self.force_refresh()

    def force_refresh(self) -> str:
        token = self._exchange()
        self._access_token = token
        logger.info("Access token refreshed")
        return token

    def _exchange(self) -> str:
        form = {
            "grant_type": "refresh_token",
            "refresh_token": self.credentials.refresh_token,
            "client_id": self.credentials.client_id,
            "client_secret": self.credentials.client_secret,
        }
        try:
            resp = self._client.post(
                self.token_url,
                data=form,
                headers={"User-Agent": USER_AGENT},
            )
        except httpx.TransportError as exc:
            raise TransportError(f"Token refresh transport error: {exc}") from exc

        try:
            payload: Any = resp.json()
        except ValueError as exc:
            raise AuthError(
                "Token refresh response was not valid JSON",
                status_code=resp.status_code,
                details=resp.text,
            ) from exc

        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not isinstance(token, str) or not token:
            error = payload.get("error") if isinstance(payload, dict) else None
            logger.warning("Refresh token grant rejected: %s", error or "no access_token")
            raise AuthError(
                f"Failed to refresh access token: {error or 'Unknown error'}",
                status_code=resp.status_code if resp.status_code >= 400 else None,
                details=payload,
            )
        return token

    def close(self) -> None:
        """Close the underlying :class:`httpx.Client`."""

        self._client.close()

    def __enter__(self) -> RefreshTokenManager:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
