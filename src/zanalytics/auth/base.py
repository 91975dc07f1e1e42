from __future__ import annotations

from abc import ABC, abstractmethod

from ..errors import AuthError


class TokenProvider(ABC):
    @abstractmethod
    def get_token(self) -> str:
        """Return an access token for ``Authorization: Zoho-oauthtoken``."""

    @abstractmethod
    def force_refresh(self) -> str:
        """Discard the current token and return a freshly issued one."""


class StaticTokenProvider(TokenProvider):
    def __init__(self, token: str) -> None:
        self._token = token

    def get_token(self) -> str:
        return self._token

    def force_refresh(self) -> str:
        raise AuthError("Static access token was rejected and cannot be refreshed")
