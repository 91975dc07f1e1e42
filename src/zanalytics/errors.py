from __future__ import annotations

from typing import Any


class ZAnalyticsError(Exception):
    """Base error for zanalytics."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


class ConfigError(ZAnalyticsError):
    pass


class ValidationError(ZAnalyticsError):
    pass


class AuthError(ZAnalyticsError):
    pass


class TransportError(ZAnalyticsError):
    pass


class FileAccessError(ZAnalyticsError, OSError):
    """Local file could not be read for import or written for export."""

    def __init__(self, path: str, message: str) -> None:
        ZAnalyticsError.__init__(self, f"{message}: {path}")
        self.path = path

    def __str__(self) -> str:
        return self.message


class ApiError(ZAnalyticsError):
    def __init__(
        self,
        status_code: int,
        code: str | None,
        message: str,
        *,
        details: Any | None = None,
    ) -> None:
        label = f"HTTP {status_code}"
        if code:
            label = f"{label} (code {code})"
        super().__init__(f"{label}: {message}", status_code=status_code, details=details)
        self.code = code
        self.error_message = message
