from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType
from typing import IO, Any

import httpx

from .auth.base import TokenProvider
from .config import USER_AGENT, analytics_base_url
from .errors import ApiError, AuthError, FileAccessError, TransportError, ValidationError
from .wire import build_url, error_from_envelope, is_expired_token_code, sanitize_headers, unwrap_envelope

logger = logging.getLogger(__name__)

DEFAULT_BATCH_FILE_NAME = "batch.csv"


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything needed to (re-)issue one API call."""

    method: str
    path: str
    config: Mapping[str, Any] | None = None
    headers: Mapping[str, str] | None = None
    json: Any | None = None
    data: str | None = None
    file_path: str | os.PathLike[str] | None = None
    file_content: bytes | None = None
    file_name: str | None = None
    export: bool = False

    def __post_init__(self) -> None:
        payloads = [
            value
            for value in (self.json, self.data, self.file_path, self.file_content)
            if value is not None
        ]
        if len(payloads) > 1:
            raise ValueError("json, data, file_path and file_content are mutually exclusive")


class _TokenExpired(ApiError):
    pass


class AnalyticsHttpClient:
    """Single chokepoint for Zoho Analytics API calls.

    Attaches the OAuth header, serialises ``CONFIG``, unwraps the response envelope
    and, when the API reports an expired token, refreshes it and re-issues the same
    request exactly once.
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        *,
        base_url: str | None = None,
        timeout: float = 60.0,
        user_agent: str = USER_AGENT,
    ) -> None:
        self.base_url = (base_url or analytics_base_url()).rstrip("/")
        self.token_provider = token_provider
        self._client = httpx.Client(timeout=timeout)
        self._user_agent = user_agent

    def request(
        self,
        method: str,
        path: str,
        *,
        config: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        json: Any | None = None,
        data: str | bytes | None = None,
        file_path: str | os.PathLike[str] | None = None,
        file_content: bytes | None = None,
        file_name: str | None = None,
    ) -> Any:
        """Issue a call and return the unwrapped ``data`` member of the response."""

        if isinstance(data, bytes):
            try:
                data = data.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise ValidationError("Raw import data must be UTF-8 encoded text") from exc
        descriptor = RequestDescriptor(
            method=method.upper(),
            path=path,
            config=config,
            headers=headers,
            json=json,
            data=data,
            file_path=file_path,
            file_content=file_content,
            file_name=file_name,
        )
        resp = self.execute(descriptor)
        if resp.status_code != 200:
            return None
        try:
            payload = resp.json()
        except ValueError as exc:
            raise TransportError(
                f"HTTP {resp.status_code}: response body is not valid JSON",
                status_code=resp.status_code,
                details=resp.text,
            ) from exc
        return unwrap_envelope(payload)

    def export(
        self,
        path: str,
        *,
        config: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        target: str | os.PathLike[str] | None = None,
        method: str = "GET",
    ) -> bytes | Path:
        """Download raw response bytes, optionally writing them to ``target``.

        Exported content may be binary (e.g. XLSX or PDF), so successful bodies are
        never parsed. Only a 200 counts as an export; any other 2xx raises
        :class:`TransportError` and nothing is written.
        """

        descriptor = RequestDescriptor(
            method=method.upper(), path=path, config=config, headers=headers, export=True
        )
        resp = self.execute(descriptor)
        if resp.status_code != 200:
            raise TransportError(
                f"HTTP {resp.status_code}: export returned no content",
                status_code=resp.status_code,
            )
        if target is None:
            return resp.content
        return _write_export(Path(target), resp.content)

    def execute(self, descriptor: RequestDescriptor) -> httpx.Response:
        with _open_import_file(descriptor) as handle:
            token = self.token_provider.get_token()
            try:
                return self._send(descriptor, token, handle)
            except _TokenExpired as exc:
                logger.info(
                    "Access token expired (code %s) for %s %s; refreshing and retrying once",
                    exc.code,
                    descriptor.method,
                    descriptor.path,
                )
            token = self.token_provider.force_refresh()
            try:
                return self._send(descriptor, token, handle)
            except _TokenExpired as exc:
                logger.warning(
                    "Refreshed access token rejected for %s %s", descriptor.method, descriptor.path
                )
                raise AuthError(
                    f"Access token rejected after refresh: {exc.error_message}",
                    status_code=exc.status_code,
                    details=exc.details,
                ) from exc

    def _send(
        self,
        descriptor: RequestDescriptor,
        token: str,
        handle: IO[bytes] | None,
    ) -> httpx.Response:
        url = build_url(self.base_url, descriptor.path, descriptor.config)
        headers = {
            **(descriptor.headers or {}),
            "User-Agent": self._user_agent,
            "Authorization": f"Zoho-oauthtoken {token}",
        }
        logger.debug(
            "%s %s headers=%s", descriptor.method, descriptor.path, sanitize_headers(headers)
        )
        try:
            resp = self._client.request(
                descriptor.method, url, headers=headers, **_payload_kwargs(descriptor, handle)
            )
        except httpx.TransportError as exc:
            raise TransportError(f"Transport error: {exc}") from exc
        except OSError as exc:
            if descriptor.file_path is None:
                raise
            raise FileAccessError(str(descriptor.file_path), "Unable to read import file") from exc

        if 200 <= resp.status_code < 300:
            return resp

        try:
            payload = resp.json()
        except ValueError as exc:
            raise TransportError(
                f"HTTP {resp.status_code}: {resp.reason_phrase} (unparseable error body)",
                status_code=resp.status_code,
                details=resp.text,
            ) from exc
        code, message = error_from_envelope(payload)
        if is_expired_token_code(code):
            raise _TokenExpired(resp.status_code, code, message, details=payload)
        raise ApiError(resp.status_code, code, message, details=payload)

    def close(self) -> None:
        """Close the underlying :class:`httpx.Client`."""

        self._client.close()

    def __enter__(self) -> AnalyticsHttpClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


@contextmanager
def _open_import_file(descriptor: RequestDescriptor) -> Iterator[IO[bytes] | None]:
    if descriptor.file_path is None:
        yield None
        return
    path = Path(descriptor.file_path)
    try:
        handle = path.open("rb")
    except OSError as exc:
        raise FileAccessError(str(path), "Unable to open import file") from exc
    try:
        yield handle
    finally:
        handle.close()


def _payload_kwargs(descriptor: RequestDescriptor, handle: IO[bytes] | None) -> dict[str, Any]:
    if descriptor.json is not None:
        return {"json": descriptor.json}
    if descriptor.data is not None:
        return {"data": {"DATA": descriptor.data}}
    if handle is not None:
        handle.seek(0)
        name = descriptor.file_name or Path(str(descriptor.file_path)).name
        return {"files": {"FILE": (name, handle)}}
    if descriptor.file_content is not None:
        name = descriptor.file_name or DEFAULT_BATCH_FILE_NAME
        return {"files": {"FILE": (name, descriptor.file_content)}}
    return {}


def _write_export(path: Path, content: bytes) -> Path:
    try:
        with path.open("wb") as handle:
            handle.write(content)
    except OSError as exc:
        raise FileAccessError(str(path), "Unable to write export file") from exc
    return path
