from .clients import AnalyticsClient, BulkAPI, OrgAPI, ViewAPI, WorkspaceAPI
from .config import CLIENT_VERSION as __version__
from .errors import (
    ApiError,
    AuthError,
    ConfigError,
    FileAccessError,
    TransportError,
    ValidationError,
    ZAnalyticsError,
)
from .http_client import AnalyticsHttpClient

__all__ = [
    "AnalyticsClient",
    "AnalyticsHttpClient",
    "ApiError",
    "AuthError",
    "BulkAPI",
    "ConfigError",
    "FileAccessError",
    "OrgAPI",
    "TransportError",
    "ValidationError",
    "ViewAPI",
    "WorkspaceAPI",
    "ZAnalyticsError",
    "__version__",
]
