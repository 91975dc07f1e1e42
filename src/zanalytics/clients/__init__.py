from .analytics import AnalyticsClient as AnalyticsClient
from .bulk import BulkAPI as BulkAPI
from .organization import OrgAPI as OrgAPI
from .view import ViewAPI as ViewAPI
from .workspace import WorkspaceAPI as WorkspaceAPI

__all__ = [
    "AnalyticsClient",
    "BulkAPI",
    "OrgAPI",
    "ViewAPI",
    "WorkspaceAPI",
]
