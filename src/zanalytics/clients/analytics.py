from __future__ import annotations

import os
from collections.abc import Mapping
from types import TracebackType

from ..auth import RefreshTokenManager, StaticTokenProvider, TokenProvider
from ..config import Credentials, initial_access_token, load_credentials
from ..endpoints import WHOLE, Endpoint, ResourceAPI
from ..http_client import AnalyticsHttpClient
from .bulk import BulkAPI
from .organization import OrgAPI
from .view import ViewAPI
from .workspace import WorkspaceAPI


class AnalyticsClient(ResourceAPI):
    """Entry point for the Zoho Analytics v2 REST API.

    Owns the shared :class:`AnalyticsHttpClient` and hands out scoped façades for
    organizations, workspaces, views and bulk data operations. Root-level calls
    are sent without an organization header.

    Args:
        http: Pipeline shared by this client and every façade it creates.
    """

    def __init__(self, http: AnalyticsHttpClient) -> None:
        super().__init__(http)

    @classmethod
    def from_credentials(
        cls,
        credentials: Credentials,
        *,
        access_token: str | None = None,
        base_url: str | None = None,
        token_url: str | None = None,
    ) -> AnalyticsClient:
        manager = RefreshTokenManager(credentials, token_url=token_url, access_token=access_token)
        return cls(AnalyticsHttpClient(manager, base_url=base_url))

    @classmethod
    def from_token(cls, access_token: str, *, base_url: str | None = None) -> AnalyticsClient:
        """Build a client around a fixed access token that is never refreshed."""

        return cls(AnalyticsHttpClient(StaticTokenProvider(access_token), base_url=base_url))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AnalyticsClient:
        """Build a client from ``ZOHO_*`` environment variables.

        Raises:
            ConfigError: If the refresh token or client credentials are missing.
        """

        return cls.from_credentials(
            load_credentials(environ), access_token=initial_access_token(environ)
        )

    @property
    def token_provider(self) -> TokenProvider:
        return self.http.token_provider

    get_orgs = Endpoint("GET", "/orgs", returns="orgs", accepts_config=False)
    get_workspaces = Endpoint("GET", "/workspaces", returns=WHOLE, accepts_config=False)
    get_owned_workspaces = Endpoint(
        "GET", "/workspaces/owned", returns="workspaces", accepts_config=False
    )
    get_shared_workspaces = Endpoint(
        "GET", "/workspaces/shared", returns="workspaces", accepts_config=False
    )
    get_recent_views = Endpoint("GET", "/recentviews", returns="views", accepts_config=False)
    get_dashboards = Endpoint("GET", "/dashboards", returns=WHOLE, accepts_config=False)
    get_owned_dashboards = Endpoint(
        "GET", "/dashboards/owned", returns="views", accepts_config=False
    )
    get_shared_dashboards = Endpoint(
        "GET", "/dashboards/shared", returns="views", accepts_config=False
    )
    get_workspace_details = Endpoint(
        "GET",
        "/workspaces/{workspace_id}",
        params=("workspace_id",),
        returns="workspaces",
        accepts_config=False,
    )
    get_view_details = Endpoint(
        "GET", "/views/{view_id}", params=("view_id",), returns="views"
    )
    get_view = Endpoint(
        "GET",
        "/workspaces/{workspace_id}/views/{view_id}",
        params=("workspace_id", "view_id"),
        returns=WHOLE,
        accepts_config=False,
        doc="Fetch one view (report or table) of a workspace as the raw payload.",
    )
    get_dashboard = Endpoint(
        "GET",
        "/dashboards/{dashboard_id}",
        params=("dashboard_id",),
        returns=WHOLE,
        accepts_config=False,
    )

    def get_org_instance(self, org_id: str) -> OrgAPI:
        return OrgAPI(self.http, org_id)

    def get_workspace_instance(self, org_id: str, workspace_id: str) -> WorkspaceAPI:
        return WorkspaceAPI(self.http, org_id, workspace_id)

    def get_view_instance(self, org_id: str, workspace_id: str, view_id: str) -> ViewAPI:
        return ViewAPI(self.http, org_id, workspace_id, view_id)

    def get_bulk_instance(self, org_id: str, workspace_id: str) -> BulkAPI:
        return BulkAPI(self.http, org_id, workspace_id)

    def close(self) -> None:
        self.http.close()
        closer = getattr(self.token_provider, "close", None)
        if callable(closer):
            closer()

    def __enter__(self) -> AnalyticsClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def default_download_path(
    view_id: str, response_format: str, directory: str | os.PathLike[str] = "."
) -> str:
    return os.path.join(os.fspath(directory), f"{view_id}.{response_format.lower()}")
