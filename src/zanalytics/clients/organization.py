from __future__ import annotations

from ..endpoints import WHOLE, Endpoint, ResourceAPI


class OrgAPI(ResourceAPI):
    """Organization-scoped operations (sent with the ``ZANALYTICS-ORGID`` header)."""

    def __init__(self, http, org_id: str) -> None:
        super().__init__(http, org_id)

    create_workspace = Endpoint(
        "POST",
        "/workspaces",
        params=("workspace_name",),
        returns="workspaceId",
        doc="Create a blank workspace and return its id.",
    )
    get_admins = Endpoint("GET", "/orgadmins", returns="orgAdmins")
    get_subscription_details = Endpoint(
        "GET", "/subscription", returns="subscription", accepts_config=False
    )
    get_resource_details = Endpoint(
        "GET", "/resources", returns="resourceDetails", accepts_config=False
    )
    get_users = Endpoint("GET", "/users", returns="users", accepts_config=False)
    add_users = Endpoint("POST", "/users", params=("email_ids",))
    remove_users = Endpoint("DELETE", "/users", params=("email_ids",))
    activate_users = Endpoint("PUT", "/users/active", params=("email_ids",))
    deactivate_users = Endpoint("PUT", "/users/inactive", params=("email_ids",))
    change_user_role = Endpoint("PUT", "/users/role", params=("email_ids", "role"))
    get_meta_details = Endpoint(
        "GET",
        "/metadetails",
        params=("workspace_name", "view_name"),
        optional=frozenset({"view_name"}),
        returns=WHOLE,
        doc="Return metadata of a workspace, or of one of its views when view_name is given.",
    )
