from __future__ import annotations

from ..endpoints import EXPORT, WHOLE, Endpoint, ResourceAPI


class WorkspaceAPI(ResourceAPI):
    """Operations scoped to one workspace of an organization."""

    def __init__(self, http, org_id: str, workspace_id: str) -> None:
        super().__init__(http, org_id)
        self.workspace_id = workspace_id
        self._base = f"/restapi/v2/workspaces/{workspace_id}"

    copy = Endpoint(
        "POST",
        params=("new_workspace_name",),
        returns="workspaceId",
        dest_org=True,
        doc="Copy the workspace, optionally into another organization; returns the new id.",
    )
    rename = Endpoint("PUT", params=("workspace_name",))
    delete = Endpoint("DELETE")
    create_table = Endpoint("POST", "/tables", params=("table_design",), returns="viewId")
    create_query_table = Endpoint(
        "POST", "/querytables", params=("sql_query", "query_table_name"), returns="viewId"
    )
    edit_query_table = Endpoint("PUT", "/querytables/{view_id}", params=("view_id", "sql_query"))
    get_secret_key = Endpoint("GET", "/secretkey", returns="workspaceKey")
    add_favorite = Endpoint("POST", "/favorite")
    remove_favorite = Endpoint("DELETE", "/favorite")
    add_default = Endpoint("POST", "/default")
    remove_default = Endpoint("DELETE", "/default")

    # Administrators and sharing
    get_admins = Endpoint("GET", "/admins", returns="workspaceAdmins")
    add_admins = Endpoint("POST", "/admins", params=("email_ids",))
    remove_admins = Endpoint("DELETE", "/admins", params=("email_ids",))
    get_share_info = Endpoint("GET", "/share", returns=WHOLE, accepts_config=False)
    share_views = Endpoint("POST", "/share", params=("view_ids", "email_ids", "permissions"))
    remove_share = Endpoint(
        "DELETE",
        "/share",
        params=("view_ids", "email_ids"),
        optional=frozenset({"view_ids"}),
        doc="Revoke shares; pass ``view_ids=None`` to revoke every view shared with the users.",
    )
    get_shared_details_for_views = Endpoint(
        "GET",
        "/share/shareddetails",
        params=("view_ids",),
        returns="sharedDetails",
        accepts_config=False,
    )

    # Folders and views
    get_folders = Endpoint("GET", "/folders", returns="folders", accepts_config=False)
    create_folder = Endpoint("POST", "/folders", params=("folder_name",), returns="folderId")
    rename_folder = Endpoint("PUT", "/folders/{folder_id}", params=("folder_id", "folder_name"))
    delete_folder = Endpoint(
        "DELETE", "/folders/{folder_id}", params=("folder_id",), accepts_config=False
    )
    make_default_folder = Endpoint(
        "PUT", "/folders/{folder_id}/default", params=("folder_id",), accepts_config=False
    )
    change_folder_hierarchy = Endpoint(
        "PUT", "/folders/{folder_id}/move", params=("folder_id", "hierarchy")
    )
    change_folder_position = Endpoint(
        "PUT", "/folders/{folder_id}/reorder", params=("folder_id", "reference_folder_id")
    )
    get_views = Endpoint("GET", "/views", returns="views")
    copy_views = Endpoint(
        "POST",
        "/views/copy",
        params=("view_ids", "dest_workspace_id"),
        returns="views",
        dest_org=True,
    )
    move_views_to_folder = Endpoint(
        "PUT", "/views/movetofolder", params=("folder_id", "view_ids")
    )
    enable_domain_access = Endpoint("POST", "/wlaccess", accepts_config=False)
    disable_domain_access = Endpoint("DELETE", "/wlaccess", accepts_config=False)

    # Groups
    get_groups = Endpoint("GET", "/groups", returns="groups", accepts_config=False)
    get_group_details = Endpoint(
        "GET", "/groups/{group_id}", params=("group_id",), returns="groups", accepts_config=False
    )
    create_group = Endpoint(
        "POST", "/groups", params=("group_name", "email_ids"), returns="groupId"
    )
    rename_group = Endpoint("PUT", "/groups/{group_id}", params=("group_id", "group_name"))
    add_group_members = Endpoint(
        "POST", "/groups/{group_id}/members", params=("group_id", "email_ids")
    )
    remove_group_members = Endpoint(
        "DELETE", "/groups/{group_id}/members", params=("group_id", "email_ids")
    )
    delete_group = Endpoint(
        "DELETE", "/groups/{group_id}", params=("group_id",), accepts_config=False
    )

    # Slideshows
    create_slideshow = Endpoint(
        "POST", "/slides", params=("slide_name", "view_ids"), returns="slideId"
    )
    update_slideshow = Endpoint("PUT", "/slides/{slide_id}", params=("slide_id",))
    delete_slideshow = Endpoint(
        "DELETE", "/slides/{slide_id}", params=("slide_id",), accepts_config=False
    )
    get_slideshows = Endpoint("GET", "/slides", returns="slideshows", accepts_config=False)
    get_slideshow_url = Endpoint(
        "GET", "/slides/{slide_id}/publish", params=("slide_id",), returns="slideUrl"
    )
    get_slideshow_details = Endpoint(
        "GET", "/slides/{slide_id}", params=("slide_id",), returns="slideInfo", accepts_config=False
    )

    # Variables
    create_variable = Endpoint(
        "POST",
        "/variables",
        params=("variable_name", "variable_data_type", "variable_type"),
        returns="variableId",
    )
    update_variable = Endpoint(
        "PUT",
        "/variables/{variable_id}",
        params=("variable_id", "variable_name", "variable_data_type", "variable_type"),
    )
    delete_variable = Endpoint(
        "DELETE", "/variables/{variable_id}", params=("variable_id",), accepts_config=False
    )
    get_variables = Endpoint("GET", "/variables", returns="variables", accepts_config=False)
    get_variable_details = Endpoint(
        "GET",
        "/variables/{variable_id}",
        params=("variable_id",),
        returns=WHOLE,
        accepts_config=False,
    )

    # Data sources and trash
    get_datasources = Endpoint("GET", "/datasources", returns="dataSources", accepts_config=False)
    sync_data = Endpoint("POST", "/datasources/{datasource_id}/sync", params=("datasource_id",))
    update_datasource_connection = Endpoint(
        "PUT", "/datasources/{datasource_id}", params=("datasource_id",)
    )
    get_trash_views = Endpoint("GET", "/trash", returns="views", accepts_config=False)
    restore_trash_view = Endpoint("POST", "/trash/{view_id}", params=("view_id",))
    delete_trash_view = Endpoint("DELETE", "/trash/{view_id}", params=("view_id",))

    export_as_template = Endpoint(
        "GET",
        "/template/data",
        params=("view_ids", "file_path"),
        kind=EXPORT,
        doc="Download the given views as a workspace template file.",
    )

    # Workspace users
    get_workspace_users = Endpoint("GET", "/users", returns="users", accepts_config=False)
    add_workspace_users = Endpoint("POST", "/users", params=("email_ids", "role"))
    remove_workspace_users = Endpoint("DELETE", "/users", params=("email_ids",))
    change_workspace_user_status = Endpoint(
        "PUT", "/users/status", params=("email_ids", "operation")
    )
    change_workspace_user_role = Endpoint("PUT", "/users/role", params=("email_ids", "role"))

    # Email schedules
    get_email_schedules = Endpoint(
        "GET", "/emailschedules", returns="emailSchedules", accepts_config=False
    )
    create_email_schedule = Endpoint(
        "POST",
        "/emailschedules",
        params=("schedule_name", "view_ids", "export_type", "email_ids", "schedule_details"),
        returns="scheduleId",
    )
    update_email_schedule = Endpoint(
        "PUT", "/emailschedules/{schedule_id}", params=("schedule_id",), returns="scheduleId"
    )
    trigger_email_schedule = Endpoint(
        "POST", "/emailschedules/{schedule_id}", params=("schedule_id",), accepts_config=False
    )
    change_email_schedule_status = Endpoint(
        "PUT",
        "/emailschedules/{schedule_id}/status",
        params=("schedule_id", "operation"),
        accepts_config=False,
    )
    delete_email_schedule = Endpoint(
        "DELETE", "/emailschedules/{schedule_id}", params=("schedule_id",), accepts_config=False
    )

    # Aggregate formulas and reports
    get_aggregate_formulas = Endpoint("GET", "/aggregateformulas", returns="aggregateFormulas")
    get_aggregate_formula_dependents = Endpoint(
        "GET",
        "/aggregateformulas/{formula_id}/dependents",
        params=("formula_id",),
        returns=WHOLE,
        accepts_config=False,
    )
    get_aggregate_formula_value = Endpoint(
        "GET",
        "/aggregateformulas/{formula_id}/value",
        params=("formula_id",),
        returns="formulaValue",
        accepts_config=False,
    )
    create_report = Endpoint("POST", "/reports", returns="viewId")
    update_report = Endpoint("PUT", "/reports/{view_id}", params=("view_id",))
