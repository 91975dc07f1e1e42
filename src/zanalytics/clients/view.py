from __future__ import annotations

from ..endpoints import WHOLE, Endpoint, ResourceAPI


class ViewAPI(ResourceAPI):
    """Operations on a single table, report or dashboard inside a workspace."""

    def __init__(self, http, org_id: str, workspace_id: str, view_id: str) -> None:
        super().__init__(http, org_id)
        self.workspace_id = workspace_id
        self.view_id = view_id
        self._base = f"/restapi/v2/workspaces/{workspace_id}/views/{view_id}"

    rename = Endpoint("PUT", params=("view_name",))
    delete = Endpoint("DELETE")
    save_as = Endpoint("POST", "/saveas", params=("view_name",), returns="viewId")
    copy_formulas = Endpoint(
        "POST",
        "/formulas/copy",
        params=("formula_names", "dest_workspace_id"),
        rename={"formula_names": "formulaColumnNames"},
        dest_org=True,
    )
    add_favorite = Endpoint("POST", "/favorite")
    remove_favorite = Endpoint("DELETE", "/favorite")
    create_similar_views = Endpoint(
        "POST", "/similarviews", params=("reference_view_id", "folder_id")
    )
    auto_analyse = Endpoint("POST", "/autoanalyse")
    get_my_permissions = Endpoint(
        "GET", "/share/userpermissions", returns="permissions", accepts_config=False
    )

    # Publishing
    get_view_url = Endpoint("GET", "/publish", returns="viewUrl")
    get_embed_url = Endpoint("GET", "/publish/embed", returns="embedUrl")
    get_private_url = Endpoint("GET", "/publish/privatelink", returns="privateUrl")
    create_private_url = Endpoint("POST", "/publish/privatelink", returns="privateUrl")
    remove_private_access = Endpoint("DELETE", "/publish/privatelink", accepts_config=False)
    make_view_public = Endpoint("POST", "/publish/public", returns="publicUrl")
    remove_public_access = Endpoint("DELETE", "/publish/public", accepts_config=False)
    get_publish_configurations = Endpoint(
        "GET", "/publish/config", returns=WHOLE, accepts_config=False
    )
    update_publish_configurations = Endpoint("PUT", "/publish/config")

    # Columns
    add_column = Endpoint(
        "POST", "/columns", params=("column_name", "data_type"), returns="columnId"
    )
    hide_columns = Endpoint("PUT", "/columns/hide", params=("column_ids",))
    show_columns = Endpoint("PUT", "/columns/show", params=("column_ids",))
    rename_column = Endpoint("PUT", "/columns/{column_id}", params=("column_id", "column_name"))
    delete_column = Endpoint("DELETE", "/columns/{column_id}", params=("column_id",))
    add_lookup = Endpoint(
        "POST",
        "/columns/{column_id}/lookup",
        params=("column_id", "reference_view_id", "reference_column_id"),
    )
    remove_lookup = Endpoint("DELETE", "/columns/{column_id}/lookup", params=("column_id",))
    auto_analyse_column = Endpoint(
        "POST", "/columns/{column_id}/autoanalyse", params=("column_id",)
    )
    get_column_dependents = Endpoint(
        "GET",
        "/columns/{column_id}/dependents",
        params=("column_id",),
        returns=WHOLE,
        accepts_config=False,
    )

    # Rows
    add_row = Endpoint(
        "POST",
        "/rows",
        params=("columns",),
        returns=WHOLE,
        doc="Add a row; ``columns`` maps column names to values.",
    )
    update_row = Endpoint(
        "PUT",
        "/rows",
        params=("columns", "criteria"),
        optional=frozenset({"criteria"}),
        returns=WHOLE,
        doc="Update rows matching ``criteria`` (all rows when criteria is empty).",
    )
    delete_row = Endpoint(
        "DELETE",
        "/rows",
        params=("criteria",),
        optional=frozenset({"criteria"}),
        returns="deletedRows",
    )

    refetch_data = Endpoint("POST", "/sync")
    get_last_import_details = Endpoint(
        "GET", "/importdetails", returns=WHOLE, accepts_config=False
    )

    # Formulas
    get_formula_columns = Endpoint(
        "GET", "/formulacolumns", returns="formulaColumns", accepts_config=False
    )
    add_formula_column = Endpoint(
        "POST", "/formulacolumns", params=("formula_name", "expression"), returns="formulaId"
    )
    edit_formula_column = Endpoint(
        "PUT", "/formulacolumns/{formula_id}", params=("formula_id", "expression")
    )
    delete_formula_column = Endpoint(
        "DELETE", "/formulacolumns/{formula_id}", params=("formula_id",)
    )
    get_aggregate_formulas = Endpoint(
        "GET", "/aggregateformulas", returns="aggregateFormulas", accepts_config=False
    )
    add_aggregate_formula = Endpoint(
        "POST", "/aggregateformulas", params=("formula_name", "expression"), returns="formulaId"
    )
    edit_aggregate_formula = Endpoint(
        "PUT", "/aggregateformulas/{formula_id}", params=("formula_id", "expression")
    )
    delete_aggregate_formula = Endpoint(
        "DELETE", "/aggregateformulas/{formula_id}", params=("formula_id",)
    )

    get_view_dependents = Endpoint("GET", "/dependents", returns="views", accepts_config=False)
    update_shared_details = Endpoint("PUT", "/share")
