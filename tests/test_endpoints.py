from __future__ import annotations

import inspect
from pathlib import Path
from typing import Any

import pytest

from zanalytics.clients import AnalyticsClient, BulkAPI, OrgAPI, ViewAPI, WorkspaceAPI
from zanalytics.endpoints import WHOLE, Endpoint, ResourceAPI, to_camel
from zanalytics.errors import ValidationError


class RecordingHttp:
    """Stands in for AnalyticsHttpClient and records every call."""

    def __init__(self, result: Any = None) -> None:
        self.result = result
        self.calls: list[dict[str, Any]] = []

    def request(self, method: str, path: str, **kwargs: Any) -> Any:
        self.calls.append({"method": method, "path": path, **kwargs})
        return self.result

    def export(self, path: str, **kwargs: Any) -> bytes:
        self.calls.append({"export": True, "path": path, **kwargs})
        return b""

    @property
    def last(self) -> dict[str, Any]:
        return self.calls[-1]


def test_to_camel() -> None:
    assert to_camel("workspace_name") == "workspaceName"
    assert to_camel("sql_query") == "sqlQuery"
    assert to_camel("criteria") == "criteria"


def test_root_call_has_no_org_header_and_projects() -> None:
    http = RecordingHttp({"orgs": [{"orgId": "1"}], "extra": True})

    assert AnalyticsClient(http).get_orgs() == [{"orgId": "1"}]

    call = http.last
    assert call["method"] == "GET"
    assert call["path"] == "/restapi/v2/orgs"
    assert call["headers"] == {}
    assert call["config"] is None


def test_whole_projection_returns_payload() -> None:
    payload = {"ownedWorkspaces": [], "sharedWorkspaces": []}
    assert AnalyticsClient(RecordingHttp(payload)).get_workspaces() == payload


def test_projection_of_missing_key_is_none() -> None:
    assert AnalyticsClient(RecordingHttp({})).get_orgs() is None
    assert AnalyticsClient(RecordingHttp(None)).get_orgs() is None


def test_org_call_sends_org_header_and_camel_case_config() -> None:
    http = RecordingHttp({"workspaceId": "55"})
    org = AnalyticsClient(http).get_org_instance("777")

    assert org.create_workspace("Sales", {"description": "q3"}) == "55"

    call = http.last
    assert call["method"] == "POST"
    assert call["path"] == "/restapi/v2/workspaces"
    assert call["headers"] == {"ZANALYTICS-ORGID": "777"}
    assert call["config"] == {"description": "q3", "workspaceName": "Sales"}


def test_caller_config_is_not_mutated() -> None:
    http = RecordingHttp({"workspaceId": "1"})
    caller = {"description": "x"}

    OrgAPI(http, "1").create_workspace("W", caller)

    assert caller == {"description": "x"}


def test_blank_required_argument_is_rejected_before_network() -> None:
    http = RecordingHttp()
    org = OrgAPI(http, "1")

    with pytest.raises(ValidationError):
        org.create_workspace("  ")
    with pytest.raises(ValidationError):
        org.create_workspace(None)

    assert http.calls == []


def test_missing_argument_raises_type_error() -> None:
    with pytest.raises(TypeError):
        OrgAPI(RecordingHttp(), "1").create_workspace()


def test_generated_signature() -> None:
    workspace = WorkspaceAPI(RecordingHttp(), "1", "2")
    params = list(inspect.signature(workspace.copy).parameters)
    assert params == ["new_workspace_name", "config", "dest_org_id"]
    assert workspace.copy.__name__ == "copy"


def test_copy_sends_destination_org_header() -> None:
    http = RecordingHttp({"workspaceId": "99"})
    workspace = WorkspaceAPI(http, "1", "2")

    assert workspace.copy("Copy of W", dest_org_id="888") == "99"

    call = http.last
    assert call["path"] == "/restapi/v2/workspaces/2"
    assert call["headers"] == {"ZANALYTICS-ORGID": "1", "ZANALYTICS-DEST-ORGID": "888"}
    assert call["config"] == {"newWorkspaceName": "Copy of W"}


def test_path_params_are_formatted_not_configured() -> None:
    http = RecordingHttp()
    WorkspaceAPI(http, "1", "2").rename_folder("f 1", "Archive")

    call = http.last
    assert call["method"] == "PUT"
    assert call["path"] == "/restapi/v2/workspaces/2/folders/f%201"
    assert call["config"] == {"folderName": "Archive"}


def test_optional_params_are_omitted_when_empty() -> None:
    http = RecordingHttp()
    workspace = WorkspaceAPI(http, "1", "2")

    workspace.remove_share(None, ["a@example.com"])
    assert http.last["config"] == {"emailIds": ["a@example.com"]}

    workspace.remove_share(["v1"], ["a@example.com"])
    assert http.last["config"] == {"viewIds": ["v1"], "emailIds": ["a@example.com"]}


def test_view_rows() -> None:
    http = RecordingHttp({"deletedRows": 4})
    view = ViewAPI(http, "1", "2", "3")

    assert view.delete_row("\"Region\"='East'") == 4
    assert http.last["method"] == "DELETE"
    assert http.last["path"] == "/restapi/v2/workspaces/2/views/3/rows"
    assert http.last["config"] == {"criteria": "\"Region\"='East'"}

    view.delete_row()
    assert http.last["config"] is None


def test_rename_override() -> None:
    http = RecordingHttp()
    ViewAPI(http, "1", "2", "3").copy_formulas(["f1"], "9", dest_org_id="8")

    assert http.last["config"]["formulaColumnNames"] == ["f1"]
    assert http.last["headers"]["ZANALYTICS-DEST-ORGID"] == "8"


def test_get_view_used_by_relay() -> None:
    http = RecordingHttp({"views": {"viewId": "3"}})

    assert AnalyticsClient(http).get_view("2", "3") == {"views": {"viewId": "3"}}
    assert http.last["path"] == "/restapi/v2/workspaces/2/views/3"


def test_import_passes_file_path_as_payload(tmp_path: Path) -> None:
    http = RecordingHttp({"jobId": "j1"})
    bulk = BulkAPI(http, "1", "2")
    csv = tmp_path / "a.csv"

    assert bulk.import_bulk_data("3", "append", "csv", "true", csv) == "j1"

    call = http.last
    assert call["path"] == "/restapi/v2/bulk/workspaces/2/views/3/data"
    assert call["file_path"] == csv
    assert call["config"] == {"importType": "append", "fileType": "csv", "autoIdentify": "true"}


def test_raw_import_passes_data() -> None:
    http = RecordingHttp({"importSummary": {}})
    BulkAPI(http, "1", "2").import_raw_data_in_new_table("T", "csv", "true", "a\n1")

    assert http.last["path"] == "/restapi/v2/workspaces/2/data"
    assert http.last["data"] == "a\n1"
    assert http.last["config"] == {"tableName": "T", "fileType": "csv", "autoIdentify": "true"}


def test_export_endpoint_targets_file(tmp_path: Path) -> None:
    http = RecordingHttp()
    target = tmp_path / "out.csv"

    assert BulkAPI(http, "1", "2").export_data("3", "csv", target) is None

    call = http.last
    assert call["export"] is True
    assert call["path"] == "/restapi/v2/workspaces/2/views/3/data"
    assert call["target"] == target
    assert call["config"] == {"responseFormat": "csv"}


def test_endpoint_declaration_checks() -> None:
    with pytest.raises(ValueError):
        Endpoint("GET", "/views/{view_id}")
    with pytest.raises(ValueError):
        Endpoint("GET", "/data", kind="export")
    with pytest.raises(ValueError, match="file_path or data"):
        Endpoint("POST", "/data", params=("table_name",), kind="import")
    Endpoint("POST", "/data", params=("table_name", "data"), kind="import")


def test_endpoint_tables_are_discoverable() -> None:
    table = WorkspaceAPI.endpoints()
    assert "create_folder" in table
    assert table["get_share_info"].returns is WHOLE
    assert "get_orgs" not in table
    assert issubclass(AnalyticsClient, ResourceAPI)
