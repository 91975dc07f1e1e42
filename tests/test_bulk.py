from __future__ import annotations

import json
from urllib.parse import parse_qs, urlsplit

import httpx
import pytest
from conftest import API

from zanalytics.clients import BulkAPI
from zanalytics.clients import bulk as bulk_module
from zanalytics.errors import ApiError, FileAccessError, ValidationError

BATCH_URL = f"{API}/restapi/v2/bulk/workspaces/ws1/views/v1/data/batch"
NEW_TABLE_URL = f"{API}/restapi/v2/bulk/workspaces/ws1/data/batch"


@pytest.fixture
def sleeps(monkeypatch) -> list[float]:
    recorded: list[float] = []
    monkeypatch.setattr(bulk_module.time, "sleep", recorded.append)
    return recorded


def write_csv(tmp_path, rows: int):
    path = tmp_path / "rows.csv"
    lines = ["Name,Qty"] + [f"item{i},{i}" for i in range(rows)]
    path.write_text("\n".join(lines) + "\n")
    return path


def chunk_config(request: httpx.Request) -> dict[str, object]:
    query = parse_qs(urlsplit(str(request.url)).query)
    return json.loads(query["CONFIG"][0])


def chunk_body(request: httpx.Request) -> str:
    content = request.content
    start = content.index(b"\r\n\r\n") + 4
    end = content.index(b"\r\n--", start)
    return content[start:end].decode()


def batch_response(key: str, job: str = "job-1") -> httpx.Response:
    return httpx.Response(200, json={"status": "success", "data": {"batchKey": key, "jobId": job}})


def test_batches_chain_keys_and_flag_last(http, tmp_path, respx_mock, sleeps) -> None:
    csv = write_csv(tmp_path, 5)
    route = respx_mock.post(url__startswith=BATCH_URL).mock(
        side_effect=[batch_response("k1"), batch_response("k2"), batch_response("k3", "job-9")]
    )

    bulk = BulkAPI(http, "org1", "ws1")
    job_id = bulk.import_bulk_data_as_batches("v1", "append", "true", csv, 2)

    assert job_id == "job-9"
    assert route.call_count == 3
    configs = [chunk_config(call.request) for call in route.calls]
    assert [c["batchKey"] for c in configs] == ["start", "k1", "k2"]
    assert [c["isLastBatch"] for c in configs] == ["false", "false", "true"]
    assert all(c["importType"] == "append" and c["autoIdentify"] == "true" for c in configs)

    bodies = [chunk_body(call.request) for call in route.calls]
    assert bodies == [
        "Name,Qty\nitem0,0\nitem1,1",
        "Name,Qty\nitem2,2\nitem3,3",
        "Name,Qty\nitem4,4",
    ]
    for call in route.calls:
        assert b'filename="batch.csv"' in call.request.content
        assert call.request.headers["ZANALYTICS-ORGID"] == "org1"
    assert sleeps == [2.0, 2.0]


def test_exact_multiple_of_batch_size(http, tmp_path, respx_mock, sleeps) -> None:
    csv = write_csv(tmp_path, 4)
    route = respx_mock.post(url__startswith=NEW_TABLE_URL).mock(
        side_effect=[batch_response("k1"), batch_response("k2")]
    )

    bulk = BulkAPI(http, "org1", "ws1")
    bulk.import_data_in_new_table_as_batches("Orders", "true", csv, 2)

    assert route.call_count == 2
    configs = [chunk_config(call.request) for call in route.calls]
    assert configs[0]["tableName"] == "Orders"
    assert configs[-1]["isLastBatch"] == "true"
    assert len(sleeps) == 1


def test_single_chunk_is_last_and_no_sleep(http, tmp_path, respx_mock, sleeps) -> None:
    csv = write_csv(tmp_path, 3)
    route = respx_mock.post(url__startswith=BATCH_URL).mock(return_value=batch_response("k1"))

    BulkAPI(http, "org1", "ws1").import_bulk_data_as_batches("v1", "append", "true", csv, 10)

    config = chunk_config(route.calls.last.request)
    assert config["batchKey"] == "start"
    assert config["isLastBatch"] == "true"
    assert sleeps == []


def test_failing_chunk_aborts_remaining(http, tmp_path, respx_mock, sleeps) -> None:
    csv = write_csv(tmp_path, 6)
    failure = httpx.Response(
        400, json={"status": "failure", "data": {"errorCode": 8504, "errorMessage": "Bad column"}}
    )
    route = respx_mock.post(url__startswith=BATCH_URL).mock(
        side_effect=[batch_response("k1"), failure, batch_response("k3")]
    )

    with pytest.raises(ApiError):
        BulkAPI(http, "org1", "ws1").import_bulk_data_as_batches("v1", "append", "true", csv, 2)

    assert route.call_count == 2


def test_expired_token_mid_batch_retries_that_chunk(
    http, token_provider, tmp_path, respx_mock, sleeps
) -> None:
    csv = write_csv(tmp_path, 4)
    expired = httpx.Response(
        401, json={"status": "failure", "data": {"errorCode": "8535", "errorMessage": "expired"}}
    )
    route = respx_mock.post(url__startswith=BATCH_URL).mock(
        side_effect=[batch_response("k1"), expired, batch_response("k2")]
    )

    job = BulkAPI(http, "org1", "ws1").import_bulk_data_as_batches("v1", "append", "true", csv, 2)

    assert job == "job-1"
    assert route.call_count == 3
    retried = [chunk_config(call.request)["batchKey"] for call in route.calls]
    assert retried == ["start", "k1", "k1"]
    assert token_provider.refresh_calls == 1


def test_header_only_file_sends_nothing(http, tmp_path, respx_mock, sleeps) -> None:
    csv = write_csv(tmp_path, 0)
    route = respx_mock.post(url__startswith=BATCH_URL)

    assert BulkAPI(http, "org1", "ws1").import_bulk_data_as_batches(
        "v1", "append", "true", csv, 2
    ) is None
    assert not route.called


def test_invalid_batch_size(http, tmp_path, sleeps) -> None:
    csv = write_csv(tmp_path, 2)
    with pytest.raises(ValidationError):
        BulkAPI(http, "org1", "ws1").import_bulk_data_as_batches("v1", "append", "true", csv, 0)


def test_unreadable_file_fails_without_network(http, token_provider, tmp_path, respx_mock) -> None:
    route = respx_mock.post(url__startswith=BATCH_URL)

    with pytest.raises(FileAccessError):
        BulkAPI(http, "org1", "ws1").import_bulk_data_as_batches(
            "v1", "append", "true", tmp_path / "absent.csv", 2
        )

    assert not route.called
    assert token_provider.get_calls == 0


def test_batch_delay_is_configurable(http, tmp_path, respx_mock, sleeps) -> None:
    csv = write_csv(tmp_path, 2)
    respx_mock.post(url__startswith=BATCH_URL).mock(
        side_effect=[batch_response("k1"), batch_response("k2")]
    )

    bulk = BulkAPI(http, "org1", "ws1", batch_delay=0.5)
    bulk.import_bulk_data_as_batches("v1", "append", "true", csv, 1)

    assert sleeps == [0.5]


def test_job_endpoints(http, respx_mock) -> None:
    respx_mock.get(f"{API}/restapi/v2/bulk/workspaces/ws1/importjobs/j1").mock(
        return_value=httpx.Response(
            200, json={"status": "success", "data": {"jobId": "j1", "jobStatus": "JOB COMPLETED"}}
        )
    )
    respx_mock.get(url__startswith=f"{API}/restapi/v2/bulk/workspaces/ws1/data").mock(
        return_value=httpx.Response(200, json={"status": "success", "data": {"jobId": "e1"}})
    )

    bulk = BulkAPI(http, "org1", "ws1")
    assert bulk.get_import_job_details("j1")["jobStatus"] == "JOB COMPLETED"
    assert bulk.initiate_bulk_export_using_sql("select * from T", "csv") == "e1"


def test_export_bulk_data_writes_file(http, tmp_path, respx_mock) -> None:
    respx_mock.get(f"{API}/restapi/v2/bulk/workspaces/ws1/exportjobs/e1/data").mock(
        return_value=httpx.Response(200, content=b"a,b\n1,2\n")
    )
    target = tmp_path / "job.csv"

    BulkAPI(http, "org1", "ws1").export_bulk_data("e1", target)

    assert target.read_bytes() == b"a,b\n1,2\n"
