from __future__ import annotations

import logging
import math
import os
import time
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..endpoints import EXPORT, IMPORT, WHOLE, Endpoint, ResourceAPI, require
from ..errors import FileAccessError, ValidationError
from ..http_client import DEFAULT_BATCH_FILE_NAME, AnalyticsHttpClient

logger = logging.getLogger(__name__)

BATCH_DELAY_SECONDS = 2.0


def _read_lines(file_path: str | os.PathLike[str]) -> list[str]:
    path = Path(file_path)
    try:
        return path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise FileAccessError(str(path), "Unable to read import file") from exc


def batch_import(
    http: AnalyticsHttpClient,
    path: str,
    file_path: str | os.PathLike[str],
    batch_size: int,
    *,
    config: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
    delay: float = BATCH_DELAY_SECONDS,
) -> str | None:
    """Upload a CSV file as a chain of fixed-size batches.

    The header line is repeated on every chunk. The first chunk is sent with
    ``batchKey="start"``; each later chunk carries the ``batchKey`` returned for
    the previous one, and only the final chunk has ``isLastBatch="true"``. A
    failing chunk aborts the remaining ones.

    Args:
        http: Pipeline used for every chunk (token refresh applies per chunk).
        path: Batch import endpoint path.
        file_path: CSV file to upload. Read fully before any request is sent.
        batch_size: Number of data lines per chunk.
        config: Extra CONFIG attributes sent with every chunk.
        headers: Extra request headers (organization id).
        delay: Seconds to wait between consecutive chunks.

    Returns:
        The import job id reported by the last chunk, or ``None`` when the file
        holds no data lines.
    """

    if batch_size < 1:
        raise ValidationError("batch_size must be at least 1")
    lines = _read_lines(file_path)
    if not lines:
        raise ValidationError(f"Import file is empty: {file_path}")
    header, rows = lines[0], lines[1:]
    total = math.ceil(len(rows) / batch_size)
    if total == 0:
        logger.warning("No data rows found in %s; nothing imported", file_path)
        return None

    batch_key: Any = "start"
    job_id: str | None = None
    for index in range(total):
        chunk = rows[index * batch_size : (index + 1) * batch_size]
        chunk_config = {
            **(config or {}),
            "batchKey": batch_key,
            "isLastBatch": "true" if index == total - 1 else "false",
        }
        result = http.request(
            "POST",
            path,
            config=chunk_config,
            headers=headers,
            file_content="\n".join([header, *chunk]).encode("utf-8"),
            file_name=DEFAULT_BATCH_FILE_NAME,
        )
        payload = result if isinstance(result, Mapping) else {}
        batch_key = payload.get("batchKey")
        job_id = payload.get("jobId", job_id)
        logger.debug("Sent batch %d/%d (%d rows) for %s", index + 1, total, len(chunk), path)
        if index < total - 1:
            time.sleep(delay)
    return job_id


class BulkAPI(ResourceAPI):
    """Data import and export for one workspace, synchronous and asynchronous."""

    def __init__(
        self,
        http,
        org_id: str,
        workspace_id: str,
        *,
        batch_delay: float = BATCH_DELAY_SECONDS,
    ) -> None:
        super().__init__(http, org_id)
        self.workspace_id = workspace_id
        self.batch_delay = batch_delay
        self._base = f"/restapi/v2/workspaces/{workspace_id}"
        self._bulk_base = f"/restapi/v2/bulk/workspaces/{workspace_id}"

    def base_path(self, scope: str = "default") -> str:
        return self._bulk_base if scope == "bulk" else self._base

    import_data_in_new_table = Endpoint(
        "POST",
        "/data",
        params=("table_name", "file_type", "auto_identify", "file_path"),
        returns=WHOLE,
        kind=IMPORT,
        doc="Create a table and import the given file into it.",
    )
    import_raw_data_in_new_table = Endpoint(
        "POST",
        "/data",
        params=("table_name", "file_type", "auto_identify", "data"),
        returns=WHOLE,
        kind=IMPORT,
    )
    import_data = Endpoint(
        "POST",
        "/views/{view_id}/data",
        params=("view_id", "import_type", "file_type", "auto_identify", "file_path"),
        returns=WHOLE,
        kind=IMPORT,
        doc="Import a file into an existing table (append, truncateadd or updateadd).",
    )
    import_raw_data = Endpoint(
        "POST",
        "/views/{view_id}/data",
        params=("view_id", "import_type", "file_type", "auto_identify", "data"),
        returns=WHOLE,
        kind=IMPORT,
    )
    import_bulk_data_in_new_table = Endpoint(
        "POST",
        "/data",
        params=("table_name", "file_type", "auto_identify", "file_path"),
        returns="jobId",
        kind=IMPORT,
        scope="bulk",
    )
    import_bulk_data = Endpoint(
        "POST",
        "/views/{view_id}/data",
        params=("view_id", "import_type", "file_type", "auto_identify", "file_path"),
        returns="jobId",
        kind=IMPORT,
        scope="bulk",
    )
    get_import_job_details = Endpoint(
        "GET",
        "/importjobs/{job_id}",
        params=("job_id",),
        returns=WHOLE,
        accepts_config=False,
        scope="bulk",
    )

    export_data = Endpoint(
        "GET",
        "/views/{view_id}/data",
        params=("view_id", "response_format", "file_path"),
        kind=EXPORT,
        doc="Export a table or view in ``response_format`` and write the bytes to file_path.",
    )
    initiate_bulk_export = Endpoint(
        "GET",
        "/views/{view_id}/data",
        params=("view_id", "response_format"),
        returns="jobId",
        scope="bulk",
    )
    initiate_bulk_export_using_sql = Endpoint(
        "GET",
        "/data",
        params=("sql_query", "response_format"),
        returns="jobId",
        scope="bulk",
    )
    get_export_job_details = Endpoint(
        "GET",
        "/exportjobs/{job_id}",
        params=("job_id",),
        returns=WHOLE,
        accepts_config=False,
        scope="bulk",
    )
    export_bulk_data = Endpoint(
        "GET",
        "/exportjobs/{job_id}/data",
        params=("job_id", "file_path"),
        kind=EXPORT,
        accepts_config=False,
        scope="bulk",
    )

    def import_data_in_new_table_as_batches(
        self,
        table_name: str,
        auto_identify: str | bool,
        file_path: str | os.PathLike[str],
        batch_size: int,
        config: Mapping[str, Any] | None = None,
    ) -> str | None:
        """Create a table and fill it from ``file_path`` in ``batch_size`` line chunks."""

        require(table_name, "table_name")
        merged = {**(config or {}), "tableName": table_name, "autoIdentify": auto_identify}
        return batch_import(
            self.http,
            f"{self._bulk_base}/data/batch",
            file_path,
            batch_size,
            config=merged,
            headers=self.headers(),
            delay=self.batch_delay,
        )

    def import_bulk_data_as_batches(
        self,
        view_id: str,
        import_type: str,
        auto_identify: str | bool,
        file_path: str | os.PathLike[str],
        batch_size: int,
        config: Mapping[str, Any] | None = None,
    ) -> str | None:
        """Import ``file_path`` into an existing table in ``batch_size`` line chunks."""

        require(view_id, "view_id")
        require(import_type, "import_type")
        merged = {**(config or {}), "importType": import_type, "autoIdentify": auto_identify}
        return batch_import(
            self.http,
            f"{self._bulk_base}/views/{view_id}/data/batch",
            file_path,
            batch_size,
            config=merged,
            headers=self.headers(),
            delay=self.batch_delay,
        )
