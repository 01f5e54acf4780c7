"""Shared fixtures for the clustering_map test suite."""

import json
from typing import Any, Dict, Optional

import pytest
import requests

from clustering_map.config import XLSX_CONTENT_TYPE
from clustering_map.models import SpreadsheetFile, UploadResult

BASE_URL = "https://analysis.test"


class SizedFile(SpreadsheetFile):
    """Spreadsheet with a reported size, so limits can be tested without 50 MiB of bytes."""

    reported_size: int = 0

    @property
    def size(self) -> int:
        return self.reported_size


UPLOAD_BODY: Dict[str, Any] = {
    "columns": ["ID", "回答者", "自由記述", "グループ"],
    "sample_data": [
        {"ID": 1, "回答者": "Aさん", "自由記述": "UIが分かりやすい", "グループ": "満足"},
        {"ID": 2, "回答者": "Bさん", "自由記述": "料金が少し高い", "グループ": "不満"},
    ],
    "tag_candidates": [
        {"label": "料金", "count": 12},
        {"label": "サポート", "score": 0.82},
    ],
}


def make_response(
    status_code: int = 200,
    json_body: Any = None,
    content: Optional[bytes] = None,
    headers: Optional[Dict[str, str]] = None,
) -> requests.Response:
    """Build a real requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    response.url = BASE_URL
    if json_body is not None:
        response._content = json.dumps(json_body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = content if content is not None else b""
    if headers:
        response.headers.update(headers)
    return response


@pytest.fixture
def upload_result() -> UploadResult:
    return UploadResult.model_validate(UPLOAD_BODY)


@pytest.fixture
def xlsx_file() -> SpreadsheetFile:
    return SpreadsheetFile(filename="survey.xlsx", content_type=XLSX_CONTENT_TYPE, content=b"PK\x03\x04 fake")
