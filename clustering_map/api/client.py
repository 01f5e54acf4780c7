"""HTTP client for the remote analysis service.

Every failure is normalized into ServerError, NetworkError or ClientError
before it leaves this module.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

import requests
from pydantic import ValidationError

from .. import messages
from ..config import REQUEST_TIMEOUT, resolve_api_url
from ..errors import ApiError, ClientError, NetworkError, ServerError
from ..models import (
    AnalysisRequest,
    AnalysisResult,
    Artifact,
    ArtifactKind,
    SpreadsheetFile,
    TagListResponse,
    TagRule,
    TagUpdateResponse,
    UploadResult,
)
from .artifacts import make_artifact
from .template import TemplateVariant, build_local_template

logger = logging.getLogger(__name__)


def _error_detail(response: requests.Response) -> Optional[str]:
    """Pull a human-readable message out of an error body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None

    detail = body.get("message") or body.get("detail")
    if isinstance(detail, list):
        # FastAPI validation errors: [{"loc": [...], "msg": "...", ...}, ...]
        parts = [d.get("msg", str(d)) if isinstance(d, dict) else str(d) for d in detail]
        detail = "; ".join(p for p in parts if p)
    if detail is None or detail == "":
        return None
    return str(detail)


class AnalysisServiceClient:
    """Blocking client for the analysis service endpoints.

    Usage:
        client = AnalysisServiceClient()
        upload = client.upload(SpreadsheetFile.from_path("survey.xlsx"))
        result = client.analyze(request)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or resolve_api_url()).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # Exchange + normalization
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except (
            requests.ConnectionError,
            requests.Timeout,
            requests.exceptions.ChunkedEncodingError,
            requests.exceptions.ContentDecodingError,
        ) as e:
            # The body was cut off or garbled in transit: no usable response arrived
            logger.error("Network error on %s %s (API base URL: %s): %s", method, path, self.base_url, e)
            raise NetworkError(self.base_url) from e
        except requests.RequestException as e:
            logger.error("Could not send %s %s: %s", method, path, e)
            raise ClientError(str(e)) from e

        if not response.ok:
            detail = _error_detail(response)
            logger.error("Server error %s on %s %s: %s", response.status_code, method, path, detail)
            raise ServerError(response.status_code, detail)
        return response

    def _json(self, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            logger.error("Non-JSON body from %s (status %s)", response.url, response.status_code)
            raise ServerError(response.status_code, messages.INVALID_RESPONSE) from e

    def _parse(self, response: requests.Response, parser, data: Any):
        try:
            return parser(data)
        except (ValidationError, ValueError) as e:
            logger.error("Malformed response from %s: %s", response.url, e)
            raise ServerError(response.status_code, messages.INVALID_RESPONSE) from e

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def upload(self, file: SpreadsheetFile) -> UploadResult:
        """POST /upload as multipart form data (field ``file``)."""
        files = {"file": (file.filename, file.content, file.content_type)}
        response = self._request("POST", "/upload", files=files)
        return self._parse(response, UploadResult.model_validate, self._json(response))

    def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        """POST /analyze with the request as JSON."""
        response = self._request("POST", "/analyze", json=request.to_payload())
        return self._parse(response, AnalysisResult.from_response, self._json(response))

    def get_tags(self) -> TagListResponse:
        """GET /tags: the tag dictionary stored on the service."""
        response = self._request("GET", "/tags")
        return self._parse(response, TagListResponse.model_validate, self._json(response))

    def update_tags(self, rules: Sequence[TagRule]) -> TagUpdateResponse:
        """POST /tags, replacing the stored dictionary with ``rules`` in order."""
        payload: Dict[str, Any] = {"tags": [rule.model_dump(mode="json") for rule in rules]}
        response = self._request("POST", "/tags", json=payload)
        return self._parse(response, TagUpdateResponse.model_validate, self._json(response))

    def export_pdf(self) -> Artifact:
        """GET /export/pdf: the rendered map of the last analysis."""
        return self._download("/export/pdf", "pdf")

    def export_png(self) -> Artifact:
        """GET /export/png: the rendered map of the last analysis."""
        return self._download("/export/png", "png")

    def fetch_template(self, fallback_variant: TemplateVariant = "sample") -> Artifact:
        """GET /template, or a locally generated CSV template if that fails.

        Never raises an ApiError: the template is a convenience download.
        """
        try:
            return self._download("/template", "template")
        except ApiError as e:
            logger.warning("Template download failed (%s); generating a local template instead", e.message)
            return build_local_template(fallback_variant)

    def _download(self, path: str, kind: ArtifactKind) -> Artifact:
        response = self._request("GET", path)
        return make_artifact(kind, response.content, response.headers.get("Content-Type"))

    def close(self) -> None:
        self.session.close()
