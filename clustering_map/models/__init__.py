"""Pydantic data contracts exchanged between workflow steps and with the analysis service."""

from .upload import TagCandidate, UploadResult
from .mapping import ColumnMapping
from .tags import TagListResponse, TagRule, TagUpdateResponse
from .analysis import (
    AnalysisRequest,
    AnalysisResult,
    ClusterMethod,
    HdbscanParams,
    KmeansParams,
    UmapParams,
)
from .files import Artifact, ArtifactKind, SpreadsheetFile

__all__ = [
    "TagCandidate",
    "UploadResult",
    "ColumnMapping",
    "TagRule",
    "TagListResponse",
    "TagUpdateResponse",
    "AnalysisRequest",
    "AnalysisResult",
    "ClusterMethod",
    "HdbscanParams",
    "KmeansParams",
    "UmapParams",
    "Artifact",
    "ArtifactKind",
    "SpreadsheetFile",
]
