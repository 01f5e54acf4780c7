"""Transport layer for the remote analysis service."""

from .client import AnalysisServiceClient
from .artifacts import ARTIFACT_FILENAMES, make_artifact, save_artifact
from .template import build_local_template, build_template_csv

__all__ = [
    "AnalysisServiceClient",
    "ARTIFACT_FILENAMES",
    "make_artifact",
    "save_artifact",
    "build_local_template",
    "build_template_csv",
]
