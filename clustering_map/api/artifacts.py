"""Filename/content-type conventions per artifact kind and client-side saving."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from ..config import EXPORT_DIR, XLSX_CONTENT_TYPE
from ..models.files import Artifact, ArtifactKind

logger = logging.getLogger(__name__)

ARTIFACT_FILENAMES: Dict[str, str] = {
    "pdf": "clustering_map.pdf",
    "png": "clustering_map.png",
    "template": "clustering_map_template.xlsx",
    "template_fallback": "clustering_map_template.csv",
}

# Used only when the service omits a Content-Type header
DEFAULT_CONTENT_TYPES: Dict[str, str] = {
    "pdf": "application/pdf",
    "png": "image/png",
    "template": XLSX_CONTENT_TYPE,
    "template_fallback": "text/csv;charset=utf-8",
}


def make_artifact(kind: ArtifactKind, content: bytes, content_type: Optional[str] = None) -> Artifact:
    """Wrap downloaded bytes with the filename fixed for ``kind``."""
    return Artifact(
        kind=kind,
        filename=ARTIFACT_FILENAMES[kind],
        content_type=content_type or DEFAULT_CONTENT_TYPES[kind],
        content=content,
    )


def save_artifact(artifact: Artifact, directory: Optional[Union[str, Path]] = None) -> Path:
    """Write an artifact to ``directory`` (default: EXPORT_DIR) under its fixed filename.

    Returns:
        Path of the written file. An existing file with the same name is replaced.
    """
    target_dir = Path(directory) if directory is not None else EXPORT_DIR
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / artifact.filename
    tmp = path.with_name(path.name + ".tmp")
    tmp.write_bytes(artifact.content)
    tmp.replace(path)
    logger.info("Saved %s (%s, %d bytes) to %s", artifact.kind, artifact.content_type, len(artifact.content), path)
    return path
