"""Binary payloads: spreadsheets sent to the service and artifacts received from it."""

from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict

from ..config import XLS_CONTENT_TYPE, XLSX_CONTENT_TYPE

ArtifactKind = Literal["pdf", "png", "template", "template_fallback"]

# Browsers report these for Excel files; mimetypes does not know .xlsx on every platform
_EXTENSION_TYPES = {
    ".xlsx": XLSX_CONTENT_TYPE,
    ".xls": XLS_CONTENT_TYPE,
}


class SpreadsheetFile(BaseModel):
    """A file picked or dropped by the user, as it will be uploaded."""

    model_config = ConfigDict(frozen=True)

    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_path(cls, path: Union[str, Path], content_type: Optional[str] = None) -> "SpreadsheetFile":
        """Read a file from disk, inferring its content type from the extension."""
        p = Path(path)
        if content_type is None:
            content_type = _EXTENSION_TYPES.get(p.suffix.lower())
        if content_type is None:
            content_type = mimetypes.guess_type(p.name)[0] or "application/octet-stream"
        return cls(filename=p.name, content_type=content_type, content=p.read_bytes())


class Artifact(BaseModel):
    """A rendered export or template, ready to be saved client-side."""

    model_config = ConfigDict(frozen=True)

    kind: ArtifactKind
    filename: str
    content_type: str
    content: bytes
