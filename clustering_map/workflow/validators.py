"""Step validators: run synchronously before anything is sent to the service."""

from __future__ import annotations

from typing import Iterable

from .. import messages
from ..config import ALLOWED_UPLOAD_TYPES, MAX_UPLOAD_BYTES
from ..errors import InputValidationError
from ..models import ColumnMapping, SpreadsheetFile


def validate_upload_file(file: SpreadsheetFile) -> None:
    """Reject files that are not Excel spreadsheets or exceed 50 MiB.

    The content type is checked before the size, so an oversized file of
    the wrong type reports the type error.
    """
    content_type = (file.content_type or "").split(";")[0].strip().lower()
    if content_type not in ALLOWED_UPLOAD_TYPES:
        raise InputValidationError(messages.INVALID_FILE_TYPE)
    if file.size > MAX_UPLOAD_BYTES:
        raise InputValidationError(messages.FILE_TOO_LARGE)


def validate_column_mapping(mapping: ColumnMapping, columns: Iterable[str]) -> None:
    """Check that every role of ``mapping`` names one of ``columns``."""
    known = set(columns)
    if not mapping.text_column:
        raise InputValidationError(messages.TEXT_COLUMN_REQUIRED)
    for column in (mapping.text_column, mapping.id_column, mapping.group_column):
        if column is not None and column not in known:
            raise InputValidationError(messages.UNKNOWN_COLUMN.format(column=column))
