"""Column mapping data model."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict, field_validator

if TYPE_CHECKING:
    from .upload import UploadResult


class ColumnMapping(BaseModel):
    """Assignment of spreadsheet columns to semantic roles."""

    model_config = ConfigDict(frozen=True)

    text_column: str
    id_column: Optional[str] = None
    group_column: Optional[str] = None

    @field_validator("id_column", "group_column", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def for_upload(
        cls,
        upload: "UploadResult",
        text_column: str,
        *,
        id_column: Optional[str] = None,
        group_column: Optional[str] = None,
    ) -> "ColumnMapping":
        """Create a mapping whose columns are all present in ``upload``.

        Raises:
            InputValidationError: If the text column is missing or any role
                names a column the upload does not have.
        """
        from ..workflow.validators import validate_column_mapping

        mapping = cls(text_column=text_column, id_column=id_column, group_column=group_column)
        validate_column_mapping(mapping, upload.columns)
        return mapping
