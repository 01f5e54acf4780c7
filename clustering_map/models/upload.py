"""Upload step data models."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TagCandidate(BaseModel):
    """A tag suggestion extracted server-side from the uploaded file."""

    model_config = ConfigDict(frozen=True)

    label: str
    score: Optional[float] = None
    count: Optional[int] = None


class UploadResult(BaseModel):
    """Column names, preview rows and tag candidates of an uploaded spreadsheet."""

    model_config = ConfigDict(frozen=True)

    columns: List[str]
    sample_data: List[Dict[str, Any]] = Field(default_factory=list)
    tag_candidates: List[TagCandidate] = Field(default_factory=list)

    @field_validator("columns", mode="before")
    @classmethod
    def _columns_as_str(cls, value):
        # Excel headers such as 2023 arrive as JSON numbers
        if isinstance(value, list):
            return [str(column) for column in value]
        return value

    @field_validator("sample_data", mode="before")
    @classmethod
    def _row_keys_as_str(cls, value):
        if isinstance(value, list):
            return [{str(k): v for k, v in row.items()} if isinstance(row, dict) else row for row in value]
        return value

    @model_validator(mode="after")
    def _check_columns(self) -> "UploadResult":
        if not self.columns:
            raise ValueError("columns must not be empty")
        known = set(self.columns)
        for i, row in enumerate(self.sample_data):
            unknown = [key for key in row if key not in known]
            if unknown:
                raise ValueError(f"sample_data[{i}] references unknown columns: {unknown}")
        return self

    def has_column(self, name: Optional[str]) -> bool:
        return name is not None and name in self.columns
