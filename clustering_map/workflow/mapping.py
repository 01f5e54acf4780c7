"""Form state behind the column mapping step."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from .. import messages
from ..errors import InputValidationError
from ..models import ColumnMapping, UploadResult

Role = Literal["text_column", "id_column", "group_column"]

ROLES: List[str] = ["text_column", "id_column", "group_column"]


class MappingForm:
    """Role selections restricted to the columns of one upload.

    The completion action is enabled (``can_complete``) only once a text
    column has been chosen.
    """

    def __init__(self, upload: UploadResult, initial: Optional[ColumnMapping] = None):
        self.upload = upload
        self._selected: Dict[str, Optional[str]] = {role: None for role in ROLES}
        if initial is not None:
            for role in ROLES:
                column = getattr(initial, role)
                if upload.has_column(column):
                    self._selected[role] = column

    @property
    def columns(self) -> List[str]:
        return list(self.upload.columns)

    def selected(self, role: Role) -> Optional[str]:
        return self._selected[role]

    def select(self, role: Role, column: Optional[str]) -> None:
        """Assign ``column`` to ``role``; ``None`` or "" clears the role.

        Raises:
            InputValidationError: If the column is not part of the upload.
            KeyError: If ``role`` is not a mapping role.
        """
        if role not in self._selected:
            raise KeyError(role)
        if column is None or column == "":
            self._selected[role] = None
            return
        if not self.upload.has_column(column):
            raise InputValidationError(messages.UNKNOWN_COLUMN.format(column=column))
        self._selected[role] = column

    @property
    def can_complete(self) -> bool:
        return self.upload.has_column(self._selected["text_column"])

    def build(self) -> ColumnMapping:
        if not self.can_complete:
            raise InputValidationError(messages.TEXT_COLUMN_REQUIRED)
        return ColumnMapping.for_upload(
            self.upload,
            self._selected["text_column"],
            id_column=self._selected["id_column"],
            group_column=self._selected["group_column"],
        )
