"""Process-wide busy flag gating duplicate submissions."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from ..errors import WorkflowBusyError


class BusyFlag:
    """Single "is loading" flag shared by every step of a workflow.

    Acquired with ``hold()`` around each network call and released on every
    exit path, including errors and cancellation. A second acquisition while
    held is rejected, not queued. ``release()`` drops the current hold early;
    the abandoned ``hold()`` then leaves any later hold alone on exit.
    """

    def __init__(self):
        self._owner: Optional[str] = None
        self._token: Optional[object] = None

    @property
    def is_set(self) -> bool:
        return self._owner is not None

    @property
    def owner(self) -> Optional[str]:
        return self._owner

    @contextmanager
    def hold(self, owner: str) -> Iterator[None]:
        if self._owner is not None:
            raise WorkflowBusyError(f"'{self._owner}' is still in progress; '{owner}' rejected")
        token = object()
        self._owner = owner
        self._token = token
        try:
            yield
        finally:
            if self._token is token:
                self.release()

    def release(self) -> None:
        self._owner = None
        self._token = None

    def __bool__(self) -> bool:
        return self.is_set
