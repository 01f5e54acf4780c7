"""Exception hierarchy for the Clustering Map client.

ValidationError-style failures never reach the network. ApiError and its
subclasses are the only errors the transport client lets through; raw
``requests`` exceptions are attached as ``__cause__`` and nothing more.
"""

from __future__ import annotations

from typing import Optional

from . import messages


class ClusteringMapError(Exception):
    """Root of every error raised by this package."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputValidationError(ClusteringMapError):
    """A file or form failed local validation before any request was sent."""


# ===================
# Transport
# ===================


class ApiError(ClusteringMapError):
    """Normalized failure of an exchange with the analysis service."""


class ServerError(ApiError):
    """The service answered with a non-success status or a malformed body."""

    def __init__(self, status_code: int, detail: Optional[str] = None):
        self.status_code = status_code
        self.detail = detail or messages.SERVER_ERROR
        super().__init__(f"{status_code}: {self.detail}")


class NetworkError(ApiError):
    """The request was sent but no response arrived (connectivity or timeout)."""

    def __init__(self, base_url: str):
        self.base_url = base_url
        super().__init__(messages.NETWORK_ERROR.format(base_url=base_url))


class ClientError(ApiError):
    """The request could not be built or sent."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(messages.CLIENT_ERROR.format(detail=detail))


# ===================
# Workflow
# ===================


class WorkflowError(ClusteringMapError):
    """Misuse of the workflow state machine."""


class WorkflowStateError(WorkflowError):
    """A step operation was invoked while another step is active."""


class WorkflowBusyError(WorkflowError):
    """A submission was attempted while a request is still outstanding."""
