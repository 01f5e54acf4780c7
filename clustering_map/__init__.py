"""Clustering Map - guided survey clustering against a remote analysis service."""

__version__ = "1.0.0"

from .api import AnalysisServiceClient
from .errors import (
    ApiError,
    ClientError,
    ClusteringMapError,
    InputValidationError,
    NetworkError,
    ServerError,
    WorkflowBusyError,
    WorkflowError,
    WorkflowStateError,
)
from .workflow import ClusteringWorkflow, Step

__all__ = [
    "AnalysisServiceClient",
    "ClusteringWorkflow",
    "Step",
    "ApiError",
    "ClientError",
    "ClusteringMapError",
    "InputValidationError",
    "NetworkError",
    "ServerError",
    "WorkflowBusyError",
    "WorkflowError",
    "WorkflowStateError",
]
