"""Multi-step workflow: state machine, validators and the request builder."""

from .busy import BusyFlag
from .mapping import MappingForm
from .request_builder import build_analysis_request
from .state import STEP_ORDER, ClusteringWorkflow, Step, StepView
from .tagging import apply_tag_rules, preview_tags, seed_tag_rules
from .validators import validate_column_mapping, validate_upload_file

__all__ = [
    "BusyFlag",
    "MappingForm",
    "build_analysis_request",
    "STEP_ORDER",
    "ClusteringWorkflow",
    "Step",
    "StepView",
    "apply_tag_rules",
    "preview_tags",
    "seed_tag_rules",
    "validate_column_mapping",
    "validate_upload_file",
]
