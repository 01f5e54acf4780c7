"""Workflow state machine: Upload -> Mapping -> Tagging -> Analysis -> Visualization.

The workflow owns every entity produced along the way. Network steps run
the blocking transport client in the default executor, holding the shared
busy flag for the duration of the call.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from pathlib import Path
from typing import Any, Callable, Dict, List, Literal, Optional, Sequence, Union

from ..api.artifacts import save_artifact
from ..api.client import AnalysisServiceClient
from ..api.template import TemplateVariant
from .. import messages
from ..errors import ApiError, InputValidationError, WorkflowBusyError, WorkflowStateError
from ..models import (
    AnalysisRequest,
    AnalysisResult,
    ColumnMapping,
    SpreadsheetFile,
    TagRule,
    UploadResult,
)
from .busy import BusyFlag
from .mapping import MappingForm
from .request_builder import build_analysis_request
from .tagging import seed_tag_rules
from .validators import validate_column_mapping, validate_upload_file

logger = logging.getLogger(__name__)


class Step(str, Enum):
    UPLOAD = "upload"
    MAPPING = "mapping"
    TAGGING = "tags"
    ANALYSIS = "analysis"
    VISUALIZATION = "visualization"


STEP_ORDER: List[Step] = list(Step)

# Marks a response that arrived after the user navigated away
_STALE = object()


@dataclass(frozen=True)
class StepView:
    """What the active step renders: its inputs plus loading/error state."""

    step: Step
    data: Dict[str, Any] = field(default_factory=dict)
    is_loading: bool = False
    error: Optional[str] = None


class ClusteringWorkflow:
    """Sequences the clustering map steps and holds the data between them.

    Step operations may only be called while their step is active
    (WorkflowStateError otherwise) and are rejected while a request is
    outstanding (WorkflowBusyError). Validation and service failures do not
    raise: they leave every entity untouched, set ``error`` and return None.
    """

    def __init__(
        self,
        client: Optional[AnalysisServiceClient] = None,
        *,
        busy: Optional[BusyFlag] = None,
    ):
        self.client = client or AnalysisServiceClient()
        self.busy = busy or BusyFlag()
        self.step = Step.UPLOAD
        self.error: Optional[str] = None

        self.upload_result: Optional[UploadResult] = None
        self.column_mapping: Optional[ColumnMapping] = None
        self.analysis_request: Optional[AnalysisRequest] = None
        self.tag_rules: Optional[List[TagRule]] = None
        self.analysis_result: Optional[AnalysisResult] = None

        # Dictionary being edited in the tagging step, committed to tag_rules on completion
        self.working_tags: List[TagRule] = []

        self._generation = 0
        self._pending: Optional[asyncio.Future] = None

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def is_loading(self) -> bool:
        return self.busy.is_set

    def can_enter(self, step: Step) -> bool:
        """Whether the entities ``step`` needs have been produced."""
        if step is Step.UPLOAD:
            return True
        if step is Step.MAPPING:
            return self.upload_result is not None
        if step is Step.TAGGING:
            return self.upload_result is not None and self.analysis_request is not None
        if step is Step.ANALYSIS:
            return self.analysis_request is not None
        return self.analysis_result is not None

    def active_view(self) -> Optional[StepView]:
        """Data for the current step, or None when its inputs are missing."""
        if not self.can_enter(self.step):
            return None

        data: Dict[str, Any] = {}
        if self.step is Step.MAPPING:
            data = {
                "columns": list(self.upload_result.columns),
                "sample_data": list(self.upload_result.sample_data),
                "column_mapping": self.column_mapping,
            }
        elif self.step is Step.TAGGING:
            data = {
                "tag_candidates": list(self.upload_result.tag_candidates),
                "tag_rules": list(self.working_tags),
            }
        elif self.step is Step.ANALYSIS:
            data = {
                "column_mapping": self.analysis_request.column_mapping,
                "tag_rules": list(self.tag_rules or []),
            }
        elif self.step is Step.VISUALIZATION:
            data = {"analysis_result": self.analysis_result}

        return StepView(step=self.step, data=data, is_loading=self.is_loading, error=self.error)

    def mapping_form(self) -> MappingForm:
        """A mapping form bound to the current upload, prefilled with the last mapping."""
        self._require_step(Step.MAPPING, "mapping_form")
        return MappingForm(self.upload_result, self.column_mapping)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def back(self) -> Step:
        """Go to the previous step, keeping every produced entity."""
        idx = STEP_ORDER.index(self.step)
        if idx == 0:
            return self.step
        self._invalidate_pending()
        self._move_to(STEP_ORDER[idx - 1])
        return self.step

    def reset(self) -> None:
        """Discard everything and return to the upload step."""
        self._invalidate_pending()
        self.upload_result = None
        self.column_mapping = None
        self.analysis_request = None
        self.tag_rules = None
        self.analysis_result = None
        self.working_tags = []
        self._move_to(Step.UPLOAD)
        logger.info("Workflow reset")

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    async def upload(self, file: SpreadsheetFile) -> Optional[UploadResult]:
        """Validate and upload a spreadsheet, then move to the mapping step."""
        self._begin(Step.UPLOAD, "upload")
        try:
            validate_upload_file(file)
        except InputValidationError as e:
            self.error = e.message
            return None

        result = await self._guarded(Step.UPLOAD, "upload", self.client.upload, file)
        if result is _STALE or result is None:
            return None

        self._clear_after_upload()
        self.upload_result = result
        self._move_to(Step.MAPPING)
        return result

    def complete_mapping(self, mapping: Union[ColumnMapping, MappingForm]) -> Optional[AnalysisRequest]:
        """Record the column mapping and build the analysis request from it."""
        self._begin(Step.MAPPING, "complete_mapping")
        try:
            if isinstance(mapping, MappingForm):
                mapping = mapping.build()
            validate_column_mapping(mapping, self.upload_result.columns)
        except InputValidationError as e:
            self.error = e.message
            return None

        request = build_analysis_request(mapping)
        if request != self.analysis_request:
            self.analysis_result = None
        self.column_mapping = mapping
        self.analysis_request = request
        if not self.working_tags:
            self.working_tags = list(self.tag_rules) if self.tag_rules is not None else seed_tag_rules(
                self.upload_result.tag_candidates
            )
        self._move_to(Step.TAGGING)
        return request

    async def load_tag_dictionary(self) -> Optional[List[TagRule]]:
        """Merge the service's tag dictionary with this upload's tag candidates."""
        self._begin(Step.TAGGING, "load_tag_dictionary")
        response = await self._guarded(Step.TAGGING, "load_tag_dictionary", self.client.get_tags)
        if response is _STALE:
            return None
        if response is None:
            if not self.working_tags:
                self.working_tags = seed_tag_rules(self.upload_result.tag_candidates)
            return None

        self.working_tags = seed_tag_rules(self.upload_result.tag_candidates, response.tags)
        return list(self.working_tags)

    async def complete_tagging(
        self,
        rules: Optional[Sequence[Any]] = None,
        *,
        sync: bool = True,
    ) -> Optional[List[TagRule]]:
        """Commit the tag dictionary and move to the analysis step.

        Args:
            rules: Rules to commit (TagRule, dict or str entries). Defaults to
                   the working dictionary.
            sync: Also store the dictionary on the service (POST /tags).
        """
        self._begin(Step.TAGGING, "complete_tagging")
        try:
            committed = [TagRule.coerce(r) for r in (self.working_tags if rules is None else rules)]
        except ValueError as e:
            self.error = str(e)
            return None

        if sync:
            response = await self._guarded(Step.TAGGING, "complete_tagging", self.client.update_tags, committed)
            if response is _STALE or response is None:
                return None
            if not response.success:
                self.error = response.message or messages.TAG_UPDATE_FAILED
                return None

        if committed != self.tag_rules:
            self.analysis_result = None
        self.tag_rules = committed
        self.working_tags = list(committed)
        self._move_to(Step.ANALYSIS)
        return list(committed)

    async def run_analysis(self) -> Optional[AnalysisResult]:
        """Send the analysis request with the committed tag rules."""
        self._begin(Step.ANALYSIS, "run_analysis")
        request = self.analysis_request.with_tag_rules(self.tag_rules or [])
        result = await self._guarded(Step.ANALYSIS, "run_analysis", self.client.analyze, request)
        if result is _STALE or result is None:
            return None

        self.analysis_result = result
        self._move_to(Step.VISUALIZATION)
        return result

    async def export(
        self,
        kind: Literal["pdf", "png"],
        directory: Optional[Union[str, Path]] = None,
    ) -> Optional[Path]:
        """Download the rendered map and save it under its fixed filename."""
        self._begin(Step.VISUALIZATION, f"export_{kind}")
        if kind == "pdf":
            fetch = self.client.export_pdf
        elif kind == "png":
            fetch = self.client.export_png
        else:
            raise ValueError(f"Unknown export format: {kind}")

        artifact = await self._guarded(Step.VISUALIZATION, f"export_{kind}", fetch)
        if artifact is _STALE or artifact is None:
            return None
        return save_artifact(artifact, directory)

    async def download_template(
        self,
        directory: Optional[Union[str, Path]] = None,
        variant: TemplateVariant = "sample",
    ) -> Path:
        """Save the spreadsheet template. Available from any step; service
        failures fall back to a locally generated CSV."""
        with self.busy.hold("download_template"):
            loop = asyncio.get_running_loop()
            artifact = await loop.run_in_executor(None, partial(self.client.fetch_template, variant))
        return save_artifact(artifact, directory)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_step(self, step: Step, operation: str) -> None:
        if self.step is not step or not self.can_enter(step):
            raise WorkflowStateError(f"'{operation}' requires the {step.value} step (current: {self.step.value})")

    def _begin(self, step: Step, operation: str) -> None:
        self._require_step(step, operation)
        if self.busy.is_set:
            raise WorkflowBusyError(f"'{self.busy.owner}' is still in progress; '{operation}' rejected")
        self.error = None

    async def _guarded(self, step: Step, operation: str, func: Callable[..., Any], *args: Any) -> Any:
        """Run a client call; ApiError becomes ``self.error`` and a None result."""
        try:
            return await self._dispatch(step, operation, func, *args)
        except ApiError as e:
            self.error = e.message
            return None

    async def _dispatch(self, step: Step, operation: str, func: Callable[..., Any], *args: Any) -> Any:
        """Run ``func`` in the executor while holding the busy flag.

        Returns _STALE when the user navigated away before the response arrived.
        """
        with self.busy.hold(operation):
            generation = self._generation
            loop = asyncio.get_running_loop()
            future = loop.run_in_executor(None, partial(func, *args))
            self._pending = future
            try:
                result = await future
            except asyncio.CancelledError:
                if generation == self._generation:
                    raise
                result = _STALE
            except ApiError:
                if self._is_current(step, generation):
                    raise
                result = _STALE
            finally:
                if self._pending is future:
                    self._pending = None

        if result is not _STALE and not self._is_current(step, generation):
            result = _STALE
        if result is _STALE:
            logger.info("Discarded %s response: workflow moved on to %s", operation, self.step.value)
        return result

    def _is_current(self, step: Step, generation: int) -> bool:
        return self._generation == generation and self.step is step

    def _invalidate_pending(self) -> None:
        self._generation += 1
        if self._pending is not None:
            # The cancelled call still owns the busy flag until it resumes
            self._pending.cancel()
            self._pending = None
            self.busy.release()

    def _move_to(self, step: Step) -> None:
        if step is not self.step:
            logger.info("Workflow: %s -> %s", self.step.value, step.value)
        self.step = step
        self.error = None

    def _clear_after_upload(self) -> None:
        self.column_mapping = None
        self.analysis_request = None
        self.tag_rules = None
        self.analysis_result = None
        self.working_tags = []
