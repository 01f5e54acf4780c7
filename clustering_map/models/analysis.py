"""Analysis request/result data models."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .mapping import ColumnMapping
from .tags import TagRule

ClusterMethod = Literal["hdbscan", "kmeans"]


class HdbscanParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_cluster_size: int = Field(ge=2)
    min_samples: int = Field(ge=1)


class KmeansParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    n_clusters: int = Field(ge=2)


class UmapParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    n_neighbors: int = Field(ge=2, le=100)
    min_dist: float = Field(ge=0.0, le=1.0)
    random_state: int


class AnalysisRequest(BaseModel):
    """Body of ``POST /analyze``.

    Both parameter blocks are always populated; ``cluster_method`` decides
    which one the service reads.
    """

    model_config = ConfigDict(frozen=True)

    column_mapping: ColumnMapping
    tag_rules: List[TagRule] = Field(default_factory=list)
    cluster_method: ClusterMethod
    hdbscan_params: HdbscanParams
    kmeans_params: KmeansParams
    umap_params: UmapParams

    def with_tag_rules(self, rules: Sequence[TagRule]) -> "AnalysisRequest":
        """Return a copy carrying ``rules`` as its tag dictionary."""
        return self.model_copy(update={"tag_rules": list(rules)})

    def with_cluster_method(self, method: ClusterMethod) -> "AnalysisRequest":
        return self.model_validate({**self.model_dump(), "cluster_method": method})

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class AnalysisResult(BaseModel):
    """Opaque analysis output (cluster assignments, coordinates, summaries)."""

    model_config = ConfigDict(frozen=True)

    payload: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_response(cls, data: Any) -> "AnalysisResult":
        if not isinstance(data, dict):
            raise ValueError("analysis response must be a JSON object")
        return cls(payload=data)
