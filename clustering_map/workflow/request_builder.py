"""Construction of the analysis request from a completed column mapping.

This is the only place default analysis hyperparameters are defined.
"""

from __future__ import annotations

from ..models import (
    AnalysisRequest,
    ClusterMethod,
    ColumnMapping,
    HdbscanParams,
    KmeansParams,
    UmapParams,
)

DEFAULT_CLUSTER_METHOD: ClusterMethod = "hdbscan"
DEFAULT_HDBSCAN = {"min_cluster_size": 15, "min_samples": 5}
DEFAULT_KMEANS = {"n_clusters": 8}
DEFAULT_UMAP = {"n_neighbors": 15, "min_dist": 0.1, "random_state": 42}


def build_analysis_request(mapping: ColumnMapping) -> AnalysisRequest:
    """Build the request for ``mapping`` with the default hyperparameters.

    Pure and deterministic: equal mappings give equal (and identically
    serialized) requests. Tag rules start empty; the tagging step supplies
    them at dispatch time.
    """
    return AnalysisRequest(
        column_mapping=mapping,
        tag_rules=[],
        cluster_method=DEFAULT_CLUSTER_METHOD,
        hdbscan_params=HdbscanParams(**DEFAULT_HDBSCAN),
        kmeans_params=KmeansParams(**DEFAULT_KMEANS),
        umap_params=UmapParams(**DEFAULT_UMAP),
    )
