from .kinds import (
    CLUSTER_SCOPE,
    DEFAULT_KINDS,
    ResourceKind,
    kind_scope,
    namespaced,
)
from .classifiers import is_ready, readiness, status, validity
from .aggregator import WorkloadAggregator
from .delete_gate import DeleteGate

__all__ = [
    "CLUSTER_SCOPE",
    "DEFAULT_KINDS",
    "ResourceKind",
    "kind_scope",
    "namespaced",
    "is_ready",
    "readiness",
    "status",
    "validity",
    "WorkloadAggregator",
    "DeleteGate",
]
