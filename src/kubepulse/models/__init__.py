from .table_models import *
from .workload_models import *

__all__ = [
    "ColumnDefinition",
    "TableRow",
    "Table",
    "ObjectMeta",
    "PartialObjectMetadata",
    "WorkloadRow",
    "DeleteOptions",
    "PropagationPolicy",
    "STATUS_OK",
    "STATUS_DEGRADED",
    "NA_VALUE",
    "MISSING_VALUE",
    "PHASE_RUNNING",
    "PHASE_COMPLETED",
    "DEFAULT_GRACE",
    "FORCE_GRACE",
]
