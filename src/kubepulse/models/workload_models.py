"""Workload health models and display sentinels."""

from pydantic import BaseModel, ConfigDict, Field
from typing import ClassVar, Dict, Any, List, Optional
from datetime import datetime
from enum import Enum

STATUS_OK = "OK"
STATUS_DEGRADED = "DEGRADED"

# Display sentinels
NA_VALUE = "n/a"
MISSING_VALUE = "<none>"

PHASE_RUNNING = "Running"
PHASE_COMPLETED = "Completed"

# Grace periods, in seconds. DEFAULT_GRACE leaves the choice to the server.
DEFAULT_GRACE = -1
FORCE_GRACE = 0


class PropagationPolicy(str, Enum):
    """Deletion propagation policies."""
    ORPHAN = "Orphan"
    BACKGROUND = "Background"
    FOREGROUND = "Foreground"


class WorkloadRow(BaseModel):
    """Normalized health row for a single workload resource."""

    model_config = ConfigDict(frozen=True)

    HEADER: ClassVar[List[str]] = ["KIND", "NAMESPACE", "NAME", "STATUS", "READY", "VALID", "AGE"]

    kind: str
    namespace: str = ""
    name: str = ""
    status: str = MISSING_VALUE
    readiness: str = NA_VALUE
    valid: str = ""
    created: Optional[datetime] = None

    @property
    def is_degraded(self) -> bool:
        return self.valid == STATUS_DEGRADED

    def cells(self) -> List[Any]:
        """Row values in header order."""
        return [
            self.kind,
            self.namespace,
            self.name,
            self.status,
            self.readiness,
            self.valid,
            self.created,
        ]


class DeleteOptions(BaseModel):
    """Options sent along with a delete call."""

    model_config = ConfigDict(use_enum_values=True)

    propagation_policy: Optional[PropagationPolicy] = None
    grace_period_seconds: Optional[int] = Field(None, ge=0)

    def to_body(self) -> Dict[str, Any]:
        """Render as a meta/v1 DeleteOptions body, omitting unset fields."""
        body: Dict[str, Any] = {"apiVersion": "v1", "kind": "DeleteOptions"}
        if self.propagation_policy is not None:
            body["propagationPolicy"] = self.propagation_policy
        if self.grace_period_seconds is not None:
            body["gracePeriodSeconds"] = self.grace_period_seconds
        return body
