"""Per-kind readiness and status rules.

Each kind maps to a ``KindRule`` pair in ``KIND_RULES``. Kinds without an
entry get ``n/a`` readiness and a ``<none>`` status.
"""

from typing import Callable, Dict, NamedTuple, Sequence
import structlog

from kubepulse.core.exceptions import SchemaDriftException
from kubepulse.models.table_models import ColumnDefinition, TableRow
from kubepulse.models.workload_models import (
    MISSING_VALUE,
    NA_VALUE,
    PHASE_COMPLETED,
    PHASE_RUNNING,
    STATUS_DEGRADED,
    STATUS_OK,
)
from kubepulse.workloads.columns import (
    DESIRED_COLUMN,
    READY_COLUMN,
    STATUS_COLUMN,
    Cell,
    cell,
)
from kubepulse.workloads.kinds import ResourceKind

logger = structlog.get_logger(__name__)

Columns = Sequence[ColumnDefinition]
Rule = Callable[[ResourceKind, TableRow, Columns, bool], str]


class KindRule(NamedTuple):
    readiness: Rule
    status: Rule


def is_ready(ratio: str) -> bool:
    """Whether a ``ready/desired`` ratio is fully ready.

    A desired count of zero is always ready. Malformed counters are logged
    and reported as not ready.
    """
    parts = ratio.split("/")
    if len(parts) != 2:
        return False
    ready = _parse_count(parts[0], "Invalid ready count")
    if ready is None:
        return False
    desired = _parse_count(parts[1], "Invalid desired count")
    if desired is None:
        return False
    if desired == 0:
        return True
    return ready == desired


def _parse_count(token: str, event: str):
    # plain ASCII digits only; int() would also take "+1", " 1", "1_0" and non-ASCII digits
    if not (token.isascii() and token.isdigit()):
        logger.error(event, error="not a non-negative decimal count", count=token)
        return None
    return int(token)


def validity(status: str) -> str:
    """``DEGRADED`` for degraded rows, empty otherwise."""
    if status != STATUS_DEGRADED:
        return ""
    return status


def _drift(kind: ResourceKind, column: str, value: Cell, strict: bool) -> None:
    if strict:
        raise SchemaDriftException(str(kind), column, value)
    logger.warning("Column drift", kind=str(kind), column=column, value=value)


def _count_pair(row: TableRow, columns: Columns):
    """``Ready``/``Desired`` as a ratio string, from integers or else strings."""
    ready = cell(row, columns, READY_COLUMN)
    desired = cell(row, columns, DESIRED_COLUMN)
    if isinstance(ready, int) and isinstance(desired, int):
        return f"{ready}/{desired}"
    if isinstance(ready, str) and isinstance(desired, str):
        return f"{ready}/{desired}"
    return None


# Readiness rules

def _ready_column_readiness(kind, row, columns, strict):
    ready = cell(row, columns, READY_COLUMN)
    if isinstance(ready, str):
        return ready
    _drift(kind, READY_COLUMN, ready, strict)
    return NA_VALUE


def _count_readiness(kind, row, columns, strict):
    ratio = _count_pair(row, columns)
    if ratio is not None:
        return ratio
    _drift(kind, READY_COLUMN, cell(row, columns, READY_COLUMN), strict)
    return NA_VALUE


def _service_readiness(kind, row, columns, strict):
    return ""


# Status rules

def _pod_status(kind, row, columns, strict):
    phase = cell(row, columns, STATUS_COLUMN)
    if phase == PHASE_COMPLETED:
        return STATUS_OK
    ready = cell(row, columns, READY_COLUMN)
    if not isinstance(ready, str):
        _drift(kind, READY_COLUMN, ready, strict)
        return STATUS_DEGRADED
    if not is_ready(ready) or phase != PHASE_RUNNING:
        return STATUS_DEGRADED
    return STATUS_OK


def _ready_column_status(kind, row, columns, strict):
    ready = cell(row, columns, READY_COLUMN)
    if not isinstance(ready, str):
        _drift(kind, READY_COLUMN, ready, strict)
        return STATUS_DEGRADED
    if not is_ready(ready):
        return STATUS_DEGRADED
    return STATUS_OK


def _count_status(kind, row, columns, strict):
    ratio = _count_pair(row, columns)
    if ratio is None:
        _drift(kind, READY_COLUMN, cell(row, columns, READY_COLUMN), strict)
        return STATUS_OK
    if not is_ready(ratio):
        return STATUS_DEGRADED
    return STATUS_OK


def _service_status(kind, row, columns, strict):
    return STATUS_OK


KIND_RULES: Dict[ResourceKind, KindRule] = {
    ResourceKind.POD: KindRule(_ready_column_readiness, _pod_status),
    ResourceKind.SERVICE: KindRule(_service_readiness, _service_status),
    ResourceKind.DAEMON_SET: KindRule(_count_readiness, _count_status),
    ResourceKind.STATEFUL_SET: KindRule(_ready_column_readiness, _ready_column_status),
    ResourceKind.DEPLOYMENT: KindRule(_ready_column_readiness, _ready_column_status),
    ResourceKind.REPLICA_SET: KindRule(_count_readiness, _count_status),
}


def readiness(kind, row: TableRow, columns: Columns, strict: bool = False) -> str:
    """Readiness indicator for ``row``, or ``n/a`` for kinds without a rule."""
    rule = KIND_RULES.get(kind)
    if rule is None:
        return NA_VALUE
    return rule.readiness(kind, row, columns, strict)


def status(kind, row: TableRow, columns: Columns, strict: bool = False) -> str:
    """``OK`` or ``DEGRADED`` for ``row``, or ``<none>`` for kinds without a rule."""
    rule = KIND_RULES.get(kind)
    if rule is None:
        return MISSING_VALUE
    return rule.status(kind, row, columns, strict)
