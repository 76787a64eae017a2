"""Plain-text and JSON rendering of workload rows."""

import json
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from kubepulse.models.workload_models import MISSING_VALUE, WorkloadRow


def age(created: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Compact age such as ``45s``, ``12m``, ``3h`` or ``9d``."""
    if created is None:
        return MISSING_VALUE
    now = now or datetime.now(timezone.utc)
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    seconds = max(int((now - created).total_seconds()), 0)
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        return f"{seconds // 60}m"
    if seconds < 86400:
        return f"{seconds // 3600}h"
    return f"{seconds // 86400}d"


def render_table(rows: Sequence[WorkloadRow], now: Optional[datetime] = None) -> str:
    lines: List[List[str]] = [list(WorkloadRow.HEADER)]
    for row in rows:
        lines.append([
            row.kind,
            row.namespace,
            row.name,
            row.status,
            row.readiness,
            row.valid,
            age(row.created, now),
        ])

    widths = [max(len(line[i]) for line in lines) for i in range(len(WorkloadRow.HEADER))]
    return "\n".join(
        "  ".join(value.ljust(width) for value, width in zip(line, widths)).rstrip()
        for line in lines
    )


def render_json(rows: Sequence[WorkloadRow]) -> str:
    return json.dumps([row.model_dump(mode="json") for row in rows], indent=2)


def render_rows(rows: Sequence[WorkloadRow], fmt: str = "text", now: Optional[datetime] = None) -> str:
    """Render rows as an aligned text table or a JSON array."""
    if fmt == "json":
        return render_json(rows)
    return render_table(rows, now)
