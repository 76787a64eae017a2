"""Namespace-wide workload health aggregation."""

from typing import Any, Iterable, List, Optional, Protocol, Sequence
import structlog

from kubepulse.core.exceptions import (
    EmptyTableException,
    FetchException,
    UnexpectedResponseException,
)
from kubepulse.models.table_models import Table
from kubepulse.models.workload_models import WorkloadRow
from kubepulse.workloads import classifiers
from kubepulse.workloads.columns import NAME_COLUMN, cell
from kubepulse.workloads.kinds import DEFAULT_KINDS, ResourceKind
from kubepulse.workloads.metadata import recover_metadata

logger = structlog.get_logger(__name__)


class TableLister(Protocol):
    """Anything that can list a kind as a server-side table."""

    async def list_table(self, kind: ResourceKind, namespace: str) -> Optional[Any]:
        ...


class WorkloadAggregator:
    """
    Builds one health row per workload resource in a namespace scope.

    Kinds are fetched one after another, in the configured order. Any fetch
    failure aborts the whole listing; no partial results are returned.
    """

    def __init__(
        self,
        lister: TableLister,
        kinds: Sequence[ResourceKind] = DEFAULT_KINDS,
        allow_empty_kinds: Iterable[ResourceKind] = (),
        strict: bool = False,
    ):
        self.lister = lister
        self.kinds = tuple(kinds)
        self.allow_empty_kinds = frozenset(allow_empty_kinds)
        self.strict = strict
        self.logger = logger.bind(service=self.__class__.__name__)

    async def fetch(self, kind: ResourceKind, namespace: str) -> Table:
        """Fetch the table for ``kind``, checking its shape."""
        table = await self.lister.list_table(kind, namespace)
        if table is None:
            raise FetchException(str(kind), "no table found")
        if not isinstance(table, Table):
            raise UnexpectedResponseException(str(kind), type(table).__name__)
        if not table.rows and kind not in self.allow_empty_kinds:
            raise EmptyTableException(str(kind))
        return table

    async def list(self, namespace: str) -> List[WorkloadRow]:
        """List workload health rows for ``namespace``, kind by kind."""
        self.logger.info("Listing workloads", namespace=namespace, kinds=[str(k) for k in self.kinds])
        rows: List[WorkloadRow] = []
        for kind in self.kinds:
            table = await self.fetch(kind, namespace)
            if not table.rows:
                self.logger.debug("No resources found", kind=str(kind), namespace=namespace)
                continue
            rows.extend(self.normalize(kind, table))

        self.logger.info("Listed workloads", namespace=namespace, count=len(rows))
        return rows

    def normalize(self, kind: ResourceKind, table: Table) -> List[WorkloadRow]:
        """Normalize every row of ``kind``'s table, keeping source order."""
        columns = table.column_definitions
        normalized = []
        for row in table.rows:
            ns, created = recover_metadata(row.object)
            stat = classifiers.status(kind, row, columns, self.strict)
            name = cell(row, columns, NAME_COLUMN)
            normalized.append(WorkloadRow(
                kind=str(kind),
                namespace=ns,
                name="" if name is None else str(name),
                status=stat,
                readiness=classifiers.readiness(kind, row, columns, self.strict),
                valid=classifiers.validity(stat),
                created=created,
            ))
        return normalized
