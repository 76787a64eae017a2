"""Shared fixtures: server-side table layouts and fake collaborators."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional
from unittest.mock import AsyncMock, Mock

import pytest

from kubepulse.models.table_models import ColumnDefinition, Table, TableRow
from kubepulse.workloads.kinds import ResourceKind

# Column layouts as served by the API server for each kind.
COLUMNS: Dict[ResourceKind, List[str]] = {
    ResourceKind.POD: ["Name", "Ready", "Status", "Restarts", "Age", "IP", "Node"],
    ResourceKind.SERVICE: ["Name", "Type", "Cluster-IP", "External-IP", "Port(s)", "Age", "Selector"],
    ResourceKind.DAEMON_SET: ["Name", "Desired", "Current", "Ready", "Up-to-date", "Available", "Node Selector", "Age"],
    ResourceKind.STATEFUL_SET: ["Name", "Ready", "Age"],
    ResourceKind.DEPLOYMENT: ["Name", "Ready", "Up-to-date", "Available", "Age"],
    ResourceKind.REPLICA_SET: ["Name", "Desired", "Current", "Ready", "Age"],
}

CREATED = "2024-03-01T10:00:00Z"


def build_table(
    kind: ResourceKind,
    rows: List[Dict[str, Any]],
    namespace: str = "default",
    columns: Optional[List[str]] = None,
) -> Table:
    """Table for ``kind`` whose rows are given as ``{column: value}`` mappings."""
    names = columns or COLUMNS[kind]
    return Table(
        column_definitions=[ColumnDefinition(name=n) for n in names],
        rows=[
            TableRow(
                cells=[values.get(n, "") for n in names],
                object={
                    "kind": "PartialObjectMetadata",
                    "apiVersion": "meta.k8s.io/v1",
                    "metadata": {
                        "name": values.get("Name", ""),
                        "namespace": namespace,
                        "creationTimestamp": CREATED,
                    },
                },
            )
            for values in rows
        ],
    )


@pytest.fixture
def make_table() -> Callable[..., Table]:
    return build_table


@pytest.fixture
def healthy_tables() -> Dict[ResourceKind, Table]:
    """One healthy resource of every kind."""
    return {
        ResourceKind.POD: build_table(ResourceKind.POD, [{"Name": "web-1", "Ready": "1/1", "Status": "Running"}]),
        ResourceKind.SERVICE: build_table(ResourceKind.SERVICE, [{"Name": "web", "Type": "ClusterIP"}]),
        ResourceKind.DAEMON_SET: build_table(ResourceKind.DAEMON_SET, [{"Name": "agent", "Desired": 2, "Ready": 2}]),
        ResourceKind.STATEFUL_SET: build_table(ResourceKind.STATEFUL_SET, [{"Name": "db", "Ready": "3/3"}]),
        ResourceKind.DEPLOYMENT: build_table(ResourceKind.DEPLOYMENT, [{"Name": "web", "Ready": "2/2"}]),
        ResourceKind.REPLICA_SET: build_table(ResourceKind.REPLICA_SET, [{"Name": "web-5d8f", "Desired": 2, "Ready": 2}]),
    }


class FakeLister:
    """Table lister serving canned tables and recording every call."""

    def __init__(self, tables: Dict[ResourceKind, Any], errors: Optional[Dict[ResourceKind, Exception]] = None):
        self.tables = tables
        self.errors = errors or {}
        self.calls: List[tuple] = []

    async def list_table(self, kind: ResourceKind, namespace: str) -> Any:
        self.calls.append((kind, namespace))
        if kind in self.errors:
            raise self.errors[kind]
        return self.tables.get(kind)


@pytest.fixture
def lister_factory() -> Callable[..., FakeLister]:
    return FakeLister


@pytest.fixture
def fake_lister(healthy_tables: Dict[ResourceKind, Table]) -> FakeLister:
    return FakeLister(healthy_tables)


@pytest.fixture
def delete_client() -> Mock:
    """Access reviewer and dynamic deleter with every call allowed."""
    k8s = Mock()
    k8s.call_timeout = 5.0
    k8s.can_i = AsyncMock(return_value=True)

    resource = Mock()
    resource.delete = AsyncMock(return_value=None)
    namespaced = Mock()
    namespaced.delete = AsyncMock(return_value=None)
    resource.namespace = Mock(return_value=namespaced)
    k8s.dynamic = Mock(return_value=resource)
    return k8s
