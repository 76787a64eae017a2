"""Tests for workload aggregation."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from kubernetes.client.rest import ApiException

from kubepulse.core.exceptions import (
    EmptyTableException,
    FetchException,
    UnexpectedResponseException,
)
from kubepulse.models.table_models import Table
from kubepulse.models.workload_models import WorkloadRow
from kubepulse.workloads.aggregator import WorkloadAggregator
from kubepulse.workloads.kinds import DEFAULT_KINDS, ResourceKind


class TestWorkloadAggregator:
    """Tests for WorkloadAggregator.list."""

    @pytest.mark.asyncio
    async def test_lists_every_kind_in_order(self, fake_lister) -> None:
        rows = await WorkloadAggregator(fake_lister).list("default")

        assert [row.kind for row in rows] == [str(k) for k in DEFAULT_KINDS]
        assert [call[0] for call in fake_lister.calls] == list(DEFAULT_KINDS)
        assert all(call[1] == "default" for call in fake_lister.calls)

    @pytest.mark.asyncio
    async def test_normalized_row(self, fake_lister) -> None:
        rows = await WorkloadAggregator(fake_lister, kinds=[ResourceKind.REPLICA_SET]).list("default")

        assert rows == [WorkloadRow(
            kind="apps/v1/replicasets",
            namespace="default",
            name="web-5d8f",
            status="OK",
            readiness="2/2",
            valid="",
            created=datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc),
        )]

    @pytest.mark.asyncio
    async def test_kind_major_ordering(self, make_table, lister_factory) -> None:
        lister = lister_factory({
            ResourceKind.POD: make_table(ResourceKind.POD, [
                {"Name": "b", "Ready": "0/1", "Status": "Pending"},
                {"Name": "a", "Ready": "1/1", "Status": "Running"},
            ]),
            ResourceKind.DEPLOYMENT: make_table(ResourceKind.DEPLOYMENT, [
                {"Name": "z", "Ready": "1/2"},
                {"Name": "y", "Ready": "2/2"},
            ]),
        })
        aggregator = WorkloadAggregator(lister, kinds=[ResourceKind.DEPLOYMENT, ResourceKind.POD])

        rows = await aggregator.list("default")

        assert [(row.kind, row.name) for row in rows] == [
            ("apps/v1/deployments", "z"),
            ("apps/v1/deployments", "y"),
            ("v1/pods", "b"),
            ("v1/pods", "a"),
        ]
        assert [row.valid for row in rows] == ["DEGRADED", "", "DEGRADED", ""]

    @pytest.mark.asyncio
    async def test_fetch_error_aborts_listing(self, healthy_tables, lister_factory) -> None:
        error = ApiException(status=500, reason="boom")
        lister = lister_factory(healthy_tables, errors={ResourceKind.STATEFUL_SET: error})

        with pytest.raises(ApiException) as exc_info:
            await WorkloadAggregator(lister).list("default")

        assert exc_info.value is error
        # Kinds after the failing one are never fetched.
        assert [call[0] for call in lister.calls] == list(DEFAULT_KINDS[:4])

    @pytest.mark.asyncio
    async def test_missing_table_fails(self, healthy_tables, lister_factory) -> None:
        del healthy_tables[ResourceKind.SERVICE]
        lister = lister_factory(healthy_tables)

        with pytest.raises(FetchException, match="v1/services"):
            await WorkloadAggregator(lister).list("default")

    @pytest.mark.asyncio
    async def test_non_table_response_fails(self, healthy_tables, lister_factory) -> None:
        healthy_tables[ResourceKind.POD] = {"kind": "PodList", "items": []}
        lister = lister_factory(healthy_tables)

        with pytest.raises(UnexpectedResponseException, match="dict"):
            await WorkloadAggregator(lister).list("default")

    @pytest.mark.asyncio
    async def test_empty_table_fails_by_default(self, healthy_tables, lister_factory) -> None:
        healthy_tables[ResourceKind.DAEMON_SET] = Table()
        lister = lister_factory(healthy_tables)

        with pytest.raises(EmptyTableException) as exc_info:
            await WorkloadAggregator(lister).list("default")

        assert exc_info.value.kind == "apps/v1/daemonsets"

    @pytest.mark.asyncio
    async def test_allowed_empty_kind_is_skipped(self, healthy_tables, lister_factory) -> None:
        healthy_tables[ResourceKind.DAEMON_SET] = Table()
        lister = lister_factory(healthy_tables)
        aggregator = WorkloadAggregator(lister, allow_empty_kinds=[ResourceKind.DAEMON_SET])

        rows = await aggregator.list("default")

        assert len(rows) == 5
        assert "apps/v1/daemonsets" not in {row.kind for row in rows}

    @pytest.mark.asyncio
    async def test_undecodable_metadata_leaves_blanks(self, make_table, lister_factory) -> None:
        table = make_table(ResourceKind.DEPLOYMENT, [{"Name": "web", "Ready": "1/1"}])
        table.rows[0].object = b"garbage"
        lister = lister_factory({ResourceKind.DEPLOYMENT: table})

        rows = await WorkloadAggregator(lister, kinds=[ResourceKind.DEPLOYMENT]).list("default")

        assert rows[0].namespace == ""
        assert rows[0].created is None
        assert rows[0].status == "OK"

    @pytest.mark.asyncio
    async def test_rows_carry_their_own_namespace(self, make_table, lister_factory) -> None:
        table = make_table(ResourceKind.POD, [{"Name": "a", "Ready": "1/1", "Status": "Running"}], namespace="ops")
        other = make_table(ResourceKind.POD, [{"Name": "b", "Ready": "1/1", "Status": "Running"}], namespace="web")
        table.rows.extend(other.rows)
        lister = lister_factory({ResourceKind.POD: table})

        rows = await WorkloadAggregator(lister, kinds=[ResourceKind.POD]).list("")

        assert [(row.namespace, row.name) for row in rows] == [("ops", "a"), ("web", "b")]
