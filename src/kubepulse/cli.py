# src/kubepulse/cli.py
"""Workload health CLI."""

import asyncio
import click
import structlog
from kubernetes.client.rest import ApiException

from kubepulse.clients.kubernetes.client_factory import KubernetesClientFactory
from kubepulse.config.settings import LogLevel, Settings
from kubepulse.core.exceptions import KubePulseException
from kubepulse.core.utils import setup_logging
from kubepulse.models.workload_models import DEFAULT_GRACE, FORCE_GRACE, PropagationPolicy
from kubepulse.render import render_rows
from kubepulse.workloads.aggregator import WorkloadAggregator
from kubepulse.workloads.delete_gate import DeleteGate
from kubepulse.workloads.kinds import ALL_NAMESPACES, ResourceKind, kind_scope

logger = structlog.get_logger(__name__)


def _load_settings(debug: bool) -> Settings:
    settings = Settings.create_from_env()
    if debug:
        settings.debug = True
        settings.log_level = LogLevel.DEBUG
    setup_logging(
        log_level=settings.log_level.value,
        log_format=settings.log_format.value,
        config_path=settings.log_config_path,
    )
    return settings


def _run(coro, debug: bool):
    try:
        return asyncio.run(coro)
    except (KubePulseException, ApiException, TimeoutError) as e:
        if debug:
            logger.exception("Command failed")
        raise click.ClickException(str(e) or e.__class__.__name__)


@click.group()
def cli():
    """Unified health view of cluster workloads."""


@cli.command("list")
@click.option('--namespace', '-n', default=None, help='Namespace to list (default: K8S_NAMESPACE)')
@click.option('--all-namespaces', '-A', is_flag=True, help='List across all namespaces')
@click.option('--kinds', '-k', multiple=True, help='Kinds to list, in order (default: WORKLOAD_KINDS)')
@click.option('--output', '-o', type=click.Choice(['text', 'json']), default='text', help='Output format')
@click.option('--debug', is_flag=True, help='Enable debug logging')
def list_workloads(namespace, all_namespaces, kinds, output, debug):
    """
    List pods, services, daemon sets, stateful sets, deployments and
    replica sets with their readiness and OK/DEGRADED status.

    Example:
        kubepulse list -n payments -o json
    """
    settings = _load_settings(debug)
    if all_namespaces:
        ns = ALL_NAMESPACES
    else:
        ns = namespace or settings.kubernetes.namespace

    async def run_list():
        selected = (
            tuple(ResourceKind.parse(k) for k in kinds)
            if kinds
            else settings.workloads.resolved_kinds()
        )
        factory = KubernetesClientFactory(settings.kubernetes.model_dump())
        async with factory.create_client() as k8s_client:
            aggregator = WorkloadAggregator(
                k8s_client,
                kinds=selected,
                allow_empty_kinds=settings.workloads.resolved_allow_empty_kinds(),
                strict=settings.workloads.strict,
            )
            return await aggregator.list(ns)

    rows = _run(run_list(), debug)
    click.echo(render_rows(rows, output))


@cli.command("delete")
@click.argument('path')
@click.option('--kind', '-k', required=True, help='Kind of the resource (e.g. deploy, apps/v1/deployments)')
@click.option('--propagation', type=click.Choice([p.value for p in PropagationPolicy]), default=None,
              help='Deletion propagation policy')
@click.option('--grace', type=click.IntRange(min=DEFAULT_GRACE), default=DEFAULT_GRACE,
              help='Grace period in seconds, -1 for the server default')
@click.option('--force', is_flag=True, help='Delete immediately (grace period 0)')
@click.option('--debug', is_flag=True, help='Enable debug logging')
def delete_workload(path, kind, propagation, grace, force, debug):
    """
    Delete the resource at PATH (namespace/name) after an access review.

    Use "-/name" for cluster-scoped resources.

    Example:
        kubepulse delete payments/api --kind deploy --propagation Foreground
    """
    settings = _load_settings(debug)

    async def run_delete():
        resource_kind = ResourceKind.parse(kind)
        policy = PropagationPolicy(propagation) if propagation else None
        factory = KubernetesClientFactory(settings.kubernetes.model_dump())
        async with factory.create_client() as k8s_client:
            with kind_scope(resource_kind):
                await DeleteGate(k8s_client).delete(
                    path, propagation=policy, grace=FORCE_GRACE if force else grace
                )
        return resource_kind

    resource_kind = _run(run_delete(), debug)
    click.echo(f"Deleted {resource_kind!s} {path}")


if __name__ == '__main__':
    cli()
