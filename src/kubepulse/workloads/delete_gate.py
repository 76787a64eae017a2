"""Authorization-gated resource deletion."""

import asyncio
import time
from typing import Any, List, Optional, Protocol
import structlog

from kubepulse.core.exceptions import MissingKindException, PermissionDeniedException
from kubepulse.models.workload_models import DEFAULT_GRACE, DeleteOptions, PropagationPolicy
from kubepulse.workloads.kinds import (
    ResourceKind,
    current_kind,
    is_cluster_scoped,
    namespaced,
)

logger = structlog.get_logger(__name__)

DELETE_VERB = "delete"


class AccessReviewer(Protocol):
    """Answers whether the caller may perform verbs on a resource."""

    async def can_i(self, namespace: str, kind: ResourceKind, name: str, verbs: List[str]) -> bool:
        ...


class DynamicDeleter(Protocol):
    """Hands out resource handles whose ``delete(name, options, deadline=...)`` is awaitable.

    ``deadline`` is a ``time.monotonic()`` value; no request may be sent after it.
    """

    call_timeout: float

    def dynamic(self, kind: ResourceKind) -> Any:
        ...


class GateClient(AccessReviewer, DynamicDeleter, Protocol):
    pass


class DeleteGate:
    """Deletes a single resource once the caller is known to be allowed to."""

    def __init__(self, client: GateClient):
        self.client = client
        self.logger = logger.bind(service=self.__class__.__name__)

    async def delete(
        self,
        path: str,
        propagation: Optional[PropagationPolicy] = None,
        grace: int = DEFAULT_GRACE,
    ) -> None:
        """Delete the resource at ``namespace/name``.

        The kind comes from the request context (see ``kind_scope``).
        ``grace`` of ``DEFAULT_GRACE`` leaves the grace period to the server.

        Raises:
            MissingKindException: No kind is bound to the request.
            PermissionDeniedException: The caller may not delete ``path``.
        """
        kind = current_kind.get()
        if kind is None:
            raise MissingKindException(f"No resource kind bound for delete of {path}")
        ns, name = namespaced(path)

        allowed = await self.client.can_i(ns, kind, name, [DELETE_VERB])
        if not allowed:
            self.logger.warning("Delete denied", kind=str(kind), path=path)
            raise PermissionDeniedException(path, DELETE_VERB)

        options = DeleteOptions(
            propagation_policy=propagation,
            grace_period_seconds=grace if grace != DEFAULT_GRACE else None,
        )

        self.logger.info("Deleting resource", kind=str(kind), path=path, **options.model_dump(exclude_none=True))
        timeout = self.client.call_timeout
        deadline = time.monotonic() + timeout
        async with asyncio.timeout(timeout):
            resource = self.client.dynamic(kind)
            if is_cluster_scoped(ns):
                await resource.delete(name, options, deadline=deadline)
            else:
                await resource.namespace(ns).delete(name, options, deadline=deadline)
