"""Resource kinds tracked by the workload view, and namespace helpers."""

from contextlib import contextmanager
from contextvars import ContextVar
from enum import Enum
from typing import Iterator, Optional, Tuple

from kubepulse.core.exceptions import ConfigurationException

CLUSTER_SCOPE = "-"
ALL_NAMESPACES = ""
NAMESPACE_ALL = "all"


class ResourceKind(str, Enum):
    """Workload kinds, in listing order. Values are the group/version/resource form."""

    POD = "v1/pods"
    SERVICE = "v1/services"
    DAEMON_SET = "apps/v1/daemonsets"
    STATEFUL_SET = "apps/v1/statefulsets"
    DEPLOYMENT = "apps/v1/deployments"
    REPLICA_SET = "apps/v1/replicasets"

    def __str__(self) -> str:
        return self.value

    @property
    def group(self) -> str:
        parts = self.value.split("/")
        return parts[0] if len(parts) == 3 else ""

    @property
    def version(self) -> str:
        return self.value.split("/")[-2]

    @property
    def resource(self) -> str:
        return self.value.split("/")[-1]

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}" if self.group else self.version

    @property
    def kind_name(self) -> str:
        """The object kind, e.g. ``StatefulSet``."""
        return _KIND_NAMES[self]

    def api_path(self, namespace: str = ALL_NAMESPACES) -> str:
        """REST path listing this kind in ``namespace``."""
        prefix = f"/apis/{self.api_version}" if self.group else f"/api/{self.version}"
        if is_all_namespaces(namespace) or is_cluster_scoped(namespace):
            return f"{prefix}/{self.resource}"
        return f"{prefix}/namespaces/{namespace}/{self.resource}"

    @classmethod
    def parse(cls, name: str) -> "ResourceKind":
        """Resolve a kind from its string form, plural, singular or short name."""
        key = name.strip().lower()
        for kind in cls:
            if key in (kind.value, kind.resource, kind.kind_name.lower()):
                return kind
        if key in _SHORT_NAMES:
            return _SHORT_NAMES[key]
        raise ConfigurationException(f"Unknown resource kind: {name!r}")


_KIND_NAMES = {
    ResourceKind.POD: "Pod",
    ResourceKind.SERVICE: "Service",
    ResourceKind.DAEMON_SET: "DaemonSet",
    ResourceKind.STATEFUL_SET: "StatefulSet",
    ResourceKind.DEPLOYMENT: "Deployment",
    ResourceKind.REPLICA_SET: "ReplicaSet",
}

_SHORT_NAMES = {
    "po": ResourceKind.POD,
    "svc": ResourceKind.SERVICE,
    "ds": ResourceKind.DAEMON_SET,
    "sts": ResourceKind.STATEFUL_SET,
    "deploy": ResourceKind.DEPLOYMENT,
    "dp": ResourceKind.DEPLOYMENT,
    "rs": ResourceKind.REPLICA_SET,
}

DEFAULT_KINDS: Tuple[ResourceKind, ...] = tuple(ResourceKind)


def is_cluster_scoped(namespace: str) -> bool:
    return namespace == CLUSTER_SCOPE


def is_all_namespaces(namespace: str) -> bool:
    return namespace in (ALL_NAMESPACES, NAMESPACE_ALL)


def namespaced(path: str) -> Tuple[str, str]:
    """Split a ``namespace/name`` path. A bare name has an empty namespace."""
    ns, _, name = path.rpartition("/")
    return ns.strip("/"), name


# Kind bound to the current request, read by the delete gate.
current_kind: ContextVar[Optional[ResourceKind]] = ContextVar("current_kind", default=None)


@contextmanager
def kind_scope(kind: ResourceKind) -> Iterator[ResourceKind]:
    """Bind ``kind`` to the current request context."""
    token = current_kind.set(kind)
    try:
        yield kind
    finally:
        current_kind.reset(token)
