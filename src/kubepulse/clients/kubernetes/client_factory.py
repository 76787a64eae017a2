# src/kubepulse/clients/kubernetes/client_factory.py
"""Builds Kubernetes clients from ``KubernetesSettings``."""

from typing import Dict, Any, Optional
import structlog

from .k8s_client import KubernetesClient

logger = structlog.get_logger(__name__)


class KubernetesClientFactory:
    """Creates unconnected clients for the configured kubeconfig and context.

    ``config`` is ``KubernetesSettings.model_dump()``; call limits
    (``call_timeout_seconds``, ``retry_attempts``) are read by the client.
    Use the returned client as an async context manager to connect it.
    """

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.kubeconfig_path = config.get("kubeconfig_path")
        self.context = config.get("context")

        self.logger = logger.bind(factory="kubernetes")

    def create_client(self, kubeconfig_data: Optional[bytes] = None) -> KubernetesClient:
        self.logger.debug("Creating Kubernetes client", context=self.context,
                          kubeconfig=self.kubeconfig_path, inline_kubeconfig=kubeconfig_data is not None)
        return KubernetesClient(
            config_dict=self.config,
            kubeconfig_path=self.kubeconfig_path,
            context=self.context,
            kubeconfig_data=kubeconfig_data
        )
