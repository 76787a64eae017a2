from .client_factory import KubernetesClientFactory
from .k8s_client import KubernetesClient, DynamicResource

__all__ = ["KubernetesClientFactory", "KubernetesClient", "DynamicResource"]
