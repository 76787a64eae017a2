from .settings import Settings, KubernetesSettings, WorkloadSettings

__all__ = ["Settings", "KubernetesSettings", "WorkloadSettings"]
