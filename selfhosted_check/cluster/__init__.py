"""Read-only access to the Kubernetes API."""

from selfhosted_check.cluster.client import ClusterClient, KubernetesClusterClient, LogStream
from selfhosted_check.cluster.errors import ClusterQueryError

__all__ = ["ClusterClient", "ClusterQueryError", "KubernetesClusterClient", "LogStream"]
