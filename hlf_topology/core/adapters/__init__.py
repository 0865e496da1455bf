"""Adapters - concrete implementations of ports."""

from hlf_topology.core.adapters.in_memory_store import InMemoryResourceStore
from hlf_topology.core.adapters.kubernetes_store import KubernetesResourceStore
from hlf_topology.core.adapters.public_ip import KubernetesPublicIPDiscovery, StaticPublicIP

__all__ = [
    # Store
    "InMemoryResourceStore",
    "KubernetesResourceStore",
    # Public IP
    "KubernetesPublicIPDiscovery",
    "StaticPublicIP",
]
