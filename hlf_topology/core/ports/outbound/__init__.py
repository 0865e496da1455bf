"""Outbound ports - interfaces for external system connections."""

from hlf_topology.core.ports.outbound.public_ip import PublicIPDiscovery
from hlf_topology.core.ports.outbound.resource_store import (
    API_GROUP,
    API_VERSION,
    IResourceStorePort,
    ResourceKind,
)

__all__ = [
    # Store
    "IResourceStorePort",
    "ResourceKind",
    "API_GROUP",
    "API_VERSION",
    # Discovery
    "PublicIPDiscovery",
]
