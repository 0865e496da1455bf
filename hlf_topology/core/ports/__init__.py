"""Port interfaces for hexagonal architecture."""

from hlf_topology.core.ports.inbound.topology import ITopologyPort
from hlf_topology.core.ports.outbound.public_ip import PublicIPDiscovery
from hlf_topology.core.ports.outbound.resource_store import IResourceStorePort, ResourceKind

__all__ = [
    "ITopologyPort",
    "IResourceStorePort",
    "ResourceKind",
    "PublicIPDiscovery",
]
