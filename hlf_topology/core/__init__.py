"""Core module - Hexagonal architecture ports, domain and adapters."""

# Domain models
from hlf_topology.core.domain import (
    ClusterCA,
    ClusterOrdererNode,
    ClusterOrderingService,
    ClusterPeer,
    ComponentKind,
    ExposureConfig,
    HostPort,
    Organization,
    OrganizationType,
)

# Domain services
from hlf_topology.core.domain.services import (
    AddressResolver,
    DomainMapper,
    TopologyService,
)

# Ports
from hlf_topology.core.ports import (
    IResourceStorePort,
    ITopologyPort,
    PublicIPDiscovery,
    ResourceKind,
)

# Adapters
from hlf_topology.core.adapters import (
    InMemoryResourceStore,
    KubernetesPublicIPDiscovery,
    KubernetesResourceStore,
    StaticPublicIP,
)

__all__ = [
    # Domain Models
    "ClusterCA",
    "ClusterOrdererNode",
    "ClusterOrderingService",
    "ClusterPeer",
    "ComponentKind",
    "ExposureConfig",
    "HostPort",
    "Organization",
    "OrganizationType",
    # Domain Services
    "AddressResolver",
    "DomainMapper",
    "TopologyService",
    # Ports
    "IResourceStorePort",
    "ITopologyPort",
    "PublicIPDiscovery",
    "ResourceKind",
    # Adapters
    "InMemoryResourceStore",
    "KubernetesPublicIPDiscovery",
    "KubernetesResourceStore",
    "StaticPublicIP",
]
