"""
hlf-topology - resolved view of a Hyperledger Fabric network on Kubernetes.

Reads the operator's custom resources (certificate authorities, peers,
orderer nodes, ordering services), resolves the public and in-cluster
address of every component and groups them into organizations.
"""

__version__ = "0.1.0"

from hlf_topology.core.domain.models import (
    ClusterCA,
    ClusterOrdererNode,
    ClusterOrderingService,
    ClusterPeer,
    ComponentKind,
    DiscoveryError,
    ExposureConfig,
    HostPort,
    MalformedRecordError,
    MappingError,
    NotFoundError,
    Organization,
    OrganizationType,
    StoreError,
    TopologyError,
)
from hlf_topology.core.domain.services.address_resolver import AddressResolver
from hlf_topology.core.domain.services.topology import TopologyService
from hlf_topology.config import SettingsLoader, TopologySettings
from hlf_topology.service import create_topology_service

__all__ = [
    # Main
    "TopologyService",
    "AddressResolver",
    "create_topology_service",
    # Models
    "ClusterCA",
    "ClusterPeer",
    "ClusterOrdererNode",
    "ClusterOrderingService",
    "Organization",
    "OrganizationType",
    "ComponentKind",
    "ExposureConfig",
    "HostPort",
    # Settings
    "TopologySettings",
    "SettingsLoader",
    # Errors
    "TopologyError",
    "StoreError",
    "MappingError",
    "DiscoveryError",
    "MalformedRecordError",
    "NotFoundError",
]
