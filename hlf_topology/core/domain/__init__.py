"""Domain layer - business logic and models."""

from hlf_topology.core.domain.models import (
    ClusterCA,
    ClusterOrdererNode,
    ClusterOrderingService,
    ClusterPeer,
    ComponentKind,
    ExposureConfig,
    ExposureKind,
    GatewayIngress,
    HostPort,
    Identity,
    MeshIngress,
    NodePortFallback,
    Organization,
    OrganizationType,
    OrgUser,
    ReverseProxyIngress,
)

__all__ = [
    "ClusterCA",
    "ClusterPeer",
    "ClusterOrdererNode",
    "ClusterOrderingService",
    "Organization",
    "OrganizationType",
    "OrgUser",
    "Identity",
    "HostPort",
    "ComponentKind",
    "ExposureConfig",
    "ExposureKind",
    "MeshIngress",
    "ReverseProxyIngress",
    "GatewayIngress",
    "NodePortFallback",
]
