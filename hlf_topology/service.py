"""Service wiring - builds a topology service from settings."""

from pathlib import Path
from typing import Optional

import structlog

from hlf_topology.config import TopologySettings
from hlf_topology.core.adapters.in_memory_store import InMemoryResourceStore
from hlf_topology.core.adapters.kubernetes_store import KubernetesResourceStore
from hlf_topology.core.adapters.public_ip import KubernetesPublicIPDiscovery, StaticPublicIP
from hlf_topology.core.domain.services.address_resolver import AddressResolver
from hlf_topology.core.domain.services.topology import TopologyService
from hlf_topology.core.ports.outbound.public_ip import PublicIPDiscovery
from hlf_topology.core.ports.outbound.resource_store import IResourceStorePort

logger = structlog.get_logger(__name__)


def create_topology_service(
    settings: Optional[TopologySettings] = None,
    manifest: Optional[str | Path] = None,
    store: Optional[IResourceStorePort] = None,
    discover_public_ip: Optional[PublicIPDiscovery] = None,
) -> TopologyService:
    """
    Create a topology service.

    Usage:
        service = create_topology_service(TopologySettings(context="kind-hlf"))
        organizations, peers = service.list_peers("fabric")

    Args:
        settings: Runtime settings, defaults if None
        manifest: Read records from this manifest file instead of the cluster
        store: Explicit store, takes precedence over manifest and settings
        discover_public_ip: Explicit discovery capability

    Returns:
        Wired topology service
    """
    settings = settings or TopologySettings()

    if store is None:
        if manifest is not None:
            store = InMemoryResourceStore.from_file(manifest)
        else:
            store = KubernetesResourceStore(
                context=settings.context,
                group=settings.api_group,
                version=settings.api_version,
                request_timeout=settings.request_timeout,
            )

    if discover_public_ip is None:
        if settings.public_ip:
            discover_public_ip = StaticPublicIP(settings.public_ip)
        else:
            discover_public_ip = KubernetesPublicIPDiscovery(
                context=settings.context,
                request_timeout=settings.request_timeout,
            )

    logger.debug(
        "topology_service_created",
        store=type(store).__name__,
        discovery=type(discover_public_ip).__name__,
    )
    return TopologyService(
        store=store,
        resolver=AddressResolver(discover_public_ip),
        release_label=settings.release_label,
    )
