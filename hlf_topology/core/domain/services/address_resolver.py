"""Address resolver - picks one public address per component endpoint."""

import structlog

from hlf_topology.core.domain.models import (
    CA_PORT,
    ORDERER_PORT,
    PEER_PORT,
    ComponentKind,
    DiscoveryError,
    ExposureConfig,
    ExposureKind,
    ExposureMechanism,
    HostPort,
    NodePortFallback,
)
from hlf_topology.core.ports.outbound.public_ip import PublicIPDiscovery

logger = structlog.get_logger(__name__)

# Ingress precedence per endpoint kind, first present mechanism wins.
# The node-port fallback is always tried last.
PRECEDENCE: dict[ComponentKind, tuple[ExposureKind, ...]] = {
    ComponentKind.CA: (ExposureKind.MESH, ExposureKind.GATEWAY, ExposureKind.REVERSE_PROXY),
    ComponentKind.PEER: (ExposureKind.MESH, ExposureKind.GATEWAY, ExposureKind.REVERSE_PROXY),
    ComponentKind.ORDERER: (ExposureKind.MESH, ExposureKind.REVERSE_PROXY),
    ComponentKind.ORDERER_ADMIN: (ExposureKind.MESH, ExposureKind.REVERSE_PROXY),
}

PRIVATE_PORTS: dict[ComponentKind, int] = {
    ComponentKind.CA: CA_PORT,
    ComponentKind.PEER: PEER_PORT,
    ComponentKind.ORDERER: ORDERER_PORT,
}

HTTPS_KINDS = frozenset({ComponentKind.CA, ComponentKind.ORDERER_ADMIN})


def private_url(kind: ComponentKind, name: str, namespace: str) -> str:
    """
    In-cluster address of a component.

    Args:
        kind: CA, PEER or ORDERER
        name: Record name
        namespace: Record namespace

    Returns:
        `name.namespace:port` with the well-known port of the kind
    """
    return f"{name}.{namespace}:{PRIVATE_PORTS[kind]}"


class AddressResolver:
    """
    Resolves the public address of a component endpoint.

    The public IP discovery capability is injected and only called when
    no ingress mechanism is configured for the endpoint.
    """

    def __init__(self, discover_public_ip: PublicIPDiscovery):
        """
        Initialize resolver.

        Args:
            discover_public_ip: Callable returning the cluster public IP
        """
        self._discover_public_ip = discover_public_ip

    def select(
        self, kind: ComponentKind, exposure: ExposureConfig, node_port: int
    ) -> ExposureMechanism:
        """
        Pick the exposure mechanism an endpoint is reached through.

        Args:
            kind: Endpoint kind, selects the precedence order
            exposure: Configured ingress mechanisms
            node_port: Node-port from the record status, used by the fallback

        Returns:
            First present ingress in precedence order, else the node-port fallback
        """
        for mechanism_kind in PRECEDENCE[kind]:
            mechanism = exposure.mechanism(mechanism_kind)
            if mechanism is not None:
                return mechanism
        return NodePortFallback(port=node_port)

    def resolve(self, kind: ComponentKind, exposure: ExposureConfig, node_port: int) -> HostPort:
        """
        Resolve the public host and port of an endpoint.

        Raises:
            DiscoveryError: If the fallback is used and discovery fails
        """
        mechanism = self.select(kind, exposure, node_port)
        if isinstance(mechanism, NodePortFallback):
            address = mechanism.host_port(self._public_ip())
        else:
            address = mechanism.host_port()

        logger.debug(
            "address_resolved",
            kind=kind.value,
            mechanism=mechanism.kind.value,
            host=address.host,
            port=address.port,
        )
        return address

    def public_url(self, kind: ComponentKind, exposure: ExposureConfig, node_port: int) -> str:
        """Resolve and format the public URL of an endpoint."""
        return format_public_url(kind, self.resolve(kind, exposure, node_port))

    def _public_ip(self) -> str:
        try:
            return self._discover_public_ip()
        except DiscoveryError:
            logger.error("public_ip_discovery_failed")
            raise
        except Exception as e:
            logger.error("public_ip_discovery_failed", error=str(e))
            raise DiscoveryError(str(e)) from e


def format_public_url(kind: ComponentKind, address: HostPort) -> str:
    """`https://host:port` for CA and orderer admin endpoints, `host:port` otherwise."""
    if kind in HTTPS_KINDS:
        return f"https://{address.host}:{address.port}"
    return f"{address.host}:{address.port}"
