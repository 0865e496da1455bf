"""Topology inbound port interface."""

from abc import ABC, abstractmethod

from hlf_topology.core.domain.models import (
    ClusterCA,
    ClusterOrdererNode,
    ClusterOrderingService,
    ClusterPeer,
    Organization,
)


class ITopologyPort(ABC):
    """
    Inbound port for reading the resolved network topology.

    This port defines the interface for:
    - Listing certificate authorities, peers and orderers in a scope
    - Grouping components into organizations
    - Looking components up by their `name.namespace` full name

    Every call re-reads the store; nothing is cached between calls.
    """

    @abstractmethod
    def list_cas(self, namespace: str = "") -> list[ClusterCA]:
        """
        List certificate authorities.

        Args:
            namespace: Namespace scope, empty for cluster-wide

        Returns:
            Mapped certificate authorities
        """
        pass

    @abstractmethod
    def list_peers(self, namespace: str = "") -> tuple[list[Organization], list[ClusterPeer]]:
        """
        List peers and group them by MSP ID.

        Args:
            namespace: Namespace scope, empty for cluster-wide

        Returns:
            Peer organizations and the flat peer list
        """
        pass

    @abstractmethod
    def list_orderers(
        self, namespace: str = ""
    ) -> tuple[list[Organization], list[ClusterOrderingService]]:
        """
        List ordering services, implicit and explicit.

        Args:
            namespace: Namespace scope, empty for cluster-wide

        Returns:
            Orderer organizations and ordering services, both empty when
            the scope has no orderers
        """
        pass

    @abstractmethod
    def find_ca_by_full_name(self, full_name: str, namespace: str = "") -> ClusterCA:
        """
        Find a certificate authority by `name.namespace`.

        Raises:
            NotFoundError: If no certificate authority has that full name
        """
        pass

    @abstractmethod
    def find_peer_by_full_name(self, full_name: str, namespace: str = "") -> ClusterPeer:
        """
        Find a peer by `name.namespace`.

        Raises:
            NotFoundError: If no peer has that full name
        """
        pass

    @abstractmethod
    def find_orderer_node_by_full_name(
        self, full_name: str, namespace: str = ""
    ) -> ClusterOrdererNode:
        """
        Find an orderer node by `name.namespace`.

        Raises:
            NotFoundError: If no orderer node has that full name
        """
        pass

    @abstractmethod
    def find_ordering_service_by_full_name(
        self, full_name: str, namespace: str = ""
    ) -> ClusterOrderingService:
        """
        Find an ordering service by its name.

        Raises:
            NotFoundError: If no ordering service has that name
        """
        pass
