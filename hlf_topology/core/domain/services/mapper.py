"""Domain mapper - turns raw records into resolved domain objects."""

import copy

from hlf_topology.core.domain.models import (
    ClusterCA,
    ClusterOrdererNode,
    ClusterPeer,
    ComponentKind,
    Identity,
)
from hlf_topology.core.domain.records import (
    FabricCARecord,
    FabricOrdererNodeRecord,
    FabricPeerRecord,
)
from hlf_topology.core.domain.services.address_resolver import (
    AddressResolver,
    format_public_url,
    private_url,
)


class DomainMapper:
    """
    Maps component records to domain objects.

    Each mapped object owns a deep copy of the record spec and status plus
    every derived address, so callers never go back to the store.
    Errors raised by the resolver propagate unchanged.
    """

    def __init__(self, resolver: AddressResolver, release_label: str = "release"):
        self._resolver = resolver
        self._release_label = release_label

    def map_ca(self, record: FabricCARecord) -> ClusterCA:
        """
        Map a certificate authority record.

        The first registry identity, if any, provides the enroll
        credentials; an empty registry leaves them empty.
        """
        address = self._resolver.resolve(ComponentKind.CA, record.exposure(), record.node_port)
        identities = record.registry_identities()
        enroll_id = ""
        enroll_secret = ""
        if identities:
            enroll_id = identities[0].get("name") or ""
            enroll_secret = identities[0].get("pass") or ""

        return ClusterCA(
            name=record.name,
            namespace=record.namespace,
            spec=copy.deepcopy(record.spec),
            status=copy.deepcopy(record.status),
            public_url=format_public_url(ComponentKind.CA, address),
            public_address=address,
            private_url=private_url(ComponentKind.CA, record.name, record.namespace),
            hosts=record.hosts,
            node_port=record.node_port,
            enroll_id=enroll_id,
            enroll_secret=enroll_secret,
            tls_cert=record.tls_cert,
        )

    def map_peer(self, record: FabricPeerRecord) -> ClusterPeer:
        """Map a peer record; identity material stays empty."""
        address = self._resolver.resolve(ComponentKind.PEER, record.exposure(), record.node_port)
        return ClusterPeer(
            name=record.name,
            namespace=record.namespace,
            spec=copy.deepcopy(record.spec),
            status=copy.deepcopy(record.status),
            public_url=format_public_url(ComponentKind.PEER, address),
            public_address=address,
            private_url=private_url(ComponentKind.PEER, record.name, record.namespace),
            msp_id=record.msp_id,
            labels=dict(record.labels),
            identity=Identity(),
        )

    def map_orderer_node(self, record: FabricOrdererNodeRecord) -> ClusterOrdererNode:
        """Map an orderer node record, resolving client and admin endpoints."""
        address = self._resolver.resolve(
            ComponentKind.ORDERER, record.exposure(), record.node_port
        )
        admin_address = self._resolver.resolve(
            ComponentKind.ORDERER_ADMIN, record.admin_exposure(), record.admin_port
        )
        return ClusterOrdererNode(
            name=record.name,
            namespace=record.namespace,
            spec=copy.deepcopy(record.spec),
            status=copy.deepcopy(record.status),
            public_url=format_public_url(ComponentKind.ORDERER, address),
            public_address=address,
            private_url=private_url(ComponentKind.ORDERER, record.name, record.namespace),
            msp_id=record.msp_id,
            labels=dict(record.labels),
            release=record.release(self._release_label),
            admin_url=format_public_url(ComponentKind.ORDERER_ADMIN, admin_address),
            admin_address=admin_address,
        )
