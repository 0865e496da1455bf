"""Topology domain service - lists components and groups them into organizations."""

import copy
from typing import Callable, Sequence, TypeVar

import structlog

from hlf_topology.core.domain.models import (
    CA_PORT,
    ClusterCA,
    ClusterOrdererNode,
    ClusterOrderingService,
    ClusterPeer,
    NotFoundError,
    Organization,
    OrganizationType,
)
from hlf_topology.core.domain.records import (
    FabricCARecord,
    FabricOrdererNodeRecord,
    FabricOrderingServiceRecord,
    FabricPeerRecord,
    RecordT,
)
from hlf_topology.core.domain.services.address_resolver import AddressResolver
from hlf_topology.core.domain.services.mapper import DomainMapper
from hlf_topology.core.ports.inbound.topology import ITopologyPort
from hlf_topology.core.ports.outbound.resource_store import IResourceStorePort, ResourceKind

logger = structlog.get_logger(__name__)

ItemT = TypeVar("ItemT")


class TopologyService(ITopologyPort):
    """
    Domain service for the resolved network topology.

    Lists component records from the store, maps them through the
    domain mapper and groups them into organizations and ordering
    services. Holds no state between calls.
    """

    def __init__(
        self,
        store: IResourceStorePort,
        resolver: AddressResolver,
        release_label: str = "release",
    ):
        """
        Initialize topology service.

        Args:
            store: Resource store port
            resolver: Address resolver used by the mapper
            release_label: Label key tying orderer nodes to their ordering service
        """
        self._store = store
        self._release_label = release_label
        self._mapper = DomainMapper(resolver, release_label=release_label)

    # === Listings ===

    def list_cas(self, namespace: str = "") -> list[ClusterCA]:
        """List certificate authorities."""
        records = self._records(ResourceKind.CA, FabricCARecord, namespace)
        cas = [self._mapper.map_ca(record) for record in records]

        logger.info("cas_listed", namespace=namespace or "*", count=len(cas))
        return cas

    def list_peers(self, namespace: str = "") -> tuple[list[Organization], list[ClusterPeer]]:
        """List peers and group them by MSP ID."""
        records = self._records(ResourceKind.PEER, FabricPeerRecord, namespace)
        peers = [self._mapper.map_peer(record) for record in records]

        # Bucket order follows the first appearance of each MSP ID
        buckets: dict[str, Organization] = {}
        for peer in peers:
            org = buckets.get(peer.msp_id)
            if org is None:
                org = Organization(type=OrganizationType.PEER, msp_id=peer.msp_id)
                buckets[peer.msp_id] = org
            org.peers.append(peer)

        organizations = list(buckets.values())
        logger.info(
            "peers_listed",
            namespace=namespace or "*",
            count=len(peers),
            organizations=len(organizations),
        )
        return organizations, peers

    def list_orderer_nodes(self, namespace: str = "") -> list[ClusterOrdererNode]:
        """List orderer nodes without grouping them."""
        records = self._records(ResourceKind.ORDERER_NODE, FabricOrdererNodeRecord, namespace)
        nodes = [self._mapper.map_orderer_node(record) for record in records]

        logger.info("orderer_nodes_listed", namespace=namespace or "*", count=len(nodes))
        return nodes

    def list_orderers(
        self, namespace: str = ""
    ) -> tuple[list[Organization], list[ClusterOrderingService]]:
        """
        List ordering services.

        Orderer nodes that are not labelled with an ordering service of
        their namespace are merged into a single implicit service named
        after the first of them. Every ordering service record then gets
        the nodes labelled with its name.

        Returns:
            Orderer organizations and ordering services; both lists are
            empty when the scope has no orderers
        """
        node_records = self._records(
            ResourceKind.ORDERER_NODE, FabricOrdererNodeRecord, namespace
        )
        service_records = self._records(
            ResourceKind.ORDERING_SERVICE, FabricOrderingServiceRecord, namespace
        )
        owners = {(record.namespace, record.name) for record in service_records}

        services: list[ClusterOrderingService] = []

        unowned = [
            record
            for record in node_records
            if (record.namespace, record.release(self._release_label)) not in owners
        ]
        if unowned:
            services.append(self._implicit_service(unowned))

        for service_record in service_records:
            services.append(self._explicit_service(service_record))

        if not services:
            logger.info("orderers_listed", namespace=namespace or "*", count=0)
            return [], []

        organizations = self._group_orderers(services)
        logger.info(
            "orderers_listed",
            namespace=namespace or "*",
            services=len(services),
            organizations=len(organizations),
        )
        return organizations, services

    # === Lookups ===

    def find_ca_by_full_name(self, full_name: str, namespace: str = "") -> ClusterCA:
        """Find a certificate authority by `name.namespace`."""
        return _find_one(
            self.list_cas(namespace),
            lambda ca: ca.full_name == full_name,
            "CA",
            full_name,
        )

    def find_peer_by_full_name(self, full_name: str, namespace: str = "") -> ClusterPeer:
        """Find a peer by `name.namespace`."""
        _, peers = self.list_peers(namespace)
        return _find_one(peers, lambda peer: peer.full_name == full_name, "Peer", full_name)

    def find_orderer_node_by_full_name(
        self, full_name: str, namespace: str = ""
    ) -> ClusterOrdererNode:
        """Find an orderer node by `name.namespace`."""
        return _find_one(
            self.list_orderer_nodes(namespace),
            lambda node: node.full_name == full_name,
            "Orderer node",
            full_name,
        )

    def find_ordering_service_by_full_name(
        self, full_name: str, namespace: str = ""
    ) -> ClusterOrderingService:
        """Find an ordering service by its qualified name."""
        _, services = self.list_orderers(namespace)
        return _find_one(
            services,
            lambda service: service.name == full_name,
            "Ordering service",
            full_name,
        )

    def find_ca_by_name(self, name: str, namespace: str) -> ClusterCA:
        """
        Get a certificate authority by record name and namespace.

        Raises:
            NotFoundError: If the store has no such record
        """
        raw = self._store.get_resource(ResourceKind.CA, name, namespace)
        if raw is None:
            raise NotFoundError("CA", f"{name}.{namespace}")
        return self._mapper.map_ca(FabricCARecord.from_object(raw))

    def find_ca_by_url(self, host: str, port: int) -> ClusterCA:
        """
        Find a certificate authority by the host and port a client dials.

        A host of the form `name.namespace` narrows the listing to that
        namespace. A CA matches when the host is one of its configured
        hosts, when its record name equals the bare host, or when its
        node-port equals `port`. An unset node-port never matches, and
        neither does the default CA port, since any CA listens on it
        in-cluster.

        Raises:
            NotFoundError: If no certificate authority matches
        """
        bare_host = host
        namespace = ""
        chunks = host.split(".")
        if len(chunks) == 2:
            bare_host, namespace = chunks

        for ca in self.list_cas(namespace):
            if (
                host in ca.hosts
                or ca.name == bare_host
                or (ca.node_port not in (0, CA_PORT) and ca.node_port == port)
            ):
                return ca

        raise NotFoundError("CA", f"host={host} port={port}")

    # === Internals ===

    def _records(
        self,
        kind: ResourceKind,
        record_cls: type[RecordT],
        namespace: str,
    ) -> list[RecordT]:
        return [
            record_cls.from_object(raw)
            for raw in self._store.list_resources(kind, namespace)
        ]

    def _implicit_service(
        self, records: Sequence[FabricOrdererNodeRecord]
    ) -> ClusterOrderingService:
        first = records[0]
        msp_ids = {record.msp_id for record in records}
        if len(msp_ids) > 1:
            # Independent unowned clusters end up merged into one service
            logger.warning(
                "implicit_ordering_service_mixed_msp",
                name=first.full_name,
                msp_ids=sorted(msp_ids),
            )
        return ClusterOrderingService(
            name=first.full_name,
            namespace=first.namespace,
            msp_id=first.msp_id,
            implicit=True,
            orderers=[self._mapper.map_orderer_node(record) for record in records],
        )

    def _explicit_service(
        self, service_record: FabricOrderingServiceRecord
    ) -> ClusterOrderingService:
        selector = f"{self._release_label}={service_record.name}"
        raw_nodes = self._store.list_resources_by_label(
            ResourceKind.ORDERER_NODE, service_record.namespace, selector
        )
        nodes = [
            self._mapper.map_orderer_node(FabricOrdererNodeRecord.from_object(raw))
            for raw in raw_nodes
        ]
        return ClusterOrderingService(
            name=service_record.full_name,
            namespace=service_record.namespace,
            msp_id=service_record.msp_id,
            spec=copy.deepcopy(service_record.spec),
            status=copy.deepcopy(service_record.status),
            orderers=nodes,
        )

    @staticmethod
    def _group_orderers(services: Sequence[ClusterOrderingService]) -> list[Organization]:
        buckets: dict[str, Organization] = {}

        def bucket(msp_id: str) -> Organization:
            org = buckets.get(msp_id)
            if org is None:
                org = Organization(type=OrganizationType.ORDERER, msp_id=msp_id)
                buckets[msp_id] = org
            return org

        for service in services:
            if not service.orderers:
                bucket(service.msp_id)
            for node in service.orderers:
                bucket(node.msp_id or service.msp_id).orderer_nodes.append(node)

        return list(buckets.values())


def _find_one(
    items: Sequence[ItemT],
    predicate: Callable[[ItemT], bool],
    kind: str,
    key: str,
) -> ItemT:
    for item in items:
        if predicate(item):
            return item
    logger.info("lookup_missed", kind=kind, key=key)
    raise NotFoundError(kind, key)
