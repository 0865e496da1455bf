import pytest

from hlf_topology.core.domain.models import DiscoveryError, HostPort, MappingError
from hlf_topology.core.domain.records import (
    FabricCARecord,
    FabricOrdererNodeRecord,
    FabricPeerRecord,
)
from hlf_topology.core.domain.services.address_resolver import AddressResolver
from hlf_topology.core.domain.services.mapper import DomainMapper


@pytest.fixture
def mapper(resolver) -> DomainMapper:
    return DomainMapper(resolver)


def test_peer_with_mesh_ingress(mapper, make_object) -> None:
    record = FabricPeerRecord.from_object(
        make_object(
            "FabricPeer",
            "peer0",
            namespace="org1",
            spec={"mspID": "Org1MSP", "istio": {"hosts": ["peer0.example.com"], "port": 443}},
            status={"nodePort": 30051},
        )
    )

    peer = mapper.map_peer(record)

    assert peer.public_url == "peer0.example.com:443"
    assert peer.private_url == "peer0.org1:7051"
    assert peer.full_name == "peer0.org1"
    assert peer.msp_id == "Org1MSP"
    assert peer.identity.cert == ""
    assert peer.identity.key == ""


def test_ca_enroll_fields_from_first_identity(mapper, make_object) -> None:
    record = FabricCARecord.from_object(
        make_object(
            "FabricCA",
            "org1-ca",
            namespace="org1",
            spec={
                "hosts": ["localhost", "org1-ca"],
                "ca": {
                    "registry": {
                        "identities": [
                            {"name": "enroll", "pass": "enrollpw", "type": "client"},
                            {"name": "other", "pass": "otherpw"},
                        ]
                    }
                },
            },
            status={"nodePort": 30054, "tls_cert": "-----BEGIN CERTIFICATE-----"},
        )
    )

    ca = mapper.map_ca(record)

    assert ca.enroll_id == "enroll"
    assert ca.enroll_secret == "enrollpw"
    assert ca.public_url == "https://203.0.113.10:30054"
    assert ca.private_url == "org1-ca.org1:7054"
    assert ca.hosts == ["localhost", "org1-ca"]
    assert ca.tls_cert.startswith("-----BEGIN")


def test_ca_with_empty_registry(mapper, make_object) -> None:
    ca = mapper.map_ca(FabricCARecord.from_object(make_object("FabricCA", "ca", namespace="ns")))

    assert ca.enroll_id == ""
    assert ca.enroll_secret == ""


def test_orderer_admin_endpoint_is_resolved_independently(mapper, discovery, make_object) -> None:
    record = FabricOrdererNodeRecord.from_object(
        make_object(
            "FabricOrdererNode",
            "ord1",
            namespace="orderers",
            spec={"mspID": "OrdererMSP", "traefik": {"hosts": ["ord1.example.com"]}},
            status={"nodePort": 30050, "adminPort": 30053},
            labels={"release": "ordsvc"},
        )
    )

    node = mapper.map_orderer_node(record)

    assert node.public_url == "ord1.example.com:443"
    assert node.admin_address == HostPort(host="203.0.113.10", port=30053)
    assert node.admin_url == "https://203.0.113.10:30053"
    assert node.private_url == "ord1.orderers:7050"
    assert node.release == "ordsvc"
    assert discovery.calls == 1


def test_mapped_object_owns_its_payload(mapper, make_object) -> None:
    raw = make_object(
        "FabricPeer", "peer0", spec={"mspID": "Org1MSP", "istio": {"hosts": ["a"], "port": 443}}
    )
    peer = mapper.map_peer(FabricPeerRecord.from_object(raw))

    raw["spec"]["mspID"] = "Changed"
    raw["spec"]["istio"]["hosts"].append("b")

    assert peer.spec["mspID"] == "Org1MSP"
    assert peer.spec["istio"]["hosts"] == ["a"]


def test_discovery_failure_is_a_mapping_error(make_object) -> None:
    def failing() -> str:
        raise DiscoveryError("cluster has no nodes")

    mapper = DomainMapper(AddressResolver(failing))
    record = FabricPeerRecord.from_object(make_object("FabricPeer", "peer0"))

    with pytest.raises(MappingError):
        mapper.map_peer(record)
