import pytest

from hlf_topology.core.domain.models import MalformedRecordError
from hlf_topology.core.domain.records import (
    FabricCARecord,
    FabricOrdererNodeRecord,
    FabricPeerRecord,
)


def test_null_sections_are_absent(make_object) -> None:
    raw = make_object("FabricPeer", "peer0", spec={"istio": None, "traefik": {"hosts": None}})
    raw["status"] = None

    record = FabricPeerRecord.from_object(raw)
    exposure = record.exposure()

    assert exposure.mesh is None
    assert exposure.reverse_proxy is not None
    assert not exposure.reverse_proxy.is_present()
    assert record.node_port == 0


def test_exposure_reads_operator_keys(make_object) -> None:
    raw = make_object(
        "FabricPeer",
        "peer0",
        spec={
            "istio": {"hosts": ["peer0.example.com"], "port": 443, "ingressGateway": "ingressgateway"},
            "gatewayApi": {
                "hosts": ["peer0.gw.example.com"],
                "port": 8443,
                "gatewayName": "hlf-gateway",
                "gatewayNamespace": "default",
            },
        },
    )

    exposure = FabricPeerRecord.from_object(raw).exposure()

    assert exposure.mesh.ingress_gateway == "ingressgateway"
    assert exposure.gateway.port == 8443
    assert exposure.gateway.gateway_name == "hlf-gateway"


def test_exposure_section_with_wrong_type_is_malformed(make_object) -> None:
    record = FabricPeerRecord.from_object(make_object("FabricPeer", "peer0", spec={"istio": "yes"}))

    with pytest.raises(MalformedRecordError) as exc_info:
        record.exposure()

    assert exc_info.value.full_name == "peer0.fabric"


def test_hosts_with_wrong_type_is_malformed(make_object) -> None:
    record = FabricPeerRecord.from_object(
        make_object("FabricPeer", "peer0", spec={"istio": {"hosts": 42}})
    )

    with pytest.raises(MalformedRecordError):
        record.exposure()


def test_missing_metadata_name_is_malformed() -> None:
    with pytest.raises(MalformedRecordError):
        FabricPeerRecord.from_object({"kind": "FabricPeer", "metadata": {"namespace": "x"}})


def test_node_port_must_be_numeric(make_object) -> None:
    record = FabricPeerRecord.from_object(
        make_object("FabricPeer", "peer0", status={"nodePort": "n/a"})
    )

    with pytest.raises(MalformedRecordError, match="nodePort"):
        _ = record.node_port


def test_registry_identities_default_to_empty(make_object) -> None:
    assert FabricCARecord.from_object(make_object("FabricCA", "ca")).registry_identities() == []
    assert (
        FabricCARecord.from_object(
            make_object("FabricCA", "ca", spec={"ca": {"registry": {"identities": []}}})
        ).registry_identities()
        == []
    )


def test_registry_identities_must_be_a_list(make_object) -> None:
    record = FabricCARecord.from_object(
        make_object("FabricCA", "ca", spec={"ca": {"registry": {"identities": {"name": "x"}}}})
    )

    with pytest.raises(MalformedRecordError, match="identities"):
        record.registry_identities()


def test_orderer_admin_exposure_and_release(make_object) -> None:
    record = FabricOrdererNodeRecord.from_object(
        make_object(
            "FabricOrdererNode",
            "ord1",
            spec={
                "istio": {"hosts": ["ord1.example.com"], "port": 443},
                "adminIstio": {"hosts": ["admin-ord1.example.com"], "port": 443},
            },
            status={"nodePort": 30050, "adminPort": 30053},
            labels={"release": "orderer-svc"},
        )
    )

    assert record.admin_exposure().mesh.hosts == ["admin-ord1.example.com"]
    assert record.admin_exposure().gateway is None
    assert record.admin_port == 30053
    assert record.release() == "orderer-svc"
    assert record.release("app") is None
