import json

import pytest
import structlog
from click.testing import CliRunner

from hlf_topology.cli import main

MANIFEST = """\
apiVersion: hlf.kungfusoftware.es/v1alpha1
kind: FabricPeer
metadata:
  name: peer0
  namespace: org1
spec:
  mspID: Org1MSP
  istio:
    hosts: [peer0.example.com]
    port: 443
status:
  nodePort: 30051
---
apiVersion: hlf.kungfusoftware.es/v1alpha1
kind: FabricCA
metadata:
  name: org1-ca
  namespace: org1
spec:
  hosts: [org1-ca.example.com]
status:
  nodePort: 30054
"""


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    # The CLI binds structlog to the runner's stderr
    structlog.reset_defaults()


@pytest.fixture
def manifest(tmp_path) -> str:
    path = tmp_path / "network.yaml"
    path.write_text(MANIFEST, encoding="utf-8")
    return str(path)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_peers_json(runner, manifest) -> None:
    result = runner.invoke(main, ["--from-file", manifest, "--public-ip", "192.0.2.1", "peers", "-f", "json"])

    assert result.exit_code == 0
    organizations = json.loads(result.stdout)
    assert organizations[0]["msp_id"] == "Org1MSP"
    assert organizations[0]["peers"][0]["public_url"] == "peer0.example.com:443"
    assert organizations[0]["peers"][0]["full_name"] == "peer0.org1"


def test_cas_json_uses_public_ip(runner, manifest) -> None:
    result = runner.invoke(main, ["--from-file", manifest, "--public-ip", "192.0.2.1", "cas", "-f", "json"])

    assert result.exit_code == 0
    cas = json.loads(result.stdout)
    assert cas[0]["public_url"] == "https://192.0.2.1:30054"
    assert cas[0]["private_url"] == "org1-ca.org1:7054"


def test_get_peer(runner, manifest) -> None:
    result = runner.invoke(main, ["--from-file", manifest, "--public-ip", "192.0.2.1", "get", "peer", "peer0.org1"])

    assert result.exit_code == 0
    assert json.loads(result.stdout)["private_url"] == "peer0.org1:7051"


def test_get_missing_exits_with_error(runner, manifest) -> None:
    result = runner.invoke(main, ["--from-file", manifest, "--public-ip", "192.0.2.1", "get", "peer", "missing.org1"])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_ca_by_url(runner, manifest) -> None:
    result = runner.invoke(
        main, ["--from-file", manifest, "--public-ip", "192.0.2.1", "ca-by-url", "org1-ca.example.com", "443"]
    )

    assert result.exit_code == 0
    assert "org1-ca.org1" in result.stdout


def test_orderers_on_network_without_orderers(runner, manifest) -> None:
    result = runner.invoke(main, ["--from-file", manifest, "--public-ip", "192.0.2.1", "orderers"])

    assert result.exit_code == 0
    assert "No orderers found" in result.stdout


def test_config_file_is_validated(runner, manifest, tmp_path) -> None:
    config = tmp_path / "topology.yaml"
    config.write_text("unknown_key: 1\n")

    result = runner.invoke(main, ["--config", str(config), "--from-file", manifest, "peers"])

    assert result.exit_code == 2
    assert "--config" in result.output


@pytest.mark.parametrize(
    "content",
    ["kind: [unclosed\n", "- a\n- b\n"],
)
def test_unreadable_manifest_exits_with_error(runner, tmp_path, content) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text(content, encoding="utf-8")

    result = runner.invoke(main, ["--from-file", str(path), "--public-ip", "192.0.2.1", "peers"])

    assert result.exit_code == 1
    assert "Malformed record" in result.output


def test_get_with_unreadable_manifest_exits_with_error(runner, tmp_path) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("- a\n", encoding="utf-8")

    result = runner.invoke(
        main, ["--from-file", str(path), "--public-ip", "192.0.2.1", "get", "peer", "peer0.org1"]
    )

    assert result.exit_code == 1
