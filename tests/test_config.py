import json

import pytest

from hlf_topology.config import SettingsLoader, TopologySettings


def test_load_yaml(tmp_path) -> None:
    path = tmp_path / "topology.yaml"
    path.write_text("context: kind-hlf\nrequest_timeout: 10\nrelease_label: app\n")

    settings = SettingsLoader().load_from_file(path)

    assert settings.context == "kind-hlf"
    assert settings.request_timeout == 10
    assert settings.release_label == "app"
    assert settings.api_group == "hlf.kungfusoftware.es"


def test_load_json(tmp_path) -> None:
    path = tmp_path / "topology.json"
    path.write_text(json.dumps({"public_ip": "192.0.2.1", "namespace": "fabric"}))

    settings = SettingsLoader().load_from_file(path)

    assert settings.public_ip == "192.0.2.1"
    assert settings.namespace == "fabric"


def test_empty_yaml_gives_defaults(tmp_path) -> None:
    path = tmp_path / "topology.yml"
    path.write_text("")

    assert SettingsLoader().load_from_file(path) == TopologySettings()


def test_missing_file() -> None:
    with pytest.raises(FileNotFoundError):
        SettingsLoader().load_from_file("/nonexistent/topology.yaml")


def test_unsupported_suffix(tmp_path) -> None:
    path = tmp_path / "topology.toml"
    path.write_text("context = 'x'")

    with pytest.raises(ValueError, match="Unsupported file format"):
        SettingsLoader().load_from_file(path)


@pytest.mark.parametrize(
    "content",
    ["unknown_key: 1\n", "request_timeout: -1\n", "- a\n- b\n"],
)
def test_invalid_content(tmp_path, content) -> None:
    path = tmp_path / "topology.yaml"
    path.write_text(content)

    with pytest.raises(ValueError):
        SettingsLoader().load_from_file(path)


def test_merged_ignores_unset_overrides() -> None:
    settings = TopologySettings(context="kind-hlf", request_timeout=5)

    merged = settings.merged(context=None, public_ip="192.0.2.1", request_timeout=None)

    assert merged.context == "kind-hlf"
    assert merged.public_ip == "192.0.2.1"
    assert merged.request_timeout == 5
    assert settings.public_ip is None
