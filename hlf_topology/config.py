"""Settings and settings loader."""

import json
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from hlf_topology.core.ports.outbound.resource_store import API_GROUP, API_VERSION


class TopologySettings(BaseModel):
    """Runtime settings of the topology service."""

    # Store
    context: Optional[str] = None
    api_group: str = API_GROUP
    api_version: str = API_VERSION
    request_timeout: Optional[float] = Field(default=None, gt=0)
    namespace: str = ""

    # Orderer grouping
    release_label: str = "release"

    # Skip node address discovery when set
    public_ip: Optional[str] = None

    model_config = {"extra": "forbid"}

    def merged(self, **overrides: Any) -> "TopologySettings":
        """Copy with every non-None override applied."""
        values = {key: value for key, value in overrides.items() if value is not None}
        return self.model_validate({**self.model_dump(), **values})


class SettingsLoader:
    """
    Load settings from YAML or JSON files.

    Usage:
        loader = SettingsLoader()
        settings = loader.load_from_file("topology.yaml")
    """

    def load_from_file(self, file_path: str | Path) -> TopologySettings:
        """
        Load settings from a file.

        Supports YAML (.yaml, .yml) and JSON (.json) formats.

        Args:
            file_path: Path to settings file

        Returns:
            Validated settings

        Raises:
            ValueError: If file format is not supported or content is invalid
            FileNotFoundError: If file does not exist
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {file_path}")

        if path.suffix in (".yaml", ".yml"):
            data = self._load_yaml(path)
        elif path.suffix == ".json":
            data = self._load_json(path)
        else:
            raise ValueError(
                f"Unsupported file format: {path.suffix}. "
                "Supported formats: .yaml, .yml, .json"
            )

        if not isinstance(data, dict):
            raise ValueError(f"Settings file {file_path} must contain a mapping")

        try:
            return TopologySettings.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid settings in {file_path}: {e}") from e

    def _load_yaml(self, path: Path) -> Any:
        """Load settings from YAML file."""
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def _load_json(self, path: Path) -> Any:
        """Load settings from JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
