"""In-memory resource store adapter implementation."""

from pathlib import Path
from typing import Any, Iterable, Optional

import structlog
import yaml

from hlf_topology.core.domain.models import MalformedRecordError, StoreError
from hlf_topology.core.ports.outbound.resource_store import IResourceStorePort, ResourceKind

logger = structlog.get_logger(__name__)


class InMemoryResourceStore(IResourceStorePort):
    """
    Resource store holding raw records in memory.

    Records keep insertion order. Useful for tests and for reading
    manifests exported with `kubectl get ... -o yaml`.
    """

    def __init__(self, objects: Optional[Iterable[dict[str, Any]]] = None):
        self._objects: list[dict[str, Any]] = []
        for obj in objects or []:
            self.add(obj)

    @classmethod
    def from_file(cls, file_path: str | Path) -> "InMemoryResourceStore":
        """
        Load records from a YAML or JSON manifest file.

        Multi-document files and `kind: List` wrappers are both accepted.
        Documents of other kinds are skipped.

        Raises:
            FileNotFoundError: If file does not exist
            MalformedRecordError: If the file is not valid YAML or a
                document is not a mapping
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Manifest file not found: {file_path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                documents = [doc for doc in yaml.safe_load_all(f) if doc]
        except yaml.YAMLError as e:
            logger.error("manifest_parse_failed", path=str(path), error=str(e))
            raise MalformedRecordError(str(path), f"invalid YAML: {e}") from e

        store = cls()
        for index, document in enumerate(documents):
            if not isinstance(document, dict):
                raise MalformedRecordError(
                    f"{path}[{index}]",
                    f"manifest documents must be mappings, got {type(document).__name__}",
                )
            store.add(document)

        logger.info("manifests_loaded", path=str(path), count=len(store._objects))
        return store

    def add(self, obj: dict[str, Any]) -> None:
        """
        Add one record, unwrapping `kind: List` documents.

        Raises:
            MalformedRecordError: If the record or a list item is not a mapping
        """
        if not isinstance(obj, dict):
            raise MalformedRecordError(
                "<unknown>", f"records must be mappings, got {type(obj).__name__}"
            )
        if obj.get("kind") == "List":
            for item in obj.get("items") or []:
                self.add(item)
            return
        if obj.get("kind") not in {kind.value for kind in ResourceKind}:
            logger.debug("manifest_skipped", kind=obj.get("kind"))
            return
        self._objects.append(obj)

    def list_resources(self, kind: ResourceKind, namespace: str = "") -> list[dict[str, Any]]:
        return [obj for obj in self._objects if _matches(obj, kind, namespace)]

    def list_resources_by_label(
        self,
        kind: ResourceKind,
        namespace: str,
        label_selector: str,
    ) -> list[dict[str, Any]]:
        requirements = parse_label_selector(label_selector)
        return [
            obj
            for obj in self._objects
            if _matches(obj, kind, namespace) and _labels_match(obj, requirements)
        ]

    def get_resource(
        self,
        kind: ResourceKind,
        name: str,
        namespace: str,
    ) -> Optional[dict[str, Any]]:
        if not namespace:
            raise StoreError(kind.value, namespace, f"namespace is required to get {name}")
        for obj in self._objects:
            if _matches(obj, kind, namespace) and _metadata(obj).get("name") == name:
                return obj
        return None


def parse_label_selector(selector: str) -> list[tuple[str, str, Optional[str]]]:
    """
    Parse an equality-based label selector.

    Supports `key=value`, `key==value`, `key!=value`, `key` and `!key`
    terms separated by commas.

    Returns:
        List of (key, operator, value) with operator one of
        "=", "!=", "exists", "!exists"
    """
    requirements: list[tuple[str, str, Optional[str]]] = []
    for term in selector.split(","):
        term = term.strip()
        if not term:
            continue
        if "!=" in term:
            key, value = term.split("!=", 1)
            requirements.append((key.strip(), "!=", value.strip()))
        elif "==" in term:
            key, value = term.split("==", 1)
            requirements.append((key.strip(), "=", value.strip()))
        elif "=" in term:
            key, value = term.split("=", 1)
            requirements.append((key.strip(), "=", value.strip()))
        elif term.startswith("!"):
            requirements.append((term[1:].strip(), "!exists", None))
        else:
            requirements.append((term, "exists", None))
    return requirements


def _metadata(obj: dict[str, Any]) -> dict[str, Any]:
    return obj.get("metadata") or {}


def _matches(obj: dict[str, Any], kind: ResourceKind, namespace: str) -> bool:
    if obj.get("kind") != kind.value:
        return False
    return not namespace or _metadata(obj).get("namespace") == namespace


def _labels_match(
    obj: dict[str, Any],
    requirements: list[tuple[str, str, Optional[str]]],
) -> bool:
    labels = _metadata(obj).get("labels") or {}
    for key, operator, value in requirements:
        if operator == "=" and labels.get(key) != value:
            return False
        if operator == "!=" and labels.get(key) == value:
            return False
        if operator == "exists" and key not in labels:
            return False
        if operator == "!exists" and key in labels:
            return False
    return True
