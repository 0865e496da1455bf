from typing import Any, Callable, Optional

import pytest

from hlf_topology.core.adapters.in_memory_store import InMemoryResourceStore
from hlf_topology.core.domain.services.address_resolver import AddressResolver
from hlf_topology.core.domain.services.topology import TopologyService

PUBLIC_IP = "203.0.113.10"


class CountingDiscovery:
    """Public IP discovery double that records how often it was called."""

    def __init__(self, address: str = PUBLIC_IP, error: Optional[Exception] = None) -> None:
        self.address = address
        self.error = error
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.address


def _make_object(
    kind: str,
    name: str,
    namespace: str = "fabric",
    spec: Optional[dict[str, Any]] = None,
    status: Optional[dict[str, Any]] = None,
    labels: Optional[dict[str, str]] = None,
) -> dict[str, Any]:
    metadata: dict[str, Any] = {"name": name, "namespace": namespace}
    if labels is not None:
        metadata["labels"] = labels
    return {
        "apiVersion": "hlf.kungfusoftware.es/v1alpha1",
        "kind": kind,
        "metadata": metadata,
        "spec": spec or {},
        "status": status or {},
    }


@pytest.fixture
def make_object() -> Callable[..., dict[str, Any]]:
    return _make_object


@pytest.fixture
def discovery() -> CountingDiscovery:
    return CountingDiscovery()


@pytest.fixture
def resolver(discovery: CountingDiscovery) -> AddressResolver:
    return AddressResolver(discovery)


@pytest.fixture
def make_service(resolver: AddressResolver) -> Callable[..., TopologyService]:
    def factory(*objects: dict[str, Any]) -> TopologyService:
        return TopologyService(InMemoryResourceStore(objects), resolver)

    return factory
