"""Resource store outbound port interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

API_GROUP = "hlf.kungfusoftware.es"
API_VERSION = "v1alpha1"


class ResourceKind(str, Enum):
    """Custom resource kinds read from the store."""

    CA = "FabricCA"
    PEER = "FabricPeer"
    ORDERER_NODE = "FabricOrdererNode"
    ORDERING_SERVICE = "FabricOrderingService"

    @property
    def plural(self) -> str:
        """Lower-case plural used in API paths."""
        return f"{self.value.lower()}s"


class IResourceStorePort(ABC):
    """
    Outbound port for reading component records.

    Records are returned as raw objects with `metadata`, `spec` and
    `status` keys. An empty namespace means every namespace.
    Implementations raise StoreError when the backing store fails.
    """

    @abstractmethod
    def list_resources(self, kind: ResourceKind, namespace: str = "") -> list[dict[str, Any]]:
        """
        List all records of a kind.

        Args:
            kind: Resource kind
            namespace: Namespace scope, empty for cluster-wide

        Returns:
            Raw records in store order
        """
        pass

    @abstractmethod
    def list_resources_by_label(
        self,
        kind: ResourceKind,
        namespace: str,
        label_selector: str,
    ) -> list[dict[str, Any]]:
        """
        List records of a kind matching a label selector.

        Args:
            kind: Resource kind
            namespace: Namespace scope, empty for cluster-wide
            label_selector: Equality selector such as `release=orderer`

        Returns:
            Raw records in store order
        """
        pass

    @abstractmethod
    def get_resource(
        self,
        kind: ResourceKind,
        name: str,
        namespace: str,
    ) -> Optional[dict[str, Any]]:
        """
        Get one record by name.

        Args:
            kind: Record kind
            name: Record name
            namespace: Record namespace, required

        Returns:
            Raw record if found, None otherwise

        Raises:
            StoreError: If namespace is empty or the store call failed
        """
        pass
