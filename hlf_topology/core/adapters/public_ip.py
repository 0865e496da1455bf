"""Public IP discovery adapters."""

from typing import Any, Optional

import structlog
import urllib3
from kubernetes import client
from kubernetes.client.exceptions import ApiException

from hlf_topology.core.adapters.kubernetes_store import load_api_client
from hlf_topology.core.domain.models import DiscoveryError

logger = structlog.get_logger(__name__)

# Address types in lookup order
ADDRESS_TYPES = ("ExternalIP", "InternalIP")


class KubernetesPublicIPDiscovery:
    """
    Discovers the cluster public IP from the node addresses.

    An ExternalIP of any node is preferred; otherwise the first node
    InternalIP is used. Every call queries the API again.
    """

    def __init__(
        self,
        core_api: Optional[Any] = None,
        context: Optional[str] = None,
        request_timeout: Optional[float] = None,
    ):
        """
        Initialize discovery.

        Args:
            core_api: CoreV1Api instance, built from kubeconfig if None
            context: Kubeconfig context used when building the client
            request_timeout: Per-request timeout in seconds
        """
        self._core_api = core_api
        self._context = context
        self._request_timeout = request_timeout

    @property
    def core_api(self) -> Any:
        if self._core_api is None:
            self._core_api = client.CoreV1Api(load_api_client(self._context))
        return self._core_api

    def __call__(self) -> str:
        kwargs: dict[str, Any] = {}
        if self._request_timeout is not None:
            kwargs["_request_timeout"] = self._request_timeout

        try:
            nodes = self.core_api.list_node(**kwargs)
        except ApiException as e:
            raise DiscoveryError(f"listing nodes failed: {e.status} {e.reason}") from e
        except urllib3.exceptions.HTTPError as e:
            raise DiscoveryError(f"listing nodes failed: {e}") from e

        items = nodes.items or []
        if not items:
            raise DiscoveryError("cluster has no nodes")

        for address_type in ADDRESS_TYPES:
            for node in items:
                for address in (node.status and node.status.addresses) or []:
                    if address.type == address_type and address.address:
                        logger.debug(
                            "public_ip_discovered",
                            node=node.metadata.name,
                            address_type=address_type,
                            address=address.address,
                        )
                        return address.address

        raise DiscoveryError("no node exposes an ExternalIP or InternalIP address")


class StaticPublicIP:
    """Fixed public IP, for clusters whose nodes do not report a routable address."""

    def __init__(self, address: str):
        if not address:
            raise ValueError("address must not be empty")
        self._address = address

    def __call__(self) -> str:
        return self._address
