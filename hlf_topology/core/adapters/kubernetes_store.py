"""Kubernetes resource store adapter implementation."""

from typing import Any, Optional

import structlog
import urllib3
from kubernetes import client, config
from kubernetes.client.exceptions import ApiException

from hlf_topology.core.domain.models import StoreError
from hlf_topology.core.ports.outbound.resource_store import (
    API_GROUP,
    API_VERSION,
    IResourceStorePort,
    ResourceKind,
)

logger = structlog.get_logger(__name__)


def load_api_client(context: Optional[str] = None) -> client.ApiClient:
    """
    Build an API client from kubeconfig, or from the in-cluster service account.

    Args:
        context: Kubeconfig context name, current context if None
    """
    try:
        return config.new_client_from_config(context=context)
    except config.ConfigException:
        if context:
            raise
        config.load_incluster_config()
        return client.ApiClient()


class KubernetesResourceStore(IResourceStorePort):
    """
    Custom-resource store backed by the Kubernetes API.

    Reads the operator's custom resources through CustomObjectsApi.
    Client failures are raised as StoreError with the client exception
    chained; nothing is retried here.
    """

    def __init__(
        self,
        custom_api: Optional[Any] = None,
        context: Optional[str] = None,
        group: str = API_GROUP,
        version: str = API_VERSION,
        request_timeout: Optional[float] = None,
    ):
        """
        Initialize Kubernetes store.

        Args:
            custom_api: CustomObjectsApi instance, built from kubeconfig if None
            context: Kubeconfig context used when building the client
            group: API group of the custom resources
            version: API version of the custom resources
            request_timeout: Per-request timeout in seconds
        """
        self._custom_api = custom_api
        self._context = context
        self._group = group
        self._version = version
        self._request_timeout = request_timeout

    @property
    def custom_api(self) -> Any:
        """CustomObjectsApi, created on first use."""
        if self._custom_api is None:
            self._custom_api = client.CustomObjectsApi(load_api_client(self._context))
        return self._custom_api

    def list_resources(self, kind: ResourceKind, namespace: str = "") -> list[dict[str, Any]]:
        """List all records of a kind."""
        return self._list(kind, namespace)

    def list_resources_by_label(
        self,
        kind: ResourceKind,
        namespace: str,
        label_selector: str,
    ) -> list[dict[str, Any]]:
        """List records of a kind matching a label selector."""
        return self._list(kind, namespace, label_selector=label_selector)

    def get_resource(
        self,
        kind: ResourceKind,
        name: str,
        namespace: str,
    ) -> Optional[dict[str, Any]]:
        """Get one record by name, None when the API answers 404."""
        if not namespace:
            raise StoreError(kind.value, namespace, f"namespace is required to get {name}")
        try:
            return self.custom_api.get_namespaced_custom_object(
                group=self._group,
                version=self._version,
                namespace=namespace,
                plural=kind.plural,
                name=name,
                **self._request_kwargs(),
            )
        except ApiException as e:
            if e.status == 404:
                return None
            logger.error(
                "store_get_failed",
                kind=kind.value,
                namespace=namespace,
                name=name,
                status=e.status,
            )
            raise StoreError(kind.value, namespace, f"{e.status} {e.reason}") from e
        except urllib3.exceptions.HTTPError as e:
            logger.error("store_get_failed", kind=kind.value, namespace=namespace, error=str(e))
            raise StoreError(kind.value, namespace, str(e)) from e

    def _list(
        self,
        kind: ResourceKind,
        namespace: str,
        label_selector: str = "",
    ) -> list[dict[str, Any]]:
        kwargs = self._request_kwargs()
        if label_selector:
            kwargs["label_selector"] = label_selector

        try:
            if namespace:
                raw = self.custom_api.list_namespaced_custom_object(
                    group=self._group,
                    version=self._version,
                    namespace=namespace,
                    plural=kind.plural,
                    **kwargs,
                )
            else:
                raw = self.custom_api.list_cluster_custom_object(
                    group=self._group,
                    version=self._version,
                    plural=kind.plural,
                    **kwargs,
                )
        except ApiException as e:
            logger.error(
                "store_list_failed",
                kind=kind.value,
                namespace=namespace or "*",
                label_selector=label_selector,
                status=e.status,
            )
            raise StoreError(kind.value, namespace, f"{e.status} {e.reason}") from e
        except urllib3.exceptions.HTTPError as e:
            logger.error(
                "store_list_failed",
                kind=kind.value,
                namespace=namespace or "*",
                error=str(e),
            )
            raise StoreError(kind.value, namespace, str(e)) from e

        items = raw.get("items") or []
        logger.debug(
            "store_listed",
            kind=kind.value,
            namespace=namespace or "*",
            label_selector=label_selector,
            count=len(items),
        )
        return items

    def _request_kwargs(self) -> dict[str, Any]:
        if self._request_timeout is None:
            return {}
        return {"_request_timeout": self._request_timeout}
