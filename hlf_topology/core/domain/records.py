"""Typed views over raw resource records returned by the store."""

from typing import Any, Optional, TypeVar

from pydantic import (
    BaseModel,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from hlf_topology.core.domain.models import (
    ExposureConfig,
    GatewayIngress,
    MalformedRecordError,
    MeshIngress,
    ReverseProxyIngress,
)

RecordT = TypeVar("RecordT", bound="ResourceRecord")


class ObjectMeta(BaseModel):
    """Subset of the record metadata this layer reads."""

    name: str
    namespace: str = ""
    labels: dict[str, str] = Field(default_factory=dict)

    model_config = {"extra": "ignore"}

    @field_validator("labels", "namespace", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return {} if info.field_name == "labels" else ""
        return value


class ResourceRecord(BaseModel):
    """
    Raw spec+status snapshot of one custom resource.

    `spec` and `status` are kept as plain dictionaries and passed through
    to the domain objects untouched.
    """

    metadata: ObjectMeta
    spec: dict[str, Any] = Field(default_factory=dict)
    status: dict[str, Any] = Field(default_factory=dict)

    model_config = {"extra": "ignore", "frozen": True}

    @field_validator("spec", "status", mode="before")
    @classmethod
    def _null_section(cls, value: Any) -> Any:
        return {} if value is None else value

    @classmethod
    def from_object(cls: type[RecordT], obj: dict[str, Any]) -> RecordT:
        """
        Parse a raw store object.

        Raises:
            MalformedRecordError: If metadata, spec or status has the wrong shape
        """
        try:
            return cls.model_validate(obj)
        except ValidationError as exc:
            raise MalformedRecordError(_object_full_name(obj), str(exc)) from exc

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    @property
    def full_name(self) -> str:
        return f"{self.metadata.name}.{self.metadata.namespace}"

    @property
    def labels(self) -> dict[str, str]:
        return self.metadata.labels

    @property
    def msp_id(self) -> str:
        return self.spec.get("mspID") or ""

    @property
    def node_port(self) -> int:
        return self._int_status("nodePort")

    def _int_status(self, key: str) -> int:
        value = self.status.get(key)
        if value is None:
            return 0
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise MalformedRecordError(
                self.full_name, f"status.{key} is not a port: {value!r}"
            ) from exc

    def exposure(
        self,
        mesh_key: str = "istio",
        proxy_key: str = "traefik",
        gateway_key: Optional[str] = "gatewayApi",
    ) -> ExposureConfig:
        """
        Build the exposure config from the spec sections with the given keys.

        A missing or null section is an absent mechanism.

        Raises:
            MalformedRecordError: If a section is not an object or has bad fields
        """
        try:
            return ExposureConfig(
                mesh=self._section(MeshIngress, mesh_key),
                reverse_proxy=self._section(ReverseProxyIngress, proxy_key),
                gateway=self._section(GatewayIngress, gateway_key) if gateway_key else None,
            )
        except ValidationError as exc:
            raise MalformedRecordError(self.full_name, str(exc)) from exc

    def _section(self, model: type[BaseModel], key: str) -> Any:
        raw = self.spec.get(key)
        if raw is None:
            return None
        if not isinstance(raw, dict):
            raise MalformedRecordError(
                self.full_name, f"spec.{key} must be an object, got {type(raw).__name__}"
            )
        return model.model_validate(raw)


class FabricCARecord(ResourceRecord):
    """Certificate authority record."""

    @property
    def hosts(self) -> list[str]:
        return list(self.spec.get("hosts") or [])

    @property
    def tls_cert(self) -> str:
        return self.status.get("tls_cert") or self.status.get("tlsCert") or ""

    def registry_identities(self) -> list[dict[str, Any]]:
        """
        Identities declared in the CA registry.

        Returns an empty list when any level of `spec.ca.registry.identities`
        is missing.

        Raises:
            MalformedRecordError: If a level is present but has the wrong type
        """
        node: Any = self.spec
        path = ("ca", "registry", "identities")
        for depth, key in enumerate(path):
            node = node.get(key)
            if node is None:
                return []
            expected = list if depth == len(path) - 1 else dict
            if not isinstance(node, expected):
                raise MalformedRecordError(
                    self.full_name,
                    f"spec.{'.'.join(path[: depth + 1])} must be a {expected.__name__}",
                )
        for identity in node:
            if not isinstance(identity, dict):
                raise MalformedRecordError(
                    self.full_name, "spec.ca.registry.identities entries must be objects"
                )
        return node


class FabricPeerRecord(ResourceRecord):
    """Peer record."""


class FabricOrdererNodeRecord(ResourceRecord):
    """Orderer node record with a client and an admin listener."""

    @property
    def admin_port(self) -> int:
        return self._int_status("adminPort")

    def admin_exposure(self) -> ExposureConfig:
        """Exposure config of the admin listener; there is no gateway variant."""
        return self.exposure(mesh_key="adminIstio", proxy_key="adminTraefik", gateway_key=None)

    def release(self, label_key: str = "release") -> Optional[str]:
        """Name of the ordering service this node is labelled with, if any."""
        return self.labels.get(label_key) or None


class FabricOrderingServiceRecord(ResourceRecord):
    """Explicit ordering service record."""


def _object_full_name(obj: Any) -> str:
    if not isinstance(obj, dict):
        return "<unknown>"
    metadata = obj.get("metadata")
    if not isinstance(metadata, dict):
        return "<unknown>"
    return f"{metadata.get('name', '<unknown>')}.{metadata.get('namespace') or ''}"
