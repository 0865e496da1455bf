"""Domain models for the ledger network topology."""

from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field, computed_field, field_validator

CA_PORT = 7054
PEER_PORT = 7051
ORDERER_PORT = 7050
REVERSE_PROXY_PORT = 443


class ComponentKind(str, Enum):
    """Endpoint kind an address is resolved for."""

    CA = "ca"
    PEER = "peer"
    ORDERER = "orderer"
    ORDERER_ADMIN = "orderer_admin"


class OrganizationType(str, Enum):
    """Organization type - which component family it groups."""

    PEER = "PEER"
    ORDERER = "ORDERER"


class ExposureKind(str, Enum):
    """Exposure mechanism variant tag."""

    MESH = "mesh"
    REVERSE_PROXY = "reverse_proxy"
    GATEWAY = "gateway"
    NODE_PORT = "node_port"


class HostPort(BaseModel):
    """Resolved network address."""

    host: str
    port: int

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"


class _Ingress(BaseModel):
    """Common shape of the host-based exposure mechanisms."""

    hosts: list[str] = Field(default_factory=list)

    model_config = {"frozen": True, "extra": "ignore", "populate_by_name": True}

    @field_validator("hosts", mode="before")
    @classmethod
    def _null_hosts(cls, value: Any) -> Any:
        return [] if value is None else value

    def is_present(self) -> bool:
        """An ingress without hosts counts as absent."""
        return len(self.hosts) > 0


class MeshIngress(_Ingress):
    """Service-mesh ingress (istio)."""

    kind: Literal[ExposureKind.MESH] = ExposureKind.MESH
    port: int = 0
    ingress_gateway: Optional[str] = Field(default=None, alias="ingressGateway")

    @field_validator("port", mode="before")
    @classmethod
    def _null_port(cls, value: Any) -> Any:
        return 0 if value is None else value

    def host_port(self) -> HostPort:
        return HostPort(host=self.hosts[0], port=self.port)


class ReverseProxyIngress(_Ingress):
    """Reverse-proxy ingress (traefik), always served on 443."""

    kind: Literal[ExposureKind.REVERSE_PROXY] = ExposureKind.REVERSE_PROXY

    def host_port(self) -> HostPort:
        return HostPort(host=self.hosts[0], port=REVERSE_PROXY_PORT)


class GatewayIngress(_Ingress):
    """Gateway-API ingress."""

    kind: Literal[ExposureKind.GATEWAY] = ExposureKind.GATEWAY
    port: int = 0
    gateway_name: Optional[str] = Field(default=None, alias="gatewayName")
    gateway_namespace: Optional[str] = Field(default=None, alias="gatewayNamespace")

    @field_validator("port", mode="before")
    @classmethod
    def _null_port(cls, value: Any) -> Any:
        return 0 if value is None else value

    def host_port(self) -> HostPort:
        return HostPort(host=self.hosts[0], port=self.port)


class NodePortFallback(BaseModel):
    """Cluster node-port, reachable through the cluster public IP."""

    kind: Literal[ExposureKind.NODE_PORT] = ExposureKind.NODE_PORT
    port: int = 0

    model_config = {"frozen": True}

    def host_port(self, public_ip: str) -> HostPort:
        return HostPort(host=public_ip, port=self.port)


# Selected by the resolver; the `kind` tag names the variant
ExposureMechanism = Union[MeshIngress, ReverseProxyIngress, GatewayIngress, NodePortFallback]


class ExposureConfig(BaseModel):
    """
    Optional ingress mechanisms configured for one endpoint.

    The node-port fallback is not part of the config; it comes from the
    record status and is supplied at resolution time.
    """

    mesh: Optional[MeshIngress] = None
    reverse_proxy: Optional[ReverseProxyIngress] = None
    gateway: Optional[GatewayIngress] = None

    model_config = {"frozen": True}

    def mechanism(self, kind: ExposureKind) -> Optional[ExposureMechanism]:
        """Get a configured ingress mechanism if it is present."""
        candidate = {
            ExposureKind.MESH: self.mesh,
            ExposureKind.REVERSE_PROXY: self.reverse_proxy,
            ExposureKind.GATEWAY: self.gateway,
        }.get(kind)
        if candidate is not None and candidate.is_present():
            return candidate
        return None


class Identity(BaseModel):
    """Certificate/key pair attached to a component after enrollment."""

    key: str = ""
    cert: str = ""


class OrgUser(BaseModel):
    """User identity belonging to an organization."""

    name: str
    cert: str = ""
    key: str = ""


class _ClusterComponent(BaseModel):
    """Fields shared by every mapped component."""

    name: str
    namespace: str
    spec: dict[str, Any] = Field(default_factory=dict)
    status: dict[str, Any] = Field(default_factory=dict)
    public_url: str
    public_address: HostPort
    private_url: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def full_name(self) -> str:
        """Qualified `name.namespace` identifier."""
        return f"{self.name}.{self.namespace}"


class ClusterCA(_ClusterComponent):
    """Certificate authority as seen by the rest of the tooling."""

    hosts: list[str] = Field(default_factory=list)
    node_port: int = 0
    enroll_id: str = ""
    enroll_secret: str = ""
    tls_cert: str = ""


class ClusterPeer(_ClusterComponent):
    """Peer node."""

    msp_id: str = ""
    labels: dict[str, str] = Field(default_factory=dict)
    identity: Identity = Field(default_factory=Identity)
    tls_ca_cert: str = ""
    root_cert: str = ""


class ClusterOrdererNode(_ClusterComponent):
    """Orderer node with its separate admin endpoint."""

    msp_id: str = ""
    labels: dict[str, str] = Field(default_factory=dict)
    release: Optional[str] = None
    admin_url: str
    admin_address: HostPort


class ClusterOrderingService(BaseModel):
    """Orderer nodes that order transactions for one network."""

    name: str
    namespace: str = ""
    msp_id: str = ""
    implicit: bool = False
    spec: dict[str, Any] = Field(default_factory=dict)
    status: dict[str, Any] = Field(default_factory=dict)
    orderers: list[ClusterOrdererNode] = Field(default_factory=list)

    def orderer_count(self) -> int:
        return len(self.orderers)


class Organization(BaseModel):
    """Components grouped under one MSP ID."""

    type: OrganizationType
    msp_id: str
    peers: list[ClusterPeer] = Field(default_factory=list)
    orderer_nodes: list[ClusterOrdererNode] = Field(default_factory=list)
    users: list[OrgUser] = Field(default_factory=list)


# Exception classes
class TopologyError(Exception):
    """Base exception for topology errors."""

    pass


class StoreError(TopologyError):
    """Resource store call failed."""

    def __init__(self, kind: str, namespace: str = "", reason: str = ""):
        self.kind = kind
        self.namespace = namespace
        self.reason = reason
        scope = namespace or "<all namespaces>"
        super().__init__(f"Failed to read {kind} in {scope}: {reason}")


class MappingError(TopologyError):
    """A record could not be turned into a domain object."""

    pass


class DiscoveryError(MappingError):
    """Cluster public IP could not be discovered."""

    def __init__(self, reason: str = ""):
        self.reason = reason
        super().__init__(f"Failed to discover cluster public IP: {reason}")


class MalformedRecordError(MappingError):
    """Record is structurally invalid."""

    def __init__(self, full_name: str, reason: str = ""):
        self.full_name = full_name
        self.reason = reason
        super().__init__(f"Malformed record {full_name}: {reason}")


class NotFoundError(TopologyError):
    """Lookup matched no record."""

    def __init__(self, kind: str, key: str):
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} not found: {key}")
