"""Domain services - pure business logic."""

from hlf_topology.core.domain.services.address_resolver import (
    AddressResolver,
    format_public_url,
    private_url,
)
from hlf_topology.core.domain.services.mapper import DomainMapper
from hlf_topology.core.domain.services.topology import TopologyService

__all__ = [
    "AddressResolver",
    "DomainMapper",
    "TopologyService",
    "format_public_url",
    "private_url",
]
