"""Inbound ports - interfaces for incoming requests."""

from hlf_topology.core.ports.inbound.topology import ITopologyPort

__all__ = [
    "ITopologyPort",
]
