"""Public IP discovery outbound capability."""

from typing import Callable

# Returns an externally routable address of the cluster.
# Implementations raise DiscoveryError when none can be determined.
PublicIPDiscovery = Callable[[], str]
