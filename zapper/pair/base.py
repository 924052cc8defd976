"""Query interface to an external constant-product pair."""

from typing import Protocol, runtime_checkable

from zapper.models.assets import Asset
from zapper.pair.types import PairInfo, PoolResponse, SimulationResponse


@runtime_checkable
class PairQuerier(Protocol):
    """Read-only queries the zapper issues against a pair contract.

    All three are point-in-time reads. Implementations raise PairError
    subclasses when the pair cannot be reached or does not exist.
    """

    def query_pair(self, pair_addr: str) -> PairInfo:
        """Pair metadata: type, asset infos, liquidity token."""
        ...

    def query_pool(self, pair_addr: str) -> PoolResponse:
        """Current depths of both assets and total share supply."""
        ...

    def query_simulation(self, pair_addr: str, offer_asset: Asset) -> SimulationResponse:
        """Quote a swap of offer_asset against the pair's current depths."""
        ...
