"""In-memory registry of pairs, keyed by contract address.

PairRegistry implements PairQuerier over ConstantProductPair instances and
also executes swaps and liquidity provisions against them, which is what a
local host needs to play the part of the external pool.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from zapper.models.assets import Asset, AssetSet
from zapper.models.messages import Event
from zapper.pair.errors import PairNotFound
from zapper.pair.types import PairInfo, PoolResponse, SimulationResponse
from zapper.pair.xyk import ConstantProductPair

logger = structlog.get_logger()


class PairRegistry:
    """Registry of in-memory pairs.

    Implements the PairQuerier protocol.
    """

    def __init__(self, pairs: list[ConstantProductPair] | None = None) -> None:
        """Initialize the registry with optional pairs.

        Args:
            pairs: Initial pairs. If None, starts empty.
        """
        self._pairs: dict[str, ConstantProductPair] = {}
        if pairs:
            for pair in pairs:
                self.add_pair(pair)

    def __len__(self) -> int:
        return len(self._pairs)

    def __contains__(self, pair_addr: object) -> bool:
        return pair_addr in self._pairs

    def add_pair(self, pair: ConstantProductPair) -> None:
        """Add a pair. A pair already registered at the same address is replaced."""
        if pair.contract_addr in self._pairs:
            logger.debug("pair_replaced", pair=pair.contract_addr)
        self._pairs[pair.contract_addr] = pair

    def get_pair(self, pair_addr: str) -> ConstantProductPair:
        """Return the pair at pair_addr.

        Raises:
            PairNotFound: If no pair is registered there
        """
        pair = self._pairs.get(pair_addr)
        if pair is None:
            raise PairNotFound(f"pair info not set for pair {pair_addr}")
        return pair

    # --- PairQuerier ---

    def query_pair(self, pair_addr: str) -> PairInfo:
        return self.get_pair(pair_addr).info()

    def query_pool(self, pair_addr: str) -> PoolResponse:
        return self.get_pair(pair_addr).pool()

    def query_simulation(self, pair_addr: str, offer_asset: Asset) -> SimulationResponse:
        return self.get_pair(pair_addr).simulate(offer_asset)

    # --- Executions ---

    def execute_swap(
        self,
        pair_addr: str,
        offer_asset: Asset,
        sender: str,
        max_spread: Decimal | None = None,
    ) -> Event:
        return self.get_pair(pair_addr).swap(offer_asset, sender, max_spread)

    def execute_provide_liquidity(self, pair_addr: str, assets: AssetSet, sender: str) -> Event:
        return self.get_pair(pair_addr).provide_liquidity(assets, sender)
