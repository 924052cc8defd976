"""Types describing an external pair contract and its query responses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from zapper.models.assets import Asset, AssetInfo, AssetSet


class PairType(str, Enum):
    """Pricing curve of a pair. Only XYK (constant product) is supported."""

    XYK = "xyk"
    STABLE = "stable"
    CUSTOM = "custom"


@dataclass(frozen=True)
class PairInfo:
    """Pair metadata: constituent assets, addresses and curve type."""

    asset_infos: tuple[AssetInfo, AssetInfo]
    contract_addr: str
    liquidity_token: str
    pair_type: PairType = PairType.XYK


@dataclass(frozen=True)
class PoolResponse:
    """Point-in-time pool depths and total outstanding liquidity shares."""

    assets: tuple[Asset, Asset]
    total_share: int

    def asset_set(self) -> AssetSet:
        """Depths as an AssetSet, in pool order."""
        return AssetSet(self.assets)


@dataclass(frozen=True)
class SimulationResponse:
    """Quoted outcome of a swap.

    Attributes:
        return_amount: Amount of the ask asset received, after commission
        spread_amount: Shortfall versus the pre-trade spot price
        commission_amount: Commission withheld by the pool
    """

    return_amount: int
    spread_amount: int
    commission_amount: int
