"""Constant-product (x * y = k) pair math.

Replicates the external pool's integer semantics exactly, including its
18-decimal fixed-point intermediate, so that quotes computed here agree with
the pool at settlement:

    cp             = offer_pool * ask_pool
    return_amount  = ask_pool - cp / (offer_pool + offer_amount)
    spread_amount  = offer_amount * ask_pool / offer_pool - return_amount
    commission     = return_amount * fee_bps / 10000
    return_amount -= commission
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from math import isqrt

import structlog

from zapper.constants import (
    BPS_DENOMINATOR,
    DECIMAL_FRACTIONAL,
    FEE_BPS,
    PROVIDE_LIQUIDITY_ACTION,
    SWAP_ACTION,
)
from zapper.models.assets import Asset, AssetInfo, AssetSet
from zapper.models.messages import Event
from zapper.pair.errors import AssetMismatch, MaxSpreadExceeded
from zapper.pair.types import PairInfo, PairType, PoolResponse, SimulationResponse
from zapper.safe_int import S

logger = structlog.get_logger()


def compute_swap(
    offer_pool: int,
    ask_pool: int,
    offer_amount: int,
    fee_bps: int = FEE_BPS,
) -> SimulationResponse:
    """Quote a swap of offer_amount against the given depths.

    Args:
        offer_pool: Pool depth of the offered asset
        ask_pool: Pool depth of the asked asset
        offer_amount: Amount offered
        fee_bps: Commission in basis points (default 30 = 0.3%)

    Returns:
        SimulationResponse with return, spread and commission amounts

    Raises:
        DivisionByZero: If offer_pool + offer_amount == 0 or offer_pool == 0
    """
    if offer_amount == 0:
        return SimulationResponse(return_amount=0, spread_amount=0, commission_amount=0)

    cp = S(offer_pool) * S(ask_pool)
    # ask depth after the trade, as an 18-decimal fixed-point value
    ask_after = (cp * DECIMAL_FRACTIONAL) // (S(offer_pool) + S(offer_amount))
    return_amount = (S(ask_pool) * DECIMAL_FRACTIONAL - ask_after) // DECIMAL_FRACTIONAL

    spot_price = (S(ask_pool) * DECIMAL_FRACTIONAL) // S(offer_pool)
    spot_amount = (S(offer_amount) * spot_price) // DECIMAL_FRACTIONAL
    spread_amount = spot_amount.value - return_amount.value
    if spread_amount < 0:
        spread_amount = 0

    commission_amount = (return_amount * fee_bps) // BPS_DENOMINATOR
    return_amount = return_amount - commission_amount

    return SimulationResponse(
        return_amount=return_amount.to_uint128(),
        spread_amount=S(spread_amount).to_uint128(),
        commission_amount=commission_amount.to_uint128(),
    )


def compute_mint_shares(
    deposits: tuple[int, int],
    pools: tuple[int, int],
    total_share: int,
) -> int:
    """Liquidity shares minted for deposits provided against pools.

    For an empty pool the shares are sqrt(d0 * d1); otherwise the smaller of
    the two proportional claims, so the less-represented side sets the price.

    Raises:
        DivisionByZero: If a pool depth is zero while total_share is not
    """
    if total_share == 0:
        return S(isqrt(deposits[0] * deposits[1])).to_uint128()
    share_0 = S(deposits[0]).multiply_ratio(total_share, pools[0])
    share_1 = S(deposits[1]).multiply_ratio(total_share, pools[1])
    return share_0.min(share_1).to_uint128()


@dataclass
class ConstantProductPair:
    """In-memory constant-product pair.

    Answers the same queries as a deployed pair and executes swaps and
    liquidity provisions against its own depths, emitting the events the
    deployed pair emits. Used to back a PairRegistry for local hosts, quotes
    and tests.

    `pair_type` is only the type reported by query_pair; the math is always
    constant product.
    """

    contract_addr: str
    liquidity_token: str
    assets: list[Asset]
    total_share: int = 0
    fee_bps: int = FEE_BPS
    pair_type: PairType = PairType.XYK
    # Shares minted per recipient, standing in for the liquidity token's balances
    share_balances: dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if len(self.assets) != 2:
            raise ValueError(f"Pair must hold exactly 2 assets, got {len(self.assets)}")
        if self.assets[0].info == self.assets[1].info:
            raise ValueError(f"Pair assets must differ, got {self.assets[0].info} twice")

    # --- Queries ---

    def info(self) -> PairInfo:
        return PairInfo(
            asset_infos=(self.assets[0].info, self.assets[1].info),
            contract_addr=self.contract_addr,
            liquidity_token=self.liquidity_token,
            pair_type=self.pair_type,
        )

    def pool(self) -> PoolResponse:
        return PoolResponse(assets=(self.assets[0], self.assets[1]), total_share=self.total_share)

    def _offer_index(self, info: AssetInfo) -> int:
        for i, asset in enumerate(self.assets):
            if asset.info == info:
                return i
        raise AssetMismatch(f"Asset {info} does not belong to pair {self.contract_addr}")

    def simulate(self, offer_asset: Asset) -> SimulationResponse:
        """Quote a swap without changing depths."""
        offer_index = self._offer_index(offer_asset.info)
        offer_pool = self.assets[offer_index].amount
        ask_pool = self.assets[1 - offer_index].amount
        return compute_swap(offer_pool, ask_pool, offer_asset.amount, self.fee_bps)

    # --- Executions ---

    def swap(
        self,
        offer_asset: Asset,
        sender: str,
        max_spread: Decimal | None = None,
    ) -> Event:
        """Swap offer_asset into the pair and return the emitted event.

        The commission stays in the pool; only return_amount leaves it.

        Raises:
            AssetMismatch: If offer_asset does not belong to the pair
            MaxSpreadExceeded: If spread / (return + spread) > max_spread
        """
        offer_index = self._offer_index(offer_asset.info)
        ask_index = 1 - offer_index
        result = self.simulate(offer_asset)

        if max_spread is not None and result.return_amount + result.spread_amount > 0:
            spread_ratio = Decimal(result.spread_amount) / Decimal(
                result.return_amount + result.spread_amount
            )
            if spread_ratio > max_spread:
                raise MaxSpreadExceeded(
                    f"Operation exceeds max spread limit: {spread_ratio} > {max_spread}"
                )

        offer_depth = self.assets[offer_index]
        ask_depth = self.assets[ask_index]
        self.assets[offer_index] = offer_depth.with_amount(
            (S(offer_depth.amount) + S(offer_asset.amount)).to_uint128()
        )
        self.assets[ask_index] = ask_depth.with_amount(
            (S(ask_depth.amount) - S(result.return_amount)).to_uint128()
        )

        logger.debug(
            "pair_swap_executed",
            pair=self.contract_addr,
            offer=str(offer_asset),
            return_amount=result.return_amount,
        )

        return Event.with_attributes(
            "wasm",
            action=SWAP_ACTION,
            sender=sender,
            receiver=sender,
            offer_asset=offer_asset.info.id,
            ask_asset=ask_depth.info.id,
            offer_amount=str(offer_asset.amount),
            return_amount=str(result.return_amount),
            spread_amount=str(result.spread_amount),
            commission_amount=str(result.commission_amount),
        )

    def provide_liquidity(self, assets: AssetSet, sender: str) -> Event:
        """Deposit assets, mint shares to sender and return the emitted event.

        Assets missing from the set count as zero. Depths grow by the full
        deposit; any excess over the pool ratio is donated to the pool.

        Raises:
            AssetMismatch: If an asset does not belong to the pair
        """
        for asset in assets:
            self._offer_index(asset.info)

        deposits = (
            assets.amount_of(self.assets[0].info),
            assets.amount_of(self.assets[1].info),
        )
        share = compute_mint_shares(
            deposits,
            (self.assets[0].amount, self.assets[1].amount),
            self.total_share,
        )

        for i, deposit in enumerate(deposits):
            self.assets[i] = self.assets[i].with_amount(
                (S(self.assets[i].amount) + S(deposit)).to_uint128()
            )
        self.total_share = (S(self.total_share) + S(share)).to_uint128()
        self.share_balances[sender] = self.share_balances.get(sender, 0) + share

        logger.debug(
            "pair_liquidity_provided",
            pair=self.contract_addr,
            assets=str(assets),
            share=share,
        )

        return Event.with_attributes(
            "wasm",
            action=PROVIDE_LIQUIDITY_ACTION,
            sender=sender,
            receiver=sender,
            assets=str(assets),
            share=str(share),
        )
