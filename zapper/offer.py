"""Optimal-offer selection.

Decides which asset to swap (the one the user over-supplies relative to pool
depth) and how much of it, so that providing both assets afterwards mints
the most liquidity shares.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from zapper.constants import FEE_BPS, MAX_ITERATIONS
from zapper.math.quadratic import Quadratic
from zapper.models.assets import Asset, AssetSet
from zapper.safe_int import DivisionByZero, S

logger = structlog.get_logger()


def select_offer_index(pool_amounts: tuple[int, int], user_amounts: tuple[int, int]) -> int:
    """Index (0 or 1) of the pool asset the user should offer.

    Compares the user's share of each side, user / pool, by
    cross-multiplication so no precision is lost. The strictly larger share
    is offered; ties (including both zero) go to index 0, where the solved
    amount is zero anyway.

    Raises:
        DivisionByZero: If either pool depth is zero
    """
    pool_a, pool_b = pool_amounts
    user_a, user_b = user_amounts
    if pool_a == 0 or pool_b == 0:
        raise DivisionByZero(f"Cannot compare deposit shares against empty pool ({pool_a}, {pool_b})")

    share_a = S(user_a) * S(pool_b)
    share_b = S(user_b) * S(pool_a)
    if share_b > share_a:
        return 1
    return 0


def compute_offer_asset(
    pool_assets: Sequence[Asset],
    user_assets: AssetSet,
    fee_bps: int = FEE_BPS,
    max_iterations: int = MAX_ITERATIONS,
) -> Asset:
    """Compute the swap that maximizes minted shares.

    Args:
        pool_assets: The pool's two depths, in pool order
        user_assets: The user's deposits (assets absent from the set count as 0)
        fee_bps: Pool commission in basis points
        max_iterations: Newton-Raphson iteration cap

    Returns:
        The asset to offer. An amount of zero means the deposit is already
        in pool proportion and no swap is needed.

    Raises:
        DivisionByZero: If a pool depth is zero or the solver's derivative vanishes
        Overflow: If solver intermediates leave the Int512 range
        Uint128Overflow: If the solved amount does not fit uint128
    """
    pool_a, pool_b = pool_assets[0], pool_assets[1]
    user_a = user_assets.amount_of(pool_a.info)
    user_b = user_assets.amount_of(pool_b.info)

    offer_index = select_offer_index((pool_a.amount, pool_b.amount), (user_a, user_b))
    if offer_index == 0:
        offer_pool, ask_pool, offer_user, ask_user = pool_a, pool_b, user_a, user_b
    else:
        offer_pool, ask_pool, offer_user, ask_user = pool_b, pool_a, user_b, user_a

    quadratic = Quadratic.from_asset_amounts(
        offer_user=offer_user,
        offer_pool=offer_pool.amount,
        ask_user=ask_user,
        ask_pool=ask_pool.amount,
        fee_bps=fee_bps,
    )
    result = quadratic.newton(max_iterations=max_iterations)
    offer_amount = S(result.root).to_uint128()

    logger.info(
        "offer_asset_computed",
        offer_info=str(offer_pool.info),
        offer_amount=offer_amount,
        iterations=result.iterations,
        converged=result.converged,
    )

    return Asset(offer_pool.info, offer_amount)
