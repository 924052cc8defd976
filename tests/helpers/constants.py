"""Shared pair fixtures for tests.

Depths and supplies are snapshots of live constant-product pairs, so solved
amounts and minted shares below can be cross-checked against the pool
contract's own arithmetic.

Usage:
    from tests.helpers import LUNA_UST_PAIR, UUSD
    # or
    from tests.helpers.constants import LUNA_UST_POOL
"""

# =============================================================================
# Accounts and contracts
# =============================================================================

ALICE = "alice"
ZAPPER_ADDR = "zapper"

LUNA_UST_PAIR = "luna_ust_pair"
LUNA_UST_LP_TOKEN = "luna_ust_lp_token"

ASTRO_UST_PAIR = "astro_ust_pair"
ASTRO_UST_LP_TOKEN = "astro_ust_lp_token"
ASTRO_TOKEN = "astro_token"

BLUNA_LUNA_PAIR = "bluna_luna_pair"
BLUNA_LUNA_LP_TOKEN = "bluna_luna_lp_token"
BLUNA_TOKEN = "bluna_token"

# Strings that validate as addresses; anything else is a native denom
VALID_ADDRESSES = [
    ASTRO_TOKEN,
    BLUNA_TOKEN,
    LUNA_UST_PAIR,
    LUNA_UST_LP_TOKEN,
    ASTRO_UST_PAIR,
    ASTRO_UST_LP_TOKEN,
    BLUNA_LUNA_PAIR,
    BLUNA_LUNA_LP_TOKEN,
]

# =============================================================================
# Native denoms
# =============================================================================

UUSD = "uusd"
ULUNA = "uluna"

# =============================================================================
# Pool snapshots (asset depths in pool order, total share)
# =============================================================================

LUNA_UST_POOL = {UUSD: 118070429547232, ULUNA: 1451993415113}
LUNA_UST_TOTAL_SHARE = 12966110801826

ASTRO_UST_POOL = {ASTRO_TOKEN: 48059201882191, UUSD: 65155920988539}
ASTRO_UST_TOTAL_SHARE = 55851193190261

BLUNA_LUNA_POOL = {BLUNA_TOKEN: 2961459937027, ULUNA: 2937863752918}
BLUNA_LUNA_TOTAL_SHARE = 2948589474051
