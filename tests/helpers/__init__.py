"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Pair snapshots, addresses and denoms
- factories: Pair, registry, zapper and request factory functions
- host: In-process host that executes dispatched calls
"""

from tests.helpers.constants import (
    ALICE,
    ASTRO_TOKEN,
    ASTRO_UST_LP_TOKEN,
    ASTRO_UST_PAIR,
    BLUNA_LUNA_PAIR,
    BLUNA_TOKEN,
    LUNA_UST_LP_TOKEN,
    LUNA_UST_PAIR,
    ULUNA,
    UUSD,
    VALID_ADDRESSES,
    ZAPPER_ADDR,
)
from tests.helpers.factories import (
    make_enter_request,
    make_info,
    make_provide_reply,
    make_registry,
    make_swap_reply,
    make_zapper,
    native,
    token,
)
from tests.helpers.host import LocalHost

__all__ = [
    # Constants
    "ALICE",
    "ZAPPER_ADDR",
    "UUSD",
    "ULUNA",
    "ASTRO_TOKEN",
    "BLUNA_TOKEN",
    "LUNA_UST_PAIR",
    "LUNA_UST_LP_TOKEN",
    "ASTRO_UST_PAIR",
    "ASTRO_UST_LP_TOKEN",
    "BLUNA_LUNA_PAIR",
    "VALID_ADDRESSES",
    # Factories
    "native",
    "token",
    "make_registry",
    "make_zapper",
    "make_info",
    "make_enter_request",
    "make_swap_reply",
    "make_provide_reply",
    # Host
    "LocalHost",
]
