"""External constant-product pair: query interface, math and implementations."""

from zapper.pair.base import PairQuerier
from zapper.pair.errors import (
    AssetMismatch,
    MaxSpreadExceeded,
    PairError,
    PairNotFound,
    PairQueryError,
)
from zapper.pair.lcd import LcdPairQuerier
from zapper.pair.registry import PairRegistry
from zapper.pair.types import PairInfo, PairType, PoolResponse, SimulationResponse
from zapper.pair.xyk import ConstantProductPair, compute_mint_shares, compute_swap

__all__ = [
    # Interface
    "PairQuerier",
    "PairInfo",
    "PairType",
    "PoolResponse",
    "SimulationResponse",
    # Constant-product math
    "compute_swap",
    "compute_mint_shares",
    "ConstantProductPair",
    # Implementations
    "PairRegistry",
    "LcdPairQuerier",
    # Errors
    "PairError",
    "PairNotFound",
    "AssetMismatch",
    "MaxSpreadExceeded",
    "PairQueryError",
]
