"""Configuration for the zapper."""

from dataclasses import dataclass
from decimal import Decimal

from zapper.constants import DEFAULT_OPERATION_ID, FEE_BPS, MAX_ITERATIONS, MAX_SPREAD


@dataclass(frozen=True)
class ZapConfig:
    """Centralized configuration for a Zapper instance.

    Attributes:
        contract_address: Address the zapper acts as (recipient of pulled
            deposits, sender of sub-calls)
        fee_bps: Pool commission used when solving for the optimal swap
            (default: 30 = 0.3%). Must match the pool's own rate for the
            solved swap to be exact.
        max_iterations: Newton-Raphson iteration cap (default: 32)
        max_spread: Spread tolerance sent with swaps (default: 0.5, the
            pool's maximum)
        operation_id: Checkpoint slot used for the in-flight operation
    """

    contract_address: str = "zapper"
    fee_bps: int = FEE_BPS
    max_iterations: int = MAX_ITERATIONS
    max_spread: Decimal = MAX_SPREAD
    operation_id: str = DEFAULT_OPERATION_ID


# Default configuration instance
DEFAULT_ZAP_CONFIG = ZapConfig()
