"""Protocol constants for the zapper.

Centralizes reply identifiers and the external pool's parameters.
"""

from decimal import Decimal

# Commission rate of the constant-product pool, in basis points (30 = 0.3%)
# Querying the pool factory for it on every call is not worth the extra
# round trip; the rate is effectively fixed.
FEE_BPS = 30
BPS_DENOMINATOR = 10_000

# Newton-Raphson iteration cap for the optimal swap solver
MAX_ITERATIONS = 32

# Maximum spread the pool accepts on a swap. The zapper enforces its own
# end-to-end minimum on minted shares, so swaps are sent with the loosest
# tolerance the pool allows.
MAX_SPREAD = Decimal("0.5")

# Fixed-point scale used by the pool for its Decimal256 math
DECIMAL_FRACTIONAL = 10**18

# Reply identifiers tagging dispatched sub-calls
NO_REPLY_ID = 0
SWAP_REPLY_ID = 1
PROVIDE_LIQUIDITY_REPLY_ID = 2

# Storage slot for the single in-flight operation
DEFAULT_OPERATION_ID = "zap"

# Event attributes emitted by the pool that the zapper reads back
SWAP_ACTION = "swap"
PROVIDE_LIQUIDITY_ACTION = "provide_liquidity"
