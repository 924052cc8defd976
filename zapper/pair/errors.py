"""Pair error classes.

These errors are raised by pair queriers and by the in-memory pair; they
model failures reported by the external pool contract.
"""


class PairError(Exception):
    """Base error for pair operations."""

    pass


class PairNotFound(PairError):
    """No pair is known at the given address."""

    pass


class AssetMismatch(PairError):
    """An asset does not belong to the pair."""

    pass


class MaxSpreadExceeded(PairError):
    """Swap spread exceeds the caller's tolerance."""

    pass


class PairQueryError(PairError):
    """A remote pair query failed or returned an unexpected payload."""

    pass
