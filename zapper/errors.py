"""Zapper error classes.

Errors fall into four groups:
- InputError: the request is rejected before anything is dispatched
- ProtocolError: a continuation cannot be resumed safely
- SlippageError: minted shares fell below the caller's minimum
- arithmetic errors are raised by zapper.safe_int (ArithmeticError subclasses)
"""


class ZapError(Exception):
    """Base error for zapper operations."""

    pass


class InputError(ZapError):
    """Request failed validation; the operation never starts."""

    pass


class UnsupportedPairType(InputError):
    """Pair is not a constant-product (xyk) pair."""

    pass


class DepositNotInPool(InputError):
    """A claimed deposit is not one of the pool's two assets."""

    pass


class InvalidDepositCount(InputError):
    """After dropping zero entries, not exactly 1 or 2 deposits remain."""

    pass


class InvalidDeposit(InputError):
    """A native deposit does not match the funds attached to the request."""

    pass


class UnexpectedFunds(InputError):
    """Funds were attached that no deposit claims."""

    pass


class DuplicateAsset(InputError):
    """The same asset appears twice where assets must be unique."""

    pass


class InvalidAddress(InputError):
    """A string does not validate as an account address."""

    pass


class ProtocolError(ZapError):
    """A callback cannot be matched to the in-flight operation."""

    pass


class MissingCheckpoint(ProtocolError):
    """A callback arrived with no checkpoint stored."""

    pass


class OperationInProgress(ProtocolError):
    """A new operation was started while a checkpoint exists."""

    pass


class UnknownReplyId(ProtocolError):
    """A callback carries an identifier the zapper never dispatches."""

    pass


class UnexpectedReply(ProtocolError):
    """A callback does not match the checkpoint's continuation state."""

    pass


class MissingEvent(ProtocolError):
    """The expected event is absent from a callback's event log."""

    pass


class MissingAttribute(ProtocolError):
    """The expected attribute is absent from the located event."""

    pass


class MalformedAttribute(ProtocolError):
    """An attribute value cannot be parsed."""

    pass


class SubCallFailed(ProtocolError):
    """The external call reported failure."""

    pass


class SlippageError(ZapError):
    """Minted shares are below the caller's minimum."""

    pass
