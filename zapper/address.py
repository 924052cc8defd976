"""Account address validation.

The zapper only needs to know whether a string is an account address. After
a swap, the pool reports the returned asset as a bare string; a string that
validates as an address is a token contract, anything else is a native denom.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from zapper.errors import InvalidAddress

# bech32 data charset (excludes 1, b, i, o)
_BECH32_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"


@runtime_checkable
class AddressValidator(Protocol):
    """Validates human-readable account addresses."""

    def validate(self, human: str) -> str:
        """Return the canonical form of human.

        Raises:
            InvalidAddress: If human is not a valid address
        """
        ...


def is_valid_address(validator: AddressValidator, human: str) -> bool:
    """True if human validates as an address under validator."""
    try:
        validator.validate(human)
    except InvalidAddress:
        return False
    return True


class PrefixAddressValidator:
    """Format check for bech32-style addresses with a fixed prefix.

    Accepts `<prefix>1<data>` where data is 38 (account) or 58 (contract)
    lowercase bech32 characters. The checksum is not verified.
    """

    def __init__(self, prefix: str = "terra", data_lengths: Iterable[int] = (38, 58)) -> None:
        self.prefix = prefix
        self.data_lengths = frozenset(data_lengths)

    def validate(self, human: str) -> str:
        if not isinstance(human, str):
            raise InvalidAddress(f"invalid address: {human!r}")
        # bech32 forbids mixed case
        if human.lower() != human and human.upper() != human:
            raise InvalidAddress(f"invalid address: {human} (mixed case)")
        addr = human.lower()
        hrp, separator, data = addr.rpartition("1")
        if (
            not separator
            or hrp != self.prefix
            or len(data) not in self.data_lengths
            or any(ch not in _BECH32_CHARSET for ch in data)
        ):
            raise InvalidAddress(f"invalid address: {human}")
        return addr


class AllowListAddressValidator:
    """Treats a fixed set of strings as the only valid addresses."""

    def __init__(self, addresses: Iterable[str]) -> None:
        self.addresses = frozenset(addresses)

    def validate(self, human: str) -> str:
        if human not in self.addresses:
            raise InvalidAddress(f"invalid address: {human}")
        return human
