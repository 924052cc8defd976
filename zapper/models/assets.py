"""Asset domain types.

An asset is identified by its AssetInfo: either a native denom (funds attached
directly to a request) or a token contract address (balances held by the
token contract, moved with explicit transfer messages).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from zapper.errors import DuplicateAsset
from zapper.safe_int import S, Underflow


class AssetKind(str, Enum):
    """How an asset is held and moved."""

    NATIVE = "native"
    TOKEN = "token"


@dataclass(frozen=True)
class AssetInfo:
    """Identity of an asset: its kind plus denom or token address."""

    kind: AssetKind
    id: str

    @classmethod
    def native(cls, denom: str) -> AssetInfo:
        return cls(AssetKind.NATIVE, denom)

    @classmethod
    def token(cls, address: str) -> AssetInfo:
        return cls(AssetKind.TOKEN, address)

    @property
    def is_native(self) -> bool:
        return self.kind == AssetKind.NATIVE

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.id}"


@dataclass(frozen=True)
class Asset:
    """An amount of an asset. Amounts are uint128."""

    info: AssetInfo
    amount: int

    def __post_init__(self) -> None:
        # Raises TypeError for non-ints and Uint128Overflow for out-of-range
        S(self.amount).to_uint128()

    @classmethod
    def native(cls, denom: str, amount: int) -> Asset:
        return cls(AssetInfo.native(denom), amount)

    @classmethod
    def token(cls, address: str, amount: int) -> Asset:
        return cls(AssetInfo.token(address), amount)

    def with_amount(self, amount: int) -> Asset:
        return Asset(self.info, amount)

    def __str__(self) -> str:
        return f"{self.info}:{self.amount}"


class AssetSet:
    """Ordered collection of assets with unique infos.

    Insertion order is preserved; new assets are appended. Amounts are
    combined with checked arithmetic: addition past uint128 raises
    Uint128Overflow and subtraction below zero raises Underflow.
    """

    def __init__(self, assets: Iterable[Asset] = ()) -> None:
        """Create a set from assets.

        Raises:
            DuplicateAsset: If the same info appears more than once
        """
        self._assets: list[Asset] = []
        for asset in assets:
            if self.find(asset.info) is not None:
                raise DuplicateAsset(f"duplicate asset {asset.info}")
            self._assets.append(asset)

    def __iter__(self) -> Iterator[Asset]:
        return iter(self._assets)

    def __len__(self) -> int:
        return len(self._assets)

    def __getitem__(self, index: int) -> Asset:
        return self._assets[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AssetSet):
            return NotImplemented
        return self._assets == other._assets

    def __repr__(self) -> str:
        return f"AssetSet({self._assets!r})"

    def __str__(self) -> str:
        if not self._assets:
            return "[]"
        return ",".join(str(asset) for asset in self._assets)

    def copy(self) -> AssetSet:
        return AssetSet(self._assets)

    def infos(self) -> list[AssetInfo]:
        return [asset.info for asset in self._assets]

    def find(self, info: AssetInfo) -> Asset | None:
        """Return the asset with the given info, or None."""
        for asset in self._assets:
            if asset.info == info:
                return asset
        return None

    def amount_of(self, info: AssetInfo) -> int:
        """Amount held of info (0 if absent)."""
        asset = self.find(info)
        return asset.amount if asset is not None else 0

    def _index(self, info: AssetInfo) -> int | None:
        for i, asset in enumerate(self._assets):
            if asset.info == info:
                return i
        return None

    def add(self, asset: Asset) -> AssetSet:
        """Merge asset into the set (sum with existing entry or append).

        Raises:
            Uint128Overflow: If the sum exceeds uint128
        """
        index = self._index(asset.info)
        if index is None:
            self._assets.append(asset)
        else:
            existing = self._assets[index]
            total = (S(existing.amount) + S(asset.amount)).to_uint128()
            self._assets[index] = existing.with_amount(total)
        return self

    def deduct(self, asset: Asset) -> AssetSet:
        """Subtract asset from the set. Entries that reach zero are dropped.

        Raises:
            Underflow: If the set holds less than asset.amount of asset.info
        """
        index = self._index(asset.info)
        if index is None:
            if asset.amount == 0:
                return self
            raise Underflow(f"Underflow: cannot deduct {asset} from {self}")
        existing = self._assets[index]
        remaining = (S(existing.amount) - S(asset.amount)).to_uint128()
        if remaining == 0:
            del self._assets[index]
        else:
            self._assets[index] = existing.with_amount(remaining)
        return self

    def purge(self) -> AssetSet:
        """Drop zero-amount entries."""
        self._assets = [asset for asset in self._assets if asset.amount > 0]
        return self
