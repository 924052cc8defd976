"""Tests for Asset, AssetInfo and AssetSet."""

import pytest

from zapper.errors import DuplicateAsset
from zapper.models.assets import Asset, AssetInfo, AssetKind, AssetSet
from zapper.safe_int import UINT128_MAX, Uint128Overflow, Underflow


class TestAssetInfo:
    def test_rendering(self):
        assert str(AssetInfo.native("uusd")) == "native:uusd"
        assert str(AssetInfo.token("astro_token")) == "token:astro_token"

    def test_identity_is_kind_and_id(self):
        """A denom and a token address with the same text are different assets."""
        assert AssetInfo.native("uusd") == AssetInfo(AssetKind.NATIVE, "uusd")
        assert AssetInfo.native("x") != AssetInfo.token("x")

    def test_is_native(self):
        assert AssetInfo.native("uusd").is_native
        assert not AssetInfo.token("astro_token").is_native


class TestAsset:
    def test_rendering(self):
        assert str(Asset.native("uluna", 12345)) == "native:uluna:12345"
        assert str(Asset.token("astro_token", 1)) == "token:astro_token:1"

    def test_uint128_bounds(self):
        """Amounts outside [0, 2^128 - 1] are rejected at construction."""
        assert Asset.native("uusd", UINT128_MAX).amount == UINT128_MAX
        with pytest.raises(Uint128Overflow):
            Asset.native("uusd", UINT128_MAX + 1)
        with pytest.raises(Uint128Overflow):
            Asset.native("uusd", -1)

    def test_with_amount(self):
        asset = Asset.native("uusd", 5).with_amount(7)
        assert asset == Asset.native("uusd", 7)


class TestAssetSet:
    def test_duplicate_info_rejected(self):
        with pytest.raises(DuplicateAsset, match="duplicate asset native:uluna"):
            AssetSet([Asset.native("uluna", 1), Asset.native("uluna", 2)])

    def test_rendering(self):
        assets = AssetSet([Asset.native("uusd", 1), Asset.token("astro_token", 2)])
        assert str(assets) == "native:uusd:1,token:astro_token:2"
        assert str(AssetSet()) == "[]"

    def test_find_and_amount_of(self):
        assets = AssetSet([Asset.native("uusd", 10)])
        assert assets.find(AssetInfo.native("uusd")) == Asset.native("uusd", 10)
        assert assets.find(AssetInfo.native("uluna")) is None
        assert assets.amount_of(AssetInfo.native("uluna")) == 0

    def test_add_merges_existing_entry(self):
        assets = AssetSet([Asset.native("uusd", 10), Asset.native("uluna", 1)])
        assets.add(Asset.native("uusd", 5))
        assert list(assets) == [Asset.native("uusd", 15), Asset.native("uluna", 1)]

    def test_add_appends_new_entry(self):
        """Insertion order is preserved; new assets go last."""
        assets = AssetSet([Asset.native("uusd", 10)])
        assets.add(Asset.native("uluna", 3))
        assert assets.infos() == [AssetInfo.native("uusd"), AssetInfo.native("uluna")]

    def test_add_overflow_raises(self):
        assets = AssetSet([Asset.native("uusd", UINT128_MAX)])
        with pytest.raises(Uint128Overflow):
            assets.add(Asset.native("uusd", 1))

    def test_deduct(self):
        assets = AssetSet([Asset.native("uusd", 10)])
        assets.deduct(Asset.native("uusd", 4))
        assert assets.amount_of(AssetInfo.native("uusd")) == 6

    def test_deduct_to_zero_drops_entry(self):
        assets = AssetSet([Asset.native("uusd", 10), Asset.native("uluna", 1)])
        assets.deduct(Asset.native("uusd", 10))
        assert list(assets) == [Asset.native("uluna", 1)]

    def test_deduct_underflow_raises(self):
        assets = AssetSet([Asset.native("uusd", 10)])
        with pytest.raises(Underflow):
            assets.deduct(Asset.native("uusd", 11))

    def test_deduct_absent_asset(self):
        """Deducting an absent asset is fine for zero, an underflow otherwise."""
        assets = AssetSet([Asset.native("uusd", 10)])
        assets.deduct(Asset.native("uluna", 0))
        assert len(assets) == 1
        with pytest.raises(Underflow):
            assets.deduct(Asset.native("uluna", 1))

    def test_purge_drops_zero_entries(self):
        assets = AssetSet([Asset.native("uusd", 0), Asset.native("uluna", 3)]).purge()
        assert list(assets) == [Asset.native("uluna", 3)]
        assert all(asset.amount > 0 for asset in assets)

    def test_copy_is_independent(self):
        original = AssetSet([Asset.native("uusd", 10)])
        copied = original.copy()
        copied.add(Asset.native("uusd", 1))
        assert original.amount_of(AssetInfo.native("uusd")) == 10
        assert copied != original
