"""End-to-end zap operations executed by an in-process host.

Each test enters a pair and lets LocalHost dispatch every call, feeding
swap and provide-liquidity outcomes back to the zapper until the
operation finishes.
"""

import pytest

from zapper.errors import SlippageError
from zapper.models.messages import AssetModel, SimulateEnterRequest
from zapper.state import ZapState
from tests.helpers import (
    ALICE,
    ASTRO_TOKEN,
    ASTRO_UST_LP_TOKEN,
    ASTRO_UST_PAIR,
    LUNA_UST_LP_TOKEN,
    LUNA_UST_PAIR,
    ULUNA,
    UUSD,
    ZAPPER_ADDR,
    make_enter_request,
    make_info,
    native,
    token,
)
from tests.helpers.constants import LUNA_UST_POOL, LUNA_UST_TOTAL_SHARE


def enter_luna_ust(host, minimum_received=None):
    host.execute(
        host.zapper.enter(
            make_info(funds=[(UUSD, 100000000000)]),
            make_enter_request(
                LUNA_UST_PAIR, [native(UUSD, 100000000000)], minimum_received=minimum_received
            ),
        )
    )


class TestNativeSingleSided:
    """100000000000 uusd into luna/ust."""

    def test_shares_reach_user(self, host):
        enter_luna_ust(host)

        assert host.transfers == [(LUNA_UST_LP_TOKEN, ALICE, 5481424982)]
        assert [reply.id for reply in host.replies] == [1, 2]
        assert host.zapper.state() == ZapState.IDLE

    def test_pool_depths_after(self, host, registry):
        enter_luna_ust(host)

        pair = registry.get_pair(LUNA_UST_PAIR)
        assert pair.assets[0] == native(UUSD, LUNA_UST_POOL[UUSD] + 100000000000)
        # the swapped-out uluna comes straight back as liquidity
        assert pair.assets[1] == native(ULUNA, LUNA_UST_POOL[ULUNA])
        assert pair.total_share == LUNA_UST_TOTAL_SHARE + 5481424982
        assert pair.share_balances == {ZAPPER_ADDR: 5481424982}

    def test_matches_simulation(self, host):
        quote = host.zapper.simulate_enter(
            SimulateEnterRequest(
                pair=LUNA_UST_PAIR,
                deposits=[AssetModel.from_asset(native(UUSD, 100000000000))],
            )
        )
        enter_luna_ust(host)

        assert host.transfers[-1][2] == int(quote.mint_shares)

    def test_minimum_met_exactly(self, host):
        enter_luna_ust(host, minimum_received=5481424982)
        assert host.transfers == [(LUNA_UST_LP_TOKEN, ALICE, 5481424982)]

    def test_minimum_missed(self, host):
        with pytest.raises(SlippageError, match="minimum: 5481424983, received 5481424982"):
            enter_luna_ust(host, minimum_received=5481424983)

        assert host.transfers == []
        assert host.zapper.state() == ZapState.IDLE

    def test_operations_run_back_to_back(self, host):
        enter_luna_ust(host)
        enter_luna_ust(host)

        assert len(host.transfers) == 2
        assert all(recipient == ALICE for _, recipient, _ in host.transfers)
        assert host.zapper.state() == ZapState.IDLE


class TestTokenAndNative:
    """750000000000 astro plus 100000000000 uusd into astro/ust."""

    def enter(self, host):
        host.execute(
            host.zapper.enter(
                make_info(funds=[(UUSD, 100000000000)]),
                make_enter_request(
                    ASTRO_UST_PAIR,
                    [token(ASTRO_TOKEN, 750000000000), native(UUSD, 100000000000)],
                ),
            )
        )

    def test_token_pulled_then_shares_returned(self, host):
        self.enter(host)

        assert host.transfers == [
            (ASTRO_TOKEN, ZAPPER_ADDR, 750000000000),
            (ASTRO_UST_LP_TOKEN, ALICE, 476696702710),
        ]

    def test_allowance_covers_remaining_token(self, host):
        self.enter(host)

        assert host.allowances == [(ASTRO_TOKEN, ASTRO_UST_PAIR, 750000000000 - 336933122413)]

    def test_swap_goes_through_token(self, host):
        self.enter(host)

        swap_event = host.replies[0].result.events[0]
        assert swap_event.get("offer_asset") == ASTRO_TOKEN
        assert swap_event.get("offer_amount") == "336933122413"
        assert swap_event.get("return_amount") == "452253642498"


class TestBalancedDeposit:
    """Deposits already in pool proportion skip the swap."""

    def test_no_swap(self, host):
        host.execute(
            host.zapper.enter(
                make_info(funds=[(UUSD, LUNA_UST_POOL[UUSD]), (ULUNA, LUNA_UST_POOL[ULUNA])]),
                make_enter_request(
                    LUNA_UST_PAIR,
                    [native(UUSD, LUNA_UST_POOL[UUSD]), native(ULUNA, LUNA_UST_POOL[ULUNA])],
                ),
            )
        )

        assert [reply.id for reply in host.replies] == [2]
        # doubling the pool doubles the outstanding shares
        assert host.transfers == [(LUNA_UST_LP_TOKEN, ALICE, LUNA_UST_TOTAL_SHARE)]
