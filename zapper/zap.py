"""Zapper: single-sided liquidity provision as a resumable operation.

An operation spans up to three steps, each ending at an external call:

    enter        pull deposits, compute the optimal swap, dispatch it
                 (or skip straight to providing when no swap is needed)
    reply 1      read the swap's output, provide both assets as liquidity
    reply 2      read the minted shares, enforce the minimum, pay the caller

Between steps the only state is the Checkpoint in the store, so the host may
deliver each callback in a separate request.
"""

from __future__ import annotations

import os

import structlog

from zapper.address import AddressValidator, PrefixAddressValidator, is_valid_address
from zapper.config import DEFAULT_ZAP_CONFIG, ZapConfig
from zapper.constants import (
    PROVIDE_LIQUIDITY_ACTION,
    PROVIDE_LIQUIDITY_REPLY_ID,
    SWAP_ACTION,
    SWAP_REPLY_ID,
)
from zapper.deposits import handle_deposits, validate_deposits
from zapper.errors import (
    MalformedAttribute,
    MissingAttribute,
    MissingEvent,
    OperationInProgress,
    ProtocolError,
    SlippageError,
    SubCallFailed,
    UnexpectedReply,
    UnknownReplyId,
)
from zapper.models.assets import Asset, AssetInfo, AssetSet
from zapper.models.messages import (
    AssetModel,
    EnterRequest,
    Event,
    MessageInfo,
    Reply,
    Response,
    SimulateEnterRequest,
    SimulateEnterResponse,
)
from zapper.models.types import parse_uint128
from zapper.offer import compute_offer_asset
from zapper.pair.base import PairQuerier
from zapper.pair.messages import (
    build_provide_liquidity_submsgs,
    build_swap_submsg,
    build_transfer_msg,
)
from zapper.pair.registry import PairRegistry
from zapper.safe_int import S, SafeIntError
from zapper.state import Checkpoint, CheckpointStore, ZapState

logger = structlog.get_logger()

ENTER_ACTION = "zapper/execute/enter"
AFTER_SWAP_ACTION = "zapper/reply/after_swap"
AFTER_PROVIDE_ACTION = "zapper/reply/after_provide_liquidity"

# Continuation state each reply id resumes
_EXPECTED_STATE = {
    SWAP_REPLY_ID: ZapState.AWAITING_SWAP,
    PROVIDE_LIQUIDITY_REPLY_ID: ZapState.AWAITING_LIQUIDITY,
}


def find_event(events: list[Event], action: str) -> Event:
    """First event carrying action=<action>.

    Raises:
        MissingEvent: If no event matches
    """
    for event in events:
        if event.contains("action", action):
            return event
    raise MissingEvent(f"cannot find `{action}` event")


def read_attribute(event: Event, key: str) -> str:
    """Raises MissingAttribute if event has no attribute named key."""
    value = event.get(key)
    if value is None:
        raise MissingAttribute(f"cannot find `{key}` attribute")
    return value


def read_amount(event: Event, key: str) -> int:
    """Read a uint128 attribute.

    Raises:
        MissingAttribute: If absent
        MalformedAttribute: If not a uint128 decimal string
    """
    raw = read_attribute(event, key)
    try:
        return parse_uint128(raw)
    except ValueError as err:
        raise MalformedAttribute(f"cannot parse `{key}` attribute: {raw!r}") from err


class Zapper:
    """Runs enter / reply / quote against a pair querier and a checkpoint store.

    Args:
        querier: Source of pair metadata, depths and swap quotes
        api: Address validator, used to tell token addresses from denoms
        store: Checkpoint store. If None, an in-memory store is used.
        config: Solver and protocol parameters
    """

    def __init__(
        self,
        querier: PairQuerier,
        api: AddressValidator,
        store: CheckpointStore | None = None,
        config: ZapConfig = DEFAULT_ZAP_CONFIG,
    ) -> None:
        self.querier = querier
        self.api = api
        self.store = store if store is not None else CheckpointStore()
        self.config = config

    @property
    def op_id(self) -> str:
        return self.config.operation_id

    # --- Execute ---

    def enter(self, info: MessageInfo, request: EnterRequest) -> Response:
        """Start an operation: pull deposits and dispatch the first external call.

        Raises:
            OperationInProgress: If a checkpoint already exists
            InputError: If the pair or the deposits fail validation
            PairError: If the pair cannot be queried
            SafeIntError: On arithmetic failure in the solver
        """
        if self.store.may_load(self.op_id) is not None:
            raise OperationInProgress(f"operation already in progress: {self.op_id}")

        pair_addr = self.api.validate(request.pair)
        pair_info = self.querier.query_pair(pair_addr)
        pool = self.querier.query_pool(pair_addr)

        deposits = validate_deposits(
            pair_info.pair_type,
            pair_info.asset_infos,
            (deposit.to_asset() for deposit in request.deposits),
        )
        deposit_msgs = handle_deposits(
            deposits,
            info.funds_as_assets(),
            info.sender,
            self.config.contract_address,
        )

        offer_asset = compute_offer_asset(
            pool.assets,
            deposits,
            fee_bps=self.config.fee_bps,
            max_iterations=self.config.max_iterations,
        )
        available = deposits.copy().deduct(offer_asset)
        swap_needed = offer_asset.amount > 0

        self.store.save(
            Checkpoint(
                user_addr=info.sender,
                pair_addr=pair_addr,
                liquidity_token_addr=pair_info.liquidity_token,
                assets=[AssetModel.from_asset(asset) for asset in available],
                minimum_received=request.minimum_received,
                state=ZapState.AWAITING_SWAP if swap_needed else ZapState.AWAITING_LIQUIDITY,
            ),
            self.op_id,
        )

        response = Response()
        for msg in deposit_msgs:
            response.add_message(msg)

        response.add_attribute("action", ENTER_ACTION)
        response.add_attribute("assets_deposited", str(deposits))
        if swap_needed:
            response.add_submessage(
                build_swap_submsg(pair_addr, offer_asset, self.config.max_spread)
            )
            response.add_attribute("asset_offered", str(offer_asset))
            response.add_attribute("assets_provided", "none")
        else:
            response.add_submessages(build_provide_liquidity_submsgs(pair_addr, deposits))
            response.add_attribute("asset_offered", "none")
            response.add_attribute("assets_provided", str(deposits))

        logger.info(
            "zap_entered",
            sender=info.sender,
            pair=pair_addr,
            deposits=str(deposits),
            offer=str(offer_asset),
            swap_needed=swap_needed,
        )
        return response

    # --- Reply ---

    def reply(self, reply: Reply) -> Response:
        """Resume the stored operation with an external call's outcome.

        Any failure while resuming aborts the operation: the checkpoint is
        cleared before the error propagates, so the next enter can start.

        Raises:
            UnknownReplyId: If reply.id is neither the swap nor the provide id
            SubCallFailed: If the external call reported an error
            MissingCheckpoint: If no operation is in flight
            UnexpectedReply: If the operation is not waiting for this reply
            MissingEvent, MissingAttribute, MalformedAttribute: If the
                expected data cannot be read from the events
            SlippageError: If fewer shares than the minimum were minted
        """
        try:
            return self._resume(reply)
        except (ProtocolError, SafeIntError) as err:
            if self.store.may_load(self.op_id) is not None:
                self.store.remove(self.op_id)
                logger.warning(
                    "zap_aborted",
                    reply_id=reply.id,
                    error=str(err),
                    error_type=type(err).__name__,
                )
            raise

    def _resume(self, reply: Reply) -> Response:
        expected = _EXPECTED_STATE.get(reply.id)
        if expected is None:
            raise UnknownReplyId(f"invalid reply id: {reply.id}")
        if reply.result.error is not None:
            logger.warning("sub_call_failed", reply_id=reply.id, error=reply.result.error)
            raise SubCallFailed(reply.result.error)

        checkpoint = self.store.load(self.op_id)
        if checkpoint.state != expected:
            raise UnexpectedReply(
                f"reply {reply.id} does not match state {checkpoint.state.value}"
            )

        events = reply.result.events or []
        if reply.id == SWAP_REPLY_ID:
            return self._after_swap(checkpoint, events)
        return self._after_provide_liquidity(checkpoint, events)

    def _after_swap(self, checkpoint: Checkpoint, events: list[Event]) -> Response:
        event = find_event(events, SWAP_ACTION)
        ask_asset = read_attribute(event, "ask_asset")
        return_amount = read_amount(event, "return_amount")

        # The pool reports the returned asset as a bare string
        if is_valid_address(self.api, ask_asset):
            returned_info = AssetInfo.token(ask_asset)
        else:
            returned_info = AssetInfo.native(ask_asset)
        returned_asset = Asset(returned_info, return_amount)

        assets = checkpoint.asset_set().add(returned_asset)
        self.store.save(checkpoint.with_assets(assets, ZapState.AWAITING_LIQUIDITY), self.op_id)

        logger.info(
            "zap_swap_settled",
            pair=checkpoint.pair_addr,
            returned=str(returned_asset),
            assets=str(assets),
        )

        return (
            Response()
            .add_submessages(build_provide_liquidity_submsgs(checkpoint.pair_addr, assets))
            .add_attribute("action", AFTER_SWAP_ACTION)
            .add_attribute("asset_returned", str(returned_asset))
            .add_attribute("assets_provided", str(assets))
        )

    def _after_provide_liquidity(self, checkpoint: Checkpoint, events: list[Event]) -> Response:
        event = find_event(events, PROVIDE_LIQUIDITY_ACTION)
        share = read_amount(event, "share")

        self.store.remove(self.op_id)

        if checkpoint.minimum_received is not None:
            minimum = parse_uint128(checkpoint.minimum_received)
            if share < minimum:
                logger.warning(
                    "zap_slippage_exceeded",
                    user=checkpoint.user_addr,
                    minimum=minimum,
                    received=share,
                )
                raise SlippageError(
                    f"too little received! minimum: {minimum}, received {share}"
                )

        shares_minted = Asset.token(checkpoint.liquidity_token_addr, share)

        logger.info(
            "zap_completed",
            user=checkpoint.user_addr,
            pair=checkpoint.pair_addr,
            shares=share,
        )

        return (
            Response()
            .add_message(build_transfer_msg(shares_minted, checkpoint.user_addr))
            .add_attribute("action", AFTER_PROVIDE_ACTION)
            .add_attribute("shares_minted", str(shares_minted))
        )

    # --- Query ---

    def simulate_enter(self, request: SimulateEnterRequest) -> SimulateEnterResponse:
        """Quote an enter without dispatching or storing anything.

        Runs the same pair and deposit checks as enter (funds are not
        checked), solves the same swap, asks the pair for a quote and
        applies the provide-liquidity mint formula to the result.
        """
        pair_addr = self.api.validate(request.pair)
        pair_info = self.querier.query_pair(pair_addr)
        pool = self.querier.query_pool(pair_addr)

        deposits = validate_deposits(
            pair_info.pair_type,
            pair_info.asset_infos,
            (deposit.to_asset() for deposit in request.deposits),
        )
        offer_asset = compute_offer_asset(
            pool.assets,
            deposits,
            fee_bps=self.config.fee_bps,
            max_iterations=self.config.max_iterations,
        )

        simulation = self.querier.query_simulation(pair_addr, offer_asset)
        pool_a, pool_b = pool.assets
        return_info = pool_b.info if offer_asset.info == pool_a.info else pool_a.info
        return_asset = Asset(return_info, simulation.return_amount)

        pool_after = {
            pool_a.info: S(pool_a.amount),
            pool_b.info: S(pool_b.amount),
        }
        pool_after[offer_asset.info] = pool_after[offer_asset.info] + offer_asset.amount
        pool_after[return_asset.info] = pool_after[return_asset.info] - return_asset.amount

        held: AssetSet = deposits.copy().add(return_asset).deduct(offer_asset)
        mint_shares = min(
            S(held.amount_of(info)).multiply_ratio(pool.total_share, depth)
            for info, depth in pool_after.items()
        ).to_uint128()

        logger.debug(
            "zap_simulated",
            pair=pair_addr,
            offer=str(offer_asset),
            returned=str(return_asset),
            mint_shares=mint_shares,
        )

        return SimulateEnterResponse(
            offer_asset=AssetModel.from_asset(offer_asset),
            return_asset=AssetModel.from_asset(return_asset),
            mint_shares=str(mint_shares),
        )

    # --- Administration ---

    def checkpoint(self) -> Checkpoint | None:
        return self.store.may_load(self.op_id)

    def state(self) -> ZapState:
        return self.store.state(self.op_id)

    def clear(self) -> bool:
        """Drop a stuck checkpoint. Returns True if one was stored."""
        if self.store.may_load(self.op_id) is None:
            return False
        self.store.remove(self.op_id)
        logger.warning("checkpoint_cleared", op_id=self.op_id)
        return True


def _create_default_zapper() -> Zapper:
    """Create the zapper used by the API.

    Pairs are queried through an LCD node when ZAPPER_LCD_URL is set;
    otherwise an empty in-memory registry is used.
    """
    config = ZapConfig(
        contract_address=os.environ.get("ZAPPER_CONTRACT_ADDRESS", DEFAULT_ZAP_CONFIG.contract_address)
    )
    api = PrefixAddressValidator(prefix=os.environ.get("ZAPPER_ADDRESS_PREFIX", "terra"))

    lcd_url = os.environ.get("ZAPPER_LCD_URL")
    querier: PairQuerier
    if lcd_url:
        from zapper.pair.lcd import LcdPairQuerier

        logger.info("lcd_querier_enabled", lcd_url=lcd_url)
        querier = LcdPairQuerier(lcd_url)
    else:
        logger.info("lcd_querier_disabled", reason="ZAPPER_LCD_URL not set")
        querier = PairRegistry()

    return Zapper(querier=querier, api=api, config=config)


_default_zapper: Zapper | None = None


def get_default_zapper() -> Zapper:
    """Process-wide zapper, created on first use."""
    global _default_zapper
    if _default_zapper is None:
        _default_zapper = _create_default_zapper()
    return _default_zapper
