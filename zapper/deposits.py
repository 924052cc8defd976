"""Deposit reconciliation.

Validates the deposits a caller claims against the pool and against the
native funds actually attached to the request, and builds the calls that
pull token deposits into the zapper.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import structlog

from zapper.errors import (
    DepositNotInPool,
    InvalidDeposit,
    InvalidDepositCount,
    UnexpectedFunds,
    UnsupportedPairType,
)
from zapper.models.assets import Asset, AssetInfo, AssetSet
from zapper.models.messages import ExecuteContract
from zapper.pair.messages import build_transfer_from_msg
from zapper.pair.types import PairType

logger = structlog.get_logger()


def assert_pair_type(pair_type: PairType) -> None:
    """Raises UnsupportedPairType unless the pair is constant product."""
    if pair_type != PairType.XYK:
        raise UnsupportedPairType(f"unsupported pair type: {pair_type.value}")


def assert_deposit_types(pool_infos: Iterable[AssetInfo], deposits: Iterable[Asset]) -> None:
    """Raises DepositNotInPool for the first deposit the pool does not hold."""
    infos = list(pool_infos)
    for deposit in deposits:
        if deposit.info not in infos:
            raise DepositNotInPool(f"pair does not contain asset {deposit.info}")


def assert_deposit_number(deposits: Sequence[Asset]) -> None:
    """Raises InvalidDepositCount unless exactly 1 or 2 deposits are given."""
    if not 1 <= len(deposits) <= 2:
        raise InvalidDepositCount(
            f"must deposit exactly 1 or 2 assets; received {len(deposits)}"
        )


def validate_deposits(
    pair_type: PairType,
    pool_infos: Iterable[AssetInfo],
    claimed: Iterable[Asset],
) -> AssetSet:
    """Run the checks shared by entering and quoting.

    Order matters for which error a bad request reports: pair type, then
    membership of every claimed deposit (zeros included), then the count of
    non-zero deposits, then uniqueness.

    Returns:
        The non-zero deposits as an AssetSet, in claimed order

    Raises:
        UnsupportedPairType, DepositNotInPool, InvalidDepositCount, DuplicateAsset
    """
    claimed = list(claimed)
    assert_pair_type(pair_type)
    assert_deposit_types(pool_infos, claimed)

    non_zero = [deposit for deposit in claimed if deposit.amount > 0]
    assert_deposit_number(non_zero)

    return AssetSet(non_zero)


def handle_deposit(
    deposit: Asset,
    funds: AssetSet,
    sender: str,
    contract_addr: str,
) -> ExecuteContract | None:
    """Reconcile one claimed deposit.

    Token deposits are pulled from the sender's balance; native deposits
    must have been attached as funds in exactly the claimed amount.

    Returns:
        A transfer_from call for a token deposit, None for a native one

    Raises:
        InvalidDeposit: If a native deposit is missing from funds or differs in amount
    """
    if not deposit.info.is_native:
        return build_transfer_from_msg(deposit.info.id, sender, contract_addr, deposit.amount)

    sent = funds.find(deposit.info)
    if sent is None:
        raise InvalidDeposit(f"invalid deposit: expected {deposit}, received none")
    if sent.amount != deposit.amount:
        raise InvalidDeposit(f"invalid deposit: expected {deposit}, received {sent.amount}")
    return None


def handle_deposits(
    deposits: AssetSet,
    funds: AssetSet,
    sender: str,
    contract_addr: str,
) -> list[ExecuteContract]:
    """Reconcile all deposits and reject attached funds nobody claimed.

    Returns:
        transfer_from calls for the token deposits, in deposit order

    Raises:
        InvalidDeposit: If a native deposit does not match funds
        UnexpectedFunds: If a positive coin was attached that no deposit claims
    """
    msgs: list[ExecuteContract] = []
    for deposit in deposits:
        msg = handle_deposit(deposit, funds, sender, contract_addr)
        if msg is not None:
            msgs.append(msg)

    for coin in funds:
        if coin.amount > 0 and deposits.find(coin.info) is None:
            raise UnexpectedFunds(f"unexpected funds: {coin}")

    logger.debug(
        "deposits_reconciled",
        sender=sender,
        deposits=str(deposits),
        pulls=len(msgs),
    )
    return msgs
