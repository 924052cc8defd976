"""Building calls to a pair and its tokens, and parsing pair JSON.

Pair messages use the pool's own JSON shapes:
- asset info: {"native_token": {"denom": ...}} or {"token": {"contract_addr": ...}}
- asset: {"info": <asset info>, "amount": "<uint128>"}
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from zapper.constants import PROVIDE_LIQUIDITY_REPLY_ID, SWAP_REPLY_ID
from zapper.models.assets import Asset, AssetInfo, AssetKind, AssetSet
from zapper.models.messages import Coin, ExecuteContract, ReplyOn, SubCall
from zapper.pair.errors import PairQueryError
from zapper.pair.types import PairInfo, PairType, PoolResponse, SimulationResponse

# =============================================================================
# Encoding
# =============================================================================


def info_to_json(info: AssetInfo) -> dict[str, Any]:
    if info.kind == AssetKind.NATIVE:
        return {"native_token": {"denom": info.id}}
    return {"token": {"contract_addr": info.id}}


def asset_to_json(asset: Asset) -> dict[str, Any]:
    return {"info": info_to_json(asset.info), "amount": str(asset.amount)}


def _coin(asset: Asset) -> Coin:
    return Coin(denom=asset.info.id, amount=str(asset.amount))


def build_transfer_from_msg(token: str, owner: str, recipient: str, amount: int) -> ExecuteContract:
    """Pull amount of token from owner (requires an allowance to the caller)."""
    return ExecuteContract(
        contract=token,
        msg={"transfer_from": {"owner": owner, "recipient": recipient, "amount": str(amount)}},
    )


def build_transfer_msg(asset: Asset, recipient: str) -> ExecuteContract:
    """Transfer a token asset to recipient.

    Raises:
        ValueError: If asset is native
    """
    if asset.info.is_native:
        raise ValueError(f"Cannot build a token transfer for native asset {asset}")
    return ExecuteContract(
        contract=asset.info.id,
        msg={"transfer": {"recipient": recipient, "amount": str(asset.amount)}},
    )


def build_swap_submsg(pair_addr: str, offer_asset: Asset, max_spread: Decimal) -> SubCall:
    """Swap offer_asset through the pair, replying with SWAP_REPLY_ID on success.

    Native offers call the pair directly with the coin attached; token offers
    are sent to the pair through the token contract with a swap hook.
    """
    if offer_asset.info.is_native:
        msg = ExecuteContract(
            contract=pair_addr,
            msg={
                "swap": {
                    "offer_asset": asset_to_json(offer_asset),
                    "belief_price": None,
                    "max_spread": str(max_spread),
                    "to": None,
                }
            },
            funds=[_coin(offer_asset)],
        )
    else:
        msg = ExecuteContract(
            contract=offer_asset.info.id,
            msg={
                "send": {
                    "contract": pair_addr,
                    "amount": str(offer_asset.amount),
                    "msg": {
                        "swap": {
                            "belief_price": None,
                            "max_spread": str(max_spread),
                            "to": None,
                        }
                    },
                }
            },
        )
    return SubCall(id=SWAP_REPLY_ID, msg=msg, reply_on=ReplyOn.SUCCESS)


def build_provide_liquidity_submsgs(pair_addr: str, assets: AssetSet) -> list[SubCall]:
    """Provide assets to the pair, replying with PROVIDE_LIQUIDITY_REPLY_ID.

    Token assets first get an allowance increase for the pair; native assets
    are attached as funds to the provide call, which comes last.
    """
    submsgs: list[SubCall] = []
    funds: list[Coin] = []

    for asset in assets:
        if asset.info.is_native:
            funds.append(_coin(asset))
        else:
            submsgs.append(
                SubCall(
                    msg=ExecuteContract(
                        contract=asset.info.id,
                        msg={
                            "increase_allowance": {
                                "spender": pair_addr,
                                "amount": str(asset.amount),
                                "expires": None,
                            }
                        },
                    )
                )
            )

    submsgs.append(
        SubCall(
            id=PROVIDE_LIQUIDITY_REPLY_ID,
            msg=ExecuteContract(
                contract=pair_addr,
                msg={
                    "provide_liquidity": {
                        "assets": [asset_to_json(asset) for asset in assets],
                        "slippage_tolerance": None,
                        "auto_stake": None,
                        "receiver": None,
                    }
                },
                funds=funds,
            ),
            reply_on=ReplyOn.SUCCESS,
        )
    )
    return submsgs


# =============================================================================
# Decoding
# =============================================================================


def info_from_json(data: dict[str, Any]) -> AssetInfo:
    """Parse a pair asset info.

    Raises:
        PairQueryError: If the payload is not a known asset info shape
    """
    try:
        if "native_token" in data:
            return AssetInfo.native(data["native_token"]["denom"])
        if "token" in data:
            return AssetInfo.token(data["token"]["contract_addr"])
    except (KeyError, TypeError) as err:
        raise PairQueryError(f"Malformed asset info: {data}") from err
    raise PairQueryError(f"Unknown asset info: {data}")


def asset_from_json(data: dict[str, Any]) -> Asset:
    try:
        return Asset(info_from_json(data["info"]), int(data["amount"]))
    except (KeyError, TypeError, ValueError) as err:
        raise PairQueryError(f"Malformed asset: {data}") from err


def pair_type_from_json(data: dict[str, Any] | str) -> PairType:
    """Parse a pair type, e.g. {"xyk": {}} or "xyk"."""
    name = data if isinstance(data, str) else next(iter(data), "")
    try:
        return PairType(name)
    except ValueError:
        return PairType.CUSTOM


def pair_info_from_json(data: dict[str, Any]) -> PairInfo:
    try:
        infos = data["asset_infos"]
        return PairInfo(
            asset_infos=(info_from_json(infos[0]), info_from_json(infos[1])),
            contract_addr=data["contract_addr"],
            liquidity_token=data["liquidity_token"],
            pair_type=pair_type_from_json(data.get("pair_type", "xyk")),
        )
    except (KeyError, IndexError, TypeError) as err:
        raise PairQueryError(f"Malformed pair info: {data}") from err


def pool_from_json(data: dict[str, Any]) -> PoolResponse:
    try:
        assets = data["assets"]
        return PoolResponse(
            assets=(asset_from_json(assets[0]), asset_from_json(assets[1])),
            total_share=int(data["total_share"]),
        )
    except (KeyError, IndexError, TypeError, ValueError) as err:
        raise PairQueryError(f"Malformed pool response: {data}") from err


def simulation_from_json(data: dict[str, Any]) -> SimulationResponse:
    try:
        return SimulationResponse(
            return_amount=int(data["return_amount"]),
            spread_amount=int(data["spread_amount"]),
            commission_amount=int(data["commission_amount"]),
        )
    except (KeyError, TypeError, ValueError) as err:
        raise PairQueryError(f"Malformed simulation response: {data}") from err
