"""Pydantic models for zapper requests, dispatched calls and callbacks."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, model_validator

from zapper.constants import NO_REPLY_ID
from zapper.models.assets import Asset, AssetInfo, AssetKind, AssetSet
from zapper.models.types import Uint128

# =============================================================================
# Assets on the wire
# =============================================================================


class AssetInfoModel(BaseModel):
    """Asset identity: exactly one of `native` (denom) or `token` (address)."""

    native: str | None = None
    token: str | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> AssetInfoModel:
        if (self.native is None) == (self.token is None):
            raise ValueError("asset info must set exactly one of 'native' or 'token'")
        return self

    def to_info(self) -> AssetInfo:
        if self.native is not None:
            return AssetInfo.native(self.native)
        return AssetInfo.token(self.token)  # type: ignore[arg-type]

    @classmethod
    def from_info(cls, info: AssetInfo) -> AssetInfoModel:
        if info.kind == AssetKind.NATIVE:
            return cls(native=info.id)
        return cls(token=info.id)


class AssetModel(BaseModel):
    """An asset amount as sent over the wire."""

    info: AssetInfoModel
    amount: Uint128

    def to_asset(self) -> Asset:
        return Asset(self.info.to_info(), int(self.amount))

    @classmethod
    def from_asset(cls, asset: Asset) -> AssetModel:
        return cls(info=AssetInfoModel.from_info(asset.info), amount=str(asset.amount))


class Coin(BaseModel):
    """Native funds attached to a request or call."""

    denom: str
    amount: Uint128

    @property
    def amount_int(self) -> int:
        return int(self.amount)


# =============================================================================
# Requests
# =============================================================================


class MessageInfo(BaseModel):
    """Who called and what native funds they attached."""

    sender: str
    funds: list[Coin] = Field(default_factory=list)

    def funds_as_assets(self) -> AssetSet:
        """Attached funds as native assets.

        Raises:
            DuplicateAsset: If the same denom is attached twice
        """
        return AssetSet(Asset.native(coin.denom, coin.amount_int) for coin in self.funds)


class EnterRequest(BaseModel):
    """Provide an arbitrary mix of a pair's assets as liquidity."""

    pair: str = Field(description="Address of the constant-product pair.")
    deposits: list[AssetModel] = Field(
        description="Claimed deposits. Native deposits must be attached as funds; "
        "token deposits are pulled from the sender's balance (allowance required)."
    )
    minimum_received: Uint128 | None = Field(
        default=None,
        description="Minimum liquidity shares to accept; the operation aborts below it.",
    )


class SimulateEnterRequest(BaseModel):
    """Quote the outcome of an EnterRequest without executing anything."""

    pair: str
    deposits: list[AssetModel]


class SimulateEnterResponse(BaseModel):
    """Predicted outcome of entering a pair."""

    offer_asset: AssetModel = Field(description="Asset offered for swap to balance the deposit.")
    return_asset: AssetModel = Field(description="Asset the swap is predicted to return.")
    mint_shares: Uint128 = Field(description="Liquidity shares predicted to be minted.")


# =============================================================================
# Dispatched calls
# =============================================================================


class ReplyOn(str, Enum):
    """When the host should call back with the outcome of a sub-call."""

    NEVER = "never"
    SUCCESS = "success"


class ExecuteContract(BaseModel):
    """A call to a contract with a JSON message and attached native funds."""

    contract: str
    msg: dict[str, Any]
    funds: list[Coin] = Field(default_factory=list)


class SubCall(BaseModel):
    """A dispatched call, tagged with the identifier its callback will carry."""

    id: int = NO_REPLY_ID
    msg: ExecuteContract
    reply_on: ReplyOn = ReplyOn.NEVER


class Attribute(BaseModel):
    """A key/value pair on a response or event."""

    key: str
    value: str


class Response(BaseModel):
    """Calls to dispatch, in order, plus descriptive attributes."""

    messages: list[SubCall] = Field(default_factory=list)
    attributes: list[Attribute] = Field(default_factory=list)

    def add_message(self, msg: ExecuteContract) -> Response:
        """Append a fire-and-forget call."""
        self.messages.append(SubCall(msg=msg))
        return self

    def add_submessage(self, submsg: SubCall) -> Response:
        self.messages.append(submsg)
        return self

    def add_submessages(self, submsgs: list[SubCall]) -> Response:
        self.messages.extend(submsgs)
        return self

    def add_attribute(self, key: str, value: str) -> Response:
        self.attributes.append(Attribute(key=key, value=value))
        return self

    def attribute(self, key: str) -> str | None:
        """Value of the first attribute named key, or None."""
        for attr in self.attributes:
            if attr.key == key:
                return attr.value
        return None


# =============================================================================
# Callbacks
# =============================================================================


class Event(BaseModel):
    """An event emitted while executing a sub-call."""

    type: str = "wasm"
    attributes: list[Attribute] = Field(default_factory=list)

    @classmethod
    def with_attributes(cls, type_: str = "wasm", **attributes: str) -> Event:
        """Build an event from keyword attributes (order preserved)."""
        return cls(
            type=type_,
            attributes=[Attribute(key=k, value=v) for k, v in attributes.items()],
        )

    def contains(self, key: str, value: str) -> bool:
        """True if the event carries attribute key=value."""
        return any(attr.key == key and attr.value == value for attr in self.attributes)

    def get(self, key: str) -> str | None:
        for attr in self.attributes:
            if attr.key == key:
                return attr.value
        return None


class SubCallResult(BaseModel):
    """Outcome of a sub-call: either its events or an error message."""

    events: list[Event] | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> SubCallResult:
        if (self.events is None) == (self.error is None):
            raise ValueError("sub-call result must set exactly one of 'events' or 'error'")
        return self

    @classmethod
    def ok(cls, events: list[Event]) -> SubCallResult:
        return cls(events=events)

    @classmethod
    def err(cls, error: str) -> SubCallResult:
        return cls(error=error)


class Reply(BaseModel):
    """Callback delivered by the host after a tagged sub-call completes."""

    id: int
    result: SubCallResult
