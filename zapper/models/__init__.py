"""Domain types and pydantic wire models for the zapper."""

from zapper.models.assets import Asset, AssetInfo, AssetKind, AssetSet
from zapper.models.messages import (
    AssetInfoModel,
    AssetModel,
    Attribute,
    Coin,
    EnterRequest,
    Event,
    ExecuteContract,
    MessageInfo,
    Reply,
    ReplyOn,
    Response,
    SimulateEnterRequest,
    SimulateEnterResponse,
    SubCall,
    SubCallResult,
)
from zapper.models.types import Uint128, parse_uint128

__all__ = [
    # Types
    "Uint128",
    "parse_uint128",
    # Assets
    "AssetKind",
    "AssetInfo",
    "Asset",
    "AssetSet",
    # Requests
    "AssetInfoModel",
    "AssetModel",
    "Coin",
    "MessageInfo",
    "EnterRequest",
    "SimulateEnterRequest",
    "SimulateEnterResponse",
    # Dispatched calls and callbacks
    "ReplyOn",
    "ExecuteContract",
    "SubCall",
    "Attribute",
    "Response",
    "Event",
    "SubCallResult",
    "Reply",
]
