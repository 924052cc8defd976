"""Checkpoint persistence for in-flight operations.

An operation is suspended at every external call. Everything needed to
resume it (who asked, which pair, which assets the zapper currently holds,
the minimum to enforce and what callback is expected next) lives in a
Checkpoint, stored as JSON under `checkpoint:<operation id>`.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable

import structlog
from pydantic import BaseModel, Field

from zapper.constants import DEFAULT_OPERATION_ID
from zapper.errors import MissingCheckpoint
from zapper.models.assets import AssetSet
from zapper.models.messages import AssetModel
from zapper.models.types import Uint128

logger = structlog.get_logger()


class ZapState(str, Enum):
    """Continuation state of an operation.

    IDLE and TERMINAL are never stored: they mean no checkpoint exists.
    """

    IDLE = "idle"
    AWAITING_SWAP = "awaiting_swap"
    AWAITING_LIQUIDITY = "awaiting_liquidity"
    TERMINAL = "terminal"


class Checkpoint(BaseModel):
    """State carried across a suspended operation."""

    user_addr: str
    pair_addr: str
    liquidity_token_addr: str
    assets: list[AssetModel] = Field(
        default_factory=list,
        description="Assets currently held for the operation, in provide order.",
    )
    minimum_received: Uint128 | None = None
    state: ZapState

    def asset_set(self) -> AssetSet:
        return AssetSet(model.to_asset() for model in self.assets)

    def with_assets(self, assets: AssetSet, state: ZapState) -> Checkpoint:
        """Copy of this checkpoint holding assets and moved to state."""
        return self.model_copy(
            update={
                "assets": [AssetModel.from_asset(asset) for asset in assets],
                "state": state,
            }
        )


# =============================================================================
# Storage
# =============================================================================


@runtime_checkable
class Storage(Protocol):
    """Byte-oriented key-value storage."""

    def get(self, key: str) -> bytes | None: ...

    def set(self, key: str, value: bytes) -> None: ...

    def remove(self, key: str) -> None: ...

    def keys(self, prefix: str = "") -> list[str]: ...


class MemoryStorage:
    """Dict-backed Storage. Not thread-safe."""

    def __init__(self) -> None:
        self._data: dict[str, bytes] = {}

    def __len__(self) -> int:
        return len(self._data)

    def get(self, key: str) -> bytes | None:
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self, prefix: str = "") -> list[str]:
        return sorted(key for key in self._data if key.startswith(prefix))


class CheckpointStore:
    """Typed access to checkpoints kept in a Storage."""

    def __init__(self, storage: Storage | None = None, namespace: str = "checkpoint") -> None:
        self.storage = storage if storage is not None else MemoryStorage()
        self.namespace = namespace

    def _key(self, op_id: str) -> str:
        return f"{self.namespace}:{op_id}"

    def may_load(self, op_id: str = DEFAULT_OPERATION_ID) -> Checkpoint | None:
        raw = self.storage.get(self._key(op_id))
        if raw is None:
            return None
        return Checkpoint.model_validate_json(raw)

    def load(self, op_id: str = DEFAULT_OPERATION_ID) -> Checkpoint:
        """Load the checkpoint for op_id.

        Raises:
            MissingCheckpoint: If none is stored
        """
        checkpoint = self.may_load(op_id)
        if checkpoint is None:
            raise MissingCheckpoint(f"no checkpoint stored for operation {op_id}")
        return checkpoint

    def save(self, checkpoint: Checkpoint, op_id: str = DEFAULT_OPERATION_ID) -> None:
        self.storage.set(self._key(op_id), checkpoint.model_dump_json().encode())
        logger.debug("checkpoint_saved", op_id=op_id, state=checkpoint.state.value)

    def remove(self, op_id: str = DEFAULT_OPERATION_ID) -> None:
        self.storage.remove(self._key(op_id))
        logger.debug("checkpoint_removed", op_id=op_id)

    def state(self, op_id: str = DEFAULT_OPERATION_ID) -> ZapState:
        """Current continuation state; IDLE when nothing is stored."""
        checkpoint = self.may_load(op_id)
        return checkpoint.state if checkpoint is not None else ZapState.IDLE

    def active(self) -> list[str]:
        """Operation ids that currently hold a checkpoint."""
        prefix = f"{self.namespace}:"
        return [key[len(prefix) :] for key in self.storage.keys(prefix)]
