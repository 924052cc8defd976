"""API endpoints for the zapper."""

import threading

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from zapper.models.messages import (
    EnterRequest,
    MessageInfo,
    Reply,
    Response,
    SimulateEnterRequest,
    SimulateEnterResponse,
)
from zapper.state import Checkpoint, ZapState
from zapper.zap import Zapper, get_default_zapper

logger = structlog.get_logger()

router = APIRouter()

# Steps of an operation read and write the same checkpoint; FastAPI runs sync
# handlers on a thread pool, so they are serialized here.
_zap_lock = threading.Lock()


class EnterCall(BaseModel):
    """Body of POST /enter: the caller's identity and funds plus the request."""

    info: MessageInfo
    request: EnterRequest


class StateResponse(BaseModel):
    """Continuation state and, if an operation is in flight, its checkpoint."""

    state: ZapState
    checkpoint: Checkpoint | None = None


class ClearResponse(BaseModel):
    cleared: bool


def get_zapper() -> Zapper:
    """Dependency provider for the zapper instance.

    Override this in tests to inject a zapper backed by in-memory pairs:
        app.dependency_overrides[get_zapper] = lambda: zapper

    Returns:
        The zapper instance handling requests.
    """
    return get_default_zapper()


@router.post("/simulate")
def simulate(
    request: SimulateEnterRequest,
    zapper: Zapper = Depends(get_zapper),
) -> SimulateEnterResponse:
    """Quote entering a pair: offer, expected return and shares minted."""
    logger.info("received_simulate", pair=request.pair, deposit_count=len(request.deposits))
    return zapper.simulate_enter(request)


@router.post("/enter")
def enter(call: EnterCall, zapper: Zapper = Depends(get_zapper)) -> Response:
    """Start an operation and return the calls the host must dispatch.

    Error Handling:
        - Invalid request schema: 422 (Pydantic)
        - Rejected deposits or pair: 400
        - Operation already in flight: 409
    """
    logger.info(
        "received_enter",
        sender=call.info.sender,
        pair=call.request.pair,
        deposit_count=len(call.request.deposits),
    )
    with _zap_lock:
        response = zapper.enter(call.info, call.request)
    logger.info("returning_messages", message_count=len(response.messages))
    return response


@router.post("/reply")
def reply(callback: Reply, zapper: Zapper = Depends(get_zapper)) -> Response:
    """Resume the in-flight operation with the outcome of a dispatched call."""
    logger.info("received_reply", reply_id=callback.id)
    with _zap_lock:
        response = zapper.reply(callback)
    logger.info("returning_messages", message_count=len(response.messages))
    return response


@router.get("/state")
def get_state(zapper: Zapper = Depends(get_zapper)) -> StateResponse:
    """Current continuation state."""
    with _zap_lock:
        checkpoint = zapper.checkpoint()
    if checkpoint is None:
        return StateResponse(state=ZapState.IDLE)
    return StateResponse(state=checkpoint.state, checkpoint=checkpoint)


@router.delete("/state")
def clear_state(zapper: Zapper = Depends(get_zapper)) -> ClearResponse:
    """Drop the checkpoint of an operation whose callback will never arrive."""
    with _zap_lock:
        cleared = zapper.clear()
    return ClearResponse(cleared=cleared)
