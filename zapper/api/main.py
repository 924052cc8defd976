"""FastAPI application hosting the zapper.

The app plays the part of the ledger's entry points: /enter and /reply
return the calls to dispatch, and the caller delivers each call's outcome
back through /reply.
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from zapper import __version__
from zapper.api.endpoints import router
from zapper.errors import InputError, OperationInProgress, ProtocolError, SlippageError
from zapper.pair.errors import PairError
from zapper.safe_int import SafeIntError

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("ZAPPER_HOST", "0.0.0.0")
PORT = int(os.environ.get("ZAPPER_PORT", "8000"))
DEBUG = os.environ.get("ZAPPER_DEBUG", "false").lower() in ("true", "1", "yes")

# Maximum request body size (1 MB)
MAX_REQUEST_SIZE = 1024 * 1024

app = FastAPI(
    title="Zapper",
    description="Single-sided liquidity provision for constant-product pools",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


@app.exception_handler(InputError)
async def input_error_handler(_request: Request, exc: InputError) -> JSONResponse:
    logger.info("request_rejected", error=str(exc), error_type=type(exc).__name__)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(SlippageError)
async def slippage_error_handler(_request: Request, exc: SlippageError) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(OperationInProgress)
async def operation_in_progress_handler(_request: Request, exc: OperationInProgress) -> JSONResponse:
    logger.info("request_rejected", error=str(exc), error_type=type(exc).__name__)
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(ProtocolError)
async def protocol_error_handler(_request: Request, exc: ProtocolError) -> JSONResponse:
    logger.error("protocol_error", error=str(exc), error_type=type(exc).__name__)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.exception_handler(SafeIntError)
async def arithmetic_error_handler(_request: Request, exc: SafeIntError) -> JSONResponse:
    logger.warning("arithmetic_error", error=str(exc), error_type=type(exc).__name__)
    return JSONResponse(status_code=422, content={"detail": f"arithmetic error: {exc}"})


@app.exception_handler(PairError)
async def pair_error_handler(_request: Request, exc: PairError) -> JSONResponse:
    logger.warning("pair_error", error=str(exc), error_type=type(exc).__name__)
    return JSONResponse(status_code=502, content={"detail": str(exc)})


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok"}


def run() -> None:
    """Run the zapper API server.

    Configuration via environment variables:
    - ZAPPER_HOST: Host to bind to (default: 0.0.0.0)
    - ZAPPER_PORT: Port to bind to (default: 8000)
    - ZAPPER_DEBUG: Enable debug/reload mode (default: false)
    - ZAPPER_CONTRACT_ADDRESS: Address deposits are pulled to (default: zapper)
    - ZAPPER_ADDRESS_PREFIX: bech32 prefix of account addresses (default: terra)
    - ZAPPER_LCD_URL: LCD node to query pairs through (default: none, in-memory)
    """
    uvicorn.run(
        "zapper.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
