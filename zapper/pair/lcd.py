"""PairQuerier backed by a CosmWasm LCD (REST) endpoint.

Smart queries are sent as base64-encoded JSON to
`/cosmwasm/wasm/v1/contract/{address}/smart/{query}`; the node wraps the
contract's answer in {"data": ...}.
"""

from __future__ import annotations

import base64
import json
from typing import Any

import httpx
import structlog

from zapper.models.assets import Asset
from zapper.pair.errors import PairQueryError
from zapper.pair.messages import (
    asset_to_json,
    pair_info_from_json,
    pool_from_json,
    simulation_from_json,
)
from zapper.pair.types import PairInfo, PoolResponse, SimulationResponse

logger = structlog.get_logger()

DEFAULT_TIMEOUT_SECONDS = 10.0


class LcdPairQuerier:
    """Query deployed pairs through an LCD node.

    Implements the PairQuerier protocol.

    Usage:
        with LcdPairQuerier("https://lcd.example.org") as querier:
            pool = querier.query_pool("terra1...")
    """

    def __init__(
        self,
        base_url: str,
        client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Create a querier.

        Args:
            base_url: LCD root URL
            client: Optional preconfigured client (e.g. with a MockTransport
                in tests). If None, one is created and owned by this querier.
            timeout: Request timeout in seconds for an owned client
        """
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    def __enter__(self) -> LcdPairQuerier:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def smart_query(self, contract_addr: str, query: dict[str, Any]) -> Any:
        """Run a smart query and return the contract's decoded answer.

        Raises:
            PairQueryError: On transport errors, non-2xx status or a
                response without a "data" field
        """
        encoded = base64.urlsafe_b64encode(json.dumps(query).encode()).decode()
        url = f"{self.base_url}/cosmwasm/wasm/v1/contract/{contract_addr}/smart/{encoded}"
        try:
            response = self._client.get(url)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as err:
            logger.warning(
                "lcd_query_failed",
                contract=contract_addr,
                query=next(iter(query), None),
                status_code=err.response.status_code,
            )
            raise PairQueryError(
                f"Query to {contract_addr} failed with status {err.response.status_code}"
            ) from err
        except (httpx.HTTPError, ValueError) as err:
            logger.warning("lcd_query_failed", contract=contract_addr, error=str(err))
            raise PairQueryError(f"Query to {contract_addr} failed: {err}") from err

        if not isinstance(payload, dict) or "data" not in payload:
            raise PairQueryError(f"Unexpected LCD response from {contract_addr}: {payload}")
        return payload["data"]

    # --- PairQuerier ---

    def query_pair(self, pair_addr: str) -> PairInfo:
        return pair_info_from_json(self.smart_query(pair_addr, {"pair": {}}))

    def query_pool(self, pair_addr: str) -> PoolResponse:
        return pool_from_json(self.smart_query(pair_addr, {"pool": {}}))

    def query_simulation(self, pair_addr: str, offer_asset: Asset) -> SimulationResponse:
        data = self.smart_query(
            pair_addr, {"simulation": {"offer_asset": asset_to_json(offer_asset)}}
        )
        return simulation_from_json(data)
