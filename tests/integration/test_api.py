"""Integration tests for the zapper API.

The test plays the host: every call returned by /enter and /reply is
executed against in-memory pairs, and each tagged call's outcome is posted
back to /reply until no calls remain.
"""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from zapper.api.endpoints import get_zapper
from zapper.api.main import app
from zapper.models.messages import ExecuteContract, Reply, ReplyOn, SubCallResult
from tests.helpers import (
    ALICE,
    ASTRO_TOKEN,
    ASTRO_UST_LP_TOKEN,
    ASTRO_UST_PAIR,
    LUNA_UST_LP_TOKEN,
    LUNA_UST_PAIR,
    UUSD,
    ZAPPER_ADDR,
    LocalHost,
    make_registry,
    make_zapper,
)


@pytest.fixture
def host() -> LocalHost:
    registry = make_registry()
    return LocalHost(make_zapper(registry), registry)


@pytest.fixture
def client(host: LocalHost) -> Iterator[TestClient]:
    """Test client whose zapper shares the host's pairs."""
    app.dependency_overrides[get_zapper] = lambda: host.zapper
    yield TestClient(app)
    app.dependency_overrides.clear()


def run_to_completion(client: TestClient, host: LocalHost, response: dict) -> list[dict]:
    """Dispatch every returned call, posting replies; return all responses."""
    responses = [response]
    for submsg in response["messages"]:
        event = host.dispatch(ExecuteContract.model_validate(submsg["msg"]))
        if submsg["reply_on"] == ReplyOn.SUCCESS.value:
            reply = Reply(id=submsg["id"], result=SubCallResult.ok([event]))
            result = client.post("/reply", json=reply.model_dump(mode="json"))
            assert result.status_code == 200, result.text
            responses.extend(run_to_completion(client, host, result.json()))
    return responses


def attributes(response: dict) -> dict[str, str]:
    return {attr["key"]: attr["value"] for attr in response["attributes"]}


class TestZapOverHttp:
    def test_luna_ust_single_sided(self, client, host):
        deposits = [{"info": {"native": UUSD}, "amount": "100000000000"}]

        quote = client.post("/simulate", json={"pair": LUNA_UST_PAIR, "deposits": deposits})
        assert quote.status_code == 200

        entered = client.post(
            "/enter",
            json={
                "info": {"sender": ALICE, "funds": [{"denom": UUSD, "amount": "100000000000"}]},
                "request": {
                    "pair": LUNA_UST_PAIR,
                    "deposits": deposits,
                    "minimum_received": quote.json()["mint_shares"],
                },
            },
        )
        assert entered.status_code == 200
        assert client.get("/state").json()["state"] == "awaiting_swap"

        responses = run_to_completion(client, host, entered.json())

        assert [attributes(r)["action"] for r in responses] == [
            "zapper/execute/enter",
            "zapper/reply/after_swap",
            "zapper/reply/after_provide_liquidity",
        ]
        assert attributes(responses[-1])["shares_minted"] == f"token:{LUNA_UST_LP_TOKEN}:5481424982"
        assert host.transfers == [(LUNA_UST_LP_TOKEN, ALICE, 5481424982)]
        assert client.get("/state").json() == {"state": "idle", "checkpoint": None}

    def test_astro_ust_mixed_deposit(self, client, host):
        entered = client.post(
            "/enter",
            json={
                "info": {"sender": ALICE, "funds": [{"denom": UUSD, "amount": "100000000000"}]},
                "request": {
                    "pair": ASTRO_UST_PAIR,
                    "deposits": [
                        {"info": {"token": ASTRO_TOKEN}, "amount": "750000000000"},
                        {"info": {"native": UUSD}, "amount": "100000000000"},
                    ],
                },
            },
        )
        assert entered.status_code == 200

        run_to_completion(client, host, entered.json())

        assert host.transfers == [
            (ASTRO_TOKEN, ZAPPER_ADDR, 750000000000),
            (ASTRO_UST_LP_TOKEN, ALICE, 476696702710),
        ]

    def test_failed_swap_ends_operation(self, client, host):
        body = {
            "info": {"sender": ALICE, "funds": [{"denom": UUSD, "amount": "100000000000"}]},
            "request": {
                "pair": LUNA_UST_PAIR,
                "deposits": [{"info": {"native": UUSD}, "amount": "100000000000"}],
            },
        }
        assert client.post("/enter", json=body).status_code == 200

        failed = client.post(
            "/reply", json={"id": 1, "result": {"error": "Operation exceeds max spread limit"}}
        )
        assert failed.status_code == 500
        assert failed.json()["detail"] == "Operation exceeds max spread limit"
        assert client.get("/state").json() == {"state": "idle", "checkpoint": None}

        retried = client.post("/enter", json=body)
        assert retried.status_code == 200
        run_to_completion(client, host, retried.json())
        assert host.transfers == [(LUNA_UST_LP_TOKEN, ALICE, 5481424982)]
