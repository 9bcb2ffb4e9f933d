"""End-to-end market, trade, and account flow (requires running PostgreSQL).

Pre-condition: alembic upgrade head

Uses the session-scoped client fixture from tests/integration/conftest.py.
Each test starts from a reset market.
"""

import uuid

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio(loop_scope="session")


async def _reset(client: AsyncClient, admin_headers: dict[str, str]) -> None:
    await client.post("/api/v1/admin/market/freeze", json={"duration_minutes": 0},
                      headers=admin_headers)
    await client.post("/api/v1/admin/market/event", json={"event": None},
                      headers=admin_headers)
    resp = await client.post("/api/v1/admin/market/reset", headers=admin_headers)
    assert resp.status_code == 200


async def _price(client: AsyncClient, headers: dict[str, str], item_id: str) -> int:
    data = (await client.get("/api/v1/market", headers=headers)).json()["data"]
    for view in data["stocks"] + data["commodities"]:
        if view["id"] == item_id:
            return int(view["current_price_cents"])
    raise AssertionError(f"{item_id} not in market")


class TestTradeFlow:
    async def test_buy_sell_round_trip(
        self,
        client: AsyncClient,
        team_headers: dict[str, str],
        admin_headers: dict[str, str],
    ) -> None:
        await _reset(client, admin_headers)
        price = await _price(client, team_headers, "SOLR")

        buy = await client.post(
            "/api/v1/trade/buy", json={"item_id": "SOLR", "quantity": 3}, headers=team_headers
        )
        assert buy.status_code == 200
        assert buy.json()["data"]["new_balance_cents"] == 100000 - 3 * price

        portfolio = (await client.get("/api/v1/portfolio", headers=team_headers)).json()["data"]
        assert portfolio["holdings"][0]["quantity"] == 3
        assert portfolio["summary"]["net_worth_cents"] == 100000

        sell = await client.post(
            "/api/v1/trade/sell", json={"item_id": "SOLR", "quantity": 3}, headers=team_headers
        )
        assert sell.json()["data"]["new_balance_cents"] == 100000

        txs = (await client.get("/api/v1/account/transactions", headers=team_headers)).json()
        assert [t["tx_type"] for t in txs["data"]["items"]] == ["SELL", "BUY"]

    async def test_insufficient_balance(
        self,
        client: AsyncClient,
        team_headers: dict[str, str],
        admin_headers: dict[str, str],
    ) -> None:
        await _reset(client, admin_headers)
        resp = await client.post(
            "/api/v1/trade/buy", json={"item_id": "LITH", "quantity": 1000},
            headers=team_headers,
        )
        assert resp.status_code == 409
        assert resp.json()["code"] == 2004

        balance = (await client.get("/api/v1/account/balance", headers=team_headers)).json()
        assert balance["data"]["balance_cents"] == 100000

    async def test_round_moves_portfolio_value(
        self,
        client: AsyncClient,
        team_headers: dict[str, str],
        admin_headers: dict[str, str],
    ) -> None:
        await _reset(client, admin_headers)
        await client.post(
            "/api/v1/trade/buy", json={"item_id": "AQUA", "quantity": 10}, headers=team_headers
        )

        resp = await client.post("/api/v1/admin/market/advance-round", headers=admin_headers)
        assert resp.status_code == 200

        portfolio = (await client.get("/api/v1/portfolio", headers=team_headers)).json()["data"]
        holding = portfolio["holdings"][0]
        assert holding["current_price_cents"] == 6800   # 8000 × (1 - 15%)
        assert holding["pnl_percent"] == -15.0

    async def test_reset_clears_holdings(
        self,
        client: AsyncClient,
        team_headers: dict[str, str],
        admin_headers: dict[str, str],
    ) -> None:
        await _reset(client, admin_headers)
        await client.post(
            "/api/v1/trade/buy", json={"item_id": "CCRD", "quantity": 2}, headers=team_headers
        )

        await _reset(client, admin_headers)

        portfolio = (await client.get("/api/v1/portfolio", headers=team_headers)).json()["data"]
        assert portfolio["holdings"] == []
        assert portfolio["summary"]["balance_cents"] == 100000 - 2 * 5000


class TestRewards:
    async def test_reward_is_idempotent(
        self,
        client: AsyncClient,
        team_id: str,
        team_headers: dict[str, str],
        service_headers: dict[str, str],
    ) -> None:
        body = {
            "team_id": team_id,
            "kind": "QUIZ",
            "label": "Climate Quiz",
            "amount_cents": 2500,
            "reference_id": f"q-{uuid.uuid4().hex[:8]}",
        }

        first = await client.post("/api/v1/account/rewards", json=body, headers=service_headers)
        second = await client.post("/api/v1/account/rewards", json=body, headers=service_headers)

        assert first.json()["data"]["applied"] is True
        assert second.json()["data"]["applied"] is False
        balance = (await client.get("/api/v1/account/balance", headers=team_headers)).json()
        assert balance["data"]["balance_cents"] == 102500

    async def test_leaderboard_lists_team(
        self,
        client: AsyncClient,
        team_id: str,
        team_headers: dict[str, str],
        service_headers: dict[str, str],
    ) -> None:
        await client.post(
            "/api/v1/account/rewards",
            json={"team_id": team_id, "kind": "QUIZ", "label": "Q", "amount_cents": 100,
                  "reference_id": f"q-{uuid.uuid4().hex[:8]}"},
            headers=service_headers,
        )

        board = (await client.get("/api/v1/leaderboard", headers=team_headers)).json()["data"]
        ranks = [e["rank"] for e in board["items"]]
        assert ranks == list(range(1, len(ranks) + 1))

    async def test_reward_and_penalty_share_reference(
        self,
        client: AsyncClient,
        team_id: str,
        team_headers: dict[str, str],
        service_headers: dict[str, str],
    ) -> None:
        ref = f"maze-{uuid.uuid4().hex[:8]}"
        reward = await client.post(
            "/api/v1/account/rewards",
            json={"team_id": team_id, "kind": "GAME_WIN", "label": "Maze",
                  "amount_cents": 6000, "reference_id": ref},
            headers=service_headers,
        )
        penalty = await client.post(
            "/api/v1/account/penalties",
            json={"team_id": team_id, "label": "Maze", "amount_cents": 3000,
                  "reference_id": ref},
            headers=service_headers,
        )

        assert reward.json()["data"]["applied"] is True
        assert penalty.json()["data"]["applied"] is True
        balance = (await client.get("/api/v1/account/balance", headers=team_headers)).json()
        assert balance["data"]["balance_cents"] == 103000

    async def test_team_token_cannot_reward(
        self, client: AsyncClient, team_id: str, team_headers: dict[str, str]
    ) -> None:
        resp = await client.post(
            "/api/v1/account/rewards",
            json={"team_id": team_id, "kind": "QUIZ", "label": "Q", "amount_cents": 100,
                  "reference_id": "q-self"},
            headers=team_headers,
        )
        assert resp.status_code == 403
