"""
tradebook/tests/test_trades.py

Trade CRUD, partial updates and transitive ownership (trade -> account ->
user), including moving a trade between accounts.
"""

from decimal import Decimal

import pytest

from tradebook.models.trade import Trade

from test_accounts import create_account


def trade_payload(account_id, **overrides):
    payload = {
        "type": "buy",
        "asset_type": "stock",
        "ticker": "aapl",
        "trade_date": "2024-01-15",
        "quantity": "10",
        "price": "150.25",
        "currency": "USD",
        "account_id": account_id,
        "reason": "Long-term hold",
    }
    payload.update(overrides)
    return payload


def create_trade(client, headers, account_id, **overrides):
    r = client.post("/api/trades/", headers=headers, json=trade_payload(account_id, **overrides))
    assert r.status_code == 201, r.text
    return r.json()


@pytest.fixture
def alice_trade(client, alice):
    _, headers = alice
    account = create_account(client, headers)
    return account, create_trade(client, headers, account["id"])


class TestTradeCrud:

    def test_create(self, client, alice, alice_trade):
        account, trade = alice_trade

        assert trade["ticker"] == "AAPL"
        assert trade["type"] == "buy"
        assert trade["account_id"] == account["id"]
        assert trade["trade_date"] == "2024-01-15"
        assert Decimal(trade["price"]) == Decimal("150.25")
        assert isinstance(trade["quantity"], str)

    def test_list_newest_first(self, client, alice):
        _, headers = alice
        account = create_account(client, headers)
        create_trade(client, headers, account["id"], trade_date="2024-01-01", ticker="OLD")
        create_trade(client, headers, account["id"], trade_date="2024-03-01", ticker="NEW")

        tickers = [t["ticker"] for t in client.get("/api/trades/", headers=headers).json()]
        assert tickers == ["NEW", "OLD"]

    @pytest.mark.parametrize("field, value", [
        ("quantity", "0"),
        ("price", "-1"),
        ("type", "short"),
        ("asset_type", "bond"),
        ("ticker", "   "),
    ])
    def test_invalid_values(self, client, alice, field, value):
        _, headers = alice
        account = create_account(client, headers)
        r = client.post("/api/trades/", headers=headers,
                        json=trade_payload(account["id"], **{field: value}))
        assert r.status_code == 422

    def test_delete(self, client, alice, alice_trade):
        _, headers = alice
        _, trade = alice_trade

        assert client.delete(f"/api/trades/{trade['id']}", headers=headers).status_code == 204
        assert client.get("/api/trades/", headers=headers).json() == []


class TestPartialUpdate:

    def test_price_only(self, client, alice, alice_trade):
        _, headers = alice
        _, trade = alice_trade

        r = client.put(f"/api/trades/{trade['id']}", headers=headers, json={"price": "175.5"})

        assert r.status_code == 200
        updated = r.json()
        assert Decimal(updated["price"]) == Decimal("175.5")
        for unchanged in ("type", "asset_type", "ticker", "trade_date", "currency",
                          "account_id", "reason", "created_at"):
            assert updated[unchanged] == trade[unchanged]
        assert Decimal(updated["quantity"]) == Decimal(trade["quantity"])

    def test_clear_reason(self, client, alice, alice_trade):
        _, headers = alice
        _, trade = alice_trade

        r = client.put(f"/api/trades/{trade['id']}", headers=headers, json={"reason": None})
        assert r.status_code == 200
        assert r.json()["reason"] is None

    def test_null_required_field_rejected(self, client, alice, alice_trade):
        _, headers = alice
        _, trade = alice_trade

        r = client.put(f"/api/trades/{trade['id']}", headers=headers, json={"price": None})
        assert r.status_code == 422

    def test_empty_body_rejected(self, client, alice, alice_trade):
        _, headers = alice
        _, trade = alice_trade

        r = client.put(f"/api/trades/{trade['id']}", headers=headers, json={})
        assert r.status_code == 400
        assert r.json()["code"] == "no_fields_provided"

    def test_move_between_own_accounts(self, client, alice, alice_trade):
        _, headers = alice
        _, trade = alice_trade
        other = create_account(client, headers, name="Crypto", currency="USDT")

        r = client.put(f"/api/trades/{trade['id']}", headers=headers,
                       json={"account_id": other["id"]})
        assert r.status_code == 200
        assert r.json()["account_id"] == other["id"]


class TestTradeOwnership:

    def test_create_in_foreign_account(self, client, alice, bob):
        account = create_account(client, alice[1])

        r = client.post("/api/trades/", headers=bob[1], json=trade_payload(account["id"]))
        assert r.status_code == 404
        assert client.get("/api/trades/", headers=alice[1]).json() == []

    def test_list_is_scoped(self, client, alice, bob, alice_trade):
        assert client.get("/api/trades/", headers=bob[1]).json() == []

    def test_foreign_update_leaves_row_unchanged(self, client, alice, bob, alice_trade, test_db):
        _, trade = alice_trade

        r = client.put(f"/api/trades/{trade['id']}", headers=bob[1], json={"price": "1"})

        assert r.status_code == 404
        assert test_db.get(Trade, trade["id"]).price == Decimal("150.25")

    def test_move_into_foreign_account(self, client, alice, bob, alice_trade, test_db):
        """Own trade, someone else's destination account: rejected, nothing written."""
        _, trade = alice_trade
        bobs_account = create_account(client, bob[1])

        r = client.put(f"/api/trades/{trade['id']}", headers=alice[1],
                       json={"account_id": bobs_account["id"], "price": "1"})

        assert r.status_code == 404
        row = test_db.get(Trade, trade["id"])
        assert row.account_id == trade["account_id"]
        assert row.price == Decimal("150.25")

    def test_foreign_delete(self, client, alice, bob, alice_trade, test_db):
        _, trade = alice_trade

        r = client.delete(f"/api/trades/{trade['id']}", headers=bob[1])

        assert r.status_code == 404
        assert test_db.get(Trade, trade["id"]) is not None

    def test_foreign_and_missing_are_indistinguishable(self, client, alice, bob, alice_trade):
        _, trade = alice_trade

        foreign = client.put(f"/api/trades/{trade['id']}", headers=bob[1], json={"price": "1"})
        missing = client.put("/api/trades/no-such-trade", headers=bob[1], json={"price": "1"})

        assert foreign.status_code == missing.status_code == 404
        assert foreign.json() == missing.json()
