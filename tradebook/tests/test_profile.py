"""
tradebook/tests/test_profile.py

Profile read/update, password change and account self-deletion.
"""

from tradebook.models.account import Account
from tradebook.models.user import User

from conftest import bearer, sign_in, sign_up
from test_accounts import create_account

QUESTIONNAIRE = {
    "age": 35,
    "max_acceptable_short_term_loss_percentage": 20,
    "expected_annualized_rate_of_return": 8,
    "time_horizon": "10y",
    "years_investing": 5,
    "monthly_cash_flow": "1500.00",
    "default_currency": "usd",
}


class TestProfile:

    def test_get(self, client, alice):
        user, headers = alice
        body = client.get("/api/profile", headers=headers).json()

        assert body["id"] == user["id"]
        assert body["username"] == "alice"
        assert body["investment_profile"] is None

    def test_requires_token(self, client):
        assert client.get("/api/profile").status_code == 401

    def test_update_name_only(self, client, alice):
        _, headers = alice
        r = client.put("/api/profile", headers=headers, json={"name": "Alice B."})

        assert r.status_code == 200
        assert r.json()["name"] == "Alice B."
        assert r.json()["username"] == "alice"

    def test_save_questionnaire(self, client, alice):
        _, headers = alice
        r = client.put("/api/profile", headers=headers, json={"investment_profile": QUESTIONNAIRE})

        assert r.status_code == 200
        saved = r.json()["investment_profile"]
        assert saved["age"] == 35
        assert saved["default_currency"] == "USD"

        again = client.put("/api/profile", headers=headers,
                           json={"investment_profile": {"age": 36}}).json()
        assert again["investment_profile"]["age"] == 36
        assert again["investment_profile"]["time_horizon"] is None

    def test_username_taken(self, client, alice, bob):
        _, headers = alice
        r = client.put("/api/profile", headers=headers, json={"username": "bob"})

        assert r.status_code == 409
        assert client.get("/api/profile", headers=headers).json()["username"] == "alice"

    def test_empty_update_rejected(self, client, alice):
        _, headers = alice
        assert client.put("/api/profile", headers=headers, json={}).status_code == 400

    def test_blank_name_and_username_rejected(self, client, alice):
        _, headers = alice
        r = client.put("/api/profile", headers=headers, json={"username": "   ", "name": "  "})

        assert r.status_code == 422
        body = client.get("/api/profile", headers=headers).json()
        assert body["username"] == "alice"
        assert body["name"] == "Alice"

    def test_padded_username_is_stripped(self, client, alice):
        _, headers = alice
        r = client.put("/api/profile", headers=headers, json={"username": "  alice2 "})

        assert r.status_code == 200
        assert r.json()["username"] == "alice2"

    def test_padded_duplicate_username_conflicts(self, client, alice, bob):
        _, headers = alice
        r = client.put("/api/profile", headers=headers, json={"username": "bob "})

        assert r.status_code == 409
        assert client.get("/api/profile", headers=headers).json()["username"] == "alice"

    def test_null_questionnaire_rejected(self, client, alice):
        _, headers = alice
        r = client.put("/api/profile", headers=headers, json={"investment_profile": None})
        assert r.status_code == 422


class TestChangePassword:

    def test_success(self, client, alice):
        _, headers = alice
        r = client.post("/api/profile/change-password", headers=headers,
                        json={"current_password": "secret1", "new_password": "better-secret"})
        assert r.status_code == 204

        old = client.post("/api/auth/sign-in",
                          json={"email": "alice@example.com", "password": "secret1"})
        assert old.status_code == 401
        sign_in(client, "alice@example.com", password="better-secret")

    def test_wrong_current_password(self, client, alice):
        _, headers = alice
        r = client.post("/api/profile/change-password", headers=headers,
                        json={"current_password": "nope-nope", "new_password": "better-secret"})
        assert r.status_code == 401
        assert r.json()["code"] == "invalid_credentials"

    def test_new_password_too_short(self, client, alice):
        _, headers = alice
        r = client.post("/api/profile/change-password", headers=headers,
                        json={"current_password": "secret1", "new_password": "123"})
        assert r.status_code == 422


class TestDeleteProfile:

    def test_deletes_user_and_owned_rows(self, client, test_db):
        user = sign_up(client, "carol@example.com", "carol")
        headers = bearer(sign_in(client, "carol@example.com")["token"])
        create_account(client, headers)

        r = client.delete("/api/profile", headers=headers)

        assert r.status_code == 204
        assert "Max-Age=0" in r.headers["set-cookie"]
        assert test_db.get(User, user["id"]) is None
        assert test_db.query(Account).filter(Account.user_id == user["id"]).count() == 0

    def test_token_of_deleted_user_sees_nothing(self, client):
        sign_up(client, "carol@example.com", "carol")
        headers = bearer(sign_in(client, "carol@example.com")["token"])
        client.delete("/api/profile", headers=headers)

        assert client.get("/api/profile", headers=headers).status_code == 404
        assert client.get("/api/accounts/", headers=headers).json() == []
