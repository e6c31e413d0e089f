"""
Tests for the REST server.
"""

import pytest

from token_sdk.server import main, parse_amount
from token_sdk.errors import InvalidAmount

from conftest import ALICE, BOB, CAROL, DEPLOYER, INITIAL_SUPPLY


class TestParseAmount:

    def test_accepts_ints_and_strings(self):
        assert parse_amount(5) == 5
        assert parse_amount(" 1000000000000000000000000 ") == 10 ** 24

    @pytest.mark.parametrize("value", [1.0, "1.5", "-3", "", None, "0x10",
                                       "\u00b2", "\u0663", "9" * 5000, "1" * 79])
    def test_rejects(self, value):
        with pytest.raises(InvalidAmount):
            parse_amount(value)

    def test_largest_uint256_string(self):
        assert parse_amount(str(2 ** 256 - 1)) == 2 ** 256 - 1
        assert parse_amount("0" * 100 + "7") == 7

    def test_non_ascii_digits_are_bad_request(self, http):
        response = http.post("/api/transfer",
                             json={"sender": DEPLOYER, "to": BOB, "amount": "\u00b2"})
        assert response.status_code == 400
        assert response.get_json()["error"] == "InvalidAmount"


class TestReads:

    def test_health(self, http):
        assert http.get("/health").get_json()["ok"] is True

    def test_token_info(self, http):
        data = http.get("/api/token").get_json()
        assert data["name"] == "AdwaitToken"
        assert data["symbol"] == "ADW"
        assert data["total_supply"] == INITIAL_SUPPLY
        assert data["total_supply_formatted"] == "1000000 ADW"
        assert data["paused"] is False
        assert data["owner"] == DEPLOYER

    def test_balance(self, http):
        data = http.get(f"/api/balance/{DEPLOYER}").get_json()
        assert data["balance"] == INITIAL_SUPPLY

    def test_balance_invalid_address(self, http):
        response = http.get("/api/balance/bogus")
        assert response.status_code == 400
        assert response.get_json()["error"] == "InvalidAddress"

    def test_roles(self, http):
        data = http.get(f"/api/roles/{DEPLOYER}").get_json()
        assert data["is_admin"] is True
        assert data["is_minter"] is True
        assert data["roles"] == ["DEFAULT_ADMIN_ROLE", "MINTER_ROLE"]
        assert http.get(f"/api/roles/{ALICE}").get_json()["roles"] == []

    def test_has_role(self, http):
        data = http.get(f"/api/roles/MINTER_ROLE/{DEPLOYER}").get_json()
        assert data["has_role"] is True
        assert data["role_name"] == "MINTER_ROLE"
        assert http.get(f"/api/roles/nope/{DEPLOYER}").status_code == 400

    def test_events(self, http):
        http.post("/api/transfer", json={"sender": DEPLOYER, "to": BOB, "amount": 1})
        data = http.get("/api/events?type=Transfer").get_json()
        assert data["count"] == 2
        assert data["events"][-1]["args"]["to"] == BOB
        assert http.get("/api/events?type=Bogus").status_code == 400

    def test_events_negative_since(self, http):
        response = http.get("/api/events?since=-1")
        assert response.status_code == 400
        assert response.get_json()["error"] == "BadRequest"
        assert http.get("/api/events?since=0").get_json()["count"] == 5

    def test_token_info_matches_contract(self, http, token):
        token.pause(DEPLOYER)
        data = http.get("/api/token").get_json()
        assert data["paused"] is True
        assert data["decimals"] == token.decimals


class TestMutations:

    def test_transfer(self, http, token):
        response = http.post("/api/transfer",
                             json={"sender": DEPLOYER, "to": BOB, "amount": "100"})
        assert response.status_code == 200
        assert token.balance_of(BOB) == 100

    def test_insufficient_balance(self, http):
        response = http.post("/api/transfer", json={"sender": ALICE, "to": BOB, "amount": 1})
        assert response.status_code == 400
        assert response.get_json()["error"] == "InsufficientBalance"

    def test_missing_field(self, http):
        response = http.post("/api/transfer", json={"sender": DEPLOYER, "to": BOB})
        assert response.status_code == 400
        assert response.get_json()["error"] == "BadRequest"

    def test_no_body(self, http):
        assert http.post("/api/pause").status_code == 400

    def test_allowance_flow(self, http, token):
        http.post("/api/approve", json={"sender": DEPLOYER, "spender": ALICE, "amount": 50})
        assert http.get(f"/api/allowance/{DEPLOYER}/{ALICE}").get_json()["allowance"] == 50
        response = http.post("/api/transfer_from",
                             json={"sender": ALICE, "from": DEPLOYER, "to": CAROL, "amount": 30})
        assert response.status_code == 200
        assert token.balance_of(CAROL) == 30
        assert token.allowance(DEPLOYER, ALICE) == 20

    def test_mint_unauthorized(self, http):
        response = http.post("/api/mint", json={"sender": ALICE, "to": ALICE, "amount": 1})
        assert response.status_code == 403
        assert response.get_json()["error"] == "Unauthorized"

    def test_minter_lifecycle(self, http, token):
        response = http.post("/api/minters/grant", json={"sender": DEPLOYER, "account": ALICE})
        assert response.get_json()["changed"] is True
        response = http.post("/api/mint", json={"sender": ALICE, "to": BOB, "amount": 1000})
        assert response.get_json()["total_supply"] == INITIAL_SUPPLY + 1000
        http.post("/api/minters/revoke", json={"sender": DEPLOYER, "account": ALICE})
        assert http.post("/api/mint", json={"sender": ALICE, "to": BOB, "amount": 1}).status_code == 403
        assert http.post("/api/minters/bogus", json={"sender": DEPLOYER, "account": ALICE}).status_code == 404

    def test_pause_cycle(self, http):
        assert http.post("/api/pause", json={"sender": DEPLOYER}).status_code == 200
        response = http.post("/api/pause", json={"sender": DEPLOYER})
        assert response.status_code == 409
        assert response.get_json()["error"] == "AlreadyPaused"
        response = http.post("/api/transfer", json={"sender": DEPLOYER, "to": BOB, "amount": 1})
        assert response.get_json()["error"] == "Paused"
        assert http.post("/api/unpause", json={"sender": DEPLOYER}).status_code == 200
        assert http.post("/api/unpause", json={"sender": DEPLOYER}).get_json()["error"] == "NotPaused"

    def test_generic_roles(self, http, token):
        http.post("/api/roles/grant",
                  json={"sender": DEPLOYER, "role": "DEFAULT_ADMIN_ROLE", "account": ALICE})
        assert token.is_admin(ALICE)
        http.post("/api/roles/revoke",
                  json={"sender": ALICE, "role": "DEFAULT_ADMIN_ROLE", "account": DEPLOYER})
        assert not token.is_admin(DEPLOYER)
        response = http.post("/api/roles/renounce", json={"sender": ALICE, "role": "DEFAULT_ADMIN_ROLE"})
        assert response.get_json()["changed"] is True
        assert not token.is_admin(ALICE)

    def test_ownership(self, http):
        response = http.post("/api/ownership/transfer",
                             json={"sender": DEPLOYER, "new_owner": ALICE})
        assert response.get_json()["owner"] == ALICE
        response = http.post("/api/ownership/transfer",
                             json={"sender": DEPLOYER, "new_owner": BOB})
        assert response.status_code == 403


class TestMain:

    def test_main_builds_and_runs(self, monkeypatch, tmp_path):
        calls = {}

        def fake_run(self, host, port, debug):
            calls.update(host=host, port=port, app=self)

        monkeypatch.setattr("flask.Flask.run", fake_run)
        main(["--env-file", str(tmp_path / "missing.env"), "--symbol", "TST",
              "--initial-supply", "5", "--deployer", ALICE, "--port", "9000"])

        assert calls["port"] == 9000
        contract = calls["app"].config["TOKEN_CONTRACT"]
        assert contract.symbol == "TST"
        assert contract.balance_of(ALICE) == 5 * 10 ** 18
