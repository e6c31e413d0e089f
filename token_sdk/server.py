#!/usr/bin/env python3
"""
ADW Token SDK Server - REST API over one ledger

Endpoints:
  GET  /health                          - Liveness
  GET  /api/token                       - Name, symbol, supply, pause state, owner
  GET  /api/balance/<account>           - Balance of account
  GET  /api/allowance/<owner>/<spender> - Remaining allowance
  GET  /api/roles/<account>             - isAdmin / isMinter / roles held
  GET  /api/roles/<role>/<account>      - hasRole
  GET  /api/events?type=&since=         - Notification log
  POST /api/transfer                    - {sender, to, amount}
  POST /api/approve                     - {sender, spender, amount}
  POST /api/transfer_from               - {sender, from, to, amount}
  POST /api/mint                        - {sender, to, amount}
  POST /api/pause, /api/unpause         - {sender}
  POST /api/minters/grant|revoke        - {sender, account}
  POST /api/roles/grant|revoke          - {sender, role, account}
  POST /api/roles/renounce              - {sender, role}
  POST /api/ownership/transfer          - {sender, new_owner}

The ``sender`` field is taken as the calling identity; run the server
only where its callers are trusted.
"""

import argparse
import logging
import time

from flask import Flask, jsonify, request
from flask_cors import CORS

from .config import load_config
from .errors import InvalidAmount, TokenError
from .token_contract import TokenContract
from .token_types import EventType, check_amount, format_units, role_id, role_name, to_address

log = logging.getLogger(__name__)


# =============================================================================
# REQUEST HELPERS
# =============================================================================

def parse_amount(value) -> int:
    """Accept JSON ints and decimal strings. Floats are rejected."""
    if isinstance(value, str):
        digits = value.strip()
        # uint256 has at most 78 decimal digits
        if not (digits.isascii() and digits.isdigit()) or len(digits.lstrip("0")) > 78:
            raise InvalidAmount(value)
        value = int(digits)
    return check_amount(value)


def _body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise _BadRequest("No JSON object provided")
    return data


def _field(data: dict, name: str):
    if name not in data:
        raise _BadRequest(f"Missing required field: {name}")
    return data[name]


class _BadRequest(Exception):
    pass


# =============================================================================
# FLASK APP
# =============================================================================

def create_app(contract: TokenContract) -> Flask:
    """Build the REST app serving contract."""
    app = Flask(__name__)
    CORS(app)
    app.config["TOKEN_CONTRACT"] = contract

    @app.errorhandler(TokenError)
    def handle_token_error(e: TokenError):
        return jsonify(e.to_dict()), e.http_status

    @app.errorhandler(_BadRequest)
    def handle_bad_request(e: _BadRequest):
        return jsonify({"error": "BadRequest", "message": str(e)}), 400

    @app.errorhandler(ValueError)
    def handle_value_error(e: ValueError):
        log.warning(f"Rejected request {request.path}: {e}")
        return jsonify({"error": "BadRequest", "message": str(e)}), 400

    # ------------------------------------------------------------------ reads

    @app.route("/health")
    def health():
        return jsonify({"ok": True, "timestamp": int(time.time())})

    @app.route("/api/token")
    def api_token():
        snap = contract.snapshot()
        return jsonify({
            "name": snap["name"],
            "symbol": snap["symbol"],
            "decimals": snap["decimals"],
            "total_supply": snap["total_supply"],
            "total_supply_formatted": format_units(snap["total_supply"], snap["decimals"], snap["symbol"]),
            "paused": snap["paused"],
            "owner": snap["owner"],
        })

    @app.route("/api/balance/<account>")
    def api_balance(account):
        account = to_address(account)
        balance = contract.balance_of(account)
        return jsonify({
            "account": account,
            "balance": balance,
            "formatted": format_units(balance, contract.decimals, contract.symbol),
        })

    @app.route("/api/allowance/<owner>/<spender>")
    def api_allowance(owner, spender):
        owner, spender = to_address(owner), to_address(spender)
        return jsonify({
            "owner": owner,
            "spender": spender,
            "allowance": contract.allowance(owner, spender),
        })

    @app.route("/api/roles/<account>")
    def api_roles(account):
        account = to_address(account)
        held = contract.roles_of(account)
        return jsonify({
            "account": account,
            "is_admin": "DEFAULT_ADMIN_ROLE" in held,
            "is_minter": "MINTER_ROLE" in held,
            "roles": held,
        })

    @app.route("/api/roles/<role>/<account>")
    def api_has_role(role, account):
        role, account = role_id(role), to_address(account)
        return jsonify({
            "role": role,
            "role_name": role_name(role),
            "account": account,
            "has_role": contract.has_role(role, account),
        })

    @app.route("/api/events")
    def api_events():
        event_type = request.args.get("type", "")
        try:
            since = int(request.args.get("since", 0))
            kind = EventType(event_type) if event_type else None
        except ValueError:
            raise _BadRequest(f"Invalid event filter: type={event_type!r}")
        if since < 0:
            raise _BadRequest(f"Invalid event filter: since={since}")
        events = contract.events(event_type=kind, since=since)
        return jsonify({"events": [e.to_dict() for e in events], "count": len(events)})

    # -------------------------------------------------------------- mutations

    @app.route("/api/transfer", methods=["POST"])
    def api_transfer():
        data = _body()
        contract.transfer(_field(data, "sender"), _field(data, "to"),
                          parse_amount(_field(data, "amount")))
        return jsonify({"success": True})

    @app.route("/api/approve", methods=["POST"])
    def api_approve():
        data = _body()
        contract.approve(_field(data, "sender"), _field(data, "spender"),
                         parse_amount(_field(data, "amount")))
        return jsonify({"success": True})

    @app.route("/api/transfer_from", methods=["POST"])
    def api_transfer_from():
        data = _body()
        contract.transfer_from(_field(data, "sender"), _field(data, "from"),
                               _field(data, "to"), parse_amount(_field(data, "amount")))
        return jsonify({"success": True})

    @app.route("/api/mint", methods=["POST"])
    def api_mint():
        data = _body()
        contract.mint(_field(data, "sender"), _field(data, "to"),
                      parse_amount(_field(data, "amount")))
        return jsonify({"success": True, "total_supply": contract.total_supply()})

    @app.route("/api/pause", methods=["POST"])
    def api_pause():
        contract.pause(_field(_body(), "sender"))
        return jsonify({"success": True, "paused": True})

    @app.route("/api/unpause", methods=["POST"])
    def api_unpause():
        contract.unpause(_field(_body(), "sender"))
        return jsonify({"success": True, "paused": False})

    @app.route("/api/minters/<action>", methods=["POST"])
    def api_minters(action):
        data = _body()
        if action == "grant":
            changed = contract.grant_minter_role(_field(data, "sender"), _field(data, "account"))
        elif action == "revoke":
            changed = contract.revoke_minter_role(_field(data, "sender"), _field(data, "account"))
        else:
            return jsonify({"error": "NotFound", "message": f"Unknown action: {action}"}), 404
        return jsonify({"success": True, "changed": changed})

    @app.route("/api/roles/grant", methods=["POST"])
    def api_grant_role():
        data = _body()
        changed = contract.grant_role(_field(data, "sender"), _field(data, "role"),
                                      _field(data, "account"))
        return jsonify({"success": True, "changed": changed})

    @app.route("/api/roles/revoke", methods=["POST"])
    def api_revoke_role():
        data = _body()
        changed = contract.revoke_role(_field(data, "sender"), _field(data, "role"),
                                       _field(data, "account"))
        return jsonify({"success": True, "changed": changed})

    @app.route("/api/roles/renounce", methods=["POST"])
    def api_renounce_role():
        data = _body()
        sender = _field(data, "sender")
        changed = contract.renounce_role(sender, _field(data, "role"), data.get("account", sender))
        return jsonify({"success": True, "changed": changed})

    @app.route("/api/ownership/transfer", methods=["POST"])
    def api_transfer_ownership():
        data = _body()
        contract.transfer_ownership(_field(data, "sender"), _field(data, "new_owner"))
        return jsonify({"success": True, "owner": contract.owner()})

    return app


# =============================================================================
# MAIN
# =============================================================================

def main(argv=None):
    parser = argparse.ArgumentParser(description="ADW Token ledger REST server")
    parser.add_argument("--config", help="JSON config file")
    parser.add_argument("--env-file", default=".env", help="KEY=VALUE file (default: .env)")
    parser.add_argument("--name", help="Token name")
    parser.add_argument("--symbol", help="Token symbol")
    parser.add_argument("--decimals", type=int, help="Token decimals")
    parser.add_argument("--initial-supply", type=int, help="Initial supply in whole tokens")
    parser.add_argument("--deployer", help="Deployer address (admin, minter, owner)")
    parser.add_argument("--host", help="Bind address")
    parser.add_argument("--port", type=int, help="HTTP port")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s [%(levelname)s] %(message)s'
    )

    config = load_config(
        config_path=args.config,
        env_file=args.env_file,
        overrides={
            "name": args.name,
            "symbol": args.symbol,
            "decimals": args.decimals,
            "initial_supply": args.initial_supply,
            "deployer": args.deployer,
            "host": args.host,
            "port": args.port,
        },
    )
    contract = TokenContract.from_config(config)
    app = create_app(contract)

    log.info(f"Starting token server on {config.host}:{config.port}")
    log.info(f"Owner/admin/minter: {config.deployer}")
    app.run(host=config.host, port=config.port, debug=False)


if __name__ == "__main__":
    main()
