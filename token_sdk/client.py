"""
ADW Token SDK - HTTP Client

Client for the token REST server.
"""

from typing import Any, Dict, List, Optional

import requests


class ClientError(Exception):
    """Server rejected the call, or could not be reached."""
    def __init__(self, code: str, message: str, status: int = 0):
        self.code = code
        self.message = message
        self.status = status
        super().__init__(f"{code}: {message}")


class TokenClient:
    """
    HTTP client for a token server.

    Usage:
        client = TokenClient("http://127.0.0.1:8545")
        client.transfer(sender=alice, to=bob, amount=100)
        balance = client.balance_of(bob)
    """

    def __init__(self, base_url: str = "http://127.0.0.1:8545", timeout: int = 30):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _call(self, method: str, path: str, body: Optional[dict] = None,
              params: Optional[dict] = None) -> Any:
        """Make a request and return the decoded JSON body."""
        try:
            response = requests.request(
                method,
                f"{self.base_url}{path}",
                json=body,
                params=params,
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            raise ClientError("ConnectionFailed", str(e))

        try:
            result = response.json()
        except ValueError:
            raise ClientError("BadResponse", response.text[:200], response.status_code)

        if response.status_code >= 400:
            raise ClientError(result.get("error", "HTTPError"),
                              result.get("message", ""), response.status_code)
        return result

    # ═══════════════════════════════════════════════════════════════════════
    # READS
    # ═══════════════════════════════════════════════════════════════════════

    def health(self) -> bool:
        """Test if the server answers."""
        try:
            return bool(self._call("GET", "/health").get("ok"))
        except ClientError:
            return False

    def token_info(self) -> Dict:
        return self._call("GET", "/api/token")

    def total_supply(self) -> int:
        return self.token_info()["total_supply"]

    def is_paused(self) -> bool:
        return self.token_info()["paused"]

    def owner(self) -> str:
        return self.token_info()["owner"]

    def balance_of(self, account: str) -> int:
        return self._call("GET", f"/api/balance/{account}")["balance"]

    def allowance(self, owner: str, spender: str) -> int:
        return self._call("GET", f"/api/allowance/{owner}/{spender}")["allowance"]

    def roles(self, account: str) -> Dict:
        return self._call("GET", f"/api/roles/{account}")

    def is_admin(self, account: str) -> bool:
        return self.roles(account)["is_admin"]

    def is_minter(self, account: str) -> bool:
        return self.roles(account)["is_minter"]

    def has_role(self, role: str, account: str) -> bool:
        return self._call("GET", f"/api/roles/{role}/{account}")["has_role"]

    def events(self, event_type: str = "", since: int = 0) -> List[Dict]:
        params = {"since": since}
        if event_type:
            params["type"] = event_type
        return self._call("GET", "/api/events", params=params)["events"]

    # ═══════════════════════════════════════════════════════════════════════
    # MUTATIONS
    # ═══════════════════════════════════════════════════════════════════════

    def transfer(self, sender: str, to: str, amount: int) -> Dict:
        return self._call("POST", "/api/transfer",
                          {"sender": sender, "to": to, "amount": str(amount)})

    def approve(self, sender: str, spender: str, amount: int) -> Dict:
        return self._call("POST", "/api/approve",
                          {"sender": sender, "spender": spender, "amount": str(amount)})

    def transfer_from(self, sender: str, from_: str, to: str, amount: int) -> Dict:
        return self._call("POST", "/api/transfer_from",
                          {"sender": sender, "from": from_, "to": to, "amount": str(amount)})

    def mint(self, sender: str, to: str, amount: int) -> Dict:
        return self._call("POST", "/api/mint",
                          {"sender": sender, "to": to, "amount": str(amount)})

    def pause(self, sender: str) -> Dict:
        return self._call("POST", "/api/pause", {"sender": sender})

    def unpause(self, sender: str) -> Dict:
        return self._call("POST", "/api/unpause", {"sender": sender})

    def grant_minter_role(self, sender: str, account: str) -> bool:
        return self._call("POST", "/api/minters/grant",
                          {"sender": sender, "account": account})["changed"]

    def revoke_minter_role(self, sender: str, account: str) -> bool:
        return self._call("POST", "/api/minters/revoke",
                          {"sender": sender, "account": account})["changed"]

    def grant_role(self, sender: str, role: str, account: str) -> bool:
        return self._call("POST", "/api/roles/grant",
                          {"sender": sender, "role": role, "account": account})["changed"]

    def revoke_role(self, sender: str, role: str, account: str) -> bool:
        return self._call("POST", "/api/roles/revoke",
                          {"sender": sender, "role": role, "account": account})["changed"]

    def renounce_role(self, sender: str, role: str) -> bool:
        return self._call("POST", "/api/roles/renounce",
                          {"sender": sender, "role": role})["changed"]

    def transfer_ownership(self, sender: str, new_owner: str) -> Dict:
        return self._call("POST", "/api/ownership/transfer",
                          {"sender": sender, "new_owner": new_owner})
