"""
ADW Token SDK - Errors

Every rejected ledger operation raises a TokenError subclass. The error
carries a stable ``code`` (the taxonomy name) and the HTTP status the
REST server answers with.
"""


class TokenError(Exception):
    """Ledger operation rejected."""

    code = "TokenError"
    http_status = 400

    def __init__(self, message: str = ""):
        self.message = message or self.code
        super().__init__(f"{self.code}: {self.message}")

    def to_dict(self) -> dict:
        return {"error": self.code, "message": self.message}


class Unauthorized(TokenError):
    """Caller lacks the role (or ownership) the operation requires."""

    code = "Unauthorized"
    http_status = 403

    def __init__(self, account: str, role: str):
        self.account = account
        self.role = role
        super().__init__(f"account {account} is missing {role}")


class Paused(TokenError):
    code = "Paused"
    http_status = 409

    def __init__(self):
        super().__init__("token transfers are paused")


class AlreadyPaused(TokenError):
    code = "AlreadyPaused"
    http_status = 409

    def __init__(self):
        super().__init__("token is already paused")


class NotPaused(TokenError):
    code = "NotPaused"
    http_status = 409

    def __init__(self):
        super().__init__("token is not paused")


class InsufficientBalance(TokenError):
    code = "InsufficientBalance"

    def __init__(self, account: str, balance: int, needed: int):
        self.account = account
        self.balance = balance
        self.needed = needed
        super().__init__(f"{account} has {balance}, needs {needed}")


class InsufficientAllowance(TokenError):
    code = "InsufficientAllowance"

    def __init__(self, owner: str, spender: str, allowance: int, needed: int):
        self.owner = owner
        self.spender = spender
        self.allowance = allowance
        self.needed = needed
        super().__init__(
            f"{spender} may spend {allowance} of {owner}'s tokens, needs {needed}"
        )


class InvalidRecipient(TokenError):
    code = "InvalidRecipient"

    def __init__(self, recipient: str):
        self.recipient = recipient
        super().__init__(f"cannot send tokens to {recipient}")


class Overflow(TokenError):
    code = "Overflow"

    def __init__(self, message: str = "amount exceeds uint256 range"):
        super().__init__(message)


# =============================================================================
# INPUT VALIDATION
# =============================================================================

class InvalidAddress(TokenError, ValueError):
    code = "InvalidAddress"

    def __init__(self, value):
        self.value = value
        super().__init__(f"not an address: {value!r}")


class InvalidAmount(TokenError, ValueError):
    code = "InvalidAmount"

    def __init__(self, value):
        self.value = value
        super().__init__(f"amount must be an integer in [0, 2**256-1], got {value!r}")


class InvalidRole(TokenError, ValueError):
    code = "InvalidRole"

    def __init__(self, value):
        self.value = value
        super().__init__(f"unknown role: {value!r}")


class InvalidSpender(TokenError, ValueError):
    code = "InvalidSpender"

    def __init__(self, spender: str):
        self.spender = spender
        super().__init__(f"cannot approve {spender}")


class InvalidOwner(TokenError, ValueError):
    code = "InvalidOwner"

    def __init__(self, owner: str):
        self.owner = owner
        super().__init__(f"cannot transfer ownership to {owner}")


class InvalidSender(TokenError, ValueError):
    code = "InvalidSender"

    def __init__(self, sender: str, confirmation: str):
        self.sender = sender
        self.confirmation = confirmation
        super().__init__(f"{sender} can only renounce roles for itself, not {confirmation}")
