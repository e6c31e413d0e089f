"""
ADW Token SDK - Data Types

Addresses, role identifiers, amounts, ledger notifications and the
deployment config shared by every other module.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
import json
import time

from web3 import Web3

from .errors import InvalidAddress, InvalidAmount, InvalidRole


# =============================================================================
# ADDRESSES
# =============================================================================

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def to_address(value) -> str:
    """Normalize an account identity to its EIP-55 checksummed form."""
    if not isinstance(value, str) or not Web3.is_address(value):
        raise InvalidAddress(value)
    # mixed case must be a valid EIP-55 checksum
    hex_part = value[2:] if value[:2].lower() == "0x" else value
    if hex_part not in (hex_part.lower(), hex_part.upper()) and not Web3.is_checksum_address(value):
        raise InvalidAddress(value)
    return Web3.to_checksum_address(value)


# =============================================================================
# AMOUNTS
# =============================================================================

MAX_UINT256 = 2 ** 256 - 1


def check_amount(value) -> int:
    """Reject anything that is not a uint256."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAmount(value)
    if value < 0 or value > MAX_UINT256:
        raise InvalidAmount(value)
    return value


# =============================================================================
# ROLES
# =============================================================================

DEFAULT_ADMIN_ROLE = "0x" + "00" * 32
MINTER_ROLE = Web3.to_hex(Web3.keccak(text="MINTER_ROLE"))

ROLE_NAMES = {
    "DEFAULT_ADMIN_ROLE": DEFAULT_ADMIN_ROLE,
    "MINTER_ROLE": MINTER_ROLE,
}
_ROLE_BY_ID = {v: k for k, v in ROLE_NAMES.items()}


def role_id(value) -> str:
    """Resolve a role name or a bytes32 hex id to the canonical hex id."""
    if not isinstance(value, str):
        raise InvalidRole(value)
    if value in ROLE_NAMES:
        return ROLE_NAMES[value]
    hex_part = value[2:] if value.lower().startswith("0x") else ""
    if len(hex_part) != 64:
        raise InvalidRole(value)
    try:
        bytes.fromhex(hex_part)
    except ValueError:
        raise InvalidRole(value)
    return "0x" + hex_part.lower()


def role_name(role: str) -> str:
    """Readable name for a role id (the id itself for custom roles)."""
    return _ROLE_BY_ID.get(role, role)


# =============================================================================
# NOTIFICATIONS
# =============================================================================

class EventType(Enum):
    """Ledger notification kinds"""
    TRANSFER = "Transfer"
    APPROVAL = "Approval"
    MINT = "Mint"
    PAUSED = "Paused"
    UNPAUSED = "Unpaused"
    ROLE_GRANTED = "RoleGranted"
    ROLE_REVOKED = "RoleRevoked"
    OWNERSHIP_TRANSFERRED = "OwnershipTransferred"


@dataclass
class TokenEvent:
    """
    A notification emitted by a committed ledger operation.

    Structure:
      - event: EventType
      - args: event arguments (addresses, role ids, integer amounts)
      - seq: position in the ledger's event log, starting at 1
      - created_ts: Unix timestamp of the commit
    """
    event: EventType
    args: dict
    seq: int = 0
    created_ts: int = field(default_factory=lambda: int(time.time()))

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "event": self.event.value,
            "args": dict(self.args),
            "seq": self.seq,
            "created_ts": self.created_ts,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TokenEvent":
        """Create TokenEvent from dictionary."""
        return cls(
            event=EventType(data["event"]),
            args=dict(data.get("args", {})),
            seq=int(data.get("seq", 0)),
            created_ts=int(data.get("created_ts", time.time())),
        )

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=2)


# =============================================================================
# DEPLOYMENT CONFIG
# =============================================================================

@dataclass
class TokenConfig:
    """
    Parameters for constructing a ledger once.

    initial_supply is in whole tokens; the ledger is credited
    initial_supply * 10**decimals base units.
    """
    name: str
    symbol: str
    initial_supply: int
    deployer: str
    decimals: int = 18
    host: str = "127.0.0.1"
    port: int = 8545

    def __post_init__(self):
        if not self.name:
            raise ValueError("Token name must not be empty")
        if not self.symbol:
            raise ValueError("Token symbol must not be empty")
        if isinstance(self.decimals, bool) or not isinstance(self.decimals, int) \
                or not 0 <= self.decimals <= 77:
            raise ValueError(f"Decimals must be an integer in [0, 77], got {self.decimals!r}")
        if isinstance(self.initial_supply, bool) or not isinstance(self.initial_supply, int) \
                or self.initial_supply < 0:
            raise ValueError(f"Initial supply must be a non-negative integer, got {self.initial_supply!r}")
        if not 0 < self.port < 65536:
            raise ValueError(f"Port out of range: {self.port}")
        self.deployer = to_address(self.deployer)
        check_amount(self.initial_supply_units())

    def initial_supply_units(self) -> int:
        """Initial supply in base units."""
        return self.initial_supply * 10 ** self.decimals

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "symbol": self.symbol,
            "decimals": self.decimals,
            "initial_supply": self.initial_supply,
            "deployer": self.deployer,
            "host": self.host,
            "port": self.port,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TokenConfig":
        return cls(
            name=data["name"],
            symbol=data["symbol"],
            initial_supply=int(data["initial_supply"]),
            deployer=data["deployer"],
            decimals=int(data.get("decimals", 18)),
            host=data.get("host", "127.0.0.1"),
            port=int(data.get("port", 8545)),
        )


def format_units(amount: int, decimals: int = 18, symbol: Optional[str] = None) -> str:
    """Render base units as a decimal string (1500000000000000000 -> '1.5')."""
    whole, frac = divmod(amount, 10 ** decimals)
    text = str(whole)
    if frac:
        text += "." + str(frac).zfill(decimals).rstrip("0")
    return f"{text} {symbol}" if symbol else text
