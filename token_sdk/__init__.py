"""
ADW Token SDK

Off-chain ERC-20 ledger with role-gated minting, an admin pause gate and
single-owner ownership transfer.

Architecture:
  - BalanceLedger: balances, allowances, total supply
  - AccessRegistry: admin/minter role sets and the owner slot
  - PauseGate: one flag halting transfers and mints
  - TokenContract: composes the three behind one lock
  - server / client: REST surface over one TokenContract

Usage:
    from token_sdk import TokenContract

    token = TokenContract("AdwaitToken", "ADW", 1_000_000 * 10**18, deployer)
    token.grant_minter_role(deployer, alice)
    token.mint(alice, bob, 1000)
    token.pause(deployer)
"""

from .errors import (
    TokenError,
    Unauthorized,
    Paused,
    AlreadyPaused,
    NotPaused,
    InsufficientBalance,
    InsufficientAllowance,
    InvalidRecipient,
    Overflow,
    InvalidAddress,
    InvalidAmount,
    InvalidRole,
    InvalidSpender,
    InvalidOwner,
    InvalidSender,
)
from .token_types import (
    ZERO_ADDRESS,
    MAX_UINT256,
    DEFAULT_ADMIN_ROLE,
    MINTER_ROLE,
    EventType,
    TokenEvent,
    TokenConfig,
    to_address,
    role_id,
    format_units,
)
from .access_registry import AccessRegistry
from .pause_gate import PauseGate
from .balance_ledger import BalanceLedger
from .token_contract import TokenContract
from .config import load_config
from .client import TokenClient, ClientError

__version__ = "0.1.0"
__all__ = [
    # Ledger
    "TokenContract", "BalanceLedger", "AccessRegistry", "PauseGate",
    # Types
    "ZERO_ADDRESS", "MAX_UINT256", "DEFAULT_ADMIN_ROLE", "MINTER_ROLE",
    "EventType", "TokenEvent", "TokenConfig",
    "to_address", "role_id", "format_units",
    # Config / HTTP
    "load_config", "TokenClient", "ClientError",
    # Errors
    "TokenError", "Unauthorized", "Paused", "AlreadyPaused", "NotPaused",
    "InsufficientBalance", "InsufficientAllowance", "InvalidRecipient",
    "Overflow", "InvalidAddress", "InvalidAmount", "InvalidRole",
    "InvalidSpender", "InvalidOwner", "InvalidSender",
]
