"""
ADW Token SDK - Token Contract

ERC-20 ledger with role-gated minting, an admin-controlled pause gate
and single-owner ownership transfer, run as an in-process service.

Every operation takes the calling identity explicitly (``sender``) and
runs under one lock, so operations are applied one at a time and no
caller ever sees a half-applied change.
"""

import functools
import logging
import threading
from collections import deque
from typing import Callable, Dict, List, Optional

from .access_registry import AccessRegistry
from .balance_ledger import BalanceLedger
from .errors import (
    InvalidOwner,
    InvalidRecipient,
    InvalidSender,
    InvalidSpender,
    TokenError,
)
from .pause_gate import PauseGate
from .token_types import (
    DEFAULT_ADMIN_ROLE,
    MINTER_ROLE,
    ZERO_ADDRESS,
    EventType,
    TokenConfig,
    TokenEvent,
    check_amount,
    role_id,
    role_name,
    to_address,
)

log = logging.getLogger(__name__)


def _serialized(method):
    """Run method under the contract lock and log rejections."""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            try:
                return method(self, *args, **kwargs)
            except TokenError as e:
                log.warning(f"{method.__name__} rejected: {e}")
                raise
    return wrapper


class TokenContract:
    """
    Off-chain ERC-20 token ledger.

    Usage:
        token = TokenContract("AdwaitToken", "ADW", 1_000_000 * 10**18, deployer)

        token.transfer(deployer, alice, 100)
        token.grant_minter_role(deployer, alice)
        token.mint(alice, bob, 1000)

        token.pause(deployer)
        token.transfer(deployer, bob, 1)    # raises Paused
        token.unpause(deployer)

    The deployer is credited the initial supply, holds the admin and
    minter roles, and is the owner.
    """

    def __init__(self, name: str, symbol: str, initial_supply: int,
                 deployer: str, decimals: int = 18, max_events: Optional[int] = None):
        self._lock = threading.RLock()
        self._name = name
        self._symbol = symbol
        self._decimals = decimals
        # max_events=None keeps every notification for the life of the ledger
        if max_events is not None and max_events < 1:
            raise ValueError(f"max_events must be positive, got {max_events}")
        self._events: deque = deque(maxlen=max_events)
        self._seq = 0
        self._subscribers: List[Callable[[TokenEvent], None]] = []

        deployer = to_address(deployer)
        check_amount(initial_supply)
        if deployer == ZERO_ADDRESS:
            raise InvalidOwner(deployer)

        self.ledger = BalanceLedger()
        self.access = AccessRegistry(owner=deployer)
        self.gate = PauseGate()

        self._emit(EventType.OWNERSHIP_TRANSFERRED,
                   previous_owner=ZERO_ADDRESS, new_owner=deployer)
        for role in (DEFAULT_ADMIN_ROLE, MINTER_ROLE):
            self.access.grant_role(role, deployer)
            self._emit(EventType.ROLE_GRANTED, role=role, account=deployer, sender=deployer)

        if initial_supply > 0:
            self.ledger.credit_new_supply(deployer, initial_supply)
            self._emit(EventType.TRANSFER, **{"from": ZERO_ADDRESS, "to": deployer, "value": initial_supply})
            self._emit(EventType.MINT, minter=deployer, to=deployer, value=initial_supply)

        log.info(f"Token {name} ({symbol}) deployed by {deployer}, supply {initial_supply}")

    @classmethod
    def from_config(cls, config: TokenConfig) -> "TokenContract":
        """Construct the ledger described by config."""
        return cls(
            name=config.name,
            symbol=config.symbol,
            initial_supply=config.initial_supply_units(),
            deployer=config.deployer,
            decimals=config.decimals,
        )

    # ═══════════════════════════════════════════════════════════════════════
    # NOTIFICATIONS
    # ═══════════════════════════════════════════════════════════════════════

    def _emit(self, event_type: EventType, **args) -> TokenEvent:
        self._seq += 1
        event = TokenEvent(event=event_type, args=args, seq=self._seq)
        self._events.append(event)
        log.debug(f"Event #{event.seq} {event_type.value} {args}")
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception as e:
                # The operation has already committed
                log.error(f"Subscriber {callback!r} failed on {event_type.value}: {e}")
        return event

    def subscribe(self, callback: Callable[[TokenEvent], None]) -> None:
        """Call callback with every future notification, in commit order."""
        with self._lock:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[[TokenEvent], None]) -> None:
        with self._lock:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

    @_serialized
    def events(self, event_type: Optional[EventType] = None, since: int = 0) -> List[TokenEvent]:
        """
        List notifications with optional filtering.

        Args:
            event_type: Only this kind of event
            since: Only events with seq greater than this (negative means all)

        Returns:
            Matching retained events in commit order
        """
        return [
            e for e in self._events
            if e.seq > since and (event_type is None or e.event == event_type)
        ]

    # ═══════════════════════════════════════════════════════════════════════
    # READS
    # ═══════════════════════════════════════════════════════════════════════

    @property
    def name(self) -> str:
        return self._name

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def decimals(self) -> int:
        return self._decimals

    @_serialized
    def balance_of(self, account: str) -> int:
        return self.ledger.balance_of(to_address(account))

    @_serialized
    def total_supply(self) -> int:
        return self.ledger.total_supply()

    @_serialized
    def allowance(self, owner: str, spender: str) -> int:
        return self.ledger.allowance(to_address(owner), to_address(spender))

    @_serialized
    def has_role(self, role: str, account: str) -> bool:
        return self.access.has_role(role_id(role), to_address(account))

    def is_admin(self, account: str) -> bool:
        return self.has_role(DEFAULT_ADMIN_ROLE, account)

    def is_minter(self, account: str) -> bool:
        return self.has_role(MINTER_ROLE, account)

    def get_role_admin(self, role: str) -> str:
        """Every role is administered by the admin role."""
        role_id(role)
        return DEFAULT_ADMIN_ROLE

    @_serialized
    def roles_of(self, account: str) -> List[str]:
        """Names (or ids, for custom roles) of the roles account holds."""
        return sorted(role_name(r) for r in self.access.roles_of(to_address(account)))

    @_serialized
    def is_paused(self) -> bool:
        return self.gate.paused

    @_serialized
    def owner(self) -> str:
        return self.access.owner

    @_serialized
    def snapshot(self) -> Dict:
        """Consistent view of the whole ledger state."""
        return {
            "name": self._name,
            "symbol": self._symbol,
            "decimals": self._decimals,
            "paused": self.gate.paused,
            **self.ledger.to_dict(),
            **self.access.to_dict(),
            "event_count": self._seq,
        }

    # ═══════════════════════════════════════════════════════════════════════
    # BALANCE LEDGER
    # ═══════════════════════════════════════════════════════════════════════

    def _require_recipient(self, recipient: str) -> str:
        recipient = to_address(recipient)
        if recipient == ZERO_ADDRESS:
            raise InvalidRecipient(recipient)
        return recipient

    @_serialized
    def transfer(self, sender: str, to: str, amount: int) -> bool:
        """Move amount from sender to to."""
        sender = to_address(sender)
        amount = check_amount(amount)
        self.gate.require_not_paused()
        to = self._require_recipient(to)

        self.ledger.move(sender, to, amount)
        self._emit(EventType.TRANSFER, **{"from": sender, "to": to, "value": amount})
        log.info(f"Transfer {amount} {sender} -> {to}")
        return True

    @_serialized
    def approve(self, sender: str, spender: str, amount: int) -> bool:
        """Set spender's allowance over sender's tokens to amount."""
        sender = to_address(sender)
        spender = to_address(spender)
        amount = check_amount(amount)
        if spender == ZERO_ADDRESS:
            raise InvalidSpender(spender)

        self.ledger.set_allowance(sender, spender, amount)
        self._emit(EventType.APPROVAL, owner=sender, spender=spender, value=amount)
        log.info(f"Approval {sender} -> {spender}: {amount}")
        return True

    @_serialized
    def transfer_from(self, sender: str, from_: str, to: str, amount: int) -> bool:
        """Move amount from from_ to to, spending sender's allowance."""
        sender = to_address(sender)
        from_ = to_address(from_)
        amount = check_amount(amount)
        self.gate.require_not_paused()
        to = self._require_recipient(to)
        self.ledger.require_allowance(from_, sender, amount)
        self.ledger.require_balance(from_, amount)

        self.ledger.spend_allowance(from_, sender, amount)
        self.ledger.move(from_, to, amount)
        self._emit(EventType.TRANSFER, **{"from": from_, "to": to, "value": amount})
        log.info(f"TransferFrom {amount} {from_} -> {to} by {sender}")
        return True

    @_serialized
    def mint(self, sender: str, to: str, amount: int) -> bool:
        """Create amount new tokens for to. Requires MINTER_ROLE."""
        sender = to_address(sender)
        self.access.require_role(MINTER_ROLE, sender)
        self.gate.require_not_paused()
        to = self._require_recipient(to)
        amount = check_amount(amount)

        self.ledger.credit_new_supply(to, amount)
        self._emit(EventType.TRANSFER, **{"from": ZERO_ADDRESS, "to": to, "value": amount})
        self._emit(EventType.MINT, minter=sender, to=to, value=amount)
        log.info(f"Mint {amount} to {to} by {sender}, supply {self.ledger.total_supply()}")
        return True

    # ═══════════════════════════════════════════════════════════════════════
    # PAUSE GATE
    # ═══════════════════════════════════════════════════════════════════════

    @_serialized
    def pause(self, sender: str) -> None:
        sender = to_address(sender)
        self.access.require_role(DEFAULT_ADMIN_ROLE, sender)
        self.gate.pause()
        self._emit(EventType.PAUSED, account=sender)
        log.info(f"Token paused by {sender}")

    @_serialized
    def unpause(self, sender: str) -> None:
        sender = to_address(sender)
        self.access.require_role(DEFAULT_ADMIN_ROLE, sender)
        self.gate.unpause()
        self._emit(EventType.UNPAUSED, account=sender)
        log.info(f"Token unpaused by {sender}")

    # ═══════════════════════════════════════════════════════════════════════
    # ACCESS REGISTRY
    # ═══════════════════════════════════════════════════════════════════════

    @_serialized
    def grant_role(self, sender: str, role: str, account: str) -> bool:
        """
        Grant role to account. Requires the admin role.

        Returns:
            True if account did not hold the role before
        """
        sender = to_address(sender)
        role = role_id(role)
        account = to_address(account)
        self.access.require_role(self.get_role_admin(role), sender)

        if not self.access.grant_role(role, account):
            return False
        self._emit(EventType.ROLE_GRANTED, role=role, account=account, sender=sender)
        log.info(f"{role_name(role)} granted to {account} by {sender}")
        return True

    @_serialized
    def revoke_role(self, sender: str, role: str, account: str) -> bool:
        """
        Revoke role from account. Requires the admin role.

        Returns:
            True if account held the role before
        """
        sender = to_address(sender)
        role = role_id(role)
        account = to_address(account)
        self.access.require_role(self.get_role_admin(role), sender)

        if not self.access.revoke_role(role, account):
            return False
        self._emit(EventType.ROLE_REVOKED, role=role, account=account, sender=sender)
        log.info(f"{role_name(role)} revoked from {account} by {sender}")
        return True

    @_serialized
    def renounce_role(self, sender: str, role: str, confirmation: str) -> bool:
        """Drop one of sender's own roles. confirmation must equal sender."""
        sender = to_address(sender)
        role = role_id(role)
        confirmation = to_address(confirmation)
        if confirmation != sender:
            raise InvalidSender(sender, confirmation)

        if not self.access.revoke_role(role, sender):
            return False
        self._emit(EventType.ROLE_REVOKED, role=role, account=sender, sender=sender)
        log.info(f"{role_name(role)} renounced by {sender}")
        return True

    def grant_minter_role(self, sender: str, account: str) -> bool:
        return self.grant_role(sender, MINTER_ROLE, account)

    def revoke_minter_role(self, sender: str, account: str) -> bool:
        return self.revoke_role(sender, MINTER_ROLE, account)

    @_serialized
    def transfer_ownership(self, sender: str, new_owner: str) -> None:
        """Hand the owner slot to new_owner. Only the current owner may call."""
        sender = to_address(sender)
        new_owner = to_address(new_owner)
        self.access.require_owner(sender)
        if new_owner == ZERO_ADDRESS:
            raise InvalidOwner(new_owner)

        previous = self.access.set_owner(new_owner)
        self._emit(EventType.OWNERSHIP_TRANSFERRED, previous_owner=previous, new_owner=new_owner)
        log.info(f"Ownership transferred {previous} -> {new_owner}")
