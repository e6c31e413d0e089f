"""
ADW Token SDK - Balance Ledger

Balances, allowances and total supply. Every mutation checks its
preconditions before writing anything, so a rejected call leaves the
ledger untouched and totalSupply always equals the sum of balances.

Not thread-safe on its own; TokenContract serializes access.
"""

from typing import Dict, List, Tuple

from .errors import InsufficientAllowance, InsufficientBalance, Overflow
from .token_types import MAX_UINT256


class BalanceLedger:
    """
    Balance and allowance bookkeeping.

    Amounts are plain Python ints in base units. Accounts absent from the
    mappings have a balance (and allowance) of zero.
    """

    def __init__(self):
        self._balances: Dict[str, int] = {}
        self._allowances: Dict[Tuple[str, str], int] = {}
        self._total_supply = 0

    # ═══════════════════════════════════════════════════════════════════════
    # READS
    # ═══════════════════════════════════════════════════════════════════════

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def total_supply(self) -> int:
        return self._total_supply

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((owner, spender), 0)

    def holders(self) -> List[str]:
        """Accounts with a non-zero balance."""
        return sorted(a for a, b in self._balances.items() if b > 0)

    def check_conservation(self) -> bool:
        """True if totalSupply equals the sum of all balances."""
        return sum(self._balances.values()) == self._total_supply

    # ═══════════════════════════════════════════════════════════════════════
    # MUTATIONS
    # ═══════════════════════════════════════════════════════════════════════

    def require_balance(self, account: str, amount: int) -> None:
        balance = self.balance_of(account)
        if balance < amount:
            raise InsufficientBalance(account, balance, amount)

    def move(self, sender: str, recipient: str, amount: int) -> None:
        """Debit sender and credit recipient."""
        self.require_balance(sender, amount)
        self._balances[sender] = self.balance_of(sender) - amount
        self._balances[recipient] = self.balance_of(recipient) + amount

    def require_mintable(self, amount: int) -> None:
        if self._total_supply + amount > MAX_UINT256:
            raise Overflow(
                f"totalSupply {self._total_supply} + {amount} exceeds uint256"
            )

    def credit_new_supply(self, recipient: str, amount: int) -> None:
        """Create amount new tokens in recipient's balance."""
        self.require_mintable(amount)
        # balance <= totalSupply, so the balance cannot overflow either
        self._total_supply += amount
        self._balances[recipient] = self.balance_of(recipient) + amount

    def set_allowance(self, owner: str, spender: str, amount: int) -> None:
        if amount:
            self._allowances[(owner, spender)] = amount
        else:
            self._allowances.pop((owner, spender), None)

    def require_allowance(self, owner: str, spender: str, amount: int) -> None:
        current = self.allowance(owner, spender)
        if current < amount:
            raise InsufficientAllowance(owner, spender, current, amount)

    def spend_allowance(self, owner: str, spender: str, amount: int) -> None:
        """Consume amount of spender's allowance. MAX_UINT256 never decreases."""
        self.require_allowance(owner, spender, amount)
        current = self.allowance(owner, spender)
        if current != MAX_UINT256:
            self.set_allowance(owner, spender, current - amount)

    def to_dict(self) -> dict:
        return {
            "total_supply": self._total_supply,
            "balances": {a: self._balances[a] for a in self.holders()},
            "allowances": [
                {"owner": o, "spender": s, "amount": v}
                for (o, s), v in sorted(self._allowances.items())
            ],
        }
