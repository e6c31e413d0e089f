"""
ADW Token SDK - Access Registry

Role sets (administrators, minters, any custom bytes32 role) and the
single owner slot. Admin and owner are separate authority channels:
admins manage roles and the pause gate, the owner only controls the
owner slot itself.

Not thread-safe on its own; TokenContract serializes access.
"""

import logging
from typing import Dict, List, Set

from .errors import Unauthorized
from .token_types import DEFAULT_ADMIN_ROLE, MINTER_ROLE, role_name

log = logging.getLogger(__name__)


class AccessRegistry:
    """
    Role membership and ownership.

    Usage:
        registry = AccessRegistry(owner=deployer)
        registry.grant_role(DEFAULT_ADMIN_ROLE, deployer)
        registry.require_role(MINTER_ROLE, caller)
    """

    def __init__(self, owner: str):
        self.owner = owner
        self._roles: Dict[str, Set[str]] = {
            DEFAULT_ADMIN_ROLE: set(),
            MINTER_ROLE: set(),
        }

    def has_role(self, role: str, account: str) -> bool:
        return account in self._roles.get(role, ())

    def is_admin(self, account: str) -> bool:
        return self.has_role(DEFAULT_ADMIN_ROLE, account)

    def is_minter(self, account: str) -> bool:
        return self.has_role(MINTER_ROLE, account)

    def require_role(self, role: str, account: str) -> None:
        """Raise Unauthorized unless account holds role."""
        if not self.has_role(role, account):
            raise Unauthorized(account, role_name(role))

    def require_owner(self, account: str) -> None:
        if account != self.owner:
            raise Unauthorized(account, "owner")

    def grant_role(self, role: str, account: str) -> bool:
        """Add account to role. Returns False if it already held it."""
        members = self._roles.setdefault(role, set())
        if account in members:
            return False
        members.add(account)
        return True

    def revoke_role(self, role: str, account: str) -> bool:
        """Remove account from role. Returns False if it did not hold it."""
        members = self._roles.get(role)
        if not members or account not in members:
            return False
        members.discard(account)
        if role == DEFAULT_ADMIN_ROLE and not members:
            log.warning("Last administrator %s removed; roles and pause state are now frozen", account)
        return True

    def set_owner(self, new_owner: str) -> str:
        """Replace the owner, returning the previous one."""
        previous, self.owner = self.owner, new_owner
        return previous

    def members(self, role: str) -> List[str]:
        return sorted(self._roles.get(role, ()))

    def admin_count(self) -> int:
        return len(self._roles[DEFAULT_ADMIN_ROLE])

    def roles_of(self, account: str) -> List[str]:
        """Role ids held by account."""
        return sorted(role for role, members in self._roles.items() if account in members)

    def to_dict(self) -> dict:
        return {
            "owner": self.owner,
            "roles": {role_name(role): sorted(members) for role, members in self._roles.items()},
        }
