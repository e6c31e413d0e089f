"""
ADW Token SDK - Pause Gate

A single flag that halts balance-mutating operations. Toggling is
strict: pausing a paused ledger or unpausing an active one fails.
"""

from .errors import AlreadyPaused, NotPaused, Paused


class PauseGate:
    """Two states, Active and Paused; starts Active."""

    def __init__(self, paused: bool = False):
        self.paused = paused

    def require_not_paused(self) -> None:
        if self.paused:
            raise Paused()

    def require_paused(self) -> None:
        if not self.paused:
            raise NotPaused()

    def pause(self) -> None:
        if self.paused:
            raise AlreadyPaused()
        self.paused = True

    def unpause(self) -> None:
        self.require_paused()
        self.paused = False

    @property
    def state(self) -> str:
        return "paused" if self.paused else "active"
