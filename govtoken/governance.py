"""Governance identity and its two-step succession protocol.

The current governance principal proposes a successor; the successor takes
over only by accepting. Until then authority stays where it is, so a mistyped
candidate costs nothing but a second proposal.
"""

from typing import Optional

from .errors import AlreadyInitialized, Unauthorized
from .events import EventListener, GovernanceModified, GovernanceProposed
from .ledger import Ledger
from .state import TokenPhase, TokenState, can_transition, transition


class GovernanceController:
    def __init__(self, state: TokenState, ledger: Ledger, emit: EventListener) -> None:
        self._state = state
        self._ledger = ledger
        self._emit = emit

    @property
    def governance(self) -> Optional[str]:
        return self._state.governance.governance

    @property
    def pending_governance(self) -> Optional[str]:
        return self._state.governance.pending_governance

    def initialize(self, caller: str, name: str, symbol: str) -> None:
        if not can_transition(self._state.phase, TokenPhase.ACTIVE):
            raise AlreadyInitialized(f"Token already initialized by {self.governance}")
        self._ledger.setup_metadata(name, symbol)
        self._state.governance.governance = caller
        self._state.governance.pending_governance = None
        self._state.phase = transition(self._state.phase, TokenPhase.ACTIVE)

    def require_governance(self, caller: str) -> None:
        if self.governance is None or caller != self.governance:
            raise Unauthorized(f"{caller} is not the governance principal")

    def propose_governance(self, caller: str, candidate: Optional[str]) -> None:
        """Record ``candidate`` as pending successor; ``None`` withdraws any pending proposal."""
        self.require_governance(caller)
        self._state.governance.pending_governance = candidate
        self._emit(GovernanceProposed(candidate=candidate))

    def accept_governance(self, caller: str) -> None:
        pending = self.pending_governance
        if pending is None or caller != pending:
            raise Unauthorized(f"{caller} is not the pending governance principal")
        self._state.governance.governance = pending
        self._state.governance.pending_governance = None
        self._emit(GovernanceModified(new_governance=pending))
