"""Minter registry and the supply operations it gates.

A single flag per principal grants mint, burn and burn-from rights together.
Authorization is always checked before the ledger is touched.
"""

from typing import List

from .errors import Unauthorized
from .events import EventListener, MinterUpdated
from .governance import GovernanceController
from .ledger import Ledger
from .state import TokenState


class MinterRegistry:
    def __init__(
        self,
        state: TokenState,
        governance: GovernanceController,
        ledger: Ledger,
        emit: EventListener,
    ) -> None:
        self._state = state
        self._governance = governance
        self._ledger = ledger
        self._emit = emit

    def is_minter(self, user: str) -> bool:
        return self._state.minters.get(user, False)

    def minters(self) -> List[str]:
        return sorted(user for user, allowed in self._state.minters.items() if allowed)

    def require_minter(self, caller: str) -> None:
        if not self.is_minter(caller):
            raise Unauthorized(f"{caller} is not a minter")

    def set_minter(self, caller: str, user: str, allowed: bool) -> None:
        self._governance.require_governance(caller)
        self._state.minters[user] = bool(allowed)
        self._emit(MinterUpdated(user=user, allowed=bool(allowed)))

    def mint(self, caller: str, user: str, amount: int) -> None:
        self.require_minter(caller)
        self._ledger.credit(user, amount)

    def burn(self, caller: str, amount: int) -> None:
        self.require_minter(caller)
        self._ledger.debit(caller, amount)

    def burn_from(self, caller: str, account: str, amount: int) -> None:
        self.require_minter(caller)
        self._ledger.spend_allowance(account, caller, amount)
        self._ledger.debit(account, amount)
