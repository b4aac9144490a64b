"""Token facade tying governance, minters and the ledger to one state.

Every public call runs as a transaction: the state is snapshotted first,
events are buffered, and on failure the snapshot is restored and the buffer
dropped before the error propagates. Listeners run once the call's effects
are in place; a listener that raises fails the call and rolls it back.
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional

from .errors import ReentrantCall
from .events import EventListener, TokenEvent
from .governance import GovernanceController
from .ledger import BalanceHook, Ledger
from .minters import MinterRegistry
from .state import TokenPhase, TokenState


def _restore(state: TokenState, snapshot: TokenState) -> None:
    # Components hold references into ``state``; restore in place.
    state.phase = snapshot.phase
    state.governance.governance = snapshot.governance.governance
    state.governance.pending_governance = snapshot.governance.pending_governance
    state.minters.clear()
    state.minters.update(snapshot.minters)
    state.ledger.name = snapshot.ledger.name
    state.ledger.symbol = snapshot.ledger.symbol
    state.ledger.decimals = snapshot.ledger.decimals
    state.ledger.total_supply = snapshot.ledger.total_supply
    state.ledger.balances.clear()
    state.ledger.balances.update(snapshot.ledger.balances)
    state.ledger.allowances.clear()
    state.ledger.allowances.update(snapshot.ledger.allowances)


class Token:
    def __init__(
        self,
        state: Optional[TokenState] = None,
        listeners: Optional[List[EventListener]] = None,
        hooks: Optional[List[BalanceHook]] = None,
    ) -> None:
        self.state = state or TokenState()
        self.listeners: List[EventListener] = list(listeners or [])
        self._pending: List[TokenEvent] = []
        self._entered = False
        self.ledger = Ledger(self.state.ledger, self._buffer, hooks)
        self.governance = GovernanceController(self.state, self.ledger, self._buffer)
        self.minters = MinterRegistry(self.state, self.governance, self.ledger, self._buffer)

    def _buffer(self, event: TokenEvent) -> None:
        self._pending.append(event)

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        if self._entered:
            raise ReentrantCall("Token call entered while another call is in progress")
        snapshot = TokenState.from_dict(self.state.to_dict())
        self._entered = True
        self._pending = []
        try:
            yield
            # A listener failure fails the call, so it is rolled back too.
            events, self._pending = self._pending, []
            for event in events:
                for listener in self.listeners:
                    listener(event)
        except BaseException:
            _restore(self.state, snapshot)
            self._pending = []
            raise
        finally:
            self._entered = False

    # -- views -------------------------------------------------------------

    @property
    def initialized(self) -> bool:
        return self.state.phase == TokenPhase.ACTIVE

    @property
    def name(self) -> str:
        return self.state.ledger.name

    @property
    def symbol(self) -> str:
        return self.state.ledger.symbol

    @property
    def decimals(self) -> int:
        return self.state.ledger.decimals

    @property
    def total_supply(self) -> int:
        return self.ledger.total_supply

    @property
    def governance_principal(self) -> Optional[str]:
        return self.governance.governance

    @property
    def pending_governance(self) -> Optional[str]:
        return self.governance.pending_governance

    def balance_of(self, account: str) -> int:
        return self.ledger.balance_of(account)

    def allowance(self, owner: str, spender: str) -> int:
        return self.ledger.allowance(owner, spender)

    def is_minter(self, user: str) -> bool:
        return self.minters.is_minter(user)

    # -- governance ----------------------------------------------------------

    def initialize(self, caller: str, name: str, symbol: str) -> None:
        with self._transaction():
            self.governance.initialize(caller, name, symbol)

    def propose_governance(self, caller: str, candidate: Optional[str]) -> None:
        with self._transaction():
            self.governance.propose_governance(caller, candidate)

    def accept_governance(self, caller: str) -> None:
        with self._transaction():
            self.governance.accept_governance(caller)

    # -- supply control ------------------------------------------------------

    def set_minter(self, caller: str, user: str, allowed: bool) -> None:
        with self._transaction():
            self.minters.set_minter(caller, user, allowed)

    def mint(self, caller: str, user: str, amount: int) -> None:
        with self._transaction():
            self.minters.mint(caller, user, amount)

    def burn(self, caller: str, amount: int) -> None:
        with self._transaction():
            self.minters.burn(caller, amount)

    def burn_from(self, caller: str, account: str, amount: int) -> None:
        with self._transaction():
            self.minters.burn_from(caller, account, amount)

    # -- holder operations ---------------------------------------------------

    def transfer(self, caller: str, recipient: str, amount: int) -> None:
        with self._transaction():
            self.ledger.transfer(caller, recipient, amount)

    def approve(self, caller: str, spender: str, amount: int) -> None:
        with self._transaction():
            self.ledger.approve(caller, spender, amount)

    def transfer_from(self, caller: str, owner: str, recipient: str, amount: int) -> None:
        with self._transaction():
            self.ledger.transfer_from(caller, owner, recipient, amount)

    def increase_allowance(self, caller: str, spender: str, added: int) -> None:
        with self._transaction():
            self.ledger.increase_allowance(caller, spender, added)

    def decrease_allowance(self, caller: str, spender: str, subtracted: int) -> None:
        with self._transaction():
            self.ledger.decrease_allowance(caller, spender, subtracted)
