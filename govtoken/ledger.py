"""Fungible balance ledger: balances, allowances and total supply.

Supply control lives elsewhere; this module only knows how to move, create
and destroy units and how to account for allowances. Every mutation reports
a ``Transfer`` or ``Approval`` event through the ``emit`` callable it was
built with.
"""

from typing import Callable, List, Optional

from . import config
from .errors import InsufficientAllowance, InsufficientBalance, InvalidAmount, Overflow
from .events import Approval, EventListener, Transfer
from .state import LedgerState

BalanceHook = Callable[[Optional[str], Optional[str], int], None]


def require_amount(amount: int) -> int:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmount(f"Amount must be an integer, got {amount!r}")
    if amount < 0:
        raise InvalidAmount(f"Amount must not be negative, got {amount}")
    if amount > config.MAX_UINT256:
        raise Overflow(f"Amount {amount} exceeds uint256")
    return amount


class Ledger:
    def __init__(
        self,
        state: LedgerState,
        emit: EventListener,
        hooks: Optional[List[BalanceHook]] = None,
    ) -> None:
        self.state = state
        self._emit = emit
        self.hooks: List[BalanceHook] = hooks if hooks is not None else []

    def setup_metadata(self, name: str, symbol: str) -> None:
        self.state.name = name
        self.state.symbol = symbol
        self.state.decimals = config.DEFAULT_DECIMALS

    # -- views -------------------------------------------------------------

    @property
    def total_supply(self) -> int:
        return self.state.total_supply

    def balance_of(self, account: str) -> int:
        return self.state.balances.get(account, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self.state.allowances.get(owner, {}).get(spender, 0)

    # -- supply primitives ---------------------------------------------------

    def credit(self, account: str, amount: int) -> None:
        require_amount(amount)
        new_supply = self.state.total_supply + amount
        if new_supply > config.MAX_UINT256:
            raise Overflow(f"Total supply would exceed uint256 (crediting {amount} to {account})")
        self.state.total_supply = new_supply
        self.state.balances[account] = self.balance_of(account) + amount
        self._after_balance_change(None, account, amount)

    def debit(self, account: str, amount: int) -> None:
        require_amount(amount)
        balance = self.balance_of(account)
        if balance < amount:
            raise InsufficientBalance(f"{account} holds {balance}, cannot debit {amount}")
        self.state.balances[account] = balance - amount
        self.state.total_supply -= amount
        self._after_balance_change(account, None, amount)

    def spend_allowance(self, owner: str, spender: str, amount: int) -> None:
        require_amount(amount)
        current = self.allowance(owner, spender)
        if current == config.MAX_UINT256:
            return
        if current < amount:
            raise InsufficientAllowance(
                f"{spender} may spend {current} of {owner}'s balance, requested {amount}"
            )
        self._set_allowance(owner, spender, current - amount)

    # -- holder operations ---------------------------------------------------

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        require_amount(amount)
        balance = self.balance_of(sender)
        if balance < amount:
            raise InsufficientBalance(f"{sender} holds {balance}, cannot transfer {amount}")
        self.state.balances[sender] = balance - amount
        self.state.balances[recipient] = self.balance_of(recipient) + amount
        self._after_balance_change(sender, recipient, amount)

    def approve(self, owner: str, spender: str, amount: int) -> None:
        require_amount(amount)
        self._set_allowance(owner, spender, amount)

    def transfer_from(self, spender: str, owner: str, recipient: str, amount: int) -> None:
        self.spend_allowance(owner, spender, amount)
        self.transfer(owner, recipient, amount)

    def increase_allowance(self, owner: str, spender: str, added: int) -> None:
        require_amount(added)
        updated = self.allowance(owner, spender) + added
        if updated > config.MAX_UINT256:
            raise Overflow(f"Allowance of {spender} over {owner} would exceed uint256")
        self._set_allowance(owner, spender, updated)

    def decrease_allowance(self, owner: str, spender: str, subtracted: int) -> None:
        require_amount(subtracted)
        current = self.allowance(owner, spender)
        if current < subtracted:
            raise InsufficientAllowance(
                f"Allowance of {spender} over {owner} is {current}, cannot decrease by {subtracted}"
            )
        self._set_allowance(owner, spender, current - subtracted)

    # -- internals -----------------------------------------------------------

    def _set_allowance(self, owner: str, spender: str, amount: int) -> None:
        self.state.allowances.setdefault(owner, {})[spender] = amount
        self._emit(Approval(owner=owner, spender=spender, amount=amount))

    def _after_balance_change(self, sender: Optional[str], recipient: Optional[str], amount: int) -> None:
        self._emit(Transfer(sender=sender, recipient=recipient, amount=amount))
        for hook in self.hooks:
            hook(sender, recipient, amount)
