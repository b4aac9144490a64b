from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from . import config


class TokenPhase(str, Enum):
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"


ALLOWED_TRANSITIONS: Dict[TokenPhase, List[TokenPhase]] = {
    TokenPhase.UNINITIALIZED: [TokenPhase.ACTIVE],
    TokenPhase.ACTIVE: [],
}


def can_transition(current: TokenPhase, target: TokenPhase) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, [])


def transition(current: TokenPhase, target: TokenPhase) -> TokenPhase:
    if not can_transition(current, target):
        raise ValueError(f"Illegal transition: {current.value} -> {target.value}")
    return target


def parse_phase(raw: str) -> TokenPhase:
    try:
        return TokenPhase(raw)
    except ValueError as exc:
        raise ValueError(f"Unknown token phase: {raw}") from exc


@dataclass
class GovernanceState:
    governance: Optional[str] = None
    pending_governance: Optional[str] = None


@dataclass
class LedgerState:
    name: str = ""
    symbol: str = ""
    decimals: int = config.DEFAULT_DECIMALS
    total_supply: int = 0
    balances: Dict[str, int] = field(default_factory=dict)
    allowances: Dict[str, Dict[str, int]] = field(default_factory=dict)


@dataclass
class TokenState:
    """Everything a token instance owns, in one injectable struct."""

    phase: TokenPhase = TokenPhase.UNINITIALIZED
    governance: GovernanceState = field(default_factory=GovernanceState)
    minters: Dict[str, bool] = field(default_factory=dict)
    ledger: LedgerState = field(default_factory=LedgerState)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phase": self.phase.value,
            "governance": self.governance.governance,
            "pending_governance": self.governance.pending_governance,
            "minters": dict(self.minters),
            "name": self.ledger.name,
            "symbol": self.ledger.symbol,
            "decimals": self.ledger.decimals,
            "total_supply": self.ledger.total_supply,
            "balances": dict(self.ledger.balances),
            "allowances": {owner: dict(spenders) for owner, spenders in self.ledger.allowances.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenState":
        return cls(
            phase=parse_phase(data.get("phase", TokenPhase.UNINITIALIZED.value)),
            governance=GovernanceState(
                governance=data.get("governance"),
                pending_governance=data.get("pending_governance"),
            ),
            minters={user: bool(allowed) for user, allowed in (data.get("minters") or {}).items()},
            ledger=LedgerState(
                name=data.get("name", ""),
                symbol=data.get("symbol", ""),
                decimals=int(data.get("decimals", config.DEFAULT_DECIMALS)),
                total_supply=int(data.get("total_supply", 0)),
                balances={k: int(v) for k, v in (data.get("balances") or {}).items()},
                allowances={
                    owner: {spender: int(v) for spender, v in spenders.items()}
                    for owner, spenders in (data.get("allowances") or {}).items()
                },
            ),
        )
