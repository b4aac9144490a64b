"""Notifications emitted by successful token calls."""

from dataclasses import asdict, dataclass
from typing import Any, Callable, ClassVar, Dict, Optional


@dataclass(frozen=True)
class TokenEvent:
    name: ClassVar[str] = "event"

    def to_dict(self) -> Dict[str, Any]:
        return {"event": self.name, **asdict(self)}


@dataclass(frozen=True)
class GovernanceProposed(TokenEvent):
    name: ClassVar[str] = "GovernanceProposed"
    candidate: Optional[str]


@dataclass(frozen=True)
class GovernanceModified(TokenEvent):
    name: ClassVar[str] = "GovernanceModified"
    new_governance: str


@dataclass(frozen=True)
class MinterUpdated(TokenEvent):
    name: ClassVar[str] = "MinterUpdated"
    user: str
    allowed: bool


@dataclass(frozen=True)
class Transfer(TokenEvent):
    """Balance movement. ``sender`` is None on mint, ``recipient`` is None on burn."""

    name: ClassVar[str] = "Transfer"
    sender: Optional[str]
    recipient: Optional[str]
    amount: int


@dataclass(frozen=True)
class Approval(TokenEvent):
    name: ClassVar[str] = "Approval"
    owner: str
    spender: str
    amount: int


EventListener = Callable[[TokenEvent], None]
