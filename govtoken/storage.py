from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from . import config
from .events import EventListener, TokenEvent
from .state import TokenState
from .token import Token
from .utils import dump_yaml, file_lock, load_yaml


def state_path(path: Optional[Path] = None) -> Path:
    return path or config.STATE_FILE


def load_state(path: Optional[Path] = None) -> TokenState:
    """Read persisted state; a missing or empty file is an uninitialized token."""
    data = load_yaml(state_path(path))
    if not data:
        return TokenState()
    return TokenState.from_dict(data)


def save_state(state: TokenState, path: Optional[Path] = None) -> None:
    dump_yaml(state.to_dict(), state_path(path))


def load_token(path: Optional[Path] = None, listeners: Optional[List[EventListener]] = None) -> Token:
    return Token(load_state(path), listeners=listeners)


@contextmanager
def transaction(
    path: Optional[Path] = None, listeners: Optional[List[EventListener]] = None
) -> Iterator[Token]:
    """Lock the state file, yield the loaded token and persist it if the block succeeds.

    Events reach ``listeners`` only after the state has been saved.
    """
    target = state_path(path)
    committed: List[TokenEvent] = []
    with file_lock(config.LOCK_DIR / f"{target.name}.lock"):
        token = load_token(target, [committed.append])
        yield token
        save_state(token.state, target)
    for event in committed:
        for listener in listeners or []:
            listener(event)
