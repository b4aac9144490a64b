import json
import sqlite3
from typing import Any, Dict

from . import config
from .db import insert_event
from .events import EventListener, TokenEvent
from .utils import ensure_dir, file_lock, utc_now


def record_event(event_type: str, caller: str, data: Dict[str, Any]) -> None:
    ensure_dir(config.AUDIT_LOG_FILE.parent)
    entry = {
        "timestamp": utc_now(),
        "event": event_type,
        "caller": caller,
        "data": data,
    }
    lock_path = config.LOCK_DIR / "audit.log.lock"
    with file_lock(lock_path):
        with config.AUDIT_LOG_FILE.open("a", encoding="utf-8") as f:
            f.write(json.dumps(entry, ensure_ascii=False))
            f.write("\n")
    # The JSON log is the record of truth; the SQLite mirror is best-effort.
    try:
        insert_event(entry["timestamp"], event_type, caller, data)
    except sqlite3.Error:
        pass


def listener(caller: str) -> EventListener:
    """Build a token listener that audits every event on behalf of ``caller``."""

    def _record(event: TokenEvent) -> None:
        payload = event.to_dict()
        payload.pop("event")
        record_event(event.name, caller, payload)

    return _record
