import json
import sqlite3
from typing import Any, Dict, List

from . import config
from .utils import ensure_dir, file_lock


def _connect() -> sqlite3.Connection:
    ensure_dir(config.DB_FILE.parent)
    conn = sqlite3.connect(config.DB_FILE)
    conn.execute("pragma journal_mode=WAL;")
    return conn


def _create_tables(conn: sqlite3.Connection) -> None:
    conn.execute(
        """
        create table if not exists events (
            id integer primary key autoincrement,
            ts text not null,
            event text not null,
            caller text,
            data text
        );
        """
    )
    conn.commit()


def init_db() -> None:
    with file_lock(config.LOCK_DIR / "db.lock"):
        conn = _connect()
        try:
            _create_tables(conn)
        finally:
            conn.close()


def insert_event(ts: str, event: str, caller: str, data: Dict[str, Any]) -> None:
    with file_lock(config.LOCK_DIR / "db.lock"):
        conn = _connect()
        try:
            _create_tables(conn)
            conn.execute(
                "insert into events (ts, event, caller, data) values (?, ?, ?, ?)",
                (ts, event, caller, json.dumps(data, ensure_ascii=False)),
            )
            conn.commit()
        finally:
            conn.close()


def list_events(limit: int = 50) -> List[Dict[str, Any]]:
    init_db()
    with file_lock(config.LOCK_DIR / "db.lock"):
        conn = _connect()
        try:
            cur = conn.execute(
                "select ts, event, caller, data from events order by id desc limit ?",
                (limit,),
            )
            rows = cur.fetchall()
        finally:
            conn.close()
    events = []
    for ts, event, caller, data in rows:
        try:
            payload = json.loads(data) if data else {}
        except json.JSONDecodeError:
            payload = {"raw": data}
        events.append({"timestamp": ts, "event": event, "caller": caller, "data": payload})
    return events
