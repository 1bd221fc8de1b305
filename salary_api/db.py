from __future__ import annotations

# salary_api/db.py
import sqlite3
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import get_db_path, get_settings

# progress handler 每执行这么多条 VM 指令检查一次超时
_PROGRESS_STEPS = 1000


@contextmanager
def get_conn(db_path: str | None = None, timeout_s: float | None = None) -> Iterator[sqlite3.Connection]:
    """
    获取只读 SQLite 连接。优先使用显式传入的 db_path，否则走 get_db_path()。
    row_factory 设为 Row；timeout_s > 0 时，整个连接生命周期内的语句超过期限会被中断
    （sqlite3.OperationalError: interrupted）。
    """
    path = db_path or get_db_path()
    if timeout_s is None:
        timeout_s = get_settings()["query_timeout_s"]
    uri = Path(path).resolve().as_uri() + "?mode=ro"
    conn = sqlite3.connect(uri, uri=True, check_same_thread=False, isolation_level=None)
    try:
        conn.row_factory = sqlite3.Row
        if timeout_s and timeout_s > 0:
            deadline = time.perf_counter() + timeout_s
            conn.set_progress_handler(lambda: 1 if time.perf_counter() > deadline else 0, _PROGRESS_STEPS)
        yield conn
    finally:
        conn.close()
