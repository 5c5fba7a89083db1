from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqlite3 import Connection

# 多用户：时间戳由客户端写入（本地时间文本）
MULTI_USER_DDL = """
CREATE TABLE IF NOT EXISTS journals (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER,
    title TEXT NOT NULL,
    entry TEXT NOT NULL,
    image_path TEXT,
    timestamp TEXT NOT NULL,
    FOREIGN KEY (user_id) REFERENCES users(id)
)
"""

# 单用户：时间戳由引擎默认值生成
SINGLE_USER_DDL = """
CREATE TABLE IF NOT EXISTS journals (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    entry TEXT NOT NULL,
    image_path TEXT,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""

ENTRY_TEMPLATE = "Title: {title}\nDate: {timestamp}\n\n{body}"


def ensure_schema(conn: Connection, multi_user: bool = True):
    conn.execute(MULTI_USER_DDL if multi_user else SINGLE_USER_DDL)


def wall_clock_timestamp(now: dt.datetime | None = None) -> str:
    """
    本地时间文本，毫秒精度，格式 YYYY-MM-DD HH:MM:SS.f
    小数部分去掉末尾的 0，至少保留一位（.0 / .5 / .123）。
    """
    now = now or dt.datetime.now()
    frac = f"{now.microsecond // 1000:03d}".rstrip("0") or "0"
    return f"{now:%Y-%m-%d %H:%M:%S}.{frac}"


def insert_entry(
    conn: Connection,
    title: str,
    body: str,
    image_path: str | None = None,
    user_id: int | None = None,
    timestamp: str | None = None,
) -> int:
    cur = conn.execute(
        "INSERT INTO journals(user_id, title, entry, image_path, timestamp) VALUES(?, ?, ?, ?, ?)",
        (user_id, title, body, image_path, timestamp or wall_clock_timestamp()),
    )
    return int(cur.lastrowid)


def insert_entry_default_ts(conn: Connection, title: str, body: str, image_path: str | None = None) -> int:
    cur = conn.execute(
        "INSERT INTO journals(title, entry, image_path) VALUES(?, ?, ?)",
        (title, body, image_path),
    )
    return int(cur.lastrowid)


def list_for_user(conn: Connection, user_id: int | None):
    # user_id 为 None 时匹配 user_id IS NULL 的行
    return conn.execute(
        "SELECT title, entry, timestamp FROM journals WHERE user_id IS ? "
        "ORDER BY timestamp DESC, id DESC",
        (user_id,),
    ).fetchall()


def list_all(conn: Connection):
    return conn.execute(
        "SELECT title, entry, created_at AS timestamp FROM journals "
        "ORDER BY created_at DESC, id DESC"
    ).fetchall()


def format_entry(row) -> str:
    return ENTRY_TEMPLATE.format(title=row["title"], timestamp=row["timestamp"], body=row["entry"])
