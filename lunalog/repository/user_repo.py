from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqlite3 import Connection

# 用户由外部创建；这里只负责表结构
DDL = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT NOT NULL UNIQUE,
    password TEXT NOT NULL,
    last_login TEXT,
    emoji_data TEXT
)
"""


def ensure_schema(conn: Connection):
    conn.execute(DDL)
