from __future__ import annotations

# lunalog/services/journal_svc.py
import logging
from typing import Callable, TypeVar

from ..config import StoreConfig
from ..db import connect, ensure_data_dir, get_conn
from ..errors import (
    ConnectionCheckFailed,
    JournalStoreError,
    ReadFailed,
    StorageUnavailable,
    WriteFailed,
)
from ..repository import journal_repo, user_repo

logger = logging.getLogger(__name__)

T = TypeVar("T")


class JournalStore:
    """
    Journal entry store backed by one SQLite file.

    Every call opens a fresh connection, runs one statement (or the fixed
    DDL pair) and closes the connection before returning. Failures are
    either raised (``error_mode="propagating"``) or logged and replaced by a
    safe default (``error_mode="silent"``); in both modes the most recent
    failure is kept in ``last_error``.
    """

    def __init__(self, config: StoreConfig | None = None):
        self.config = config or StoreConfig()
        self.last_error: JournalStoreError | None = None

    @property
    def db_path(self) -> str:
        return self.config.db_path

    @property
    def silent(self) -> bool:
        return self.config.error_mode == "silent"

    def _run(self, op: Callable[[], T], default: T, message: str) -> T:
        try:
            result = op()
        except JournalStoreError as e:
            self.last_error = e
            cause = e.cause or e
            logger.error(f"{message} [{e.kind}]: {cause}")
            if self.silent:
                return default
            raise
        self.last_error = None
        return result

    # ---------------- schema ----------------

    def initialize(self) -> bool:
        """建表（幂等）。多用户模式同时创建 users 表。"""

        def op():
            logger.info(f"Initializing database at: {self.db_path}")
            ensure_data_dir(self.db_path)
            with get_conn(self.config) as conn:
                try:
                    if self.config.multi_user:
                        user_repo.ensure_schema(conn)
                    journal_repo.ensure_schema(conn, multi_user=self.config.multi_user)
                except Exception as e:
                    raise StorageUnavailable(f"schema creation failed: {e}", e) from e
            logger.info("Database initialized successfully.")
            return True

        return self._run(op, False, "Error initializing database")

    # ---------------- entries ----------------

    def save_entry(
        self,
        title: str,
        body: str,
        image_path: str | None = None,
        user_id: int | None = None,
    ) -> bool:
        if user_id is not None and not self.config.multi_user:
            raise ValueError("user_id is not supported by a single-user store")

        def op():
            try:
                with get_conn(self.config) as conn:
                    if self.config.multi_user:
                        journal_repo.insert_entry(conn, title, body, image_path, user_id)
                    else:
                        journal_repo.insert_entry_default_ts(conn, title, body, image_path)
            except StorageUnavailable as e:
                raise WriteFailed("Failed to save journal entry", e.cause or e) from e
            except Exception as e:
                raise WriteFailed("Failed to save journal entry", e) from e
            logger.info(f"Journal entry saved: {title}")
            return True

        return self._run(op, False, "Error saving journal entry")

    def list_entries(self, user_id: int | None = None) -> list[str]:
        """
        按时间倒序返回格式化后的条目文本：
        "Title: {title}\\nDate: {timestamp}\\n\\n{body}"
        多用户模式按 user_id 精确过滤；单用户模式返回全部。
        """
        if user_id is not None and not self.config.multi_user:
            raise ValueError("user_id is not supported by a single-user store")

        def op():
            try:
                with get_conn(self.config) as conn:
                    if self.config.multi_user:
                        rows = journal_repo.list_for_user(conn, user_id)
                    else:
                        rows = journal_repo.list_all(conn)
                    entries = [journal_repo.format_entry(r) for r in rows]
            except StorageUnavailable as e:
                raise ReadFailed("Failed to load journal entries", e.cause or e) from e
            except Exception as e:
                raise ReadFailed("Failed to load journal entries", e) from e
            if self.config.multi_user:
                logger.info(f"Retrieved {len(entries)} entries for user {user_id}")
            else:
                logger.info(f"Retrieved {len(entries)} entries")
            return entries

        return self._run(op, [], "Error fetching journal entries")

    # ---------------- connectivity ----------------

    def is_connected(self) -> bool:
        """能打开连接即视为可用；任何失败都只记录日志并返回 False。"""
        try:
            conn = connect(self.config)
        except StorageUnavailable as e:
            self.last_error = ConnectionCheckFailed("Database connection failed", e.cause or e)
            logger.error(f"Database connection failed [{self.last_error.kind}]: {e.cause or e}")
            return False
        try:
            ok = conn is not None
        finally:
            conn.close()
        self.last_error = None
        return ok

    def get_connection(self):
        """Raw connection for ad-hoc queries; closed when the block exits."""
        return get_conn(self.config)

    # 桌面客户端使用的方法名
    initialize_database = initialize
    save_journal_entry = save_entry
    get_journal_entries = list_entries
    is_database_connected = is_connected
