from __future__ import annotations

# lunalog/db.py
import logging
import os
from contextlib import contextmanager
from typing import Iterator

# sqlite3 可能因 Python 编译时缺少 _sqlite3 而无法加载；此时由调用方抛出 DriverUnavailable
try:
    import sqlite3
except ImportError:
    sqlite3 = None

from .config import StoreConfig
from .errors import DriverUnavailable, StorageUnavailable

logger = logging.getLogger(__name__)


def load_driver():
    if sqlite3 is None:
        raise DriverUnavailable("SQLite driver not found")
    return sqlite3


def ensure_data_dir(db_path: str) -> None:
    """确保数据库所在目录存在（含父目录）。"""
    dirn = os.path.dirname(db_path)
    if not dirn or os.path.isdir(dirn):
        return
    try:
        os.makedirs(dirn, exist_ok=True)
    except OSError as e:
        raise StorageUnavailable(f"cannot create data directory {dirn}: {e}", e) from e
    logger.info(f"Created application data directory: {dirn}")


def connect(cfg: StoreConfig):
    """
    打开一个新的 SQLite 连接（autocommit）。
    仅当 enforce_foreign_keys 时打开 foreign_keys；默认外键约束只是声明，不做校验。
    """
    driver = load_driver()
    try:
        conn = driver.connect(cfg.db_path, isolation_level=None)
    except driver.Error as e:
        raise StorageUnavailable(f"cannot open database {cfg.db_path}: {e}", e) from e
    try:
        if cfg.enforce_foreign_keys:
            conn.execute("PRAGMA foreign_keys = ON;")
        conn.row_factory = driver.Row
    except driver.Error as e:
        conn.close()
        raise StorageUnavailable(f"cannot configure database {cfg.db_path}: {e}", e) from e
    return conn


@contextmanager
def get_conn(cfg: StoreConfig) -> Iterator["sqlite3.Connection"]:
    """
    获取 SQLite 连接，退出时无论成功与否都会关闭。
    row_factory 为 Row。
    """
    conn = connect(cfg)
    try:
        yield conn
    finally:
        conn.close()
