import sys
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from lunalog.config import StoreConfig
from lunalog.services.journal_svc import JournalStore


@pytest.fixture()
def tmp_db_path(tmp_path):
    # nested dir so initialize() has to create it
    return str(tmp_path / "appdata" / "Journal.db")


@pytest.fixture()
def multi_cfg(tmp_db_path):
    return StoreConfig(db_path=tmp_db_path, multi_user=True)


@pytest.fixture()
def single_cfg(tmp_db_path):
    return StoreConfig(db_path=tmp_db_path, multi_user=False)


@pytest.fixture()
def store(multi_cfg):
    s = JournalStore(multi_cfg)
    s.initialize()
    return s


@pytest.fixture()
def single_store(single_cfg):
    s = JournalStore(single_cfg)
    s.initialize()
    return s


@pytest.fixture()
def unusable_db_path(tmp_path):
    # parent "directory" is a regular file, so neither mkdir nor open can succeed
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x", encoding="utf-8")
    return str(blocker / "Journal.db")


@pytest.fixture()
def add_user(store):
    """users 由外部创建，这里通过原始连接插入。"""
    def _add(username="luna", password="secret") -> int:
        with store.get_connection() as conn:
            cur = conn.execute(
                "INSERT INTO users(username, password) VALUES(?, ?)", (username, password)
            )
            return int(cur.lastrowid)
    return _add
