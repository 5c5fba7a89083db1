from __future__ import annotations

# lunalog/config.py
import os

import yaml
from pydantic import BaseModel, Field

from .errors import ErrorMode

# 存储路径解析顺序：
# 1) 构造 StoreConfig 时显式传入的 db_path
# 2) YAML 配置文件中的 db_path（相对路径按配置文件所在目录解析）
# 3) 兜底：<home>/.lunalog/Journal.db
APP_DATA_DIRNAME = ".lunalog"
DB_FILENAME = "Journal.db"
LEGACY_DB_FILENAME = "journal.db"


def default_db_path() -> str:
    return os.path.join(os.path.expanduser("~"), APP_DATA_DIRNAME, DB_FILENAME)


class StoreConfig(BaseModel):
    db_path: str = Field(default_factory=default_db_path)
    multi_user: bool = True
    error_mode: ErrorMode = "propagating"
    enforce_foreign_keys: bool = False

    @classmethod
    def per_user_app_data(cls, **overrides) -> "StoreConfig":
        """Multi-user schema stored under the user's home directory."""
        return cls(**{"db_path": default_db_path(), "multi_user": True, **overrides})

    @classmethod
    def working_directory(cls, **overrides) -> "StoreConfig":
        """Single-user schema in a relative file under the current directory."""
        return cls(**{"db_path": LEGACY_DB_FILENAME, "multi_user": False, **overrides})


def _read_config_yaml(path: str) -> dict:
    if not os.path.exists(path):
        return {}
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"config file {path} must contain a mapping")
    out = {}
    for k in StoreConfig.model_fields:
        if k in cfg and cfg[k] is not None:
            out[k] = cfg[k]
    return out


def load_config(path: str) -> StoreConfig:
    """
    从 YAML 读取 StoreConfig。文件不存在或为空时返回默认配置；未知键忽略。
    db_path 支持 ~ 展开，相对路径以配置文件所在目录为基准。
    """
    cfg = _read_config_yaml(path)
    db_path = cfg.get("db_path")
    if isinstance(db_path, str):
        if db_path.strip():
            p = os.path.expanduser(db_path.strip())
            if not os.path.isabs(p):
                p = os.path.join(os.path.dirname(os.path.abspath(path)), p)
            cfg["db_path"] = p
        else:
            cfg.pop("db_path")
    # 非字符串的 db_path 原样交给 pydantic 校验
    return StoreConfig(**cfg)
