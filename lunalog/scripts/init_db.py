"""
Initialize the journal database and report whether it is reachable.

Usage:
  python -m lunalog.scripts.init_db
  python -m lunalog.scripts.init_db --config config.yaml
  python -m lunalog.scripts.init_db --db ./journal.db --single-user
"""
from __future__ import annotations

import argparse
import logging
import sys

from lunalog.config import StoreConfig, load_config
from lunalog.errors import JournalStoreError
from lunalog.services.journal_svc import JournalStore


def build_config(args) -> StoreConfig:
    cfg = load_config(args.config) if args.config else StoreConfig()
    upd = {}
    if args.db:
        upd["db_path"] = args.db
    if args.single_user:
        upd["multi_user"] = False
    return cfg.model_copy(update=upd) if upd else cfg


def main(argv=None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", default=None, help="YAML config file")
    ap.add_argument("--db", default=None, help="database file path (overrides config)")
    ap.add_argument("--single-user", action="store_true", help="use the single-user schema")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    store = JournalStore(build_config(args).model_copy(update={"error_mode": "propagating"}))
    print("Testing database initialization...")
    try:
        store.initialize()
    except JournalStoreError as e:
        print(f"Error during initialization: {e}", file=sys.stderr)
        return 1
    print("Database and tables created successfully!")
    connected = store.is_connected()
    print({"db_path": store.db_path, "connected": connected})
    return 0 if connected else 1


if __name__ == "__main__":
    sys.exit(main())
