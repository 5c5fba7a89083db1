import os

from lunalog.scripts import init_db


def test_init_creates_db(tmp_path, capsys):
    path = tmp_path / "lunalog" / "Journal.db"
    assert init_db.main(["--db", str(path)]) == 0
    assert path.exists()
    out = capsys.readouterr().out
    assert "Database and tables created successfully!" in out
    assert "'connected': True" in out


def test_single_user_flag_from_yaml(tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("db_path: journal.db\nerror_mode: silent\n", encoding="utf-8")
    args = type("Args", (), {"config": str(cfg), "db": None, "single_user": True})()
    built = init_db.build_config(args)
    assert built.db_path == os.path.join(str(tmp_path), "journal.db")
    assert built.multi_user is False
    assert built.error_mode == "silent"


def test_init_failure_exit_code(tmp_path, capsys):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    assert init_db.main(["--db", str(blocker / "Journal.db")]) == 1
    assert "Error during initialization" in capsys.readouterr().err
