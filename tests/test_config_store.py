import json

from gui.app.config_store import (
    CONFIG_VERSION,
    DEFAULT_FILENAME,
    AppConfig,
    load_config,
    save_config,
)


def test_missing_file_gives_defaults(tmp_path):
    cfg = load_config(tmp_path)
    assert cfg == AppConfig()
    assert not cfg.is_geometry_complete()


def test_round_trip(tmp_path):
    cfg = AppConfig(
        dark_mode=True,
        console_visible=False,
        window_x=10,
        window_y=20,
        window_w=800,
        window_h=600,
        last_import_dir="/data",
        db_path="/tmp/x.sqlite3",
    )
    path = save_config(cfg, tmp_path)
    assert path.name == DEFAULT_FILENAME
    assert not path.with_suffix(path.suffix + ".tmp").exists()
    loaded = load_config(tmp_path)
    assert loaded == cfg
    assert loaded.is_geometry_complete()


def test_corrupt_file_falls_back_to_defaults(tmp_path, caplog):
    (tmp_path / DEFAULT_FILENAME).write_text("{not json", encoding="utf-8")
    assert load_config(tmp_path) == AppConfig()
    assert any("unreadable config" in r.getMessage() for r in caplog.records)


def test_version_mismatch_keeps_theme_and_store(tmp_path):
    data = AppConfig(dark_mode=True, console_visible=False, db_path="keep.db").to_dict()
    data["version"] = CONFIG_VERSION + 1
    (tmp_path / DEFAULT_FILENAME).write_text(json.dumps(data), encoding="utf-8")
    cfg = load_config(tmp_path)
    assert cfg.version == CONFIG_VERSION
    assert cfg.dark_mode is True
    assert cfg.db_path == "keep.db"
    assert cfg.console_visible is True
