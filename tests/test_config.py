from shark_attacks.utils.config import DEFAULT_CLEANING, PROJECT_ROOT, cleaning_settings, load_config, resolve_path


def test_load_project_settings():
    cfg = load_config()
    assert cfg["db"]["clean_table"] == "shark_attacks"
    assert cfg["db"]["raw_table"] == "shark_attacks_raw"
    assert "raw_source" in cfg["data_paths"]


def test_env_overrides(tmp_path, monkeypatch):
    settings = tmp_path / "settings.yaml"
    settings.write_text("db:\n  duckdb_path: data/a.duckdb\ndata_paths:\n  raw_source: a.csv\n", encoding="utf-8")
    monkeypatch.setenv("SHARK_ATTACKS_DB", "/tmp/other.duckdb")
    monkeypatch.delenv("SHARK_ATTACKS_SOURCE", raising=False)

    cfg = load_config(str(settings))
    assert cfg["db"]["duckdb_path"] == "/tmp/other.duckdb"
    assert cfg["data_paths"]["raw_source"] == "a.csv"


def test_resolve_path():
    assert resolve_path("config/settings.yaml") == PROJECT_ROOT / "config" / "settings.yaml"
    assert resolve_path("/abs/file.csv").is_absolute()


def test_cleaning_settings_merge():
    cfg = {
        "cleaning": {
            "country_aliases": {"USA ": "USA"},
            "activity_placeholders": ["", ".", "-"],
        }
    }
    settings = cleaning_settings(cfg)
    assert settings["country_aliases"]["USA "] == "USA"
    assert settings["country_aliases"]["St. Maartin"] == "St. Maarten"
    assert settings["activity_placeholders"] == ["", ".", "-"]
    assert settings["overrides"] == DEFAULT_CLEANING["overrides"]
    # defaults are not mutated
    assert "USA " not in DEFAULT_CLEANING["country_aliases"]


def test_cleaning_settings_without_section():
    assert cleaning_settings(None)["type_aliases"] == {"Boat": "Boating"}
