from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

# Project root (folder that holds config/ and data/)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Environment variable -> (section, key) in settings.yaml
ENV_OVERRIDES = {
    "SHARK_ATTACKS_DB": ("db", "duckdb_path"),
    "SHARK_ATTACKS_SOURCE": ("data_paths", "raw_source"),
}

DEFAULT_CLEANING: Dict[str, Any] = {
    "placeholders": ["", ".", "-", "--", "X"],
    "activity_placeholders": ["", "."],
    "country_aliases": {
        "United Arab Emirates (UAE)": "United Arab Emirates",
        "St. Maartin": "St. Maarten",
    },
    "type_aliases": {
        "Boat": "Boating",
    },
    # raw values checked record by record before the Y/N domain check
    "fatal_aliases": {
        "2017": "N",
    },
    "overrides": [
        {
            "match": {"case_number": "1894.07.15.R", "name": "la Badine, Hyčres,"},
            "field": "fatal",
            "value": "N",
            "reason": "No injury recorded; incident confirmed non-fatal",
        },
        {
            "match": {"name": "Brian Kang"},
            "field": "sex",
            "value": "M",
            "reason": "Sex entered as 'lli'; victim confirmed male",
        },
    ],
}


def load_config(path: str = "config/settings.yaml") -> dict:
    """
    Load the YAML settings file and apply environment overrides from .env.
    """
    load_dotenv()

    config_path = Path(path)
    if not config_path.is_absolute():
        config_path = PROJECT_ROOT / path
    with config_path.open("r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}

    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            cfg.setdefault(section, {})[key] = value

    return cfg


def resolve_path(value: str) -> Path:
    """Resolve a configured path against the project root."""
    p = Path(value)
    return p if p.is_absolute() else PROJECT_ROOT / p


def cleaning_settings(cfg: Optional[dict] = None) -> Dict[str, Any]:
    """
    Merge the `cleaning:` section of the settings over the built-in defaults.

    Alias tables are merged key by key; lists (placeholders, overrides)
    replace the default when present.
    """
    settings = copy.deepcopy(DEFAULT_CLEANING)
    section = (cfg or {}).get("cleaning") or {}

    for key, value in section.items():
        if isinstance(value, dict) and isinstance(settings.get(key), dict):
            settings[key].update(value)
        else:
            settings[key] = value

    return settings
