from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG_NAME = "config.yaml"

DEFAULT_OPTIONS: Dict[str, Any] = {
    "xlim": [-100, 500],
    "ylim": None,
    "elec": None,
    "CI": "off",
    "tepType": "data",
    "tepName": None,
}


def option_key(name: Any) -> str:
    return str(name).strip().replace("_", "").lower()


def load_config(config_path: Path) -> Dict[str, Any]:
    config_path = Path(config_path)
    with config_path.open("r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    return cfg if isinstance(cfg, dict) else {}


def default_config_path() -> Path:
    return Path(__file__).resolve().parents[2] / DEFAULT_CONFIG_NAME


def load_default_config() -> Dict[str, Any]:
    path = default_config_path()
    if not path.exists():
        return {}
    return load_config(path)


def resolve_path(base_dir: Path, maybe_path: str | Path) -> Path:
    path = Path(maybe_path)
    if path.is_absolute():
        return path
    return (Path(base_dir) / path).resolve()


def get_output_base_dir(base_dir: Path, config: Dict[str, Any]) -> Path:
    output_base = (config.get("output") or {}).get("base_dir", "output")
    return resolve_path(base_dir, output_base)


def get_file_extension(config: Dict[str, Any]) -> str:
    """
    Return the participant file extension with a leading dot.

    `data.file_extension` accepts "set", ".set" or "*.set".
    """
    data_cfg = config.get("data") or {}
    raw = str(data_cfg.get("file_extension", ".set") or ".set").strip()
    raw = raw.lstrip("*")
    if not raw.startswith("."):
        raw = "." + raw
    return raw


def get_option_defaults(config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Merge `defaults:` from config.yaml over the built-in option defaults.

    YAML 1.1 reads a bare `CI: off` as a boolean; it is mapped back to the
    "on"/"off" spelling here so the strict CI check only sees strings.
    """
    out = dict(DEFAULT_OPTIONS)
    if not config:
        return out
    raw = config.get("defaults")
    if not isinstance(raw, dict):
        return out
    canonical = {option_key(k): k for k in out}
    for key, value in raw.items():
        if key is None:
            continue
        norm = option_key(key)
        if norm == "ci" and isinstance(value, bool):
            value = "on" if value else "off"
        out[canonical.get(norm, str(key))] = value
    return out
