from __future__ import annotations
import copy
import os
from typing import Any, Dict, Optional

import yaml

DEFAULT_BUCKET_COUNT = 313507  # prime

DEFAULTS: Dict[str, Any] = {
    "search": {
        "bucket_count": DEFAULT_BUCKET_COUNT,
        "progress_every": 100000,
        "show_progress": True,
    },
    "output": {
        "style": "grid",
    },
    "puzzles": {
        "root_dir": "puzzles",
        "sources": [],
    },
    "filters": {},
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def load_config(path: Optional[str], required: bool = False) -> Dict[str, Any]:
    """Reads a YAML config on top of DEFAULTS.

    A missing file is only an error when required is set.
    """
    if path is None or not os.path.exists(path):
        if required:
            raise FileNotFoundError(f"config not found: {path}")
        return copy.deepcopy(DEFAULTS)
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"config {path} must be a mapping, got {type(cfg).__name__}")
    return _merge(DEFAULTS, cfg)
