"""
Default configuration and environment overrides.

Every entry can be overridden with a `ROI_` environment variable, using
`__` to separate nesting levels, e.g. `ROI_style__thickness=4`.
"""

import copy
import os
from pathlib import Path
from typing import Dict, Optional

from easydict import EasyDict as edict

from roi_annotation.core.annotation.elements import (
    DEFAULT_COLOR,
    DEFAULT_FONT_SIZE,
    DEFAULT_THICKNESS,
)
from roi_annotation.core.annotation.state import Style
from roi_annotation.utils.env import load_cfg_from_env

DEFAULT_CONFIG = edict(
    {
        "style": {
            "color": DEFAULT_COLOR,
            "thickness": DEFAULT_THICKNESS,
            "font_size": DEFAULT_FONT_SIZE,
        },
        "store": {"path": "config.json"},
        "display": {"width": 960},
    }
)

_INT_ENTRIES = [
    ("style", "thickness"),
    ("style", "font_size"),
    ("display", "width"),
]


def load_config(env: Optional[Dict[str, str]] = None) -> edict:
    """Defaults with environment overrides applied and numbers coerced."""
    cfg = edict(copy.deepcopy(DEFAULT_CONFIG))
    cfg = load_cfg_from_env(cfg, os.environ if env is None else env)
    for section, key in _INT_ENTRIES:
        try:
            cfg[section][key] = int(cfg[section][key])
        except (TypeError, ValueError) as e:
            raise ValueError(
                f"Configuration entry {section}.{key} must be an integer, "
                f"got {cfg[section][key]!r}"
            ) from e
    return cfg


def style_from_config(cfg: edict) -> Style:
    return Style(
        color=cfg.style.color,
        thickness=cfg.style.thickness,
        font_size=cfg.style.font_size,
    )


def store_path(env: Optional[Dict[str, str]] = None) -> Path:
    """Camera configuration file the CLI reads and writes by default."""
    return Path(load_config(env).store.path)
