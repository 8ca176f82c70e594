# textruns/policy.py

from __future__ import annotations

import yaml
from dataclasses import dataclass
from typing import Any, Dict

from textruns.models import DEFAULT_HIGHLIGHT_COLOR


class PolicyError(ValueError):
    """The render policy file is not a valid policy."""


@dataclass
class RenderPolicy:
    default_color: str = DEFAULT_HIGHLIGHT_COLOR
    color_override: str | None = None
    press_tolerance: int = 1
    strict_styles: bool = False
    cache_size: int | None = 256

    def color_for(self, color: str | None) -> str:
        if self.color_override:
            return self.color_override
        return color or self.default_color


def _section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = cfg.get(name) or {}
    if not isinstance(section, dict):
        raise PolicyError(f"'{name}' section must be a mapping")
    return section


def _non_negative(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise PolicyError(f"'{name}' must be a non-negative integer, got {value!r}")
    return value


def _optional_color(value: Any, name: str) -> str | None:
    if value is not None and (not isinstance(value, str) or not value.strip()):
        raise PolicyError(f"'{name}' must be a color string or null, got {value!r}")
    return value


def _flag(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise PolicyError(f"'{name}' must be true or false, got {value!r}")
    return value


def load_policy(path: str) -> RenderPolicy:
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}

    if not isinstance(cfg, dict):
        raise PolicyError(f"Render policy {path} must be a mapping")

    highlights_cfg = _section(cfg, "highlights")
    emphases_cfg = _section(cfg, "emphases")
    cache_cfg = _section(cfg, "cache")

    maxsize = cache_cfg.get("maxsize", 256)
    if maxsize is not None:
        maxsize = _non_negative(maxsize, "cache.maxsize")

    return RenderPolicy(
        default_color=str(highlights_cfg.get("default_color") or DEFAULT_HIGHLIGHT_COLOR),
        color_override=_optional_color(
            highlights_cfg.get("color_override"), "highlights.color_override"
        ),
        press_tolerance=_non_negative(
            highlights_cfg.get("press_tolerance", 1), "highlights.press_tolerance"
        ),
        strict_styles=_flag(emphases_cfg.get("strict", False), "emphases.strict"),
        cache_size=maxsize,
    )
