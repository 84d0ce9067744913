"""Config loading plus small helpers for reading chart/render settings from params."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

import yaml


DEFAULT_CONFIG = "configs/base.yaml"


def load_config(path: str | Path | None) -> dict:
    """Read a YAML config; a missing default config yields an empty dict."""
    if path is None:
        return {}
    p = Path(path)
    if not p.exists() and str(path) == DEFAULT_CONFIG:
        return {}
    with open(p, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _get(d: Dict, *keys, default=None):
    cur = d
    for k in keys:
        if not isinstance(cur, dict):
            return default
        cur = cur.get(k)
        if cur is None:
            return default
    return cur


def date_format(p: Dict) -> str:
    return str(_get(p, "chart", "date_format", default="YYYY-MM-DD"))


def excludes(p: Dict) -> str:
    return str(_get(p, "chart", "excludes", default="weekends"))


def duration_unit(p: Dict) -> str:
    return str(_get(p, "chart", "duration_unit", default="d"))


def title_override(p: Dict) -> Optional[str]:
    return _get(p, "chart", "title")


def mmdc_command(p: Dict) -> str:
    return os.getenv("STREAMGANTT_MMDC") or str(_get(p, "render", "mmdc", default="mmdc"))


def render_width(p: Dict) -> int:
    return int(_get(p, "render", "width", default=1600))


def render_format(p: Dict) -> str:
    return str(_get(p, "render", "format", default="svg")).lstrip(".")


def runs_dir(p: Dict) -> str:
    return _get(p, "project", "runs_dir", default="runs")


@dataclass(frozen=True)
class ChartSettings:
    date_format: str = "YYYY-MM-DD"
    excludes: str = "weekends"
    duration_unit: str = "d"
    title: Optional[str] = None

    @classmethod
    def from_params(cls, p: Dict) -> "ChartSettings":
        return cls(
            date_format=date_format(p),
            excludes=excludes(p),
            duration_unit=duration_unit(p),
            title=title_override(p),
        )
