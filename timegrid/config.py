from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict


@dataclass(frozen=True)
class GridConfig:
    start_hour: int = 8
    end_hour: int = 18
    pixels_per_hour: float = 80.0
    header_height_px: float = 60.0
    day_column_count: int = 7
    time_column_width_px: float = 80.0
    # Width of the scrollable grid; replaced on every viewport resize
    available_width_px: float = 1200.0
    min_block_height_px: float = 30.0
    floor_duration_minutes: int = 30
    block_padding_px: float = 10.0
    marker_nudge_px: float = 1.0

    @property
    def column_width(self) -> float:
        usable = self.available_width_px - self.time_column_width_px
        return max(usable, 0.0) / self.day_column_count

    def with_width(self, width: float) -> "GridConfig":
        return replace(self, available_width_px=float(width))


@dataclass(frozen=True)
class ResolverSettings:
    lookup_timeout_s: float = 5.0
    # 0 = single attempt, then fall back to the unknown-teacher label
    lookup_retries: int = 0
    tick_interval_s: float = 30.0


@dataclass(frozen=True)
class Labels:
    teacher_unknown: str = "N/A"
    course_unknown: str = "Unknown Course"
    location_unknown: str = "Unknown Location"
    child_unknown: str = "Unknown Child"


@dataclass(frozen=True)
class AppConfig:
    grid: GridConfig = GridConfig()
    resolver: ResolverSettings = ResolverSettings()
    labels: Labels = Labels()


def _project_root() -> Path:
    # timegrid/config.py -> project root is parents[1]
    return Path(__file__).resolve().parents[1]


def _coerce(section: Dict[str, Any] | None, base: Any) -> Any:
    """Overlay known keys from ``section`` onto dataclass ``base``.

    Values that cannot be converted to the field's default type are ignored.
    """
    if not isinstance(section, dict):
        return base
    updates: Dict[str, Any] = {}
    for f in fields(base):
        if f.name not in section:
            continue
        current = getattr(base, f.name)
        try:
            updates[f.name] = type(current)(section[f.name])
        except (TypeError, ValueError):
            logging.getLogger(__name__).warning(
                f"Ignoring invalid config value {f.name}={section[f.name]!r}"
            )
    return replace(base, **updates)


def load_config(project_root: Path | str | None = None, *, locale: str | None = None) -> AppConfig:
    """Load grid/resolver/label settings from configs/grid.toml if present, else defaults.

    Expected tables: ``[grid]``, ``[resolver]``, ``[labels]`` and optional
    per-locale overrides ``[labels.<locale>]``.
    """
    base = AppConfig()
    root: Path = _project_root() if project_root is None else Path(project_root)
    cfg = root / "configs" / "grid.toml"
    if not cfg.exists():
        return base
    try:
        data: Dict[str, Any] = tomllib.loads(cfg.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logging.getLogger(__name__).warning(f"Could not read {cfg}: {exc}; using defaults")
        return base

    grid = _coerce(data.get("grid"), base.grid)
    if grid.end_hour <= grid.start_hour or grid.day_column_count <= 0 or grid.pixels_per_hour <= 0:
        logging.getLogger(__name__).warning("Inconsistent [grid] settings; using defaults")
        grid = base.grid
    resolver = _coerce(data.get("resolver"), base.resolver)
    labels_data = data.get("labels") if isinstance(data.get("labels"), dict) else {}
    labels = _coerce({k: v for k, v in labels_data.items() if not isinstance(v, dict)}, base.labels)
    if locale:
        labels = _coerce(labels_data.get(locale), labels)
    return AppConfig(grid=grid, resolver=resolver, labels=labels)
