from __future__ import annotations

import json
from pathlib import Path
from typing import Dict

LIST_SECTIONS = [
    "out_of_range_days",
    "floored_durations",
    "min_height_blocks",
    "outside_grid_hours",
    "teacher_unknown",
    "overlaps",
]


def write_validation_report(report: Dict[str, object], outputs_dir: Path) -> Path:
    outputs_dir.mkdir(parents=True, exist_ok=True)
    out_path = outputs_dir / "validation.json"
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(report, f, indent=2, ensure_ascii=False)
    return out_path


def format_validation_report(report: Dict[str, object]) -> str:
    lines: list[str] = []
    lines.append(f"event_count: {report.get('event_count')}")
    for name in LIST_SECTIONS:
        items = report.get(name, [])
        if not isinstance(items, list):
            continue
        lines.append(f"{name}: {len(items)}")
        for item in items[:20]:
            lines.append(f"  - {item}")
    lines.append("courses:")
    courses = report.get("courses", {})
    if isinstance(courses, dict):
        for k, v in courses.items():
            lines.append(f"  - {k}: {v}")
    return "\n".join(lines)
