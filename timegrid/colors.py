from __future__ import annotations

DEFAULT_COLOR = "#cccccc"


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def course_color(name: str) -> str:
    """Return a stable ``#rrggbb`` colour for a course name.

    Polynomial string hash (``h * 31 + code``) kept in signed 32-bit range so
    the same name always yields the same colour across runs and processes.
    """
    h = 0
    for ch in name:
        h = _to_int32(ord(ch) + ((h << 5) - h))
    return "#" + format(h & 0x00FFFFFF, "06x")


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    raw = (color or DEFAULT_COLOR).lstrip("#")
    if len(raw) != 6:
        raw = DEFAULT_COLOR.lstrip("#")
    try:
        return int(raw[0:2], 16), int(raw[2:4], 16), int(raw[4:6], 16)
    except ValueError:
        return hex_to_rgb(DEFAULT_COLOR)


def pastel(color: str, mix: float = 0.8) -> str:
    # Blend toward white for block backgrounds
    r, g, b = hex_to_rgb(color)
    pr = int(r + (255 - r) * mix)
    pg = int(g + (255 - g) * mix)
    pb = int(b + (255 - b) * mix)
    return f"rgb({pr}, {pg}, {pb})"
