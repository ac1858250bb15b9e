"""Presentation hints for the renderer: node colour and size.

These are pure functions of cluster identity, depth and line count so that a
rebuild of an unchanged tree yields byte-identical payloads.
"""

import math

PALETTE: tuple[str, ...] = (
    "#4ea1ff",
    "#ff9966",
    "#cc99ff",
    "#99ff99",
    "#ffcc66",
    "#ff6699",
    "#66ffcc",
    "#aaaaaa",
    "#ff6666",
    "#66ff66",
)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def cluster_hash(cluster: str) -> int:
    """Java-style 31x string hash with 32-bit wrap-around."""
    h = 0
    for ch in cluster:
        h = ord(ch) + (_to_int32(_to_int32(h) << 5) - h)
    return h


def cluster_color(cluster: str, depth: int = 1) -> str:
    """Palette colour for a cluster, dimmed as depth grows (never below half)."""
    base = PALETTE[abs(cluster_hash(cluster)) % len(PALETTE)]
    fade = max(0.5, 1 - depth * 0.08)
    c = int(base[1:], 16)
    r = round(((c >> 16) & 255) * fade)
    g = round(((c >> 8) & 255) * fade)
    b = round((c & 255) * fade)
    return f"rgb({r},{g},{b})"


def file_size(loc: int) -> float:
    """Node size for a file; non-decreasing in line count."""
    return round(max(4.0, min(14.0, 5 + math.log10(loc + 1))), 4)


def folder_size(depth: int) -> float:
    """Node size for a folder; shallower folders are drawn larger."""
    return float(12 + max(0, 3 - depth) * 2)
