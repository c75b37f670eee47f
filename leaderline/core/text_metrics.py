# leaderline/core/text_metrics.py
"""
Label box sizes from Pillow font metrics, in drawing-surface units.
Only label backgrounds use them; label positions never depend on text size.
"""

from __future__ import annotations

import warnings
from functools import lru_cache

from PIL import ImageFont

FALLBACK_FONT_FILE = "DejaVuSans.ttf"


@lru_cache(maxsize=None)
def _font_file(font_family: str) -> str | None:
    """First TrueType file Pillow can open for the family; warns once per family when none is found."""
    for name in (font_family + ".ttf", font_family.replace(" ", "") + ".ttf", FALLBACK_FONT_FILE):
        try:
            ImageFont.truetype(name, size=10)
        except OSError:
            continue
        return name
    warnings.warn(f"Font not found: {font_family!r}; using Pillow's default font.", UserWarning)
    return None


@lru_cache(maxsize=64)
def _load_font(font_family: str, size: int) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
    name = _font_file(font_family)
    if name is None:
        return ImageFont.load_default()
    return ImageFont.truetype(name, size=size)


def measure_text(text: str, font_family: str, font_size: float) -> tuple[float, float]:
    """
    Return (width, height) of text. Empty text measures (0, 0).
    The bitmap default font ignores the size, so its box is rescaled to font_size.
    """
    if not text:
        return (0.0, 0.0)
    size = max(1, int(round(font_size)))
    font = _load_font(font_family, size)
    left, top, right, bottom = font.getbbox(text)
    scale = font_size / max(1.0, float(getattr(font, "size", size)))
    return (float(right - left) * scale, float(bottom - top) * scale)


def label_box_size(text: str, font_family: str, font_size: float, padding: float) -> tuple[float, float]:
    """Text size plus padding on every side."""
    w, h = measure_text(text, font_family, font_size)
    pad = max(0.0, padding)
    return (w + 2.0 * pad, h + 2.0 * pad)
