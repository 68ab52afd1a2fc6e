from functools import lru_cache
from typing import Tuple

from PIL import ImageColor


@lru_cache(maxsize=256)
def parse_color(color: str) -> Tuple[int, int, int]:
    """
    Parse a colour string into an RGB triple.

    Accepts anything Pillow understands: ``#rgb``, ``#rrggbb``, ``rgb(...)``,
    ``hsl(...)`` and CSS colour names. Alpha channels are ignored.

    Raises:
        ValueError: if the colour string cannot be parsed.
    """
    rgb = ImageColor.getrgb(color.strip())
    return rgb[0], rgb[1], rgb[2]


def is_valid_color(color: str) -> bool:
    try:
        parse_color(color)
    except (ValueError, AttributeError):
        return False
    return True


def relative_luminance(color: str) -> float:
    """WCAG relative luminance of an sRGB colour, in [0, 1]."""
    channels = []
    for value in parse_color(color):
        c = value / 255
        channels.append(c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4)
    return 0.2126 * channels[0] + 0.7152 * channels[1] + 0.0722 * channels[2]


def contrast_ratio(color1: str, color2: str) -> float:
    """Contrast ratio between two colours, from 1.0 (identical) to 21.0 (black on white)."""
    l1 = relative_luminance(color1)
    l2 = relative_luminance(color2)
    lighter, darker = max(l1, l2), min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)
