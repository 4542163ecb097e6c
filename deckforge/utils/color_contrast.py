"""
WCAG colour contrast helpers used by the deck consistency checks.
"""

from typing import Tuple

# WCAG 2.x AA thresholds
AA_NORMAL_TEXT = 4.5
AA_LARGE_TEXT = 3.0


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert '#RRGGBB' or '#RGB' to an RGB tuple; unparseable input maps to mid grey."""
    value = hex_color.strip().lstrip('#')
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    try:
        return tuple(int(value[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return (128, 128, 128)


def get_luminance(rgb: Tuple[int, int, int]) -> float:
    """Relative luminance of a colour according to WCAG."""
    channels = []
    for component in rgb:
        c = component / 255.0
        channels.append(c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4)
    r, g, b = channels
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def get_contrast_ratio(color1: str, color2: str) -> float:
    """WCAG contrast ratio between two hex colours (1.0 - 21.0)."""
    lum1 = get_luminance(hex_to_rgb(color1))
    lum2 = get_luminance(hex_to_rgb(color2))
    if lum1 < lum2:
        lum1, lum2 = lum2, lum1
    return (lum1 + 0.05) / (lum2 + 0.05)


def passes_aa(foreground: str, background: str, large_text: bool = False) -> bool:
    """Check a foreground/background pair against the WCAG AA threshold."""
    threshold = AA_LARGE_TEXT if large_text else AA_NORMAL_TEXT
    return get_contrast_ratio(foreground, background) >= threshold
