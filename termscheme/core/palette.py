"""Default terminal palette, slot names, and colour conversions.

The default table holds the 8 ANSI colours in two intensities plus the
default foreground/background pair for each intensity, in table order:

    0  Foreground          10  ForegroundIntense
    1  Background          11  BackgroundIntense
    2-9  Color0..Color7    12-19  Color0Intense..Color7Intense

HSV values use integer units: hue 0-359, saturation 0-255, value 0-255.
"""

import colorsys
import re

from PIL import ImageColor

from termscheme.core.types import RGB, TABLE_COLORS, ColorEntry, FontWeight


def _entry(r: int, g: int, b: int, transparent: bool = False) -> ColorEntry:
    return ColorEntry(color=(r, g, b), transparent=transparent, font_weight=FontWeight.USE_CURRENT_FORMAT)


# Almost IBM standard colour codes, with a slight gamma correction on the dim colours.
DEFAULT_TABLE: tuple[ColorEntry, ...] = (
    _entry(0x00, 0x00, 0x00), _entry(0xFF, 0xFF, 0xFF, transparent=True),  # foreground, background
    _entry(0x00, 0x00, 0x00), _entry(0xB2, 0x18, 0x18),  # black, red
    _entry(0x18, 0xB2, 0x18), _entry(0xB2, 0x68, 0x18),  # green, yellow
    _entry(0x18, 0x18, 0xB2), _entry(0xB2, 0x18, 0xB2),  # blue, magenta
    _entry(0x18, 0xB2, 0xB2), _entry(0xB2, 0xB2, 0xB2),  # cyan, white
    # intense
    _entry(0x00, 0x00, 0x00), _entry(0xFF, 0xFF, 0xFF, transparent=True),
    _entry(0x68, 0x68, 0x68), _entry(0xFF, 0x54, 0x54),
    _entry(0x54, 0xFF, 0x54), _entry(0xFF, 0xFF, 0x54),
    _entry(0x54, 0x54, 0xFF), _entry(0xFF, 0x54, 0xFF),
    _entry(0x54, 0xFF, 0xFF), _entry(0xFF, 0xFF, 0xFF),
)

COLOR_NAMES: tuple[str, ...] = (
    ('Foreground', 'Background')
    + tuple(f'Color{i}' for i in range(8))
    + ('ForegroundIntense', 'BackgroundIntense')
    + tuple(f'Color{i}Intense' for i in range(8))
)

TRANSLATED_COLOR_NAMES: tuple[str, ...] = (
    ('Foreground', 'Background')
    + tuple(f'Color {i + 1}' for i in range(8))
    + ('Foreground (Intense)', 'Background (Intense)')
    + tuple(f'Color {i + 1} (Intense)' for i in range(8))
)

assert len(DEFAULT_TABLE) == len(COLOR_NAMES) == len(TRANSLATED_COLOR_NAMES) == TABLE_COLORS

_TRIPLET = re.compile(r'^\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*$')


def parse_color(text: str) -> RGB:
    """Parse 'r,g,b', '#rrggbb', '#rgb', or a CSS colour name.

    Raises ValueError if the text is not a colour.
    """
    m = _TRIPLET.match(text)
    if m:
        rgb = (int(m.group(1)), int(m.group(2)), int(m.group(3)))
        if any(c > 255 for c in rgb):
            raise ValueError(f'colour component out of range: {text!r}')
        return rgb
    stripped = text.strip()
    if not stripped:
        raise ValueError('empty colour value')
    r, g, b = ImageColor.getrgb(stripped)[:3]
    return (r, g, b)


def rgb_to_hex(rgb: RGB) -> str:
    r, g, b = rgb
    return f'#{r:02x}{g:02x}{b:02x}'


def rgb_to_hsv(rgb: RGB) -> tuple[int, int, int]:
    """RGB (0-255) to integer HSV. Achromatic colours report hue 0."""
    h, s, v = colorsys.rgb_to_hsv(rgb[0] / 255.0, rgb[1] / 255.0, rgb[2] / 255.0)
    return (int(round(h * 360)) % 360, int(round(s * 255)), int(round(v * 255)))


def hsv_to_rgb(hsv: tuple[int, int, int]) -> RGB:
    """Integer HSV back to RGB (0-255)."""
    h, s, v = hsv
    r, g, b = colorsys.hsv_to_rgb((h % 360) / 360.0, s / 255.0, v / 255.0)
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)))
