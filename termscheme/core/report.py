"""Report builder: text and JSON output for termscheme results."""

import json
from typing import Any

from termscheme.core.palette import rgb_to_hex
from termscheme.core.scheme import ColorScheme
from termscheme.core.types import TABLE_COLORS


def _display_name(scheme: ColorScheme) -> str:
    return scheme.name() or '(default)'


def format_text(scheme: ColorScheme, seed: int = 0) -> str:
    """Format a scheme's palette as human-readable text."""
    lines = []
    header = f'termscheme: {_display_name(scheme)} \u2014 {scheme.description()}'
    lines.append(header)
    dark = 'dark' if scheme.has_dark_background() else 'light'
    lines.append(f'  opacity {scheme.opacity():g}  background {dark}  seed {seed}')
    lines.append('')

    table = scheme.color_table(seed)
    for index in range(TABLE_COLORS):
        entry = table[index]
        flags = []
        if entry.bold:
            flags.append('bold')
        if entry.transparent:
            flags.append('transparent')
        rng_range = scheme.randomization_range(index)
        if not rng_range.is_null():
            flags.append(f'random h={rng_range.hue} s={rng_range.saturation} v={rng_range.value}')
        name = ColorScheme.translated_color_name_for_index(index)
        line = f'  {index:>2} {name:<22} {rgb_to_hex(entry.color)}'
        if flags:
            line += f'  {", ".join(flags)}'
        lines.append(line)
    return '\n'.join(lines)


def format_list(schemes: list[ColorScheme]) -> str:
    """One line per scheme: name and description."""
    if not schemes:
        return 'No colour schemes found.'
    width = max(len(_display_name(s)) for s in schemes)
    return '\n'.join(f'  {_display_name(s):<{width}}  {s.description()}' for s in schemes)


def scheme_to_dict(scheme: ColorScheme, seed: int = 0) -> dict[str, Any]:
    table = scheme.color_table(seed)
    colors = []
    for index, entry in enumerate(table):
        rng_range = scheme.randomization_range(index)
        colors.append(
            {
                'index': index,
                'name': ColorScheme.color_name_for_index(index),
                'hex': rgb_to_hex(entry.color),
                'rgb': list(entry.color),
                'transparent': entry.transparent,
                'font_weight': entry.font_weight.value,
                'random': None
                if rng_range.is_null()
                else {'hue': rng_range.hue, 'saturation': rng_range.saturation, 'value': rng_range.value},
            }
        )
    return {
        'name': scheme.name(),
        'description': scheme.description(),
        'opacity': scheme.opacity(),
        'dark_background': scheme.has_dark_background(),
        'randomized_background': scheme.randomized_background_color(),
        'seed': seed,
        'colors': colors,
    }


def format_json(scheme: ColorScheme, seed: int = 0) -> str:
    """Format a scheme as JSON."""
    return json.dumps(scheme_to_dict(scheme, seed), indent=2)
