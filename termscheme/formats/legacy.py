"""Line-oriented colour scheme files (.schema), the older on-disk format.

One directive per line. Lines starting with '#' are comments, and a
'#' also ends the fields of a color line. A title keeps the rest of
its line verbatim.

    title Linux Colors
    color 0 178 178 178 0 0     # foreground
    color 1   0   0   0 1 0     # background

Directives:
  color <index> <red> <green> <blue> <transparent 0|1> <bold 0|1>
  title <free text>

Only the palette and title are read. Any other directive (background
images, blend colours, ...) is skipped, as is any color line with the
wrong number of fields or a value out of range. Reading never fails on
content, only when the file cannot be opened or decoded.

Example:
    termscheme import ~/.kde3/share/apps/konsole/LinuxColors.schema
"""

import logging
import re
from collections.abc import Iterable
from pathlib import Path
from typing import IO

from termscheme.core.scheme import ColorScheme
from termscheme.core.types import TABLE_COLORS, ColorEntry, FontWeight, SchemeFormat

_log = logging.getLogger(__name__)

scheme_format = SchemeFormat(
    name='legacy',
    extension='.schema',
    help='Line-oriented .schema files: title and color directives.',
    priority=10,
)

_COMMENT = re.compile(r'#.*$')
_COLOR_FIELDS = 7  # 'color' + index, r, g, b, transparent, bold
_MAX_COLOR_VALUE = 255


class LegacySchemeReader:
    """Reads a .schema document from a stream of lines."""

    def __init__(self, stream: Iterable[str]):
        self._stream = stream

    def read(self) -> ColorScheme:
        """Parse every recognised line into a new ColorScheme."""
        scheme = ColorScheme()
        for raw in self._stream:
            line = raw.strip()
            if not line or line.startswith('#'):
                continue
            directive = line.split(None, 1)[0]
            if directive == 'color':
                if not self._read_color_line(_COMMENT.sub('', line), scheme):
                    _log.warning('failed to read colour scheme line %r', line)
            elif directive == 'title':
                if not self._read_title_line(line, scheme):
                    _log.warning('failed to read colour scheme title line %r', line)
            else:
                _log.debug('skipping unsupported colour scheme line %r', line)
        return scheme

    @staticmethod
    def _read_color_line(line: str, scheme: ColorScheme) -> bool:
        fields = line.split()
        if len(fields) != _COLOR_FIELDS:
            return False
        try:
            index, red, green, blue, transparent, bold = (int(f) for f in fields[1:])
        except ValueError:
            return False

        if not 0 <= index < TABLE_COLORS:
            return False
        if any(not 0 <= c <= _MAX_COLOR_VALUE for c in (red, green, blue)):
            return False
        if transparent not in (0, 1) or bold not in (0, 1):
            return False

        scheme.set_color_table_entry(
            index,
            ColorEntry(
                color=(red, green, blue),
                transparent=transparent == 1,
                font_weight=FontWeight.BOLD if bold == 1 else FontWeight.USE_CURRENT_FORMAT,
            ),
        )
        return True

    @staticmethod
    def _read_title_line(line: str, scheme: ColorScheme) -> bool:
        _directive, _, description = line.partition(' ')
        # text after the first space, unchanged
        if not description:
            return False
        scheme.set_description(description)
        return True


@scheme_format.reader
def read(stream: IO[str]) -> ColorScheme:
    return LegacySchemeReader(stream).read()


def read_legacy_scheme(path: str | Path) -> ColorScheme:
    """Load a .schema file. Raises SchemeReadError."""
    return scheme_format.load(path)
