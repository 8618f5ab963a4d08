"""Key/value colour scheme files (.colorscheme), the current on-disk format.

INI-style document. A [General] section carries the description and the
background opacity; one section per table slot, named after the slot's
machine name (Foreground, Background, Color0 ... Color7Intense), carries
its colour, flags, and optional randomization range.

    [General]
    Description=Solarized Dark
    Opacity=0.9
    RandomizedBackgroundColor=true

    [Background]
    Color=0,43,54
    Transparency=false
    MaxRandomHue=30
    MaxRandomSaturation=0
    MaxRandomValue=20

    [Color1]
    Color=#dc322f
    Bold=true

Keys per slot:
  Color                 r,g,b  |  #rrggbb  |  CSS colour name
  Transparency          bool, default false (Transparent is also accepted)
  Bold                  bool; true forces bold, false forces normal, absent inherits
  MaxRandomHue          0-340, default 0
  MaxRandomSaturation   0-255, default 0
  MaxRandomValue        0-255, default 0

[General] keys:
  Description                 free text
  Opacity                     0.0-1.0, default 1.0
  RandomizedBackgroundColor   bool, default true

A malformed value skips that value (or the slot, for Color) with a
warning; the rest of the file still loads. A file that is not a key/value
document at all fails to load.

Example:
    termscheme import ~/Downloads/Solarized.colorscheme
"""

import configparser
import logging
from pathlib import Path
from typing import IO

from termscheme.core.palette import parse_color
from termscheme.core.scheme import ColorScheme
from termscheme.core.types import TABLE_COLORS, ColorEntry, FontWeight, SchemeFormat, SchemeReadError

_log = logging.getLogger(__name__)

scheme_format = SchemeFormat(
    name='modern',
    extension='.colorscheme',
    help='Key/value .colorscheme files: [General] plus one section per colour slot.',
    priority=0,
)

GENERAL_SECTION = 'General'
DEFAULT_DESCRIPTION = 'Un-named Color Scheme'
_TRANSPARENCY_KEYS = ('Transparency', 'Transparent')


def _new_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(interpolation=None, strict=False)
    parser.optionxform = str  # keys are case-sensitive
    return parser


class ModernSchemeReader:
    """Reads a .colorscheme document from an open text stream."""

    def __init__(self, stream: IO[str]):
        self._stream = stream

    def read(self) -> ColorScheme:
        """Parse the stream into a new ColorScheme.

        Raises SchemeReadError if the stream is not a key/value document.
        """
        parser = _new_parser()
        try:
            parser.read_file(self._stream)
        except configparser.MissingSectionHeaderError as e:
            raise SchemeReadError(f'not a colour scheme document: {e}') from e
        except configparser.ParsingError as e:
            # Well-formed lines are kept; only the bad ones are dropped.
            _log.warning('skipping malformed lines in colour scheme: %s', e)

        scheme = ColorScheme()
        self._read_general(parser, scheme)
        for index in range(TABLE_COLORS):
            self._read_color_entry(parser, scheme, index)
        return scheme

    def _read_general(self, parser: configparser.ConfigParser, scheme: ColorScheme) -> None:
        if not parser.has_section(GENERAL_SECTION):
            scheme.set_description(DEFAULT_DESCRIPTION)
            return
        general = parser[GENERAL_SECTION]
        scheme.set_description(general.get('Description', DEFAULT_DESCRIPTION))
        opacity = general.get('Opacity')
        if opacity is not None:
            try:
                scheme.set_opacity(float(opacity))
            except ValueError:
                _log.warning('ignoring malformed Opacity %r', opacity)
        randomize = self._read_bool(general, GENERAL_SECTION, 'RandomizedBackgroundColor')
        if randomize is not None:
            scheme.set_randomized_background_color(randomize)

    def _read_color_entry(self, parser: configparser.ConfigParser, scheme: ColorScheme, index: int) -> None:
        section_name = ColorScheme.color_name_for_index(index)
        if not parser.has_section(section_name):
            return
        section = parser[section_name]

        raw_color = section.get('Color')
        if raw_color is None:
            _log.warning('[%s] has no Color, keeping the default', section_name)
        else:
            try:
                color = parse_color(raw_color)
            except ValueError:
                _log.warning('[%s] ignoring malformed Color %r', section_name, raw_color)
            else:
                scheme.set_color_table_entry(
                    index,
                    ColorEntry(
                        color=color,
                        transparent=self._read_transparency(section, section_name),
                        font_weight=self._read_font_weight(section, section_name),
                    ),
                )

        hue = self._read_int(section, section_name, 'MaxRandomHue')
        saturation = self._read_int(section, section_name, 'MaxRandomSaturation')
        value = self._read_int(section, section_name, 'MaxRandomValue')
        if hue or saturation or value:
            scheme.set_randomization_range(index, hue, saturation, value)

    @staticmethod
    def _read_bool(section: configparser.SectionProxy, section_name: str, key: str) -> bool | None:
        if key not in section:
            return None
        try:
            return section.getboolean(key)
        except ValueError:
            _log.warning('[%s] ignoring malformed %s %r', section_name, key, section[key])
            return None

    def _read_transparency(self, section: configparser.SectionProxy, section_name: str) -> bool:
        for key in _TRANSPARENCY_KEYS:
            flag = self._read_bool(section, section_name, key)
            if flag is not None:
                return flag
        return False

    def _read_font_weight(self, section: configparser.SectionProxy, section_name: str) -> FontWeight:
        bold = self._read_bool(section, section_name, 'Bold')
        if bold is None:
            return FontWeight.USE_CURRENT_FORMAT
        return FontWeight.BOLD if bold else FontWeight.NORMAL

    @staticmethod
    def _read_int(section: configparser.SectionProxy, section_name: str, key: str) -> int:
        raw = section.get(key)
        if raw is None:
            return 0
        try:
            return int(raw.strip())
        except ValueError:
            _log.warning('[%s] ignoring malformed %s %r', section_name, key, raw)
            return 0


class ModernSchemeWriter:
    """Writes a ColorScheme as a .colorscheme document."""

    def __init__(self, stream: IO[str]):
        self._stream = stream

    def write(self, scheme: ColorScheme) -> None:
        parser = _new_parser()
        parser[GENERAL_SECTION] = {
            'Description': scheme.description(),
            'Opacity': str(float(scheme.opacity())),
            'RandomizedBackgroundColor': 'true' if scheme.randomized_background_color() else 'false',
        }
        table = scheme.base_table()
        for index in range(TABLE_COLORS):
            entry = table[index]
            r, g, b = entry.color
            section: dict[str, str] = {
                'Color': f'{r},{g},{b}',
                'Transparency': 'true' if entry.transparent else 'false',
            }
            if entry.font_weight is not FontWeight.USE_CURRENT_FORMAT:
                section['Bold'] = 'true' if entry.font_weight is FontWeight.BOLD else 'false'
            rng_range = scheme.randomization_range(index)
            if not rng_range.is_null():
                section['MaxRandomHue'] = str(rng_range.hue)
                section['MaxRandomSaturation'] = str(rng_range.saturation)
                section['MaxRandomValue'] = str(rng_range.value)
            parser[ColorScheme.color_name_for_index(index)] = section
        parser.write(self._stream, space_around_delimiters=False)


@scheme_format.reader
def read(stream: IO[str]) -> ColorScheme:
    return ModernSchemeReader(stream).read()


@scheme_format.writer
def write(scheme: ColorScheme, stream: IO[str]) -> None:
    ModernSchemeWriter(stream).write(scheme)


def read_modern_scheme(path: str | Path) -> ColorScheme:
    """Load a .colorscheme file. Raises SchemeReadError."""
    return scheme_format.load(path)


def write_modern_scheme(scheme: ColorScheme, path: str | Path) -> None:
    """Save `scheme` as a .colorscheme file. Raises OSError."""
    scheme_format.save(scheme, path)
