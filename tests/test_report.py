"""Tests for termscheme.core.report: text and JSON rendering of a scheme."""

import json

from termscheme.core.report import format_json, format_list, format_text
from termscheme.core.scheme import DEFAULT_COLOR_SCHEME, ColorScheme
from termscheme.core.types import TABLE_COLORS, ColorEntry, FontWeight


def _scheme() -> ColorScheme:
    scheme = ColorScheme()
    scheme.set_name('Night')
    scheme.set_description('Night Owl')
    scheme.set_color_table_entry(1, ColorEntry(color=(1, 22, 39)))
    scheme.set_color_table_entry(3, ColorEntry(color=(239, 83, 80), font_weight=FontWeight.BOLD))
    scheme.set_randomization_range(3, 20, 0, 0)
    return scheme


class TestFormatText:
    def test_header_and_rows(self):
        text = format_text(_scheme())
        lines = text.splitlines()
        assert lines[0] == 'termscheme: Night \u2014 Night Owl'
        assert 'background dark' in lines[1]
        assert len([line for line in lines if line.startswith('  ') and '#' in line]) == TABLE_COLORS

    def test_flags(self):
        text = format_text(_scheme())
        assert '#ef5350  bold, random h=20 s=0 v=0' in text

    def test_default_scheme_name(self):
        assert '(default)' in format_text(DEFAULT_COLOR_SCHEME)


class TestFormatJson:
    def test_structure(self):
        obj = json.loads(format_json(_scheme(), seed=0))
        assert obj['name'] == 'Night'
        assert obj['dark_background'] is True
        assert len(obj['colors']) == TABLE_COLORS
        red = obj['colors'][3]
        assert red['name'] == 'Color1'
        assert red['rgb'] == [239, 83, 80]
        assert red['font_weight'] == 'bold'
        assert red['random'] == {'hue': 20, 'saturation': 0, 'value': 0}
        assert obj['colors'][0]['random'] is None

    def test_seed_changes_nothing_without_ranges(self):
        assert json.loads(format_json(DEFAULT_COLOR_SCHEME, seed=9))['colors'][0]['hex'] == '#000000'


class TestFormatList:
    def test_lists_names(self):
        text = format_list([DEFAULT_COLOR_SCHEME, _scheme()])
        assert '(default)' in text
        assert any(line.split() == ['Night', 'Night', 'Owl'] for line in text.splitlines())

    def test_empty(self):
        assert format_list([]) == 'No colour schemes found.'
