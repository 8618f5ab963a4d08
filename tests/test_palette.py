"""Tests for termscheme.core.palette: default table, slot names, colour conversions."""

import pytest
from termscheme.core.palette import (
    COLOR_NAMES,
    DEFAULT_TABLE,
    TRANSLATED_COLOR_NAMES,
    hsv_to_rgb,
    parse_color,
    rgb_to_hex,
    rgb_to_hsv,
)
from termscheme.core.types import TABLE_COLORS


class TestDefaultTable:
    def test_size(self):
        assert len(DEFAULT_TABLE) == TABLE_COLORS

    def test_foreground_black_background_white(self):
        assert DEFAULT_TABLE[0].color == (0, 0, 0)
        assert DEFAULT_TABLE[1].color == (255, 255, 255)

    def test_dim_red(self):
        assert DEFAULT_TABLE[3].color == (0xB2, 0x18, 0x18)

    def test_intense_red(self):
        assert DEFAULT_TABLE[13].color == (0xFF, 0x54, 0x54)

    def test_background_slots_transparent(self):
        assert DEFAULT_TABLE[1].transparent
        assert DEFAULT_TABLE[11].transparent
        assert not DEFAULT_TABLE[0].transparent


class TestColorNames:
    def test_machine_names(self):
        assert COLOR_NAMES[0] == 'Foreground'
        assert COLOR_NAMES[1] == 'Background'
        assert COLOR_NAMES[2] == 'Color0'
        assert COLOR_NAMES[11] == 'BackgroundIntense'
        assert COLOR_NAMES[19] == 'Color7Intense'

    def test_names_unique(self):
        assert len(set(COLOR_NAMES)) == TABLE_COLORS
        assert len(set(TRANSLATED_COLOR_NAMES)) == TABLE_COLORS

    def test_translated_names(self):
        assert TRANSLATED_COLOR_NAMES[2] == 'Color 1'
        assert TRANSLATED_COLOR_NAMES[12] == 'Color 1 (Intense)'


class TestParseColor:
    def test_triplet(self):
        assert parse_color('10,20,30') == (10, 20, 30)

    def test_triplet_with_spaces(self):
        assert parse_color(' 10 , 20 ,30 ') == (10, 20, 30)

    def test_hex(self):
        assert parse_color('#dc322f') == (220, 50, 47)

    def test_short_hex(self):
        assert parse_color('#fff') == (255, 255, 255)

    def test_named(self):
        assert parse_color('red') == (255, 0, 0)

    def test_out_of_range_component(self):
        with pytest.raises(ValueError):
            parse_color('256,0,0')

    def test_garbage(self):
        with pytest.raises(ValueError):
            parse_color('not a colour')

    def test_empty(self):
        with pytest.raises(ValueError):
            parse_color('   ')


class TestHsv:
    def test_red(self):
        assert rgb_to_hsv((255, 0, 0)) == (0, 255, 255)

    def test_blue(self):
        assert rgb_to_hsv((0, 0, 255)) == (240, 255, 255)

    def test_grey_has_zero_hue_and_saturation(self):
        assert rgb_to_hsv((127, 127, 127)) == (0, 0, 127)

    def test_value_is_max_component(self):
        assert rgb_to_hsv((10, 200, 30))[2] == 200

    def test_back_to_rgb(self):
        assert hsv_to_rgb((120, 255, 255)) == (0, 255, 0)

    def test_hue_wraps(self):
        assert hsv_to_rgb((360, 255, 255)) == (255, 0, 0)


class TestRgbToHex:
    def test_hex(self):
        assert rgb_to_hex((0, 43, 54)) == '#002b36'
