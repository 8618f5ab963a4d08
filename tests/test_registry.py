"""Tests for termscheme.registry: format auto-discovery."""

import pytest
from termscheme import registry
from termscheme.core.types import SchemeFormat


class TestDiscover:
    def test_finds_both_formats(self):
        formats = registry.discover()
        assert set(formats) == {'modern', 'legacy'}
        assert all(isinstance(f, SchemeFormat) for f in formats.values())

    def test_modern_searched_first(self):
        assert [f.name for f in registry.all_formats()] == ['modern', 'legacy']

    def test_only_modern_is_writable(self):
        assert registry.get('modern').writable
        assert not registry.get('legacy').writable

    def test_unknown_format(self):
        with pytest.raises(KeyError):
            registry.get('kde5')


class TestForPath:
    def test_colorscheme(self):
        assert registry.for_path('/x/Solarized.colorscheme').name == 'modern'

    def test_schema(self):
        assert registry.for_path('/x/Linux.schema').name == 'legacy'

    def test_unsupported(self):
        assert registry.for_path('/x/theme.json') is None
