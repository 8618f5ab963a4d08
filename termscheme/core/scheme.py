"""ColorScheme: a named terminal palette with optional per-slot randomization.

A scheme starts out on the built-in DEFAULT_TABLE. The first call to
set_color_table_entry() gives it a custom table (copied from the default),
and the first call to set_randomization_range() gives it a randomization
table (all ranges null). Both tables are index-aligned with the slot layout
described in termscheme.core.palette.

Randomized tables are computed on demand from a caller-supplied seed. The
perturbation for slot i depends only on (seed, i) and the slot's range, so
the same seed always yields the same palette and seed 0 yields the base
palette.

Once a scheme is handed to the SchemeManager it is frozen: all reads stay
valid, mutators raise SchemeFrozenError. Use copy() to edit a published
scheme.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from termscheme.core.palette import (
    COLOR_NAMES,
    DEFAULT_TABLE,
    TRANSLATED_COLOR_NAMES,
    hsv_to_rgb,
    rgb_to_hsv,
)
from termscheme.core.types import (
    BACKGROUND_INDEX,
    FOREGROUND_INDEX,
    NULL_RANGE,
    RGB,
    TABLE_COLORS,
    ColorEntry,
    RandomizationRange,
    SchemeFrozenError,
    SchemeReadError,
)

_log = logging.getLogger(__name__)

DARK_VALUE_THRESHOLD = 127


def _check_index(index: int) -> None:
    if not 0 <= index < TABLE_COLORS:
        raise IndexError(f'colour table index {index} out of range [0, {TABLE_COLORS})')


def _offset(draw: float, span: int) -> int:
    """Map a uniform draw in [0, 1) to an integer offset in [-span/2, +span/2]."""
    return int(round(draw * span - span / 2.0))


class ColorScheme:
    """Palette, opacity, and randomization settings for a terminal display."""

    def __init__(self) -> None:
        self._name = ''
        self._description = ''
        self._opacity = 1.0
        self._table: list[ColorEntry] | None = None  # None: DEFAULT_TABLE
        self._random_table: list[RandomizationRange] | None = None
        self._randomize_background = True
        self._frozen = False
        self._modified = False

    # -- identity ---------------------------------------------------------

    def name(self) -> str:
        return self._name

    def set_name(self, name: str) -> None:
        self._check_mutable()
        self._name = name
        self._modified = True

    def description(self) -> str:
        return self._description

    def set_description(self, description: str) -> None:
        self._check_mutable()
        self._description = description
        self._modified = True

    def opacity(self) -> float:
        """Background opacity, 0 (transparent) to 1 (opaque). Not clamped."""
        return self._opacity

    def set_opacity(self, opacity: float) -> None:
        self._check_mutable()
        self._opacity = opacity
        self._modified = True

    # -- palette ----------------------------------------------------------

    def has_custom_table(self) -> bool:
        return self._table is not None

    def has_randomization(self) -> bool:
        return self._random_table is not None and any(not r.is_null() for r in self._random_table)

    def base_table(self) -> tuple[ColorEntry, ...]:
        """The active (non-randomized) table: custom if set, else the default."""
        return tuple(self._table) if self._table is not None else DEFAULT_TABLE

    def set_color_table_entry(self, index: int, entry: ColorEntry) -> None:
        _check_index(index)
        self._check_mutable()
        if self._table is None:
            self._table = list(DEFAULT_TABLE)
        self._table[index] = entry
        self._modified = True

    def randomization_range(self, index: int) -> RandomizationRange:
        _check_index(index)
        if self._random_table is None:
            return NULL_RANGE
        return self._random_table[index]

    def set_randomization_range(self, index: int, hue: int, saturation: int, value: int) -> None:
        _check_index(index)
        self._check_mutable()
        if self._random_table is None:
            self._random_table = [NULL_RANGE] * TABLE_COLORS
        self._random_table[index] = RandomizationRange(hue=hue, saturation=saturation, value=value)
        self._modified = True

    def set_randomized_background_color(self, randomize: bool) -> None:
        self._check_mutable()
        self._randomize_background = randomize
        self._modified = True

    def randomized_background_color(self) -> bool:
        return self._randomize_background

    def color_entry(self, index: int, seed: int = 0) -> ColorEntry:
        """Slot `index` of the table that color_table(seed) would return."""
        _check_index(index)
        entry = self._table[index] if self._table is not None else DEFAULT_TABLE[index]
        if seed == 0 or self._random_table is None:
            return entry
        if index == BACKGROUND_INDEX and not self._randomize_background:
            return entry
        rng_range = self._random_table[index]
        if rng_range.is_null():
            return entry
        return self._randomize(entry, rng_range, seed, index)

    def color_table(self, seed: int = 0) -> list[ColorEntry]:
        """A freshly computed table of TABLE_COLORS entries for `seed`."""
        return [self.color_entry(i, seed) for i in range(TABLE_COLORS)]

    def get_color_table(self, table: list[ColorEntry], seed: int = 0) -> None:
        """Fill a caller-provided list of exactly TABLE_COLORS entries."""
        if len(table) != TABLE_COLORS:
            raise ValueError(f'colour table must have {TABLE_COLORS} entries, got {len(table)}')
        table[:] = self.color_table(seed)

    def foreground_color(self) -> RGB:
        return self.color_entry(FOREGROUND_INDEX).color

    def background_color(self) -> RGB:
        return self.color_entry(BACKGROUND_INDEX).color

    def has_dark_background(self) -> bool:
        """True if the background's HSV value is below 127."""
        _h, _s, v = rgb_to_hsv(self.background_color())
        return v < DARK_VALUE_THRESHOLD

    @staticmethod
    def _randomize(entry: ColorEntry, rng_range: RandomizationRange, seed: int, index: int) -> ColorEntry:
        # Three draws per slot regardless of which components are non-zero,
        # so a slot's outcome depends only on (seed, index).
        rng = np.random.default_rng([seed & 0xFFFFFFFFFFFFFFFF, index])
        dh, ds, dv = rng.random(3)
        hue, saturation, value = rgb_to_hsv(entry.color)
        hue = (hue + _offset(dh, rng_range.hue)) % 360
        saturation = max(0, min(255, saturation + _offset(ds, rng_range.saturation)))
        value = max(0, min(255, value + _offset(dv, rng_range.value)))
        return entry.with_color(hsv_to_rgb((hue, saturation, value)))

    # -- names ------------------------------------------------------------

    @staticmethod
    def color_name_for_index(index: int) -> str:
        """Stable machine name of a slot, used as the section name on disk."""
        _check_index(index)
        return COLOR_NAMES[index]

    @staticmethod
    def translated_color_name_for_index(index: int) -> str:
        """Human-readable name of a slot."""
        _check_index(index)
        return TRANSLATED_COLOR_NAMES[index]

    # -- persistence ------------------------------------------------------

    def read(self, path: str | Path) -> bool:
        """Load the .colorscheme file at `path` into this scheme.

        All or nothing: if the file cannot be opened or is not a key/value
        document, this scheme is left untouched and False is returned.
        Individually malformed values are skipped with a warning.
        """
        from termscheme.formats.modern import read_modern_scheme

        self._check_mutable()
        try:
            parsed = read_modern_scheme(path)
        except SchemeReadError as e:
            _log.warning('could not read colour scheme %s: %s', path, e)
            return False

        self._description = parsed._description
        self._opacity = parsed._opacity
        self._table = list(parsed._table) if parsed._table is not None else None
        self._random_table = list(parsed._random_table) if parsed._random_table is not None else None
        self._randomize_background = parsed._randomize_background
        self._modified = True
        return True

    def write(self, path: str | Path) -> None:
        """Write this scheme to `path` in the .colorscheme format. Raises OSError."""
        from termscheme.formats.modern import write_modern_scheme

        write_modern_scheme(self, path)

    # -- lifecycle --------------------------------------------------------

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> ColorScheme:
        """Make this scheme read-only. Returns self."""
        self._frozen = True
        return self

    @property
    def is_modified(self) -> bool:
        return self._modified

    def mark_clean(self) -> None:
        self._modified = False

    def mark_modified(self) -> None:
        self._modified = True

    def copy(self) -> ColorScheme:
        """Deep, unfrozen copy. The modified flag carries over."""
        other = ColorScheme()
        other._name = self._name
        other._description = self._description
        other._opacity = self._opacity
        other._table = list(self._table) if self._table is not None else None
        other._random_table = list(self._random_table) if self._random_table is not None else None
        other._randomize_background = self._randomize_background
        other._modified = self._modified
        return other

    __copy__ = copy

    def _check_mutable(self) -> None:
        if self._frozen:
            raise SchemeFrozenError(f'colour scheme {self._name!r} is read-only; copy() it to make changes')

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColorScheme):
            return NotImplemented
        return (
            self._name == other._name
            and self._description == other._description
            and self._opacity == other._opacity
            and self.base_table() == other.base_table()
            and [self.randomization_range(i) for i in range(TABLE_COLORS)]
            == [other.randomization_range(i) for i in range(TABLE_COLORS)]
            and self._randomize_background == other._randomize_background
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f'ColorScheme(name={self._name!r}, description={self._description!r})'


def _build_default_scheme() -> ColorScheme:
    scheme = ColorScheme()
    scheme.set_description('Default')
    scheme.mark_clean()
    return scheme.freeze()


# The one scheme that exists without any file access. Never cached, never deleted.
DEFAULT_COLOR_SCHEME = _build_default_scheme()
