"""Shared types for termscheme: ColorEntry, RandomizationRange, SchemeFormat, errors."""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any

# 2 default colours + 8 ANSI colours, each in normal and intense variants
BASE_COLORS = 2 + 8
INTENSITIES = 2
TABLE_COLORS = INTENSITIES * BASE_COLORS

FOREGROUND_INDEX = 0
BACKGROUND_INDEX = 1

MAX_HUE = 340
MAX_COMPONENT = 255

RGB = tuple[int, int, int]


class SchemeError(Exception):
    """Base class for termscheme errors."""


class SchemeReadError(SchemeError):
    """A scheme stream could not be opened, decoded, or parsed as a document."""


class SchemeFrozenError(SchemeError):
    """A mutation was attempted on a scheme that has been published."""


class FontWeight(enum.Enum):
    """Tri-state bold flag of a colour slot."""

    BOLD = 'bold'
    NORMAL = 'normal'
    USE_CURRENT_FORMAT = 'inherit'


@dataclass(frozen=True)
class ColorEntry:
    """A colour slot's base appearance."""

    color: RGB = (0, 0, 0)
    transparent: bool = False
    font_weight: FontWeight = FontWeight.USE_CURRENT_FORMAT

    @property
    def bold(self) -> bool:
        return self.font_weight is FontWeight.BOLD

    def with_color(self, color: RGB) -> ColorEntry:
        return ColorEntry(color=color, transparent=self.transparent, font_weight=self.font_weight)


def _clamp(value: int, upper: int) -> int:
    return max(0, min(upper, int(value)))


@dataclass(frozen=True)
class RandomizationRange:
    """How far a slot may drift from its base colour, in HSV units.

    Hue is capped at MAX_HUE (below 360) so a full-range offset can never
    land on the colour it started from.
    """

    hue: int = 0
    saturation: int = 0
    value: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, 'hue', _clamp(self.hue, MAX_HUE))
        object.__setattr__(self, 'saturation', _clamp(self.saturation, MAX_COMPONENT))
        object.__setattr__(self, 'value', _clamp(self.value, MAX_COMPONENT))

    def is_null(self) -> bool:
        return self.hue == 0 and self.saturation == 0 and self.value == 0


NULL_RANGE = RandomizationRange()


class SchemeFormat:
    """A self-registering on-disk scheme format.

    Usage in a format module:

        scheme_format = SchemeFormat(name='legacy', extension='.schema', help='...')

        @scheme_format.reader
        def read(stream):
            ...
    """

    def __init__(self, name: str, extension: str, help: str = '', priority: int = 100):
        self.name = name
        self.extension = extension
        self.help = help
        self.priority = priority
        self._read_fn: Callable | None = None
        self._write_fn: Callable | None = None

    def reader(self, fn: Callable) -> Callable:
        """Decorator to register the read function."""
        self._read_fn = fn
        return fn

    def writer(self, fn: Callable) -> Callable:
        """Decorator to register the write function."""
        self._write_fn = fn
        return fn

    @property
    def writable(self) -> bool:
        return self._write_fn is not None

    def matches(self, path: Any) -> bool:
        return str(path).endswith(self.extension)

    def read(self, stream: IO[str]) -> Any:
        """Parse a scheme from an open text stream."""
        if self._read_fn is None:
            raise RuntimeError(f'Format {self.name} has no read function')
        return self._read_fn(stream)

    def write(self, scheme: Any, stream: IO[str]) -> None:
        """Serialize a scheme to an open text stream."""
        if self._write_fn is None:
            raise RuntimeError(f'Format {self.name} has no write function')
        self._write_fn(scheme, stream)

    def scheme_name(self, path: str | Path) -> str:
        """Scheme name for a file: its file name without this format's extension."""
        filename = Path(path).name
        if filename.endswith(self.extension):
            return filename[: -len(self.extension)]
        return Path(path).stem

    def load(self, path: str | Path) -> Any:
        """Read the scheme file at `path` and name it after the file.

        Raises SchemeReadError if the file cannot be opened or decoded.
        """
        try:
            with open(path, encoding='utf-8') as f:
                scheme = self.read(f)
        except (OSError, UnicodeDecodeError) as e:
            raise SchemeReadError(f'{path}: {e}') from e
        scheme.set_name(self.scheme_name(path))
        return scheme

    def save(self, scheme: Any, path: str | Path) -> None:
        """Write `scheme` to `path`. Raises OSError."""
        with open(path, 'w', encoding='utf-8') as f:
            self.write(scheme, f)
