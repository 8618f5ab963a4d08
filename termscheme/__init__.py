"""termscheme: terminal colour schemes with seeded randomization."""

from termscheme.core.scheme import DEFAULT_COLOR_SCHEME, ColorScheme
from termscheme.core.types import (
    TABLE_COLORS,
    ColorEntry,
    FontWeight,
    RandomizationRange,
    SchemeError,
    SchemeFrozenError,
    SchemeReadError,
)
from termscheme.manager import SchemeManager, instance

__all__ = [
    'DEFAULT_COLOR_SCHEME',
    'TABLE_COLORS',
    'ColorEntry',
    'ColorScheme',
    'FontWeight',
    'RandomizationRange',
    'SchemeError',
    'SchemeFrozenError',
    'SchemeManager',
    'SchemeReadError',
    'instance',
]
