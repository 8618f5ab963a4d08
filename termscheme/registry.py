"""Scheme format auto-discovery and registration.

Scans termscheme/formats/ for modules that define a `scheme_format` object
of type SchemeFormat. Collects them into a dict keyed by name, ordered by
search priority (the modern format is looked for before the legacy one).

Handles both normal Python (pkgutil.iter_modules) and frozen PyInstaller
binaries (where iter_modules returns nothing: falls back to explicit
imports from formats/__init__.py).
"""

import importlib
import pkgutil
from pathlib import Path

from termscheme.core.types import SchemeFormat

_registry: dict[str, SchemeFormat] = {}

# Known format module names: fallback for frozen binaries
_FORMAT_MODULES = [
    'legacy',
    'modern',
]


def discover() -> dict[str, SchemeFormat]:
    """Import all format modules and return the registry."""
    if _registry:
        return _registry

    import termscheme.formats as pkg

    # Try pkgutil first (works in normal Python)
    found_modules = [
        modname for _importer, modname, _ispkg in pkgutil.iter_modules(pkg.__path__) if not modname.startswith('_')
    ]

    # Frozen binary fallback: pkgutil finds nothing, use known list
    if not found_modules:
        found_modules = _FORMAT_MODULES

    found: list[SchemeFormat] = []
    for modname in found_modules:
        module = importlib.import_module(f'termscheme.formats.{modname}')
        fmt = getattr(module, 'scheme_format', None)
        if isinstance(fmt, SchemeFormat):
            found.append(fmt)

    for fmt in sorted(found, key=lambda f: (f.priority, f.name)):
        _registry[fmt.name] = fmt

    return _registry


def get(name: str) -> SchemeFormat:
    """Get a format by name."""
    reg = discover()
    if name not in reg:
        raise KeyError(f'Unknown format: {name}. Available: {", ".join(sorted(reg))}')
    return reg[name]


def all_formats() -> list[SchemeFormat]:
    """Return all registered formats in search order."""
    return list(discover().values())


def for_path(path: str | Path) -> SchemeFormat | None:
    """Return the format whose extension matches `path`, or None."""
    for fmt in discover().values():
        if fmt.matches(path):
            return fmt
    return None
