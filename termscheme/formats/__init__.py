"""Auto-discovery of scheme format modules.

Every .py file in this package that defines a `scheme_format` object is
auto-registered by termscheme.registry.discover().

The explicit imports below ensure PyInstaller includes these modules
in the frozen binary. Without them, pkgutil.iter_modules cannot find
the format files at runtime.
"""

# PyInstaller hidden imports: keep this list in sync with format modules
import termscheme.formats.legacy as _legacy  # noqa: F401
import termscheme.formats.modern as _modern  # noqa: F401
