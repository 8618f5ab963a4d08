"""SchemeManager: discovers, loads, caches, imports, deletes, and saves colour schemes.

Schemes are looked up by name. The first request for a name searches the
configured directories for `<name>.colorscheme`, then `<name>.schema`,
parses the first match, freezes it, and caches it; later requests return
the same instance without touching the disk. all_color_schemes() does the
expensive full scan once.

Schemes edited by callers come back in through add_color_scheme(). They
keep their modified flag inside the cache and are written to the user
directory by flush(), which shutdown() (and leaving a `with` block) calls.

Nothing here raises for missing, unreadable, or malformed files: lookups
return None and other operations return False.
"""

import atexit
import logging
from pathlib import Path

from termscheme import registry
from termscheme.core.env import scheme_search_dirs, user_scheme_dir
from termscheme.core.scheme import DEFAULT_COLOR_SCHEME, ColorScheme
from termscheme.core.types import SchemeFormat, SchemeReadError

_log = logging.getLogger(__name__)


def _valid_name(name: str) -> bool:
    return bool(name) and '/' not in name and '\\' not in name and '\0' not in name and not name.startswith('.')


class SchemeManager:
    """Directory of the colour schemes available to terminal displays."""

    def __init__(self, search_dirs: list[str | Path] | None = None, user_dir: str | Path | None = None):
        self._user_dir = Path(user_dir) if user_dir is not None else user_scheme_dir()
        if search_dirs is None:
            self._search_dirs = scheme_search_dirs(self._user_dir)
        else:
            dirs = [Path(d) for d in search_dirs]
            self._search_dirs = [self._user_dir] + [d for d in dirs if d != self._user_dir]
        self._color_schemes: dict[str, ColorScheme] = {}
        self._paths: dict[str, Path] = {}  # backing file of each cached scheme, if any
        self._have_loaded_all = False

    def __enter__(self) -> 'SchemeManager':
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    @property
    def user_dir(self) -> Path:
        return self._user_dir

    @property
    def search_dirs(self) -> list[Path]:
        return list(self._search_dirs)

    @property
    def have_loaded_all(self) -> bool:
        return self._have_loaded_all

    # -- lookup -----------------------------------------------------------

    def default_color_scheme(self) -> ColorScheme:
        """The built-in scheme. Never touches the disk."""
        return DEFAULT_COLOR_SCHEME

    def find_color_scheme(self, name: str) -> ColorScheme | None:
        """Return the scheme called `name`, loading it on first use.

        An empty name returns the default scheme. Returns None if no scheme
        with that name can be found or read.
        """
        if not name:
            return self.default_color_scheme()
        if name in self._color_schemes:
            return self._color_schemes[name]

        found = self._find_scheme_path(name)
        if found is None:
            _log.debug('could not find colour scheme %r', name)
            return None
        path, fmt = found
        scheme = self._load(path, fmt)
        if scheme is None:
            return None
        self._publish(name, scheme, path)
        return scheme

    def all_color_schemes(self) -> list[ColorScheme]:
        """Every available scheme, sorted by name.

        The first call reads and parses every scheme file in the search
        directories; later calls only read the cache.
        """
        if not self._have_loaded_all:
            self._load_all_color_schemes()
        return [self._color_schemes[name] for name in sorted(self._color_schemes)]

    def list_scheme_paths(self, fmt: SchemeFormat) -> list[Path]:
        """Candidate files of one format across the search directories, in search order."""
        paths: list[Path] = []
        for directory in self._search_dirs:
            if not directory.is_dir():
                continue
            try:
                entries = sorted(directory.iterdir())
            except OSError as e:
                _log.warning('cannot list colour scheme directory %s: %s', directory, e)
                continue
            paths.extend(p for p in entries if p.is_file() and fmt.matches(p))
        return paths

    def _find_scheme_path(self, name: str) -> tuple[Path, SchemeFormat] | None:
        if not _valid_name(name):
            return None
        for fmt in registry.all_formats():
            for directory in self._search_dirs:
                candidate = directory / f'{name}{fmt.extension}'
                if candidate.is_file():
                    return candidate, fmt
        return None

    def _load_all_color_schemes(self) -> None:
        success = 0
        failed = 0
        for fmt in registry.all_formats():
            for path in self.list_scheme_paths(fmt):
                name = fmt.scheme_name(path)
                if name in self._color_schemes:
                    _log.debug('colour scheme %r has already been found, ignoring %s', name, path)
                    success += 1
                    continue
                scheme = self._load(path, fmt)
                if scheme is None:
                    failed += 1
                    continue
                self._publish(name, scheme, path)
                success += 1
        if failed:
            _log.info('failed to load %d colour schemes', failed)
        _log.debug('loaded %d colour schemes', success)
        self._have_loaded_all = True

    def _load(self, path: Path, fmt: SchemeFormat) -> ColorScheme | None:
        try:
            scheme = fmt.load(path)
        except SchemeReadError as e:
            _log.warning('could not load colour scheme %s: %s', path, e)
            return None
        if not scheme.name():
            _log.warning('colour scheme in %s does not have a valid name and was not loaded', path)
            return None
        return scheme

    def _publish(self, name: str, scheme: ColorScheme, path: Path | None, keep_modified: bool = False) -> None:
        if not keep_modified:
            scheme.mark_clean()
        self._color_schemes[name] = scheme.freeze()
        if path is None:
            self._paths.pop(name, None)
        else:
            self._paths[name] = path

    # -- import / delete --------------------------------------------------

    def load_custom_color_scheme(self, path: str | Path) -> bool:
        """Load a .colorscheme or .schema file from anywhere.

        The scheme becomes available under the file's base name and
        replaces any cached scheme of the same name.
        """
        path = Path(path)
        fmt = registry.for_path(path)
        if fmt is None:
            _log.warning('unsupported colour scheme file %s', path)
            return False
        if not path.is_file():
            _log.warning('colour scheme file %s does not exist', path)
            return False
        scheme = self._load(path, fmt)
        if scheme is None:
            return False
        name = scheme.name()
        if name in self._color_schemes:
            _log.info('replacing colour scheme %r with %s', name, path)
        self._publish(name, scheme, path)
        return True

    def delete_color_scheme(self, name: str) -> bool:
        """Forget a scheme and delete its file from the user directory.

        Returns False for the default scheme, unknown names, and schemes
        whose file lives outside the user directory.
        """
        if not name:
            return False
        if name in self._color_schemes:
            path = self._paths.get(name)
        else:
            found = self._find_scheme_path(name)
            if found is None:
                return False
            path = found[0]

        if path is None:
            # Added in memory and never saved.
            self._forget(name)
            return True
        if not self._is_user_path(path):
            _log.info('not deleting read-only colour scheme %r (%s)', name, path)
            return False
        try:
            path.unlink()
        except OSError as e:
            _log.warning('failed to remove colour scheme %s: %s', path, e)
            return False
        self._forget(name)
        return True

    def _forget(self, name: str) -> None:
        self._color_schemes.pop(name, None)
        self._paths.pop(name, None)
        if not self._have_loaded_all:
            return
        # A file further down the search path may have been shadowed.
        found = self._find_scheme_path(name)
        if found is None:
            return
        path, fmt = found
        scheme = self._load(path, fmt)
        if scheme is not None:
            self._publish(name, scheme, path)

    def _is_user_path(self, path: Path) -> bool:
        try:
            return path.resolve().is_relative_to(self._user_dir.resolve())
        except OSError:
            return False

    # -- saving -----------------------------------------------------------

    def add_color_scheme(self, scheme: ColorScheme) -> bool:
        """Publish a caller-built scheme under its name, replacing any cached one.

        A frozen copy is cached; the caller's object stays editable. If the
        scheme has unsaved changes it is written out by the next flush().
        """
        name = scheme.name()
        if not _valid_name(name):
            _log.warning('cannot add colour scheme with invalid name %r', name)
            return False
        target = self._save_path(name)
        self._publish(name, scheme.copy(), target if target.is_file() else None, keep_modified=True)
        return True

    def modified_schemes(self) -> list[str]:
        """Names of cached schemes with unsaved changes."""
        return sorted(name for name, scheme in self._color_schemes.items() if scheme.is_modified)

    def flush(self) -> int:
        """Write every modified scheme to the user directory. Returns the number saved."""
        fmt = next(f for f in registry.all_formats() if f.writable)
        saved = 0
        for name in self.modified_schemes():
            scheme = self._color_schemes[name]
            target = self._save_path(name, fmt)
            try:
                self._user_dir.mkdir(parents=True, exist_ok=True)
                fmt.save(scheme, target)
            except OSError as e:
                _log.error('failed to save colour scheme %r to %s: %s', name, target, e)
                continue
            scheme.mark_clean()
            self._paths[name] = target
            saved += 1
        if saved:
            _log.info('saved %d colour schemes to %s', saved, self._user_dir)
        return saved

    def shutdown(self) -> None:
        """Save pending changes. Safe to call more than once."""
        self.flush()

    def _save_path(self, name: str, fmt: SchemeFormat | None = None) -> Path:
        if fmt is None:
            fmt = next(f for f in registry.all_formats() if f.writable)
        return self._user_dir / f'{name}{fmt.extension}'


_instance: SchemeManager | None = None


def instance() -> SchemeManager:
    """The process-wide manager, created on first use from the environment.

    Its pending changes are saved when the interpreter exits.
    """
    global _instance
    if _instance is None:
        _instance = SchemeManager()
    return _instance


def reset_instance() -> None:
    """Save and drop the process-wide manager."""
    global _instance
    if _instance is not None:
        _instance.shutdown()
    _instance = None


atexit.register(reset_instance)
