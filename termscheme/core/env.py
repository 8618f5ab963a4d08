"""Environment configuration for termscheme: .env loading and scheme directories.

Settings come from the process environment. A .env file can fill in the
ones that are not set: the file named by --env-file, or else the nearest
.env between the working directory and the enclosing repository root.

Variables:
  TERMSCHEME_USER_DIR   writable scheme directory, searched first and used
                        for saving (default $XDG_DATA_HOME/termscheme)
  TERMSCHEME_DIRS       extra read-only scheme directories, os.pathsep separated
  XDG_DATA_DIRS         system data dirs; <dir>/termscheme is searched last
"""

import os
from pathlib import Path

USER_DIR_VAR = 'TERMSCHEME_USER_DIR'
DIRS_VAR = 'TERMSCHEME_DIRS'
APP_DIR_NAME = 'termscheme'
_DEFAULT_XDG_DATA_DIRS = '/usr/local/share:/usr/share'


def _find_dotenv(start: Path) -> Path | None:
    """Nearest .env at or above `start`, not looking past a .git boundary."""
    for directory in (start.resolve(), *start.resolve().parents):
        if (directory / '.env').is_file():
            return directory / '.env'
        if (directory / '.git').exists():
            break
    return None


def _parse_dotenv(path: Path) -> dict[str, str]:
    """KEY=value pairs of a .env file; quotes around values are dropped."""
    settings: dict[str, str] = {}
    for line in path.read_text(encoding='utf-8').splitlines():
        key, sep, value = line.strip().partition('=')
        key = key.strip()
        if not sep or not key or key.startswith('#'):
            continue
        settings[key] = value.strip().strip('"').strip("'")
    return settings


def load_env(env_file: str | None = None) -> Path | None:
    """Fill unset variables from a .env file. Returns the file used, if any."""
    path = Path(env_file) if env_file else _find_dotenv(Path.cwd())
    if path is None or not path.is_file():
        return None
    for key, value in _parse_dotenv(path).items():
        os.environ.setdefault(key, value)
    return path


def _split_dirs(value: str) -> list[Path]:
    return [Path(p).expanduser() for p in value.split(os.pathsep) if p.strip()]


def user_scheme_dir() -> Path:
    """The writable directory user schemes are saved to and deleted from."""
    explicit = os.environ.get(USER_DIR_VAR)
    if explicit:
        return Path(explicit).expanduser()
    data_home = os.environ.get('XDG_DATA_HOME') or str(Path.home() / '.local' / 'share')
    return Path(data_home).expanduser() / APP_DIR_NAME


def scheme_search_dirs(user_dir: Path | None = None) -> list[Path]:
    """Ordered scheme directories: user dir, TERMSCHEME_DIRS, then XDG data dirs.

    Duplicates are dropped, keeping the first occurrence.
    """
    dirs = [user_dir if user_dir is not None else user_scheme_dir()]
    dirs.extend(_split_dirs(os.environ.get(DIRS_VAR, '')))
    xdg = os.environ.get('XDG_DATA_DIRS') or _DEFAULT_XDG_DATA_DIRS
    dirs.extend(d / APP_DIR_NAME for d in _split_dirs(xdg))

    seen: set[Path] = set()
    ordered = []
    for d in dirs:
        if d not in seen:
            seen.add(d)
            ordered.append(d)
    return ordered
