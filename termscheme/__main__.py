"""termscheme: Inspect and manage terminal colour schemes.

Usage: termscheme [global options] <command> [args]

Scheme formats are auto-discovered from termscheme/formats/.
Each format module's docstring is its documentation.
Run `termscheme help <format>` for full format docs.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, termscheme looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import logging
import sys

from termscheme import registry
from termscheme.core.env import load_env
from termscheme.core.report import format_json, format_list, format_text
from termscheme.manager import SchemeManager


def _load_format_module(name: str) -> object:
    """Load the raw module for a format (for docstring access)."""
    return importlib.import_module(f'termscheme.formats.{name}')


def _build_parser() -> argparse.ArgumentParser:
    epilog = (
        'Examples:\n'
        '  termscheme list\n'
        '  termscheme show Solarized --seed 42\n'
        '  termscheme show Solarized --json\n'
        '  termscheme import ~/Downloads/Solarized.colorscheme\n'
        '  termscheme delete Solarized\n'
        '  termscheme help legacy\n'
        '\n'
        'Directories (set in .env or environment):\n'
        '  TERMSCHEME_USER_DIR  writable schemes (default $XDG_DATA_HOME/termscheme)\n'
        '  TERMSCHEME_DIRS      extra read-only scheme dirs, path-separator separated\n'
    )
    parser = argparse.ArgumentParser(
        prog='termscheme',
        description='Inspect and manage terminal colour schemes.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    parser.add_argument('-u', '--user-dir', metavar='DIR', default=None, help='Writable scheme directory')
    parser.add_argument(
        '-D',
        '--dir',
        dest='dirs',
        metavar='DIR',
        action='append',
        default=None,
        help='Scheme search directory (repeatable; replaces the default search path)',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Log debug output to stderr')
    sub = parser.add_subparsers(dest='command', help='Command to run')

    sub.add_parser('list', help='List available colour schemes')

    show = sub.add_parser('show', help='Print a scheme\'s palette')
    show.add_argument('name', nargs='?', default='', help='Scheme name (default: built-in scheme)')
    show.add_argument('-s', '--seed', type=int, default=0, help='Randomization seed (0: base colours)')
    show.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')

    imp = sub.add_parser('import', help='Load a .colorscheme or .schema file and save it as a user scheme')
    imp.add_argument('path', help='Path to the scheme file')

    delete = sub.add_parser('delete', help='Delete a user scheme')
    delete.add_argument('name', help='Scheme name')

    sub.add_parser('formats', help='List supported scheme file formats')

    help_parser = sub.add_parser('help', help='Print full docs for a format')
    help_parser.add_argument('format', nargs='?', help='Format name')

    return parser


def _print_help(name: str | None) -> int:
    """Print full module docstring for a format."""
    formats = registry.discover()

    if name is None:
        print('Available formats:\n')
        for fmt in formats.values():
            print(f'  {fmt.name:<8} {fmt.extension:<13} {fmt.help}')
        print('\nRun: termscheme help <format> for full docs.')
        return 0

    if name not in formats:
        print(f'Unknown format: {name}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(formats))}', file=sys.stderr)
        return 1

    mod = _load_format_module(name)
    doc = (mod.__doc__ or '').strip()
    print(doc if doc else f'(No module docs for {name!r})')
    return 0


def _import(manager: SchemeManager, path: str) -> int:
    if not manager.load_custom_color_scheme(path):
        print(f'Error: could not load colour scheme from {path}', file=sys.stderr)
        return 1
    fmt = registry.for_path(path)
    name = fmt.scheme_name(path) if fmt else path
    scheme = manager.find_color_scheme(name)
    if scheme is None:
        return 1
    # Republish an editable copy so the next flush saves it to the user directory.
    edited = scheme.copy()
    edited.mark_modified()
    if not manager.add_color_scheme(edited):
        print(f'Error: cannot save colour scheme named {name!r}', file=sys.stderr)
        return 1
    print(f'termscheme: imported {name!r}', file=sys.stderr)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    # Load .env before anything else: OS env vars always win
    env_path = load_env(env_file=args.env_file)
    if env_path:
        print(f'termscheme: loaded {env_path}', file=sys.stderr)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == 'help':
        return _print_help(args.format)

    if args.command == 'formats':
        return _print_help(None)

    with SchemeManager(search_dirs=args.dirs, user_dir=args.user_dir) as manager:
        if args.command == 'list':
            print(format_list(manager.all_color_schemes()))
            return 0

        if args.command == 'show':
            scheme = manager.find_color_scheme(args.name)
            if scheme is None:
                print(f'Error: colour scheme not found: {args.name}', file=sys.stderr)
                return 1
            print(format_json(scheme, args.seed) if args.json else format_text(scheme, args.seed))
            return 0

        if args.command == 'import':
            return _import(manager, args.path)

        if args.command == 'delete':
            if not manager.delete_color_scheme(args.name):
                print(f'Error: cannot delete colour scheme: {args.name}', file=sys.stderr)
                return 1
            print(f'termscheme: deleted {args.name!r}', file=sys.stderr)
            return 0

    parser.print_help()
    return 1


if __name__ == '__main__':
    sys.exit(main())
