"""Tests for termscheme.core.env: .env loading, walk-up logic, scheme directories."""

import os
from pathlib import Path

import pytest
from termscheme.core.env import _find_dotenv, _parse_dotenv, load_env, scheme_search_dirs, user_scheme_dir


class TestParseDotenv:
    def test_simple_key_value(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('FOO=bar\n')
        assert _parse_dotenv(f) == {'FOO': 'bar'}

    def test_quoted_values(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('KEY="hello world"\nKEY2=\'single\'\n')
        assert _parse_dotenv(f) == {'KEY': 'hello world', 'KEY2': 'single'}

    def test_comments_and_blank_lines_ignored(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('# comment\n\nFOO=bar\n\n')
        assert _parse_dotenv(f) == {'FOO': 'bar'}

    def test_no_value(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('NOEQUALS\nFOO=bar\n')
        assert _parse_dotenv(f) == {'FOO': 'bar'}


class TestFindDotenv:
    def test_finds_in_parent(self, tmp_path: Path) -> None:
        subdir = tmp_path / 'sub'
        subdir.mkdir()
        dotenv = tmp_path / '.env'
        dotenv.write_text('X=1\n')
        assert _find_dotenv(subdir) == dotenv

    def test_stops_at_git_dir(self, tmp_path: Path) -> None:
        # .env is above .git: should not be found
        repo = tmp_path / 'repo'
        repo.mkdir()
        (tmp_path / '.env').write_text('X=1\n')
        (repo / '.git').mkdir()
        subdir = repo / 'src'
        subdir.mkdir()
        assert _find_dotenv(subdir) is None


class TestLoadEnv:
    def test_sets_missing_vars(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv('TERMSCHEME_USER_DIR', raising=False)
        (tmp_path / '.env').write_text('TERMSCHEME_USER_DIR=/srv/schemes\n')
        monkeypatch.chdir(tmp_path)
        assert load_env() == tmp_path / '.env'
        assert os.environ.get('TERMSCHEME_USER_DIR') == '/srv/schemes'

    def test_does_not_overwrite_existing(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('TERMSCHEME_USER_DIR', '/original')
        (tmp_path / '.env').write_text('TERMSCHEME_USER_DIR=/fromfile\n')
        monkeypatch.chdir(tmp_path)
        load_env()
        assert os.environ.get('TERMSCHEME_USER_DIR') == '/original'

    def test_explicit_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv('TERMSCHEME_DIRS', raising=False)
        dotenv = tmp_path / 'custom.env'
        dotenv.write_text('TERMSCHEME_DIRS=/a\n')
        load_env(env_file=str(dotenv))
        assert os.environ.get('TERMSCHEME_DIRS') == '/a'

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        assert load_env(env_file=str(tmp_path / 'nope.env')) is None

    def test_returns_none_when_no_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / '.git').mkdir()
        monkeypatch.chdir(tmp_path)
        assert load_env() is None


class TestSchemeDirs:
    def test_explicit_user_dir(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('TERMSCHEME_USER_DIR', '/srv/mine')
        assert user_scheme_dir() == Path('/srv/mine')

    def test_xdg_data_home(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv('TERMSCHEME_USER_DIR', raising=False)
        monkeypatch.setenv('XDG_DATA_HOME', '/home/u/data')
        assert user_scheme_dir() == Path('/home/u/data/termscheme')

    def test_search_order(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('TERMSCHEME_DIRS', os.pathsep.join(['/opt/a', '/opt/b']))
        monkeypatch.setenv('XDG_DATA_DIRS', '/usr/share')
        dirs = scheme_search_dirs(Path('/home/u/schemes'))
        assert dirs == [Path('/home/u/schemes'), Path('/opt/a'), Path('/opt/b'), Path('/usr/share/termscheme')]

    def test_duplicates_dropped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('TERMSCHEME_DIRS', os.pathsep.join(['/opt/a', '/opt/a']))
        monkeypatch.setenv('XDG_DATA_DIRS', '/usr/share')
        dirs = scheme_search_dirs(Path('/opt/a'))
        assert dirs == [Path('/opt/a'), Path('/usr/share/termscheme')]

    def test_default_xdg_data_dirs(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv('TERMSCHEME_DIRS', raising=False)
        monkeypatch.delenv('XDG_DATA_DIRS', raising=False)
        dirs = scheme_search_dirs(Path('/u'))
        assert dirs == [Path('/u'), Path('/usr/local/share/termscheme'), Path('/usr/share/termscheme')]
