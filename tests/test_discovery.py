"""Tests for test file discovery and suite loading."""

import textwrap

import pytest

from testy.config import Configuration
from testy.discovery import find_test_files, load_module_suites, load_suites
from testy.errors import ConfigurationError
from testy.suite import TestSuite

SUITE_FILE = """\
from testy import suite


@suite("{name}")
def declared(s):
    s.test("passes", lambda t: t.is_true(True))
"""


@pytest.fixture()
def project(tmp_path):
    """A directory tree with test files and helpers."""
    (tmp_path / "nested").mkdir()
    (tmp_path / "b_test.py").write_text(SUITE_FILE.format(name="b"))
    (tmp_path / "a_test.py").write_text(SUITE_FILE.format(name="a"))
    (tmp_path / "nested" / "c_test.py").write_text(SUITE_FILE.format(name="c"))
    (tmp_path / "helpers.py").write_text("VALUE = 1\n")
    return tmp_path


def test_find_test_files_in_a_directory(project):
    files = find_test_files([project], Configuration())
    assert [f.name for f in files] == ["a_test.py", "b_test.py", "c_test.py"]


def test_find_test_files_accepts_single_files(project):
    files = find_test_files([project / "b_test.py"], Configuration())
    assert [f.name for f in files] == ["b_test.py"]


def test_find_test_files_does_not_repeat_files(project):
    files = find_test_files([project, project / "a_test.py"], Configuration())
    assert len(files) == 3


def test_find_test_files_uses_the_configured_filter(project):
    files = find_test_files([project], Configuration(filter=r"^helpers\.py$"))
    assert [f.name for f in files] == ["helpers.py"]


def test_find_test_files_rejects_missing_paths(tmp_path):
    with pytest.raises(ConfigurationError, match="Path not found"):
        find_test_files([tmp_path / "missing"], Configuration())


def test_load_module_suites_collects_declared_suites(tmp_path):
    path = tmp_path / "two_test.py"
    path.write_text(textwrap.dedent("""\
        from testy import TestSuite, suite

        @suite("first")
        def first(s):
            s.test("one", lambda t: t.is_true(True))

        second = TestSuite("second", lambda s: None)
        alias = second
    """))
    suites = load_module_suites(path)
    assert [s.name for s in suites] == ["first", "second"]
    assert all(isinstance(s, TestSuite) for s in suites)


def test_load_module_suites_propagates_import_errors(tmp_path):
    path = tmp_path / "broken_test.py"
    path.write_text("raise ImportError('missing dependency')\n")
    with pytest.raises(ImportError, match="missing dependency"):
        load_module_suites(path)


def test_load_suites_in_file_order(project):
    suites = load_suites([project], Configuration())
    assert [s.name for s in suites] == ["a", "b", "c"]


def test_test_files_with_the_same_name_do_not_collide(tmp_path):
    for folder in ("one", "two"):
        (tmp_path / folder).mkdir()
        (tmp_path / folder / "same_test.py").write_text(SUITE_FILE.format(name=folder))
    suites = load_suites([tmp_path], Configuration())
    assert [s.name for s in suites] == ["one", "two"]
