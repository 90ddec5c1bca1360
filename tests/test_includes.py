"""
Include discovery and path resolution tests

Builds small project trees on disk:

    content/node/source/
        page.txt
        includes/
            connect.rst
            steps-install.yaml
            extracts-common.yaml
"""

from pathlib import Path

import pytest

from rstaudit.lib.includes import (
    includeMarkers_find,
    includePath_resolve,
    includes_find,
    sourceDir_find,
)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    source = tmp_path / "content" / "node" / "source"
    (source / "includes").mkdir(parents=True)
    (source / "includes" / "connect.rst").write_text("connect\n")
    (source / "includes" / "steps-install.yaml").write_text("title: Install\n")
    (source / "includes" / "extracts-common.yaml").write_text(
        "ref: shared-note\ncontent: note\n---\nref: other\ncontent: other\n"
    )
    (source / "page.txt").write_text("page\n")
    return source


class TestSourceDir:
    """Test source directory lookup"""

    def test_nearest_source(self, project):
        """Files below source/ resolve to it"""
        assert sourceDir_find(project / "includes" / "connect.rst") == project

    def test_no_source(self, tmp_path):
        """Without a source ancestor the file's directory is used"""
        assert sourceDir_find(tmp_path / "loose.txt") == tmp_path


class TestResolve:
    """Test include path resolution"""

    def test_absolute_from_source(self, project):
        """Leading slash is relative to source/"""
        resolved = includePath_resolve(project / "page.txt", "/includes/connect.rst")
        assert resolved == str(project / "includes" / "connect.rst")

    def test_absolute_from_nested_file(self, project):
        """Leading slash ignores the including file's directory"""
        resolved = includePath_resolve(project / "includes" / "connect.rst", "/includes/connect.rst")
        assert resolved == str(project / "includes" / "connect.rst")

    def test_relative(self, project):
        """Other paths are relative to the including file"""
        resolved = includePath_resolve(project / "includes" / "connect.rst", "../page.txt")
        assert resolved == str(project / "page.txt")

    def test_steps_fallback(self, project):
        """steps/<name>.rst maps to steps-<name>.yaml"""
        resolved = includePath_resolve(project / "page.txt", "/includes/steps/install.rst")
        assert resolved == str(project / "includes" / "steps-install.yaml")

    def test_extracts_fallback(self, project):
        """extracts/<ref>.rst maps to the YAML file declaring that ref"""
        resolved = includePath_resolve(project / "page.txt", "/includes/extracts/shared-note.rst")
        assert resolved == str(project / "includes" / "extracts-common.yaml")

    def test_unknown_extract(self, project):
        assert includePath_resolve(project / "page.txt", "/includes/extracts/nope.rst") is None

    def test_missing(self, project):
        """Missing targets are dropped"""
        assert includePath_resolve(project / "page.txt", "/includes/missing.rst") is None

    def test_empty_argument(self, project):
        assert includePath_resolve(project / "page.txt", "  ") is None


class TestFind:
    """Test include marker discovery"""

    def test_markers(self):
        """Markers at any indentation, in order, 1-based lines"""
        source = ".. include:: /a.rst\n\n.. tab::\n\n   .. include:: b.rst\n.. include::\n"
        assert includeMarkers_find(source) == [(1, "/a.rst"), (5, "b.rst")]

    def test_code_block_body_skipped(self):
        """Include markup shown in a code block is not an include"""
        source = ".. code-block:: rst\n\n   .. include:: /includes/x.rst\n\n.. include:: /b.rst\n"
        assert includeMarkers_find(source) == [(5, "/b.rst")]

    def test_includes_find(self, project):
        """Unresolved targets are skipped, duplicates kept"""
        source = """
.. include:: /includes/connect.rst
.. include:: /includes/missing.rst
.. include:: /includes/steps/install.rst
.. include:: /includes/connect.rst
"""
        connect = str(project / "includes" / "connect.rst")
        steps = str(project / "includes" / "steps-install.yaml")

        assert includes_find(project / "page.txt", source) == [connect, steps, connect]
