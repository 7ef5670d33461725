"""
Scaffold tests

Tests that `new` copies the starter sources and refuses to clobber an
existing sources directory unless forced.
"""

import json

import pytest

from inkpage.config import AppSettings
from inkpage.lib.errors import ScaffoldExistsError
from inkpage.lib.render import stylesheet_compile
from inkpage.lib.scaffold import scaffold_create
from inkpage.models.assets import SCAFFOLD_FILES


@pytest.fixture
def settings():
    return AppSettings(_env_file=None)


class TestScaffoldCreate:
    """Test project scaffolding"""

    def test_copies_every_scaffold_file(self, tmp_path, settings):
        copied = scaffold_create(cwd=tmp_path, settings=settings)

        assert copied == SCAFFOLD_FILES
        for filename in SCAFFOLD_FILES:
            assert (tmp_path / "sources" / filename).is_file()

    def test_story_is_not_scaffolded(self, tmp_path, settings):
        scaffold_create(cwd=tmp_path, settings=settings)
        assert not (tmp_path / "sources" / "story.ink.json").exists()

    def test_scaffold_sources_are_valid(self, tmp_path, settings):
        scaffold_create(cwd=tmp_path, settings=settings)
        sources = tmp_path / "sources"

        defines = json.loads((sources / "defines.json").read_text(encoding="utf-8"))
        assert "title" in defines
        assert "#story" in stylesheet_compile((sources / "style.scss").read_text(encoding="utf-8"))

    def test_refuses_existing_directory(self, tmp_path, settings):
        (tmp_path / "sources").mkdir()
        (tmp_path / "sources" / "keep.txt").write_text("mine", encoding="utf-8")

        with pytest.raises(ScaffoldExistsError):
            scaffold_create(cwd=tmp_path, settings=settings)

        assert (tmp_path / "sources" / "keep.txt").exists()

    def test_force_replaces_existing_directory(self, tmp_path, settings):
        (tmp_path / "sources").mkdir()
        (tmp_path / "sources" / "keep.txt").write_text("mine", encoding="utf-8")

        scaffold_create(cwd=tmp_path, force=True, settings=settings)

        assert not (tmp_path / "sources" / "keep.txt").exists()
        assert (tmp_path / "sources" / "template.html").is_file()
