"""Tests for the chapter/section structure builder."""

import pytest

from thesisdoc.extractors.builder import StructureBuilder, finalize_content


class TestFinalizeContent:
    """Tests for content normalization."""

    def test_whitespace_collapsed_per_line(self):
        """Runs of whitespace collapse to one space; lines stay separate."""
        assert finalize_content(["a   b", "  c\td  "]) == "a b\nc d"

    def test_empty(self):
        """No lines produce empty content."""
        assert finalize_content([]) == ""


class TestStructureBuilder:
    """Tests for StructureBuilder."""

    def test_chapters_and_sections(self):
        """Chapter content precedes sections; sections keep their own content."""
        builder = StructureBuilder()
        builder.open_chapter("I. Introduction", numbering="I")
        builder.add_line("Some opening text.")
        builder.open_section("1.1 Background", numbering="1.1", level=2)
        builder.add_line("Context text.")
        builder.open_chapter("II. Methodology", numbering="II")
        builder.add_line("Approach text.")
        chapters = builder.finish()

        assert [c.title for c in chapters] == ["I. Introduction", "II. Methodology"]
        assert chapters[0].content == "Some opening text."
        assert chapters[0].numbering == "I"
        assert len(chapters[0].sections) == 1
        section = chapters[0].sections[0]
        assert (section.title, section.content, section.level) == ("1.1 Background", "Context text.", 2)
        assert chapters[1].content == "Approach text."
        assert chapters[1].sections == ()

    def test_fallback_chapter_without_headings(self):
        """Body text with no headings becomes one fallback chapter."""
        builder = StructureBuilder()
        builder.body_title = "Introduction"
        builder.add_line("Tout le texte.")
        builder.add_line("Suite du texte.")
        chapters = builder.finish()
        assert len(chapters) == 1
        assert chapters[0].title == "Main Content"
        assert chapters[0].content == "Tout le texte.\nSuite du texte."

    def test_preamble_before_first_chapter(self):
        """Text before the first heading leads, titled after the body start."""
        builder = StructureBuilder()
        builder.body_title = "Introduction générale"
        builder.add_line("Contexte.")
        builder.open_chapter("I. Cadre")
        builder.add_line("Cadre théorique.")
        chapters = builder.finish()
        assert [c.title for c in chapters] == ["Introduction générale", "I. Cadre"]
        assert chapters[0].content == "Contexte."

    def test_preamble_without_body_title_uses_fallback(self):
        """A preamble with no body-start line takes the fallback title."""
        builder = StructureBuilder(fallback_title="Corps")
        builder.add_line("Texte libre.")
        builder.open_chapter("I. Cadre")
        assert builder.finish()[0].title == "Corps"

    def test_no_body_no_chapters(self):
        """Nothing added yields no chapters."""
        assert StructureBuilder().finish() == ()

    def test_finish_is_idempotent(self):
        """Calling finish twice returns the same chapters."""
        builder = StructureBuilder()
        builder.add_line("Texte.")
        assert builder.finish() == builder.finish()

    def test_section_requires_chapter(self):
        """Opening a section outside a chapter is a programming error."""
        builder = StructureBuilder()
        with pytest.raises(ValueError, match="outside a chapter"):
            builder.open_section("1.1 Background")

    def test_open_state(self):
        """chapter_open and section_open track the innermost node."""
        builder = StructureBuilder()
        assert not builder.chapter_open
        builder.open_chapter("I. X")
        assert builder.chapter_open and not builder.section_open
        builder.open_section("1.1 Y")
        assert builder.section_open
        builder.open_chapter("II. Z")
        assert not builder.section_open

    def test_empty_chapter_kept(self):
        """A heading followed directly by another keeps an empty chapter."""
        builder = StructureBuilder()
        builder.open_chapter("I. Vide")
        builder.open_chapter("II. Plein")
        builder.add_line("Texte.")
        chapters = builder.finish()
        assert chapters[0].content == ""
        assert chapters[1].content == "Texte."
