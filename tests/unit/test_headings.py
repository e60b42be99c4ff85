"""Tests for heading classification."""

import pytest

from thesisdoc.config import ExtractionConfig
from thesisdoc.extractors.headings import HeadingClassifier, HeadingRank


@pytest.fixture
def classifier():
    return HeadingClassifier()


class TestChapterHeadings:
    """Tests for chapter-level shapes."""

    @pytest.mark.parametrize(
        "line,numbering",
        [
            ("I. Introduction", "I"),
            ("IV. Résultats expérimentaux", "IV"),
            ("Chapitre 2 : Méthodologie", "2"),
            ("Chapter III Results", "III"),
            ("CHAPITRE 1", "1"),
            ("Partie 2 - Expérimentation", "2"),
            ("Étape 1 : Collecte des données", "1"),
            ("Étape 3.", "3"),
        ],
    )
    def test_numbered_chapters(self, classifier, line, numbering):
        """Numbered chapter shapes are recognised with their label."""
        match = classifier.classify(line, chapter_open=False)
        assert match is not None
        assert match.rank is HeadingRank.CHAPTER
        assert match.title == line
        assert match.numbering == numbering

    @pytest.mark.parametrize("line", ["Conclusion générale", "Conclusions et perspectives", "Annexes"])
    def test_unnumbered_chapters(self, classifier, line):
        """Closing headings open chapters without numbering."""
        match = classifier.classify(line, chapter_open=True)
        assert match.rank is HeadingRank.CHAPTER
        assert match.numbering is None

    @pytest.mark.parametrize(
        "line",
        [
            "II.1 Contexte général",
            "Figure 3 : Schéma de l'architecture",
            "Tableau 2 Comparaison",
            "En 2020, les chercheurs ont proposé",
            "En 2019. Les chercheurs ont proposé une méthode",
            "I.e. this is prose",
            "1. Règles de grammaire",
            "• Premier point",
        ],
    )
    def test_not_chapters(self, classifier, line):
        """Lines resembling chapter shapes in part are not chapters."""
        assert classifier.match_chapter(line) is None

    def test_chapter_length_limit(self, classifier):
        """Lines at or over the chapter length limit are content."""
        assert classifier.match_chapter("I. " + "x" * 250) is None

    @pytest.mark.parametrize(
        "line,strong",
        [
            ("I. Introduction", True),
            ("Chapitre 1", True),
            ("Étape 1 : Collecte", False),
            ("Conclusion générale", False),
            ("Une phrase ordinaire.", False),
        ],
    )
    def test_strong_headings(self, classifier, line, strong):
        """Only Roman and keyword chapters can open the body on their own."""
        assert classifier.is_strong_chapter_heading(line) is strong


class TestSectionHeadings:
    """Tests for section-level shapes."""

    @pytest.mark.parametrize(
        "line,numbering,level",
        [
            ("1.1 Background", "1.1", 2),
            ("II.1 Contexte général", "II.1", 2),
            ("1.2.3 Détails d'implémentation", "1.2.3", 3),
            ("2.1. Données utilisées", "2.1", 2),
            ("a) Les données", "a)", None),
            ("B. Résultats obtenus", "B.", None),
        ],
    )
    def test_sections(self, classifier, line, numbering, level):
        """Section shapes yield numbering and depth."""
        match = classifier.classify(line, chapter_open=True)
        assert match.rank is HeadingRank.SECTION
        assert match.numbering == numbering
        assert match.level == level

    def test_dash_bullet_section(self, classifier):
        """Dash bullets are unnumbered sections."""
        match = classifier.classify("- Une liste à puces longue", chapter_open=True)
        assert match.rank is HeadingRank.SECTION
        assert match.numbering is None

    def test_sections_need_open_chapter(self, classifier):
        """Without an open chapter, section shapes are content."""
        assert classifier.classify("1.1 Background", chapter_open=False) is None

    @pytest.mark.parametrize("line", ["a) Short", "1.1 " + "A" * 200])
    def test_section_length_bounds(self, classifier, line):
        """Section headings must be within the configured length bounds."""
        assert classifier.classify(line, chapter_open=True) is None

    @pytest.mark.parametrize(
        "line",
        ["• Premier point important", "2. Grammaires formelles", "Les résultats sont bons."],
    )
    def test_list_items_and_prose_are_content(self, classifier, line):
        """Normalizer list markers and prose are not headings."""
        assert classifier.classify(line, chapter_open=True) is None

    def test_custom_bounds(self):
        """Length bounds come from the config."""
        classifier = HeadingClassifier(ExtractionConfig(section_heading_min_length=3))
        assert classifier.classify("a) Short", chapter_open=True) is not None
