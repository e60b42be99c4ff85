"""Tests for the HTML/plain-text normalizer."""

from thesisdoc.normalizers.markup import TextNormalizer, normalize


class TestPlainText:
    """Tests for input without markup."""

    def test_lines_trimmed_and_blank_lines_dropped(self):
        """Plain text is split, trimmed and filtered."""
        result = normalize("Ligne 1\n\n   Ligne 2  \r\nLigne   3\n")
        assert result.source_format == "text"
        assert result.lines == ["Ligne 1", "Ligne 2", "Ligne 3"]

    def test_empty_input(self):
        """Empty or blank input gives no lines."""
        assert normalize("").lines == []
        assert normalize("  \n\t ").lines == []

    def test_angle_brackets_without_tags_are_text(self):
        """A stray '<' does not make the input HTML."""
        result = normalize("3 < 5 et 7 > 2")
        assert result.source_format == "text"
        assert result.lines == ["3 < 5 et 7 > 2"]

    def test_unicode_normalized_to_nfc(self):
        """Decomposed accents are composed."""
        assert normalize("Re\u0301sume\u0301").lines == ["R\u00e9sum\u00e9"]


class TestHtml:
    """Tests for HTML flattening."""

    def test_blocks_become_lines(self):
        """Block elements and <br> separate lines; inline tags do not."""
        result = normalize("<p>Résumé <span>du</span> travail</p><div>Suite<br>Fin</div>")
        assert result.source_format == "html"
        assert result.lines == ["Résumé du travail", "Suite", "Fin"]

    def test_source_newlines_are_whitespace(self):
        """Newlines inside text nodes do not split lines."""
        assert normalize("<p>Une\n   phrase</p>").lines == ["Une phrase"]

    def test_noise_excluded(self):
        """Script, style and comments contribute no text."""
        raw = (
            "<html><head><title>T</title><style>.a{}</style></head><body>"
            "<p>Texte</p><script>alert('Bibliographie')</script><!-- Résumé --></body></html>"
        )
        assert normalize(raw).lines == ["Texte"]

    def test_unordered_list(self):
        """Unordered items get a bullet marker."""
        assert normalize("<ul><li>Un</li><li>Deux</li></ul>").lines == ["• Un", "• Deux"]

    def test_ordered_list_with_start(self):
        """Ordered items are numbered from the start attribute."""
        assert normalize('<ol start="3"><li>a</li><li>b</li></ol>').lines == ["3. a", "4. b"]

    def test_list_item_wrapping_block(self):
        """The marker stays on the item's first line."""
        assert normalize("<ul><li><p>Un</p><p>Deux</p></li></ul>").lines == ["• Un", "Deux"]

    def test_table_rows(self):
        """Each row becomes one line with cells joined by a separator."""
        raw = (
            "<table><caption>Jury</caption>"
            "<tr><th>Nom</th><th>Rôle</th></tr>"
            "<tr><td>X</td><td>Président</td></tr></table>"
        )
        assert normalize(raw).lines == ["Jury", "Nom | Rôle", "X | Président"]

    def test_headings_are_lines(self):
        """Headings are separated from surrounding paragraphs."""
        raw = "<h2>Introduction</h2><p>Texte.</p><h2>I. Cadre</h2>"
        assert normalize(raw).lines == ["Introduction", "Texte.", "I. Cadre"]


class TestHints:
    """Tests for markup hints."""

    def test_title_and_author(self):
        """<title> and author meta are collected."""
        raw = (
            '<html><head><title>Ma thèse</title><meta name="Author" content="Jane Doe">'
            "</head><body><p>Texte</p></body></html>"
        )
        hints = normalize(raw).hints
        assert hints.title == "Ma thèse"
        assert hints.author == "Jane Doe"

    def test_first_h1_when_no_title(self):
        """The first <h1> stands in for a missing <title>."""
        hints = normalize("<h1>Titre principal</h1><h1>Autre</h1>").hints
        assert hints.title == "Titre principal"

    def test_tables_and_images(self):
        """Tables and images with a source are inventoried."""
        raw = (
            "<table><caption>Résultats</caption><tr><td>A</td><td>1</td></tr></table>"
            '<img src="fig1.png" alt="Figure 1" title="Architecture"><img alt="sans source">'
        )
        hints = normalize(raw).hints
        assert len(hints.tables) == 1
        assert hints.tables[0].caption == "Résultats"
        assert hints.tables[0].rows == (("A", "1"),)
        assert len(hints.images) == 1
        assert hints.images[0].src == "fig1.png"
        assert hints.images[0].alt == "Figure 1"
        assert hints.images[0].caption == "Architecture"

    def test_plain_text_has_no_hints(self):
        """Plain text carries empty hints."""
        hints = TextNormalizer().normalize("Juste du texte").hints
        assert hints.title is None
        assert hints.tables == [] and hints.images == []
