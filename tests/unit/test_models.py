"""Tests for the document and result models."""

from dataclasses import FrozenInstanceError

import pytest

from thesisdoc.exceptions import ExtractionError
from thesisdoc.models import (
    Chapter,
    DocumentMetadata,
    ExtractionFailure,
    ExtractionSuccess,
    ImageInfo,
    JuryMember,
    Language,
    Section,
    TableInfo,
    ThesisDocument,
)


@pytest.fixture
def document():
    return ThesisDocument(
        title="Segmentation de thèses",
        author="Jane Doe",
        university="Université de Biskra",
        jury=(JuryMember(role="Président", name="Dr. K. Benali"),),
        abstracts={Language.FRENCH: "Un résumé.", Language.ENGLISH: "  "},
        chapters=(
            Chapter(
                title="I. Introduction",
                content="Texte d'ouverture.",
                sections=(Section(title="1.1 Contexte", content="Le contexte.", level=2, numbering="1.1"),),
                numbering="I",
            ),
            Chapter(title="II. Méthode", content="La méthode.", numbering="II"),
        ),
        bibliography=("[1] J. Doe, Document analysis, 2020.",),
        tables=(TableInfo(caption="Jury", rows=(("Président", "X"),)),),
        images=(ImageInfo(src="fig.png", alt="Figure 1"),),
        metadata=DocumentMetadata(word_count=10, page_estimate=1, source_format="text"),
    )


class TestThesisDocument:
    """Tests for ThesisDocument."""

    def test_document_is_frozen(self, document):
        """Fields cannot be reassigned."""
        with pytest.raises(FrozenInstanceError):
            document.title = "Autre"

    def test_abstracts_are_read_only(self, document):
        """The abstracts map rejects item assignment."""
        with pytest.raises(TypeError):
            document.abstracts[Language.ARABIC] = "ملخص"

    def test_empty_abstracts_dropped(self, document):
        """Whitespace-only abstracts are not kept."""
        assert set(document.abstracts) == {Language.FRENCH}

    def test_defaults_are_empty(self):
        """A bare document has empty fields and no chapters."""
        doc = ThesisDocument()
        assert doc.title == ""
        assert doc.jury == ()
        assert dict(doc.abstracts) == {}
        assert doc.metadata.word_count is None

    def test_to_dict(self, document):
        """to_dict produces plain JSON-friendly structures."""
        data = document.to_dict()
        assert data["author"] == "Jane Doe"
        assert data["abstracts"] == {"fr": "Un résumé."}
        assert data["jury"] == [
            {"role": "Président", "name": "Dr. K. Benali", "affiliation": "unspecified"}
        ]
        assert data["chapters"][0]["sections"][0] == {
            "title": "1.1 Contexte",
            "numbering": "1.1",
            "level": 2,
            "content": "Le contexte.",
        }
        assert data["tables"] == [{"caption": "Jury", "rows": [["Président", "X"]]}]
        assert data["metadata"]["word_count"] == 10
        assert isinstance(data["metadata"]["created_at"], str)

    def test_to_plain_text_layout(self, document):
        """Plain text lists title, body marker, headings, contents and references."""
        lines = document.to_plain_text().split("\n")
        assert lines[0] == "Segmentation de thèses"
        assert lines[1] == "Introduction"
        assert lines[2:6] == ["I. Introduction", "Texte d'ouverture.", "1.1 Contexte", "Le contexte."]
        assert lines[-2:] == ["Bibliographie", "[1] J. Doe, Document analysis, 2020."]

    def test_to_plain_text_skips_marker_for_body_start_title(self):
        """No extra marker when the first chapter is titled like a body start."""
        doc = ThesisDocument(
            chapters=(
                Chapter(title="Introduction générale", content="Texte."),
                Chapter(title="I. Cadre", content="Suite."),
            )
        )
        assert doc.to_plain_text().split("\n")[:2] == ["Introduction générale", "Texte."]


class TestExtractionResults:
    """Tests for ExtractionSuccess and ExtractionFailure."""

    def test_success_unwrap(self, document):
        """Success exposes and unwraps the document."""
        result = ExtractionSuccess(document=document, warnings=("No jury members found",))
        assert result.ok is True
        assert result.unwrap() is document

    def test_failure_unwrap_raises(self, document):
        """Failure unwrap raises ExtractionError carrying the partial document."""
        result = ExtractionFailure(reason="Strict mode: Missing title", partial=document)
        assert result.ok is False
        assert result.document is document
        with pytest.raises(ExtractionError, match="Missing title") as excinfo:
            result.unwrap()
        assert excinfo.value.partial is document

    def test_failure_without_partial(self):
        """A failure on empty input carries no document."""
        result = ExtractionFailure(reason="Input is empty")
        assert result.document is None
        assert result.warnings == ()
