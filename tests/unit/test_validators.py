"""Tests for document validation rules."""

from thesisdoc.extractors.validators import (
    ChapterPresenceValidator,
    EmptyChapterValidator,
    JuryPresenceValidator,
    RequiredFieldsValidator,
    validate,
)
from thesisdoc.models import Chapter, JuryMember, ThesisDocument


def complete_document(**overrides):
    fields = dict(
        title="Segmentation de thèses",
        author="Jane Doe",
        university="Université de Biskra",
        jury=(JuryMember(role="Président", name="Dr. K. Benali"),),
        chapters=(Chapter(title="I. Introduction", content="Texte."),),
    )
    fields.update(overrides)
    return ThesisDocument(**fields)


class TestRules:
    """Tests for individual rules."""

    def test_required_fields(self):
        """Each empty required field is one warning."""
        issues = RequiredFieldsValidator().check(complete_document(title="", author=""))
        assert [i.message for i in issues] == ["Missing title", "Missing author"]
        assert all(i.severity == "warning" for i in issues)
        assert [i.field for i in issues] == ["title", "author"]

    def test_custom_required_fields(self):
        """Required fields are configurable."""
        issues = RequiredFieldsValidator(fields=("submission_date",)).check(complete_document())
        assert [i.message for i in issues] == ["Missing submission date"]

    def test_no_chapters(self):
        """A document without chapters is flagged."""
        issues = ChapterPresenceValidator().check(complete_document(chapters=()))
        assert issues[0].message == "No chapters found"

    def test_no_jury(self):
        """A document without jury is flagged."""
        issues = JuryPresenceValidator().check(complete_document(jury=()))
        assert issues[0].message == "No jury members found"

    def test_empty_chapter_is_info(self):
        """Empty chapters are informational only."""
        doc = complete_document(chapters=(Chapter(title="I. Vide"), Chapter(title="II. X", content="y")))
        issues = EmptyChapterValidator().check(doc)
        assert len(issues) == 1
        assert issues[0].severity == "info"
        assert "I. Vide" in issues[0].message


class TestValidate:
    """Tests for validate()."""

    def test_complete_document_has_no_issues(self):
        """A complete document passes every default rule."""
        assert validate(complete_document()) == []

    def test_empty_document(self):
        """An empty document collects warnings from every rule in order."""
        messages = [i.message for i in validate(ThesisDocument())]
        assert messages == [
            "Missing title",
            "Missing author",
            "Missing university",
            "No chapters found",
            "No jury members found",
        ]

    def test_custom_rules(self):
        """Only the given rules run."""
        assert validate(ThesisDocument(), rules=(JuryPresenceValidator(),))[0].type == "no_jury"
