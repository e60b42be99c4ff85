"""
Validation rules for extracted documents.

Validators check the finished document for missing pieces.
Issues are reported but don't block extraction (graceful degradation);
the caller decides, through strict mode, whether warnings are fatal.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from thesisdoc.models import ThesisDocument


@dataclass(frozen=True)
class ValidationIssue:
    """A problem found in an extracted document."""

    type: str  # "missing_field", "no_chapters", "no_jury", "empty_chapter"
    message: str
    severity: str  # "warning", "info"
    field: str | None = None  # Affected document field


class ValidationRule(ABC):
    """Abstract base for validation rules."""

    name: str = "base"

    @abstractmethod
    def check(self, document: ThesisDocument) -> list[ValidationIssue]:
        """Check the document for issues.

        Returns list of issues found (empty if all good).
        """
        pass


class RequiredFieldsValidator(ValidationRule):
    """Title-page fields every thesis is expected to carry."""

    name = "required_fields"

    def __init__(self, fields: tuple[str, ...] = ("title", "author", "university")):
        """Initialize validator.

        Args:
            fields: ThesisDocument attributes that must be non-empty.
        """
        self.fields = fields

    def check(self, document: ThesisDocument) -> list[ValidationIssue]:
        """Report each empty required field."""
        issues = []
        for name in self.fields:
            if not getattr(document, name, "").strip():
                issues.append(
                    ValidationIssue(
                        type="missing_field",
                        message=f"Missing {name.replace('_', ' ')}",
                        severity="warning",
                        field=name,
                    )
                )
        return issues


class ChapterPresenceValidator(ValidationRule):
    """At least one chapter must have been recovered."""

    name = "chapters"

    def check(self, document: ThesisDocument) -> list[ValidationIssue]:
        if document.chapters:
            return []
        return [
            ValidationIssue(
                type="no_chapters",
                message="No chapters found",
                severity="warning",
                field="chapters",
            )
        ]


class JuryPresenceValidator(ValidationRule):
    """Jury panel presence.

    Not every document carries a jury, so this is never more than a warning.
    """

    name = "jury"

    def check(self, document: ThesisDocument) -> list[ValidationIssue]:
        if document.jury:
            return []
        return [
            ValidationIssue(
                type="no_jury",
                message="No jury members found",
                severity="warning",
                field="jury",
            )
        ]


class EmptyChapterValidator(ValidationRule):
    """Flag chapters with neither content nor sections.

    These usually come from a line that only looked like a heading.
    """

    name = "empty_chapter"

    def check(self, document: ThesisDocument) -> list[ValidationIssue]:
        return [
            ValidationIssue(
                type="empty_chapter",
                message=f"Chapter '{chapter.title}' has no content",
                severity="info",
                field="chapters",
            )
            for chapter in document.chapters
            if not chapter.content and not chapter.sections
        ]


DEFAULT_RULES: tuple[ValidationRule, ...] = (
    RequiredFieldsValidator(),
    ChapterPresenceValidator(),
    JuryPresenceValidator(),
    EmptyChapterValidator(),
)


def validate(
    document: ThesisDocument, rules: tuple[ValidationRule, ...] | None = None
) -> list[ValidationIssue]:
    """Run validation rules over ``document``.

    Args:
        document: The assembled document.
        rules: Rules to apply (default: DEFAULT_RULES).

    Returns:
        All issues found, in rule order.
    """
    issues: list[ValidationIssue] = []
    for rule in rules if rules is not None else DEFAULT_RULES:
        issues.extend(rule.check(document))
    return issues
