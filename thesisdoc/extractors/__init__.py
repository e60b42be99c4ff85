"""
Structure extraction module.

Turns the normalized line stream into a ThesisDocument:
- patterns: recognizer tables (boundaries, fields, jury lines, list items,
  heading shapes)
- headings: chapter/section classification of body lines
- builder: chapter/section tree accumulation
- segmenter: the line-by-line state machine driving the two above
- validators: missing-field checks on the finished document
"""

from thesisdoc.extractors.builder import StructureBuilder
from thesisdoc.extractors.headings import HeadingClassifier, HeadingMatch, HeadingRank
from thesisdoc.extractors.patterns import (
    BOUNDARY_PATTERNS,
    FIELD_PATTERNS,
    JURY_PATTERNS,
    LIST_ITEM_PATTERNS,
    BoundaryMatch,
    FieldMatch,
    JuryMatch,
    SegmentKind,
    match_boundary,
    match_field,
    match_jury,
)
from thesisdoc.extractors.segmenter import DocumentSegmenter, SegmentationResult
from thesisdoc.extractors.validators import (
    ChapterPresenceValidator,
    EmptyChapterValidator,
    JuryPresenceValidator,
    RequiredFieldsValidator,
    ValidationIssue,
    ValidationRule,
    validate,
)

__all__ = [
    # State machine
    "DocumentSegmenter",
    "SegmentationResult",
    "SegmentKind",
    # Headings and structure
    "HeadingClassifier",
    "HeadingMatch",
    "HeadingRank",
    "StructureBuilder",
    # Patterns
    "BOUNDARY_PATTERNS",
    "FIELD_PATTERNS",
    "JURY_PATTERNS",
    "LIST_ITEM_PATTERNS",
    "BoundaryMatch",
    "FieldMatch",
    "JuryMatch",
    "match_boundary",
    "match_field",
    "match_jury",
    # Validators
    "ValidationRule",
    "ValidationIssue",
    "RequiredFieldsValidator",
    "ChapterPresenceValidator",
    "JuryPresenceValidator",
    "EmptyChapterValidator",
    "validate",
]
