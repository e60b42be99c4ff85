"""
Data models for thesisdoc.

These models represent the output of extraction. Every entity is a frozen
dataclass built once by the pipeline; sequences are tuples and the
abstracts map is read-only, so a returned document cannot be mutated.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Union

from thesisdoc.exceptions import ExtractionError

# Distinguishes "affiliation not found" from "found but blank"
UNSPECIFIED_AFFILIATION = "unspecified"


class Language(Enum):
    """Languages an abstract can be written in."""

    FRENCH = "fr"
    ENGLISH = "en"
    ARABIC = "ar"


@dataclass(frozen=True)
class JuryMember:
    """A member of the defense jury panel."""

    role: str  # "Président", "Examinateur", "Directrice de thèse", ...
    name: str
    affiliation: str = UNSPECIFIED_AFFILIATION


@dataclass(frozen=True)
class Section:
    """A section inside a chapter."""

    title: str
    content: str = ""
    level: int | None = None  # Depth in the numbering hierarchy: "1.1" -> 2
    numbering: str | None = None  # Leading label: "1.1", "a)", "B."


@dataclass(frozen=True)
class Chapter:
    """A chapter with its own content and ordered sections."""

    title: str
    content: str = ""
    sections: tuple[Section, ...] = ()
    numbering: str | None = None  # "II", "3"


@dataclass(frozen=True)
class TableInfo:
    """A table found in the markup source."""

    caption: str | None
    rows: tuple[tuple[str, ...], ...] = ()


@dataclass(frozen=True)
class ImageInfo:
    """An image found in the markup source."""

    src: str
    alt: str = ""
    caption: str | None = None


@dataclass(frozen=True)
class DocumentMetadata:
    """Metadata derived from the assembled document."""

    word_count: int | None = None  # None when metadata computation is disabled
    page_estimate: int | None = None
    language: str | None = None  # ISO 639-1 code of the dominant body language
    source_format: str = ""  # "html" or "text"
    created_at: datetime = field(default_factory=datetime.now)
    thesisdoc_version: str = ""


@dataclass(frozen=True)
class ThesisDocument:
    """
    The structured thesis recovered from a text or HTML source.

    Example:
        >>> result = thesisdoc.extract(html)
        >>> doc = result.document
        >>> print(doc.title, doc.author)
        >>> for chapter in doc.chapters:
        ...     print(chapter.title, len(chapter.sections))
    """

    # Title page
    title: str = ""
    author: str = ""
    university: str = ""
    faculty: str = ""
    department: str = ""
    specialty: str = ""
    submission_date: str = ""
    academic_year: str = ""
    jury: tuple[JuryMember, ...] = ()

    # Front matter
    abstracts: Mapping[Language, str] = field(default_factory=lambda: MappingProxyType({}))
    acknowledgments: str = ""
    dedications: str = ""
    list_of_figures: tuple[str, ...] = ()
    list_of_tables: tuple[str, ...] = ()

    # Body and back matter
    chapters: tuple[Chapter, ...] = ()
    bibliography: tuple[str, ...] = ()

    # Markup inventory
    tables: tuple[TableInfo, ...] = ()
    images: tuple[ImageInfo, ...] = ()

    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)

    def __post_init__(self):
        # Freeze the abstracts map and drop empty entries
        abstracts = {lang: text for lang, text in dict(self.abstracts).items() if text.strip()}
        object.__setattr__(self, "abstracts", MappingProxyType(abstracts))

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the document
        """
        return {
            "title": self.title,
            "author": self.author,
            "university": self.university,
            "faculty": self.faculty,
            "department": self.department,
            "specialty": self.specialty,
            "submission_date": self.submission_date,
            "academic_year": self.academic_year,
            "jury": [
                {"role": m.role, "name": m.name, "affiliation": m.affiliation} for m in self.jury
            ],
            "abstracts": {lang.value: text for lang, text in self.abstracts.items()},
            "acknowledgments": self.acknowledgments,
            "dedications": self.dedications,
            "list_of_figures": list(self.list_of_figures),
            "list_of_tables": list(self.list_of_tables),
            "chapters": [
                {
                    "title": chapter.title,
                    "numbering": chapter.numbering,
                    "content": chapter.content,
                    "sections": [
                        {
                            "title": s.title,
                            "numbering": s.numbering,
                            "level": s.level,
                            "content": s.content,
                        }
                        for s in chapter.sections
                    ],
                }
                for chapter in self.chapters
            ],
            "bibliography": list(self.bibliography),
            "tables": [
                {"caption": t.caption, "rows": [list(r) for r in t.rows]} for t in self.tables
            ],
            "images": [{"src": i.src, "alt": i.alt, "caption": i.caption} for i in self.images],
            "metadata": {
                "word_count": self.metadata.word_count,
                "page_estimate": self.metadata.page_estimate,
                "language": self.metadata.language,
                "source_format": self.metadata.source_format,
                "created_at": self.metadata.created_at.isoformat(),
                "thesisdoc_version": self.metadata.thesisdoc_version,
            },
        }

    def to_plain_text(self, body_marker: str = "Introduction") -> str:
        """
        Reconstruct a plain-text rendition of the title, body and bibliography.

        Extracting the result again yields the same chapter count for
        documents whose headings have unambiguous shapes. The body marker
        is emitted unless the first chapter title already starts the body.

        Args:
            body_marker: Line emitted before the chapters to open the body.
        """
        # Imported here: patterns is part of the extraction layer above models
        from thesisdoc.extractors.patterns import BODY_START

        lines: list[str] = []
        if self.title:
            lines.append(self.title)
        if self.chapters and BODY_START.match(self.chapters[0].title) is None:
            lines.append(body_marker)
        for chapter in self.chapters:
            lines.append(chapter.title)
            if chapter.content:
                lines.append(chapter.content)
            for section in chapter.sections:
                lines.append(section.title)
                if section.content:
                    lines.append(section.content)
        if self.bibliography:
            lines.append("Bibliographie")
            lines.extend(self.bibliography)
        return "\n".join(lines)


@dataclass(frozen=True)
class ExtractionSuccess:
    """A usable document plus any non-fatal warnings."""

    document: ThesisDocument
    warnings: tuple[str, ...] = ()
    issues: tuple[Any, ...] = ()  # ValidationIssue, including info-level ones
    processing_log: tuple[str, ...] = ()

    ok = True

    def unwrap(self) -> ThesisDocument:
        """Return the document."""
        return self.document


@dataclass(frozen=True)
class ExtractionFailure:
    """
    An unusable input, or a strict-mode validation failure.

    partial holds the document built so far when there is one, so callers
    can display it or complete it by hand.
    """

    reason: str
    partial: ThesisDocument | None = None
    warnings: tuple[str, ...] = ()
    issues: tuple[Any, ...] = ()
    processing_log: tuple[str, ...] = ()

    ok = False

    @property
    def document(self) -> ThesisDocument | None:
        """The partial document, if any."""
        return self.partial

    def unwrap(self) -> ThesisDocument:
        """Raise ExtractionError carrying the failure reason."""
        raise ExtractionError(self.reason, partial=self.partial)


ExtractionResult = Union[ExtractionSuccess, ExtractionFailure]
