"""
Segmentation state machine.

Consumes the normalized line stream once, holding the current logical
section (front matter of some kind, body, or bibliography) and routing
each line to the matching accumulator:

    meta ──"Remerciements"──▶ acknowledgments ──"Résumé"──▶ abstract(fr)
      │                                                       │
      └──────────"Introduction" / "I. ..."───────────▶ body ◀─┘
                                                        │
                                       "Bibliographie"──▶ bibliography

Boundary lines are control signals: they switch state and are never
stored as content. Once the body has opened only the bibliography keyword
leaves it; a chapter's own "Résumé" or "Introduction" line is content.
Table-of-contents entries ("Bibliographie ....... 40") are dropped before
any keyword is looked at. An unexpected error on one line skips that line
with a warning; it never aborts the document.
"""

from __future__ import annotations

import html
import logging
import re
from collections import Counter
from dataclasses import dataclass, field

from thesisdoc.config import ExtractionConfig
from thesisdoc.extractors.builder import StructureBuilder
from thesisdoc.extractors.headings import HeadingClassifier, HeadingRank
from thesisdoc.extractors.patterns import (
    FIGURE_ITEM,
    SUBMISSION_DATE,
    TABLE_ITEM,
    BoundaryMatch,
    ListItemPattern,
    SegmentKind,
    is_toc_entry,
    match_boundary,
    match_field,
    match_jury,
)
from thesisdoc.models import JuryMember, Language, ThesisDocument

logger = logging.getLogger(__name__)

# States whose lines are kept verbatim
FREE_TEXT_KINDS = frozenset(
    {SegmentKind.ACKNOWLEDGMENTS, SegmentKind.DEDICATIONS, SegmentKind.ABSTRACT}
)

# States a strong chapter heading may leave for the body
IMPLICIT_BODY_KINDS = FREE_TEXT_KINDS | {
    SegmentKind.META,
    SegmentKind.LIST_OF_FIGURES,
    SegmentKind.LIST_OF_TABLES,
    SegmentKind.TABLE_OF_CONTENTS,
}

# The only boundaries honoured once the body has opened
BODY_EXIT_KINDS = frozenset({SegmentKind.BIBLIOGRAPHY})

_MARKUP_ARTIFACTS = re.compile(r"<[^>]*>|[*_#`«»“”„\"]")


def clean_title(text: str) -> str:
    """Strip markup leftovers and normalize whitespace in a title."""
    text = html.unescape(text)
    text = _MARKUP_ARTIFACTS.sub(" ", text)
    return " ".join(text.split()).strip(" :;,-–—")


@dataclass
class ParseContext:
    """All mutable state of one segmentation run."""

    config: ExtractionConfig
    builder: StructureBuilder
    kind: SegmentKind = SegmentKind.META
    abstract_language: Language | None = None

    # Title page
    fields: dict[str, str] = field(default_factory=dict)
    title_parts: list[str] = field(default_factory=list)
    collecting_title: bool = False
    title_lines: int = 0
    jury: list[JuryMember] = field(default_factory=list)

    # Front and back matter accumulators
    acknowledgments: list[str] = field(default_factory=list)
    dedications: list[str] = field(default_factory=list)
    abstracts: dict[Language, list[str]] = field(default_factory=dict)
    list_of_figures: list[str] = field(default_factory=list)
    list_of_tables: list[str] = field(default_factory=list)
    bibliography: list[str] = field(default_factory=list)

    # Diagnostics
    dropped: Counter[str] = field(default_factory=Counter)
    warnings: list[str] = field(default_factory=list)
    processing_log: list[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        self.warnings.append(message)
        self.processing_log.append(message)


@dataclass(frozen=True)
class SegmentationResult:
    """Output of a segmentation run: the document without metadata."""

    document: ThesisDocument
    warnings: list[str]
    processing_log: list[str]


class DocumentSegmenter:
    """Runs the segmentation state machine over a line stream.

    Usage:
        segmenter = DocumentSegmenter()
        result = segmenter.segment(lines)
        print(result.document.author, len(result.document.chapters))
    """

    def __init__(
        self,
        config: ExtractionConfig | None = None,
        classifier: HeadingClassifier | None = None,
    ):
        """Initialize the segmenter.

        Args:
            config: Extraction configuration (uses defaults if None).
            classifier: Heading classifier for body lines (default creates one).
        """
        self.config = config or ExtractionConfig()
        self.classifier = classifier or HeadingClassifier(self.config)

    def segment(self, lines: list[str]) -> SegmentationResult:
        """Segment ``lines`` into a document.

        Args:
            lines: Trimmed, non-empty lines from the normalizer.

        Returns:
            SegmentationResult with the document, warnings and log.
        """
        ctx = ParseContext(
            config=self.config,
            builder=StructureBuilder(fallback_title=self.config.fallback_chapter_title),
        )
        ctx.processing_log.append(f"Segmenting {len(lines)} lines")

        for number, line in enumerate(lines, start=1):
            try:
                self._process_line(ctx, line)
            except Exception as e:
                ctx.warn(f"Line {number} skipped: {e}")
                logger.warning("Line %d skipped: %s", number, e)

        if ctx.collecting_title:
            self._close_title(ctx)

        document = self._assemble(ctx)
        for reason, count in sorted(ctx.dropped.items()):
            ctx.processing_log.append(f"Dropped {count} {reason} line(s)")
        ctx.processing_log.append(
            f"Segmentation complete: {len(document.chapters)} chapters, "
            f"{len(document.jury)} jury members, {len(document.bibliography)} references"
        )
        return SegmentationResult(
            document=document,
            warnings=ctx.warnings,
            processing_log=ctx.processing_log,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Transitions
    # ─────────────────────────────────────────────────────────────────────────

    def _process_line(self, ctx: ParseContext, line: str) -> None:
        if ctx.collecting_title:
            if self._continues_title(ctx, line):
                ctx.title_parts.append(line)
                ctx.title_lines += 1
                return
            self._close_title(ctx)

        # Contents entries repeat boundary keywords and heading lines
        if ctx.kind is SegmentKind.TABLE_OF_CONTENTS and is_toc_entry(line):
            ctx.dropped["table of contents"] += 1
            return

        boundary = match_boundary(line)
        if boundary is not None:
            if ctx.kind is not SegmentKind.BODY or boundary.kind in BODY_EXIT_KINDS:
                self._enter(ctx, boundary)
                return
            logger.debug("Keyword %r kept as body content", boundary.keyword)

        if (
            self.config.implicit_body_start
            and ctx.kind in IMPLICIT_BODY_KINDS
            and self.classifier.is_strong_chapter_heading(line)
        ):
            ctx.processing_log.append(f"Body started at heading {line!r}")
            ctx.kind = SegmentKind.BODY

        self._route(ctx, line)

    def _enter(self, ctx: ParseContext, boundary: BoundaryMatch) -> None:
        previous = ctx.kind
        ctx.kind = boundary.kind
        ctx.abstract_language = boundary.language
        if boundary.kind is SegmentKind.BODY and ctx.builder.body_title is None:
            ctx.builder.body_title = boundary.keyword
        logger.debug("%s -> %s at %r", previous.value, boundary.kind.value, boundary.keyword)
        if boundary.remainder:
            self._route(ctx, boundary.remainder)

    def _continues_title(self, ctx: ParseContext, line: str) -> bool:
        """True if ``line`` still belongs to the title being collected."""
        if SUBMISSION_DATE.match(line) is not None:
            return False
        if match_boundary(line) is not None or match_field(line) is not None:
            return False
        if match_jury(line) is not None or self.classifier.is_strong_chapter_heading(line):
            return False
        if ctx.title_lines >= self.config.max_title_lines:
            ctx.warn(
                f"Title closed after {ctx.title_lines} continuation lines "
                f"without a submission date"
            )
            return False
        return True

    def _close_title(self, ctx: ParseContext) -> None:
        ctx.collecting_title = False
        title = clean_title(" ".join(ctx.title_parts))
        if title:
            ctx.fields["title"] = title

    # ─────────────────────────────────────────────────────────────────────────
    # Routing
    # ─────────────────────────────────────────────────────────────────────────

    def _route(self, ctx: ParseContext, line: str) -> None:
        kind = ctx.kind
        if kind is SegmentKind.META:
            self._route_meta(ctx, line)
        elif kind is SegmentKind.ACKNOWLEDGMENTS:
            ctx.acknowledgments.append(line)
        elif kind is SegmentKind.DEDICATIONS:
            ctx.dedications.append(line)
        elif kind is SegmentKind.ABSTRACT:
            ctx.abstracts.setdefault(ctx.abstract_language, []).append(line)
        elif kind is SegmentKind.LIST_OF_FIGURES:
            self._route_list_item(ctx, line, FIGURE_ITEM, ctx.list_of_figures)
        elif kind is SegmentKind.LIST_OF_TABLES:
            self._route_list_item(ctx, line, TABLE_ITEM, ctx.list_of_tables)
        elif kind is SegmentKind.TABLE_OF_CONTENTS:
            ctx.dropped["table of contents"] += 1
        elif kind is SegmentKind.BODY:
            self._route_body(ctx, line)
        elif kind is SegmentKind.BIBLIOGRAPHY:
            if len(line) >= self.config.min_bibliography_entry_length:
                ctx.bibliography.append(line)
            else:
                ctx.dropped["short bibliography"] += 1

    def _route_meta(self, ctx: ParseContext, line: str) -> None:
        match = match_field(line)
        if match is not None:
            if match.field == "title":
                # Titles append, so a title split over several lines survives
                if ctx.fields.get("title"):
                    ctx.title_parts = [ctx.fields["title"]]
                else:
                    ctx.title_parts = []
                if match.value:
                    ctx.title_parts.append(match.value)
                ctx.collecting_title = True
                ctx.title_lines = 0
                return
            previous = ctx.fields.get(match.field)
            if previous and previous != match.value:
                logger.debug("%s overwritten: %r -> %r", match.field, previous, match.value)
            ctx.fields[match.field] = match.value
            return

        jury = match_jury(line)
        if jury is not None:
            ctx.jury.append(
                JuryMember(role=jury.role, name=jury.name, affiliation=jury.affiliation)
            )
            return

        ctx.dropped["unrecognised front matter"] += 1
        logger.debug("Ignored front-matter line %r", line)

    def _route_list_item(
        self, ctx: ParseContext, line: str, pattern: ListItemPattern, target: list[str]
    ) -> None:
        if pattern.match(line) is not None:
            target.append(line)
        else:
            ctx.dropped[f"non-{pattern.name.replace('_', ' ')}"] += 1

    def _route_body(self, ctx: ParseContext, line: str) -> None:
        builder = ctx.builder
        heading = self.classifier.classify(line, chapter_open=builder.chapter_open)
        if heading is None:
            builder.add_line(line)
        elif heading.rank is HeadingRank.CHAPTER:
            builder.open_chapter(heading.title, numbering=heading.numbering)
        else:
            builder.open_section(heading.title, numbering=heading.numbering, level=heading.level)

    # ─────────────────────────────────────────────────────────────────────────
    # Assembly
    # ─────────────────────────────────────────────────────────────────────────

    def _assemble(self, ctx: ParseContext) -> ThesisDocument:
        fields = ctx.fields
        return ThesisDocument(
            title=fields.get("title", ""),
            author=fields.get("author", ""),
            university=fields.get("university", ""),
            faculty=fields.get("faculty", ""),
            department=fields.get("department", ""),
            specialty=fields.get("specialty", ""),
            submission_date=fields.get("submission_date", ""),
            academic_year=fields.get("academic_year", ""),
            jury=tuple(ctx.jury),
            abstracts={lang: "\n".join(text).strip() for lang, text in ctx.abstracts.items()},
            acknowledgments="\n".join(ctx.acknowledgments).strip(),
            dedications="\n".join(ctx.dedications).strip(),
            list_of_figures=tuple(ctx.list_of_figures),
            list_of_tables=tuple(ctx.list_of_tables),
            chapters=ctx.builder.finish(),
            bibliography=tuple(ctx.bibliography),
        )
