"""
Extraction orchestrator.

This module provides the main `extract()` function that turns thesis HTML
or plain text into an ExtractionResult by wiring together:
- TextNormalizer (markup flattening)
- DocumentSegmenter (state machine + heading classifier + structure builder)
- compute_metadata (word and page counts, language)
- validate (missing-field warnings)

The pipeline is single-pass and keeps all state local to one call, so
extract() is safe to call concurrently from several threads.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path

from thesisdoc.config import ExtractionConfig
from thesisdoc.exceptions import UnsupportedFormatError
from thesisdoc.extractors.segmenter import DocumentSegmenter
from thesisdoc.extractors.validators import ValidationIssue, validate
from thesisdoc.metadata import compute_metadata
from thesisdoc.models import (
    ExtractionFailure,
    ExtractionResult,
    ExtractionSuccess,
    ThesisDocument,
)
from thesisdoc.normalizers.markup import NormalizedInput, TextNormalizer

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# Extractor
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass
class ExtractorContext:
    """Context accumulated during one extraction."""

    raw: str
    config: ExtractionConfig
    processing_log: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    normalized: NormalizedInput | None = None
    document: ThesisDocument | None = None
    issues: list[ValidationIssue] = field(default_factory=list)


class ThesisExtractor:
    """
    Extracts a ThesisDocument from raw HTML or plain text.

    Each call to extract() works on its own ExtractorContext; an extractor
    instance can be shared between threads.
    """

    def __init__(self, config: ExtractionConfig | None = None) -> None:
        """Initialize the extractor."""
        self.config = config or ExtractionConfig()
        self.normalizer = TextNormalizer()
        self.segmenter = DocumentSegmenter(self.config)

    def extract(self, raw: str) -> ExtractionResult:
        """
        Extract a document from raw input.

        Args:
            raw: HTML markup or plain text

        Returns:
            ExtractionSuccess, or ExtractionFailure for unusable input
            (and, in strict mode, for any validation warning)
        """
        ctx = ExtractorContext(raw=raw or "", config=self.config)

        # Step 1: Reject unusable input
        failure = self._check_input(ctx)
        if failure is not None:
            return failure

        # Step 2: Flatten markup into lines
        self._normalize(ctx)
        if not ctx.normalized.lines:
            return self._fail(ctx, "Input contains no text")

        # Step 3: Segment lines into a document
        self._segment(ctx)

        # Step 4: Fill gaps from markup hints
        self._apply_markup_hints(ctx)

        # Step 5: Derive metadata
        self._compute_metadata(ctx)

        # Step 6: Validate
        return self._validate(ctx)

    def _check_input(self, ctx: ExtractorContext) -> ExtractionFailure | None:
        if not ctx.raw.strip():
            return self._fail(ctx, "Input is empty")
        limit = self.config.max_input_chars
        if limit is not None and len(ctx.raw) > limit:
            return self._fail(ctx, f"Input too large: {len(ctx.raw)} chars > {limit}")
        ctx.processing_log.append(f"Raw input: {len(ctx.raw)} chars")
        return None

    def _normalize(self, ctx: ExtractorContext) -> None:
        ctx.normalized = self.normalizer.normalize(ctx.raw)
        normalized = ctx.normalized
        ctx.processing_log.append(
            f"Normalized {normalized.source_format} input into {len(normalized.lines)} lines"
        )

    def _segment(self, ctx: ExtractorContext) -> None:
        segmentation = self.segmenter.segment(ctx.normalized.lines)
        ctx.document = segmentation.document
        ctx.warnings.extend(segmentation.warnings)
        ctx.processing_log.extend(segmentation.processing_log)

    def _apply_markup_hints(self, ctx: ExtractorContext) -> None:
        """Use <title>/<meta author> only for fields the text left empty."""
        hints = ctx.normalized.hints
        updates = {"tables": tuple(hints.tables), "images": tuple(hints.images)}
        if not ctx.document.title and hints.title:
            updates["title"] = hints.title
            ctx.processing_log.append(f"Title taken from markup: {hints.title!r}")
        if not ctx.document.author and hints.author:
            updates["author"] = hints.author
            ctx.processing_log.append(f"Author taken from markup: {hints.author!r}")
        ctx.document = replace(ctx.document, **updates)

    def _compute_metadata(self, ctx: ExtractorContext) -> None:
        metadata = compute_metadata(ctx.document, self.config, ctx.normalized.source_format)
        ctx.document = replace(ctx.document, metadata=metadata)
        if metadata.word_count is not None:
            ctx.processing_log.append(
                f"Metadata: {metadata.word_count} words, ~{metadata.page_estimate} pages, "
                f"language={metadata.language}"
            )

    def _validate(self, ctx: ExtractorContext) -> ExtractionResult:
        ctx.issues = validate(ctx.document)
        validation_warnings = [i.message for i in ctx.issues if i.severity == "warning"]
        ctx.warnings.extend(validation_warnings)
        ctx.processing_log.append(
            f"Validation: {len(ctx.issues)} issues, {len(validation_warnings)} warnings"
        )

        if self.config.strict and validation_warnings:
            reason = "Strict mode: " + "; ".join(validation_warnings)
            logger.warning("Extraction failed in strict mode: %s", reason)
            return self._fail(ctx, reason, partial=ctx.document)

        return ExtractionSuccess(
            document=ctx.document,
            warnings=tuple(ctx.warnings),
            issues=tuple(ctx.issues),
            processing_log=tuple(ctx.processing_log),
        )

    def _fail(
        self, ctx: ExtractorContext, reason: str, partial: ThesisDocument | None = None
    ) -> ExtractionFailure:
        ctx.processing_log.append(f"Extraction failed: {reason}")
        return ExtractionFailure(
            reason=reason,
            partial=partial,
            warnings=tuple(ctx.warnings),
            issues=tuple(ctx.issues),
            processing_log=tuple(ctx.processing_log),
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════════


def extract(raw_input: str, config: ExtractionConfig | None = None) -> ExtractionResult:
    """
    Extract a structured thesis from HTML or plain text.

    This is the main entry point for thesisdoc. It handles:
    - Markup detection (HTML is flattened, anything else is split on lines)
    - Front matter, jury, abstracts, chapters, sections and bibliography
    - Word count and page estimate
    - Validation of required fields

    Args:
        raw_input: HTML markup or plain text
        config: Extraction configuration (uses defaults if None)

    Returns:
        ExtractionSuccess with the document and warnings, or
        ExtractionFailure with a reason and, when available, the partial document

    Example:
        >>> result = extract(open("these.html").read())
        >>> if result.ok:
        ...     print(result.document.title)
        ... else:
        ...     print(result.reason)
    """
    return ThesisExtractor(config).extract(raw_input)


def extract_file(source: str | Path, config: ExtractionConfig | None = None) -> ExtractionResult:
    """
    Read a thesis file and extract it.

    Args:
        source: Path to an .html, .htm or .txt file
        config: Extraction configuration

    Raises:
        FileNotFoundError: If source doesn't exist
        UnsupportedFormatError: If the format isn't supported
    """
    source = Path(source)
    if not source.exists():
        raise FileNotFoundError(f"Source file not found: {source}")

    fmt = detect_format(source)
    if fmt not in supported_formats():
        raise UnsupportedFormatError(
            f"Format '{fmt}' is not supported. Supported: {', '.join(supported_formats())}"
        )

    raw = source.read_text(encoding="utf-8", errors="replace")
    logger.debug("Read %d chars from %s", len(raw), source)
    return extract(raw, config)


def extract_batch(
    sources: list[str | Path],
    config: ExtractionConfig | None = None,
):
    """
    Extract multiple files, yielding results in order.

    Args:
        sources: Paths to thesis files
        config: Extraction configuration

    Yields:
        (path, result) tuples where result is an ExtractionResult or Exception
    """
    for source in sources:
        source = Path(source)
        try:
            yield (source, extract_file(source, config))
        except (OSError, UnsupportedFormatError) as e:
            logger.warning("Could not extract %s: %s", source, e)
            yield (source, e)


def detect_format(path: str | Path) -> str:
    """
    Detect source format from the file extension.

    Args:
        path: Path to document file

    Returns:
        Format string: "html", "text", or the bare extension for anything else

    Raises:
        UnsupportedFormatError: If the file has no extension
    """
    path = Path(path)
    ext = path.suffix.lower()
    ext_map = {
        ".html": "html",
        ".htm": "html",
        ".xhtml": "html",
        ".txt": "text",
        ".text": "text",
    }
    if ext in ext_map:
        return ext_map[ext]
    if not ext:
        raise UnsupportedFormatError(f"Cannot detect format for: {path}")
    return ext.lstrip(".")


def supported_formats() -> list[str]:
    """Return list of supported input formats."""
    return ["html", "text"]
