"""
Metadata derived from an assembled document.

Word count covers the title, acknowledgments, dedications, abstracts,
chapter and section contents and bibliography entries; the page estimate
assumes a fixed number of words per printed page.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator

from langdetect import DetectorFactory
from langdetect import detect as langdetect_detect
from langdetect.lang_detect_exception import LangDetectException

from thesisdoc.config import ExtractionConfig
from thesisdoc.models import DocumentMetadata, ThesisDocument

logger = logging.getLogger(__name__)

__version__ = "0.1.0"

# Make language detection deterministic
DetectorFactory.seed = 0

# Below this many characters langdetect guesses more than it detects
MIN_DETECTION_CHARS = 20


def iter_text(document: ThesisDocument) -> Iterator[str]:
    """Yield every free-text part that counts toward the word count."""
    yield document.title
    yield document.acknowledgments
    yield document.dedications
    yield from document.abstracts.values()
    for chapter in document.chapters:
        yield chapter.content
        for section in chapter.sections:
            yield section.content
    yield from document.bibliography


def count_words(parts) -> int:
    """Count whitespace-separated tokens across ``parts``."""
    return sum(len(part.split()) for part in parts if part)


def estimate_pages(word_count: int, words_per_page: int = 250) -> int:
    """Page estimate: ceil(word_count / words_per_page), at least 1."""
    return max(1, math.ceil(word_count / words_per_page))


def detect_language(text: str) -> str | None:
    """Detect the dominant language of text using langdetect.

    Returns None when the text is too short or has no usable features.
    """
    if len(text.strip()) < MIN_DETECTION_CHARS:
        return None
    try:
        return langdetect_detect(text)
    except LangDetectException as e:
        logger.debug("Language detection failed: %s", e)
        return None


def compute_metadata(
    document: ThesisDocument,
    config: ExtractionConfig | None = None,
    source_format: str = "",
) -> DocumentMetadata:
    """Compute derived metadata for ``document``.

    With ``config.compute_metadata`` off, counts and language stay None.
    """
    config = config or ExtractionConfig()
    if not config.compute_metadata:
        return DocumentMetadata(source_format=source_format, thesisdoc_version=__version__)

    word_count = count_words(iter_text(document))

    language = None
    if config.detect_language:
        body = "\n".join(
            part
            for chapter in document.chapters
            for part in (chapter.content, *(s.content for s in chapter.sections))
            if part
        )
        language = detect_language(body or "\n".join(p for p in iter_text(document) if p))

    return DocumentMetadata(
        word_count=word_count,
        page_estimate=estimate_pages(word_count, config.words_per_page),
        language=language,
        source_format=source_format,
        thesisdoc_version=__version__,
    )
