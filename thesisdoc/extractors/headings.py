"""
Heading classification for body lines.

Academic numbering is not one grammar across documents (Roman and Arabic
numerals, "Chapitre 2", "1.2.3", "a)"), so a line is tested against
several narrow shapes from the pattern library instead:

1. Chapter shapes: Roman numeral + period, "Chapter N", a capitalized
   word + number, or an unnumbered closing heading ("Conclusion générale").
2. Section shapes, only while a chapter is open: multi-level numbering,
   lettered markers, dashed bullets, within a bounded length.

Anything else is body content.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from thesisdoc.config import ExtractionConfig
from thesisdoc.extractors.patterns import (
    CHAPTER_SHAPES,
    SECTION_SHAPES,
    HeadingShape,
    is_list_item,
)


class HeadingRank(Enum):
    """Structural rank of a heading."""

    CHAPTER = 1
    SECTION = 2


@dataclass(frozen=True)
class HeadingMatch:
    """A line classified as a heading."""

    rank: HeadingRank
    shape: str  # Name of the matching HeadingShape
    title: str
    numbering: str | None = None  # "II", "1.2", "a)"
    level: int | None = None  # Numbering depth for multi-level sections


class HeadingClassifier:
    """Classify body lines as chapter headings, section headings or content.

    Usage:
        classifier = HeadingClassifier()
        match = classifier.classify("1.1 Background", chapter_open=True)
        if match and match.rank is HeadingRank.SECTION:
            print(match.numbering, match.level)  # 1.1 2
    """

    def __init__(
        self,
        config: ExtractionConfig | None = None,
        *,
        chapter_shapes: tuple[HeadingShape, ...] = CHAPTER_SHAPES,
        section_shapes: tuple[HeadingShape, ...] = SECTION_SHAPES,
    ):
        """Initialize the classifier.

        Args:
            config: Supplies the heading length bounds.
            chapter_shapes: Chapter-level shapes, tested in order.
            section_shapes: Section-level shapes, tested in order.
        """
        config = config or ExtractionConfig()
        self.chapter_max_length = config.chapter_heading_max_length
        self.section_min_length = config.section_heading_min_length
        self.section_max_length = config.section_heading_max_length
        self.chapter_shapes = chapter_shapes
        self.section_shapes = section_shapes

    def classify(self, line: str, chapter_open: bool) -> HeadingMatch | None:
        """Classify a body line.

        Args:
            line: A trimmed, non-empty line.
            chapter_open: Whether a chapter is currently open; section
                headings are only recognised inside a chapter.

        Returns:
            A HeadingMatch, or None for body content.
        """
        text = line.strip()
        chapter = self.match_chapter(text)
        if chapter is not None:
            return chapter
        if chapter_open:
            return self.match_section(text)
        return None

    def match_chapter(self, text: str) -> HeadingMatch | None:
        """Match ``text`` against the chapter shapes."""
        if len(text) >= self.chapter_max_length:
            return None
        # Figure and table captions start with a word and a number too
        if is_list_item(text):
            return None
        for shape in self.chapter_shapes:
            m = shape.match(text)
            if m is not None:
                return HeadingMatch(
                    rank=HeadingRank.CHAPTER,
                    shape=shape.name,
                    title=text,
                    numbering=_numbering(m),
                )
        return None

    def match_section(self, text: str) -> HeadingMatch | None:
        """Match ``text`` against the section shapes."""
        if not self.section_min_length <= len(text) <= self.section_max_length:
            return None
        for shape in self.section_shapes:
            m = shape.match(text)
            if m is not None:
                numbering = _numbering(m)
                level = None
                if shape.numbered_levels and numbering:
                    level = len(numbering.split("."))
                return HeadingMatch(
                    rank=HeadingRank.SECTION,
                    shape=shape.name,
                    title=text,
                    numbering=numbering,
                    level=level,
                )
        return None

    def is_strong_chapter_heading(self, line: str) -> bool:
        """True for chapter shapes unambiguous enough to open the body."""
        match = self.match_chapter(line.strip())
        if match is None:
            return False
        return any(shape.strong for shape in self.chapter_shapes if shape.name == match.shape)


def _numbering(m) -> str | None:
    if "num" not in m.re.groupindex:
        return None
    return m.group("num")
