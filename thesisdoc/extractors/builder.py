"""
Structure builder: accumulates body lines into the chapter/section tree.

The segmenter drives it with boundary events (open_chapter, open_section)
and content (add_line); finish() closes whatever is still open so no
content is dropped at the tail.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from thesisdoc.models import Chapter, Section

logger = logging.getLogger(__name__)


def finalize_content(lines: list[str]) -> str:
    """Join buffered lines, collapsing whitespace inside each line."""
    return "\n".join(" ".join(line.split()) for line in lines).strip()


@dataclass
class SectionDraft:
    """A section still receiving content."""

    title: str
    numbering: str | None = None
    level: int | None = None
    lines: list[str] = field(default_factory=list)

    def close(self) -> Section:
        return Section(
            title=self.title,
            content=finalize_content(self.lines),
            level=self.level,
            numbering=self.numbering,
        )


@dataclass
class ChapterDraft:
    """A chapter still receiving content and sections."""

    title: str
    numbering: str | None = None
    lines: list[str] = field(default_factory=list)
    sections: list[Section] = field(default_factory=list)

    def close(self) -> Chapter:
        return Chapter(
            title=self.title,
            content=finalize_content(self.lines),
            sections=tuple(self.sections),
            numbering=self.numbering,
        )


class StructureBuilder:
    """Builds chapters and sections from boundary events.

    Body text seen before the first chapter heading is kept as a preamble.
    When no heading ever matched, the preamble becomes a single fallback
    chapter; otherwise it becomes a leading chapter titled after the
    body-start line ("Introduction générale").

    Usage:
        builder = StructureBuilder()
        builder.open_chapter("I. Introduction", numbering="I")
        builder.add_line("Some opening text.")
        builder.open_section("1.1 Background", numbering="1.1", level=2)
        builder.add_line("Context text.")
        chapters = builder.finish()
    """

    def __init__(self, fallback_title: str = "Main Content"):
        """Initialize the builder.

        Args:
            fallback_title: Title of the synthetic chapter wrapping body
                text that no heading claimed.
        """
        self.fallback_title = fallback_title
        self.body_title: str | None = None  # Text of the body-start line, if any
        self.preamble: list[str] = []
        self.chapters: list[Chapter] = []
        self._chapter: ChapterDraft | None = None
        self._section: SectionDraft | None = None
        self._finished = False

    @property
    def chapter_open(self) -> bool:
        return self._chapter is not None

    @property
    def section_open(self) -> bool:
        return self._section is not None

    def open_chapter(self, title: str, numbering: str | None = None) -> None:
        """Close the open chapter (and its section) and start a new one."""
        self._close_chapter()
        self._chapter = ChapterDraft(title=title, numbering=numbering)
        logger.debug("Opened chapter %r", title)

    def open_section(
        self, title: str, numbering: str | None = None, level: int | None = None
    ) -> None:
        """Close the open section and start a new one in the open chapter.

        Raises:
            ValueError: If no chapter is open.
        """
        if self._chapter is None:
            raise ValueError(f"Cannot open section {title!r} outside a chapter")
        self._close_section()
        self._section = SectionDraft(title=title, numbering=numbering, level=level)
        logger.debug("Opened section %r in %r", title, self._chapter.title)

    def add_line(self, line: str) -> None:
        """Append content to the innermost open node."""
        if self._section is not None:
            self._section.lines.append(line)
        elif self._chapter is not None:
            self._chapter.lines.append(line)
        else:
            self.preamble.append(line)

    def finish(self) -> tuple[Chapter, ...]:
        """Close open nodes and return the chapters in encounter order."""
        if self._finished:
            return tuple(self.chapters)
        self._close_chapter()
        self._finished = True

        preamble = finalize_content(self.preamble)
        if preamble:
            if not self.chapters:
                logger.debug("No heading matched; wrapping body in %r", self.fallback_title)
                self.chapters.append(Chapter(title=self.fallback_title, content=preamble))
            else:
                title = self.body_title or self.fallback_title
                self.chapters.insert(0, Chapter(title=title, content=preamble))
        return tuple(self.chapters)

    def _close_section(self) -> None:
        if self._section is not None and self._chapter is not None:
            self._chapter.sections.append(self._section.close())
        self._section = None

    def _close_chapter(self) -> None:
        if self._chapter is None:
            return
        self._close_section()
        self.chapters.append(self._chapter.close())
        self._chapter = None
