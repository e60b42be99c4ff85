"""
Text normalizer: flattens HTML or plain text into a line stream.

Downstream stages only ever see trimmed, non-empty lines. Structural
markup is translated into textual equivalents on the way:

- ``<br>`` becomes a line boundary
- block elements (``<p>``, ``<div>``, ``<h1>``...) become blank-line blocks
- ``<ul>`` items are prefixed with "• ", ``<ol>`` items with "N. "
- table rows become one line each, cells joined by " | "
- script, style, meta, link and head content is dropped

Input without recognisable markup is treated as plain text and split on
its own line boundaries.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from dataclasses import dataclass, field

from bs4 import BeautifulSoup, Comment, Declaration, Doctype, NavigableString, Tag
from bs4.element import ProcessingInstruction

from thesisdoc.models import ImageInfo, TableInfo

logger = logging.getLogger(__name__)

BULLET = "• "
CELL_SEPARATOR = " | "

# Elements whose presence marks the input as HTML
_MARKUP_TAGS = [
    "html", "head", "body", "title", "meta", "p", "div", "span", "br", "hr",
    "h1", "h2", "h3", "h4", "h5", "h6", "ul", "ol", "li", "table", "tr", "td", "th",
    "section", "article", "main", "header", "footer", "blockquote", "pre",
    "b", "i", "u", "em", "strong", "a", "img", "font", "center", "sup", "sub",
]

_BLOCK_TAGS = {
    "p", "div", "section", "article", "main", "aside", "nav", "header", "footer",
    "blockquote", "address", "figure", "figcaption", "caption", "form", "fieldset",
    "details", "summary", "dl", "dt", "dd", "center",
    "h1", "h2", "h3", "h4", "h5", "h6",
}

_NOISE_TAGS = {"script", "style", "meta", "link", "noscript", "head", "title", "template"}

_SKIPPED_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)

_WHITESPACE = re.compile(r"\s+")


@dataclass
class MarkupHints:
    """Information carried by markup that lines alone cannot convey."""

    title: str | None = None  # <title> or first <h1>
    author: str | None = None  # <meta name="author">
    tables: list[TableInfo] = field(default_factory=list)
    images: list[ImageInfo] = field(default_factory=list)


@dataclass
class NormalizedInput:
    """Output of the normalizer."""

    lines: list[str]
    source_format: str  # "html" or "text"
    hints: MarkupHints = field(default_factory=MarkupHints)


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


class TextNormalizer:
    """Converts HTML or plain text into normalized lines.

    Usage:
        normalizer = TextNormalizer()
        result = normalizer.normalize("<p>Résumé</p><p>Ce travail...</p>")
        result.lines  # ["Résumé", "Ce travail..."]
    """

    def __init__(self, parser: str = "html.parser"):
        """Initialize the normalizer.

        Args:
            parser: BeautifulSoup tree builder to use.
        """
        self.parser = parser

    def normalize(self, raw: str) -> NormalizedInput:
        """Normalize raw input.

        Returns an empty line list for empty input; deciding whether that
        is a failure is left to the caller.
        """
        if not raw or not raw.strip():
            return NormalizedInput(lines=[], source_format="text")

        soup = BeautifulSoup(raw, self.parser)
        if soup.find(_MARKUP_TAGS) is None:
            return NormalizedInput(lines=self.split_lines(raw), source_format="text")

        hints = self._collect_hints(soup)
        root = soup.body or soup
        pieces: list[str] = []
        self._flatten(root, pieces)
        lines = self.split_lines("".join(pieces))
        logger.debug(
            "Flattened HTML into %d lines (%d tables, %d images)",
            len(lines),
            len(hints.tables),
            len(hints.images),
        )
        return NormalizedInput(lines=lines, source_format="html", hints=hints)

    @staticmethod
    def split_lines(text: str) -> list[str]:
        """Split text on line boundaries into trimmed, non-empty lines."""
        text = unicodedata.normalize("NFC", text)
        lines = (_collapse(line) for line in text.splitlines())
        return [line for line in lines if line]

    # ─────────────────────────────────────────────────────────────────────────
    # Flattening
    # ─────────────────────────────────────────────────────────────────────────

    def _flatten(self, node: Tag, out: list[str]) -> None:
        for child in node.children:
            if isinstance(child, _SKIPPED_STRINGS):
                continue
            if isinstance(child, NavigableString):
                # Source newlines inside text are plain whitespace in HTML
                out.append(_WHITESPACE.sub(" ", str(child)))
                continue
            if not isinstance(child, Tag):
                continue

            name = child.name
            if name in _NOISE_TAGS:
                continue
            if name == "br":
                out.append("\n")
            elif name == "hr":
                out.append("\n\n")
            elif name == "pre":
                out.append("\n\n" + child.get_text() + "\n\n")
            elif name == "table":
                self._flatten_table(child, out)
            elif name in ("ul", "ol"):
                self._flatten_list(child, out)
            elif name == "li":
                # Stray item outside a list
                self._flatten_item(child, BULLET, out)
            elif name in _BLOCK_TAGS:
                out.append("\n\n")
                self._flatten(child, out)
                out.append("\n\n")
            else:
                self._flatten(child, out)

    def _flatten_list(self, element: Tag, out: list[str]) -> None:
        ordered = element.name == "ol"
        index = _list_start(element)
        out.append("\n")
        for item in element.find_all("li", recursive=False):
            self._flatten_item(item, f"{index}. " if ordered else BULLET, out)
            index += 1
        out.append("\n")

    def _flatten_item(self, item: Tag, marker: str, out: list[str]) -> None:
        # The marker goes on the item's first line even when it wraps a block
        pieces: list[str] = []
        self._flatten(item, pieces)
        lines = [_collapse(line) for line in "".join(pieces).split("\n")]
        lines = [line for line in lines if line]
        if not lines:
            return
        lines[0] = marker + lines[0]
        out.append("\n" + "\n".join(lines) + "\n")

    def _flatten_table(self, table: Tag, out: list[str]) -> None:
        out.append("\n\n")
        caption = table.find("caption")
        if caption is not None:
            out.append(_collapse(caption.get_text(" ")) + "\n")
        for cells in _table_rows(table):
            if cells:
                out.append(CELL_SEPARATOR.join(cells) + "\n")
        out.append("\n")

    # ─────────────────────────────────────────────────────────────────────────
    # Hints
    # ─────────────────────────────────────────────────────────────────────────

    def _collect_hints(self, soup: BeautifulSoup) -> MarkupHints:
        hints = MarkupHints()

        title = soup.find("title")
        if title is None or not _collapse(title.get_text(" ")):
            title = soup.find("h1")
        if title is not None:
            hints.title = _collapse(title.get_text(" ")) or None

        author = soup.find("meta", attrs={"name": re.compile(r"^author$", re.IGNORECASE)})
        if author is not None and author.get("content"):
            hints.author = _collapse(author["content"])

        for table in soup.find_all("table"):
            caption = table.find("caption")
            hints.tables.append(
                TableInfo(
                    caption=_collapse(caption.get_text(" ")) if caption is not None else None,
                    rows=tuple(tuple(cells) for cells in _table_rows(table) if cells),
                )
            )

        for img in soup.find_all("img"):
            src = (img.get("src") or "").strip()
            if src:
                hints.images.append(
                    ImageInfo(src=src, alt=img.get("alt") or "", caption=img.get("title") or None)
                )
        return hints


def _list_start(element: Tag) -> int:
    try:
        return int(element.get("start", 1))
    except (TypeError, ValueError):
        return 1


def _table_rows(table: Tag) -> list[list[str]]:
    """Cell texts per row, skipping rows of nested tables."""
    rows = []
    for row in table.find_all("tr"):
        if row.find_parent("table") is not table:
            continue
        cells = [
            _collapse(cell.get_text(" ")) for cell in row.find_all(["td", "th"], recursive=False)
        ]
        rows.append([cell for cell in cells if cell])
    return rows


_default_normalizer = TextNormalizer()


def normalize(raw: str) -> NormalizedInput:
    """Normalize raw HTML or plain text with the default normalizer."""
    return _default_normalizer.normalize(raw)
