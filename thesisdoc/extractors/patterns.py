"""
Pattern library: the recognizers used by every extraction stage.

Each recognizer is a frozen dataclass wrapping a compiled regex, exposing
``match(line)`` which returns a structured match or ``None``. They hold no
state, so the module-level tables below are shared by all extractions.

Four families:
- Boundary patterns: a keyword opening a front-matter section, the body
  or the bibliography ("Remerciements", "Abstract", "Bibliographie").
- Field patterns: a labelled metadata line ("Spécialité: ...").
- Jury patterns: a jury member line or a flattened jury table row.
- List-item patterns: "Figure 3 ..." / "Tableau 2 ..." entries.

Heading shapes (chapter and section numbering) live here too; the
HeadingClassifier decides how to apply them.

Tables are tested in order; the first matching entry wins.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from thesisdoc.models import UNSPECIFIED_AFFILIATION, Language


class SegmentKind(Enum):
    """Logical section a line belongs to."""

    META = "meta"
    ACKNOWLEDGMENTS = "acknowledgments"
    DEDICATIONS = "dedications"
    ABSTRACT = "abstract"
    LIST_OF_FIGURES = "list_of_figures"
    LIST_OF_TABLES = "list_of_tables"
    TABLE_OF_CONTENTS = "table_of_contents"
    BODY = "body"
    BIBLIOGRAPHY = "bibliography"


def _p(pattern: str, flags: int = re.IGNORECASE) -> re.Pattern[str]:
    return re.compile(pattern, flags | re.UNICODE)


# ═══════════════════════════════════════════════════════════════════════════════
# Boundary patterns
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class BoundaryMatch:
    """A line recognised as a section boundary."""

    pattern: BoundaryPattern
    keyword: str  # The keyword as written in the line
    remainder: str  # Text after the separator, "" if none

    @property
    def kind(self) -> SegmentKind:
        return self.pattern.kind

    @property
    def language(self) -> Language | None:
        return self.pattern.language


@dataclass(frozen=True)
class BoundaryPattern:
    """A keyword opening a new logical section.

    The keyword must start the line and be followed either by the end of
    the line or by a ``:``/``.``/dash separator; text after the separator
    is returned as the remainder.
    """

    name: str
    kind: SegmentKind
    regex: re.Pattern[str]
    language: Language | None = None

    def match(self, line: str) -> BoundaryMatch | None:
        m = self.regex.match(line.strip())
        if m is None:
            return None
        # "Introduction générale ........ 1" is a contents entry, not a boundary
        if m.group("rest") and _LEADER_REMAINDER.match(m.group("rest")):
            return None
        return BoundaryMatch(
            pattern=self,
            keyword=m.group("keyword"),
            remainder=(m.group("rest") or "").strip(),
        )


# Dot leaders between a contents entry and its page number
_LEADER = r"(?:(?:[.·_]\s*){3,}|(?:…\s*)+)"
_PAGE = r"(?:\d{1,4}|[ivxlcdm]{1,6})"

_LEADER_REMAINDER = _p(rf"^{_LEADER}{_PAGE}?$")


def _boundary(keywords: str) -> re.Pattern[str]:
    return _p(rf"^(?P<keyword>{keywords})\s*(?:[:.\-–—]\s*(?P<rest>.*))?$")


ACKNOWLEDGMENTS = BoundaryPattern(
    "acknowledgments",
    SegmentKind.ACKNOWLEDGMENTS,
    _boundary(r"remerciements?|acknowledge?ments?"),
)
DEDICATIONS = BoundaryPattern(
    "dedications",
    SegmentKind.DEDICATIONS,
    _boundary(r"d[ée]dicaces?|dedications?"),
)
ABSTRACT_FR = BoundaryPattern(
    "abstract_fr", SegmentKind.ABSTRACT, _boundary(r"r[ée]sum[ée]"), Language.FRENCH
)
ABSTRACT_EN = BoundaryPattern(
    "abstract_en", SegmentKind.ABSTRACT, _boundary(r"abstract|summary"), Language.ENGLISH
)
ABSTRACT_AR = BoundaryPattern(
    "abstract_ar", SegmentKind.ABSTRACT, _boundary(r"الملخص|ملخص"), Language.ARABIC
)
LIST_OF_FIGURES = BoundaryPattern(
    "list_of_figures",
    SegmentKind.LIST_OF_FIGURES,
    _boundary(r"liste\s+des\s+(?:figures|illustrations)|list\s+of\s+(?:figures|illustrations)"),
)
LIST_OF_TABLES = BoundaryPattern(
    "list_of_tables",
    SegmentKind.LIST_OF_TABLES,
    _boundary(r"liste\s+des\s+tableaux|list\s+of\s+tables"),
)
TABLE_OF_CONTENTS = BoundaryPattern(
    "table_of_contents",
    SegmentKind.TABLE_OF_CONTENTS,
    _boundary(r"table\s+des\s+mati[èe]res|sommaire|table\s+of\s+contents|contents"),
)
BODY_START = BoundaryPattern(
    "body_start",
    SegmentKind.BODY,
    _boundary(r"introduction\s+g[ée]n[ée]rale|general\s+introduction|introduction"),
)
BIBLIOGRAPHY = BoundaryPattern(
    "bibliography",
    SegmentKind.BIBLIOGRAPHY,
    _boundary(
        r"bibliographie|r[ée]f[ée]rences\s+bibliographiques|r[ée]f[ée]rences"
        r"|bibliography|references|works\s+cited"
    ),
)

# Priority order: front matter, then body start, then bibliography
BOUNDARY_PATTERNS: tuple[BoundaryPattern, ...] = (
    ACKNOWLEDGMENTS,
    DEDICATIONS,
    ABSTRACT_FR,
    ABSTRACT_EN,
    ABSTRACT_AR,
    LIST_OF_FIGURES,
    LIST_OF_TABLES,
    TABLE_OF_CONTENTS,
    BODY_START,
    BIBLIOGRAPHY,
)


def match_boundary(line: str) -> BoundaryMatch | None:
    """Return the first boundary pattern matching ``line``."""
    for pattern in BOUNDARY_PATTERNS:
        m = pattern.match(line)
        if m is not None:
            return m
    return None


# ═══════════════════════════════════════════════════════════════════════════════
# Metadata field patterns
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class FieldMatch:
    """A metadata field value captured from a line."""

    field: str
    value: str


@dataclass(frozen=True)
class FieldPattern:
    """A labelled metadata line; captures the ``value`` group."""

    field: str
    regex: re.Pattern[str]
    allow_empty: bool = False  # "Titre :" alone still starts a title

    def match(self, line: str) -> FieldMatch | None:
        m = self.regex.match(line.strip())
        if m is None:
            return None
        value = " ".join(m.group("value").split())
        if not value and not self.allow_empty:
            return None
        return FieldMatch(field=self.field, value=value)


_COLON = r"\s*[:：]\s*"

TITLE_START = FieldPattern(
    "title",
    _p(
        r"^(?:titre(?:\s+de\s+la\s+th[èe]se)?|th[èe]me|intitul[ée]|sujet|(?:thesis\s+)?title)"
        rf"{_COLON}(?P<value>.*)$"
    ),
    allow_empty=True,
)
SUBMISSION_DATE = FieldPattern(
    "submission_date",
    _p(
        r"^(?:soutenu(?:e)?(?:\s+publiquement)?\s+le|date\s+de\s+(?:la\s+)?soutenance"
        r"|defended\s+on|submitted\s+on|defen[cs]e\s+date)"
        r"\s*[:：]?\s*(?P<value>.+)$"
    ),
)
AUTHOR_BY = FieldPattern(
    "author",
    _p(
        r"^(?:pr[ée]sent[ée]e?|r[ée]alis[ée]e?|soumise?|[ée]labor[ée]e?|pr[ée]par[ée]e?)"
        r"\s+par(?:\s*[:：]\s*|\s+)(?P<value>.+)$"
    ),
)
AUTHOR_LABEL = FieldPattern(
    "author",
    _p(
        r"^(?:submitted\s+by|presented\s+by|prepared\s+by|par|by|auteure?|author"
        rf"|candidate?|[ée]tudiante?|student){_COLON}(?P<value>.+)$"
    ),
)
SPECIALTY = FieldPattern(
    "specialty",
    _p(
        r"^(?:sp[ée]cialit[ée]|option|fili[èe]re|parcours|speciali[sz]ation|specialty"
        rf"|speciality|major|field\s+of\s+study){_COLON}(?P<value>.+)$"
    ),
)
UNIVERSITY_LABEL = FieldPattern(
    "university", _p(rf"^(?:universit[ée]|university){_COLON}(?P<value>.+)$")
)
UNIVERSITY_LINE = FieldPattern(
    "university", _p(r"^(?P<value>(?:universit[ée]|university)\b.+)$")
)
FACULTY_LABEL = FieldPattern(
    "faculty", _p(rf"^(?:facult[ée]|faculty|institut|institute){_COLON}(?P<value>.+)$")
)
FACULTY_LINE = FieldPattern(
    "faculty",
    _p(r"^(?P<value>(?:facult[ée]|faculty|institut|institute|[ée]cole|school)\b.+)$"),
)
DEPARTMENT_LABEL = FieldPattern(
    "department", _p(rf"^(?:d[ée]partement|department|dept\.?){_COLON}(?P<value>.+)$")
)
DEPARTMENT_LINE = FieldPattern(
    "department", _p(r"^(?P<value>(?:d[ée]partement|department)\b.+)$")
)
ACADEMIC_YEAR = FieldPattern(
    "academic_year",
    _p(
        r"^(?:ann[ée]e\s+(?:universitaire|acad[ée]mique)|academic\s+year|promotion)"
        r"\s*[:：]?\s*(?P<value>.+)$"
    ),
)

# Labelled forms precede whole-line forms of the same field
FIELD_PATTERNS: tuple[FieldPattern, ...] = (
    TITLE_START,
    SUBMISSION_DATE,
    AUTHOR_BY,
    AUTHOR_LABEL,
    SPECIALTY,
    UNIVERSITY_LABEL,
    UNIVERSITY_LINE,
    FACULTY_LABEL,
    FACULTY_LINE,
    DEPARTMENT_LABEL,
    DEPARTMENT_LINE,
    ACADEMIC_YEAR,
)

# Scalar fields a FieldPattern may set (title is appended, not overwritten)
METADATA_FIELDS: tuple[str, ...] = (
    "author",
    "university",
    "faculty",
    "department",
    "specialty",
    "submission_date",
    "academic_year",
)


def match_field(line: str) -> FieldMatch | None:
    """Return the first metadata field captured from ``line``."""
    for pattern in FIELD_PATTERNS:
        m = pattern.match(line)
        if m is not None:
            return m
    return None


# ═══════════════════════════════════════════════════════════════════════════════
# Jury patterns
# ═══════════════════════════════════════════════════════════════════════════════

JURY_ROLE = r"""
    (?:co[\s-]?)?
    (?:directeur|directrice|encadreur|encadrante?|promoteur|promotrice
      |rapporteur|rapporteuse|superviseur|supervisor|advisor|adviser|director)
    (?:\s+de\s+(?:th[èe]se|m[ée]moire|recherche))?
  | pr[ée]sidente?(?:\s+du\s+jury)?
  | examinat(?:eur|rice)
  | membre(?:\s+du\s+jury)?
  | invit[ée]e?
  | (?:internal\s+|external\s+)?examiner
  | thesis\s+(?:director|supervisor|advisor)
  | chair(?:man|person|woman)?
  | president
  | reviewer
  | referee
"""

_ROLE_CELL = re.compile(rf"^(?:{JURY_ROLE})\s*[:.]?$", re.IGNORECASE | re.VERBOSE)

# Academic grades listed between a jury member's name and institution
GRADE_MARKERS = frozenset(
    {
        "pr",
        "prof",
        "professeur",
        "professor",
        "dr",
        "docteur",
        "doctor",
        "mca",
        "mcb",
        "maa",
        "mab",
        "mc",
        "ma",
        "hdr",
        "maître de conférences",
        "maître de conférences a",
        "maître de conférences b",
        "maître assistant",
        "maître assistant a",
        "maître assistant b",
        "associate professor",
        "assistant professor",
        "lecturer",
        "senior lecturer",
    }
)


def is_grade_marker(text: str) -> bool:
    """True if ``text`` is an academic grade such as "Pr" or "MCA"."""
    return " ".join(text.strip().rstrip(".").split()).lower() in GRADE_MARKERS


def _affiliation(parts: list[str]) -> str:
    kept = [p.strip() for p in parts if p.strip() and not is_grade_marker(p)]
    return ", ".join(kept) if kept else UNSPECIFIED_AFFILIATION


@dataclass(frozen=True)
class JuryMatch:
    """A jury member captured from a line."""

    role: str
    name: str
    affiliation: str


@dataclass(frozen=True)
class JuryLinePattern:
    """``<role>: <name>, <grade>, <institution>`` jury lines.

    Grade markers are dropped from the trailing clause; whatever remains
    is the affiliation.
    """

    name: str
    regex: re.Pattern[str]

    def match(self, line: str) -> JuryMatch | None:
        m = self.regex.match(line.strip())
        if m is None:
            return None
        member = m.group("member").strip()
        head, *rest = re.split(r"\s*[,;]\s*", member)
        if not head or is_grade_marker(head):
            return None
        return JuryMatch(
            role=" ".join(m.group("role").split()),
            name=head.strip(),
            affiliation=_affiliation(rest),
        )


@dataclass(frozen=True)
class JuryRowPattern:
    """A jury table row flattened to ``cell | cell | ...``.

    One cell must be a role; the first other non-grade cell is the name
    and the remaining non-grade cells form the affiliation.
    """

    name: str
    separator: str = "|"

    def match(self, line: str) -> JuryMatch | None:
        if self.separator not in line:
            return None
        cells = [c.strip() for c in line.split(self.separator) if c.strip()]
        if len(cells) < 2:
            return None
        role_index = next((i for i, c in enumerate(cells) if _ROLE_CELL.match(c)), None)
        if role_index is None:
            return None
        others = [c for i, c in enumerate(cells) if i != role_index]
        names = [c for c in others if not is_grade_marker(c)]
        if not names:
            return None
        return JuryMatch(
            role=cells[role_index].rstrip(":. "),
            name=names[0],
            affiliation=_affiliation(names[1:]),
        )


JURY_LINE = JuryLinePattern(
    "jury_line",
    re.compile(
        rf"^(?P<role>{JURY_ROLE})\s*[:：\-–—]\s*(?P<member>.+)$",
        re.IGNORECASE | re.VERBOSE,
    ),
)
JURY_ROW = JuryRowPattern("jury_row")

JURY_PATTERNS: tuple[JuryLinePattern | JuryRowPattern, ...] = (JURY_LINE, JURY_ROW)


def match_jury(line: str) -> JuryMatch | None:
    """Return the jury member described by ``line``, if any."""
    for pattern in JURY_PATTERNS:
        m = pattern.match(line)
        if m is not None:
            return m
    return None


# ═══════════════════════════════════════════════════════════════════════════════
# List-item patterns
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class ListItemPattern:
    """A list-of-figures / list-of-tables entry."""

    name: str
    regex: re.Pattern[str]

    def match(self, line: str) -> re.Match[str] | None:
        return self.regex.match(line.strip())


_ITEM_NUMBER = r"\s*(?:n[°o]\.?\s*)?(?:\d+|[IVX]+)(?:[.\-]\d+)*\b"

FIGURE_ITEM = ListItemPattern("figure_item", _p(rf"^(?:figure|fig\.?){_ITEM_NUMBER}"))
TABLE_ITEM = ListItemPattern("table_item", _p(rf"^(?:tableau|table){_ITEM_NUMBER}"))

LIST_ITEM_PATTERNS: tuple[ListItemPattern, ...] = (FIGURE_ITEM, TABLE_ITEM)


def is_list_item(line: str) -> bool:
    """True if ``line`` looks like a figure or table entry."""
    return any(p.match(line) is not None for p in LIST_ITEM_PATTERNS)


@dataclass(frozen=True)
class TocEntryPattern:
    """A table-of-contents entry: text followed by a page number.

    The page number comes after dot leaders, or bare after the text. A bare
    number needs at least two words before it, so "Chapitre 1" stays a
    heading.
    """

    name: str
    regex: re.Pattern[str]
    min_words_before_bare_page: int = 2

    def match(self, line: str) -> re.Match[str] | None:
        m = self.regex.match(line.strip())
        if m is None:
            return None
        if m.group("bare") and len(m.group("text").split()) < self.min_words_before_bare_page:
            return None
        return m


TOC_ENTRY = TocEntryPattern(
    "toc_entry",
    _p(rf"^(?P<text>.+?)\s*(?:{_LEADER}(?P<page>{_PAGE})|\s(?P<bare>\d{{1,4}}))$"),
)


def is_toc_entry(line: str) -> bool:
    """True if ``line`` looks like a table-of-contents entry."""
    return TOC_ENTRY.match(line) is not None


# ═══════════════════════════════════════════════════════════════════════════════
# Heading shapes
# ═══════════════════════════════════════════════════════════════════════════════

_CAPITAL = r"A-ZÀ-ÖØ-Þ"


@dataclass(frozen=True)
class HeadingShape:
    """A numbering shape marking a chapter or section heading.

    ``num`` captures the numbering label. ``strong`` shapes are
    unambiguous enough to start the body from front matter.
    """

    name: str
    regex: re.Pattern[str]
    strong: bool = False
    numbered_levels: bool = False  # Level = count of dot-separated parts

    def match(self, line: str) -> re.Match[str] | None:
        return self.regex.match(line.strip())


ROMAN_CHAPTER = HeadingShape(
    "roman",
    re.compile(
        rf"^(?P<num>VIII|VII|VI|IV|IX|V|III|II|I|X)\.(?=\s|$|[{_CAPITAL}])", re.UNICODE
    ),
    strong=True,
)
KEYWORD_CHAPTER = HeadingShape(
    "keyword",
    _p(
        r"^(?:chapitre|chapter|partie|part)\s+"
        r"(?P<num>\d+|[IVX]+|premier|premi[èe]re|first|second|deuxi[èe]me|troisi[èe]me|third)"
        r"(?=\s|$|[.:\-–—)])"
    ),
    strong=True,
)
WORD_NUMBER_CHAPTER = HeadingShape(
    "word_number",
    re.compile(
        # A period after the number only counts at the end of the line:
        # "En 2019. Les chercheurs..." is prose
        rf"^[{_CAPITAL}][a-zà-öø-ÿ]*\s+(?P<num>\d+)"
        rf"(?=\s*\.?\s*$|\s*[:\-–—)]|\s+[{_CAPITAL}])",
        re.UNICODE,
    ),
)

UNNUMBERED_CHAPTER = HeadingShape(
    "unnumbered",
    _p(
        r"^(?:conclusions?\s+g[ée]n[ée]rales?|general\s+conclusions?"
        r"|conclusions?\s+et\s+perspectives|conclusions?\s+and\s+(?:future\s+work|perspectives)"
        r"|annexes|appendices)\s*[:.]?$"
    ),
)

CHAPTER_SHAPES: tuple[HeadingShape, ...] = (
    ROMAN_CHAPTER,
    KEYWORD_CHAPTER,
    WORD_NUMBER_CHAPTER,
    UNNUMBERED_CHAPTER,
)

NUMERIC_SECTION = HeadingShape(
    "multilevel",
    re.compile(
        rf"^(?P<num>(?:\d+|[IVX]+)(?:\.\d+)+)\.?\s*[-–—:]?\s*(?=$|[{_CAPITAL}«\"'“])",
        re.UNICODE,
    ),
    numbered_levels=True,
)
LETTER_SECTION = HeadingShape(
    "lettered",
    re.compile(r"^(?P<num>[a-z]\)|[A-Z]\.)\s", re.UNICODE),
)
BULLET_SECTION = HeadingShape(
    "bullet",
    re.compile(r"^(?P<bullet>[·\-])\s", re.UNICODE),
)

SECTION_SHAPES: tuple[HeadingShape, ...] = (NUMERIC_SECTION, LETTER_SECTION, BULLET_SECTION)
