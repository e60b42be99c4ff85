"""
Normalizers for transforming raw input into a line stream.

- TextNormalizer: HTML or plain text -> trimmed, non-empty lines
- MarkupHints: title, author, tables and images only markup can provide
"""

from thesisdoc.normalizers.markup import (
    BULLET,
    CELL_SEPARATOR,
    MarkupHints,
    NormalizedInput,
    TextNormalizer,
    normalize,
)

__all__ = [
    "TextNormalizer",
    "NormalizedInput",
    "MarkupHints",
    "normalize",
    "BULLET",
    "CELL_SEPARATOR",
]
