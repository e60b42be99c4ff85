"""
thesisdoc: Recover the structure of academic theses from HTML or plain text.

This library reads a thesis whose markup carries no reliable semantics
(an HTML export, or text transcribed from a scan) and rebuilds its title
page, jury, abstracts, front matter, chapter/section tree and
bibliography using heuristic pattern recognizers.

Example:
    >>> import thesisdoc
    >>> result = thesisdoc.extract(html)
    >>> if result.ok:
    ...     doc = result.document
    ...     print(doc.title, doc.author)
    ...     for chapter in doc.chapters:
    ...         print(chapter.title)
    >>> for warning in result.warnings:
    ...     print(warning)
"""

from thesisdoc.config import ExtractionConfig
from thesisdoc.exceptions import (
    ConfigurationError,
    ExtractionError,
    ThesisDocError,
    UnsupportedFormatError,
)
from thesisdoc.extract import (
    detect_format,
    extract,
    extract_batch,
    extract_file,
    supported_formats,
)
from thesisdoc.models import (
    UNSPECIFIED_AFFILIATION,
    Chapter,
    DocumentMetadata,
    ExtractionFailure,
    ExtractionResult,
    ExtractionSuccess,
    ImageInfo,
    JuryMember,
    Language,
    Section,
    TableInfo,
    ThesisDocument,
)

__version__ = "0.1.0"
__all__ = [
    # Main API
    "extract",
    "extract_file",
    "extract_batch",
    "detect_format",
    "supported_formats",
    # Configuration
    "ExtractionConfig",
    # Document
    "ThesisDocument",
    "Chapter",
    "Section",
    "JuryMember",
    "Language",
    "TableInfo",
    "ImageInfo",
    "DocumentMetadata",
    "UNSPECIFIED_AFFILIATION",
    # Results
    "ExtractionResult",
    "ExtractionSuccess",
    "ExtractionFailure",
    # Exceptions
    "ThesisDocError",
    "UnsupportedFormatError",
    "ExtractionError",
    "ConfigurationError",
]
