"""
Exception classes for thesisdoc.

All thesisdoc exceptions inherit from ThesisDocError,
making it easy to catch all library errors.

Problems inside a document never raise: they are reported as warnings
on the ExtractionResult. Exceptions are reserved for misuse at the API
edge (bad configuration, unreadable source, unwrapping a failure).

Example:
    >>> try:
    ...     doc = thesisdoc.extract_file("thesis.docx").unwrap()
    ... except thesisdoc.UnsupportedFormatError as e:
    ...     print(f"Format not supported: {e}")
    ... except thesisdoc.ThesisDocError as e:
    ...     print(f"thesisdoc error: {e}")
"""


class ThesisDocError(Exception):
    """
    Base exception for all thesisdoc errors.

    Catch this to handle any thesisdoc-specific error.
    """

    pass


class UnsupportedFormatError(ThesisDocError):
    """
    Raised when a source file format is not supported.

    Example:
        >>> thesisdoc.extract_file("thesis.pdf")
        UnsupportedFormatError: Format 'pdf' is not supported. Supported: html, text
    """

    pass


class ExtractionError(ThesisDocError):
    """
    Raised when a failed extraction result is unwrapped.

    Carries the partially built document, if any, for diagnostics.
    """

    def __init__(self, reason: str, partial=None):
        super().__init__(reason)
        self.reason = reason
        self.partial = partial


class ConfigurationError(ThesisDocError, ValueError):
    """
    Raised for invalid configuration.

    Example:
        >>> ExtractionConfig(words_per_page=0)
        ConfigurationError: words_per_page must be >= 1, got 0
    """

    pass
