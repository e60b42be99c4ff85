"""
Configuration for thesisdoc extraction.

Every option has a default tuned on French/English thesis front matter;
create a config only when you need to change behavior.
"""

from __future__ import annotations

from dataclasses import dataclass

from thesisdoc.exceptions import ConfigurationError


@dataclass(frozen=True)
class ExtractionConfig:
    """
    Configuration for document extraction.

    Example:
        >>> config = ExtractionConfig(strict=True, compute_metadata=False)
        >>> result = thesisdoc.extract(html, config)
    """

    # Escalate validation warnings to a failure carrying the partial document
    strict: bool = False

    # Metadata calculation
    compute_metadata: bool = True
    detect_language: bool = True
    words_per_page: int = 250

    # Segmentation
    implicit_body_start: bool = True  # Strong chapter heading in front matter starts the body
    min_bibliography_entry_length: int = 20  # Shorter lines are page numbers, running headers
    max_title_lines: int = 8  # Title continuation closes after this many lines

    # Heading shapes
    chapter_heading_max_length: int = 200
    section_heading_min_length: int = 10
    section_heading_max_length: int = 150
    fallback_chapter_title: str = "Main Content"

    # Input guard (None = unbounded)
    max_input_chars: int | None = None

    def __post_init__(self):
        """Validate configuration."""
        if self.words_per_page < 1:
            raise ConfigurationError(f"words_per_page must be >= 1, got {self.words_per_page}")
        if self.min_bibliography_entry_length < 0:
            raise ConfigurationError(
                f"min_bibliography_entry_length must be >= 0, "
                f"got {self.min_bibliography_entry_length}"
            )
        if self.max_title_lines < 1:
            raise ConfigurationError(f"max_title_lines must be >= 1, got {self.max_title_lines}")
        if self.section_heading_min_length > self.section_heading_max_length:
            raise ConfigurationError(
                f"section_heading_min_length ({self.section_heading_min_length}) must not exceed "
                f"section_heading_max_length ({self.section_heading_max_length})"
            )
        if self.chapter_heading_max_length < 1:
            raise ConfigurationError(
                f"chapter_heading_max_length must be >= 1, got {self.chapter_heading_max_length}"
            )
        if not self.fallback_chapter_title.strip():
            raise ConfigurationError("fallback_chapter_title must not be empty")
        if self.max_input_chars is not None and self.max_input_chars < 1:
            raise ConfigurationError(f"max_input_chars must be >= 1, got {self.max_input_chars}")
