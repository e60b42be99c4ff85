#!/usr/bin/env python3
"""
Basic thesisdoc Usage Example

This example demonstrates the core workflow:
1. Extract a thesis from HTML or plain text
2. Inspect the title page, jury and front matter
3. Walk the chapter/section tree
4. Handle warnings, failures and strict mode
5. Export to a dictionary or plain text
"""

import json
from pathlib import Path

import thesisdoc
from thesisdoc import ExtractionConfig, Language


def main():
    # ─────────────────────────────────────────────────────────────────────────
    # 1. Basic Extraction
    # ─────────────────────────────────────────────────────────────────────────

    result = thesisdoc.extract_file("path/to/thesis.html")
    if not result.ok:
        print(f"Extraction failed: {result.reason}")
        return

    doc = result.document
    print(f"Extracted: {doc.title}")
    print(f"  Author: {doc.author}")
    print(f"  University: {doc.university}")
    print(f"  ~{doc.metadata.page_estimate} pages ({doc.metadata.word_count:,} words)")

    # ─────────────────────────────────────────────────────────────────────────
    # 2. Title Page and Front Matter
    # ─────────────────────────────────────────────────────────────────────────

    for member in doc.jury:
        print(f"  {member.role}: {member.name} ({member.affiliation})")

    french = doc.abstracts.get(Language.FRENCH)
    if french:
        print(f"  Résumé: {french[:100]}...")

    # ─────────────────────────────────────────────────────────────────────────
    # 3. Chapters and Sections
    # ─────────────────────────────────────────────────────────────────────────

    for chapter in doc.chapters:
        print(f"{chapter.title}")
        for section in chapter.sections:
            indent = "  " * (section.level or 1)
            print(f"{indent}{section.title}")

    # ─────────────────────────────────────────────────────────────────────────
    # 4. Warnings and Strict Mode
    # ─────────────────────────────────────────────────────────────────────────

    # Missing fields never abort extraction; they are reported as warnings
    for warning in result.warnings:
        print(f"  warning: {warning}")

    # In strict mode any warning is a failure carrying the partial document
    strict = thesisdoc.extract_file("path/to/thesis.html", ExtractionConfig(strict=True))
    if not strict.ok and strict.partial is not None:
        print(f"Strict failure, {len(strict.partial.chapters)} chapters recovered")

    # ─────────────────────────────────────────────────────────────────────────
    # 5. Export
    # ─────────────────────────────────────────────────────────────────────────

    Path("output").mkdir(exist_ok=True)
    Path("output/thesis.json").write_text(
        json.dumps(doc.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8"
    )
    Path("output/thesis.txt").write_text(doc.to_plain_text(), encoding="utf-8")


def batch_extraction_example():
    """Extract every thesis in a directory, continuing on errors."""
    sources = sorted(Path("theses/").glob("*.htm*"))

    for path, result in thesisdoc.extract_batch(sources):
        if isinstance(result, Exception):
            print(f"{path.name}: ERROR {result}")
        elif result.ok:
            print(f"{path.name}: {len(result.document.chapters)} chapters")
        else:
            print(f"{path.name}: FAILED {result.reason}")


if __name__ == "__main__":
    # Note: These examples use placeholder paths.
    # Replace with actual thesis paths to run.
    print("thesisdoc Usage Examples")
    print("=" * 50)
    print("\nSee the code for detailed examples of:")
    print("  - Basic extraction")
    print("  - Jury and abstracts")
    print("  - Chapter tree")
    print("  - Strict mode")
