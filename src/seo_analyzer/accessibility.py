# src/seo_analyzer/accessibility.py
"""Markup-level accessibility heuristics (alt coverage, heading presence)."""

from seo_analyzer.constants import ALT_COVERAGE_THRESHOLD
from seo_analyzer.document import Document
from seo_analyzer.models import AccessibilityFacts

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]


def extract_accessibility(doc: Document) -> AccessibilityFacts:
    """Alt-attribute coverage and heading presence.

    An alt attribute counts even when empty (decorative images). Contrast is
    not analyzed, so contrast_ratio is always None.
    """
    images = doc.all("img")
    images_with_alt = sum(1 for img in images if img.has_attr("alt"))

    has_alt_tags = not images or images_with_alt / len(images) > ALT_COVERAGE_THRESHOLD

    return AccessibilityFacts(
        has_alt_tags=has_alt_tags,
        has_headings=doc.first(HEADING_TAGS) is not None,
        contrast_ratio=None,
        image_count=len(images),
        images_with_alt=images_with_alt,
    )
