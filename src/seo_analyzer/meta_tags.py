"""Meta tag extraction: title, description, keywords, canonical, robots, lang."""

import logging
from typing import Optional
from urllib.parse import urljoin

from seo_analyzer.document import Document
from seo_analyzer.models import MetaTagsFacts
from seo_analyzer.urls import normalize_url

logger = logging.getLogger(__name__)


def extract_meta_tags(doc: Document, url: str) -> MetaTagsFacts:
    """Read the head meta tags of a page.

    Args:
        doc: Parsed page
        url: The URL the page was requested as; canonical links are
            resolved against it

    Returns:
        MetaTagsFacts; lengths are 0 whenever the text is absent
    """
    title = doc.title_text()
    description = doc.meta_content(name="description")
    keywords = doc.meta_content(name="keywords")
    canonical = doc.link_href("canonical")
    robots = doc.meta_content(name="robots")
    html_lang = (doc.root_attr("lang") or "").strip() or None

    return MetaTagsFacts(
        title=title,
        title_length=len(title) if title else 0,
        description=description,
        description_length=len(description) if description else 0,
        keywords=keywords,
        keywords_length=len(keywords) if keywords else 0,
        canonical=canonical,
        canonical_matches=canonical_matches(canonical, url),
        robots=robots,
        robots_valid=bool(robots) and ("index" in robots or "noindex" in robots),
        html_lang=html_lang,
        max_image_preview=bool(robots) and "max-image-preview:large" in robots,
    )


def canonical_matches(canonical: Optional[str], url: str) -> bool:
    """True when the canonical href, resolved against url, is the same absolute URL."""
    if not canonical:
        return False
    try:
        return normalize_url(urljoin(url, canonical.strip())) == normalize_url(url)
    except ValueError as e:
        logger.debug(f"Malformed canonical href {canonical!r}: {e}")
        return False
