"""AMP detection and AMP/regular URL pairing.

A page is AMP when its <html> element carries an ``amp`` or ``⚡``
attribute. For an AMP page the regular counterpart is its canonical link.
For a regular page the AMP counterpart is its amphtml link, or else the
first of a few conventional URL patterns that answers HEAD with 200.
"""

import logging
from typing import List, Optional
from urllib.parse import urljoin, urlsplit

from seo_analyzer.document import Document
from seo_analyzer.models import AmpResolution
from seo_analyzer.urls import origin_of

logger = logging.getLogger(__name__)

AMP_ROOT_ATTRIBUTES = ("amp", "⚡")


def is_amp_document(doc: Document) -> bool:
    return any(doc.has_root_attr(name) for name in AMP_ROOT_ATTRIBUTES)


def _resolved_link(doc: Document, rel: str, url: str) -> Optional[str]:
    href = doc.link_href(rel)
    if not href:
        return None
    try:
        return urljoin(url, href.strip())
    except ValueError as e:
        logger.debug(f"Ignoring malformed {rel} href {href!r}: {e}")
        return None


def amp_candidate_urls(url: str) -> List[str]:
    """Conventional AMP locations for a regular URL, in probing order."""
    parts = urlsplit(url)
    origin = origin_of(url)
    path = parts.path or "/"
    query = f"?{parts.query}" if parts.query else ""
    return [
        f"{origin}/amp{path}",
        f"{origin}{path}/amp/",
        f"{origin}{path}?amp=1",
        f"{origin}/amp{path}{query}",
    ]


async def find_amp_by_pattern(fetcher, url: str) -> Optional[str]:
    """Probe candidate patterns one by one; the first 200 wins.

    Probe failures count as "this candidate does not exist".
    """
    for candidate in amp_candidate_urls(url):
        result = await fetcher.probe(candidate, timeout=fetcher.config.amp_probe_timeout)
        if result.status == 200:
            logger.info(f"Found AMP version by URL pattern: {candidate}")
            return candidate
        logger.debug(f"AMP candidate {candidate} rejected (status {result.status})")
    return None


async def resolve_amp(doc: Document, url: str, fetcher) -> AmpResolution:
    """Classify the page and find its counterpart.

    Args:
        doc: Parsed page
        url: URL the page was fetched as
        fetcher: HttpFetcher inside its context, used for pattern probes

    Returns:
        AmpResolution; a counterpart that could not be found is None
    """
    if is_amp_document(doc):
        # An AMP page without a canonical link stays unpaired
        return AmpResolution(
            is_amp=True,
            amp_url=url,
            regular_url=_resolved_link(doc, "canonical", url),
        )

    amp_url = _resolved_link(doc, "amphtml", url)
    if amp_url is None:
        amp_url = await find_amp_by_pattern(fetcher, url)

    return AmpResolution(is_amp=False, amp_url=amp_url, regular_url=url)
