"""Link graph analysis with sampled liveness checking.

Every anchor is counted and classified, but only a bounded sample is probed:
all internal links plus the first few external ones, capped at a fixed total.
Links past the cap are never checked and never reported broken.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import List

from seo_analyzer.constants import SKIPPED_HREF_PREFIXES, UNVERIFIED_LINK_STATUS
from seo_analyzer.document import Document, attr_text
from seo_analyzer.models import BrokenLink, ExternalLink, LinkGraphFacts, ProbeResult
from seo_analyzer.urls import hostname_of, resolve_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinkRef:
    """One resolved anchor."""
    url: str
    text: str
    is_external: bool
    nofollow: bool


def collect_links(doc: Document, base_url: str) -> List[LinkRef]:
    """Enumerate and classify anchors.

    Fragment-only, mailto: and tel: hrefs are skipped. Hrefs that do not
    resolve to an http(s) URL are dropped silently.

    Args:
        doc: Parsed page
        base_url: URL the page was fetched as

    Returns:
        Links in document order
    """
    base_host = hostname_of(base_url)
    links: List[LinkRef] = []

    for anchor in doc.all("a", {"href": True}):
        href = (attr_text(anchor, "href") or "").strip()
        if not href or href.startswith(SKIPPED_HREF_PREFIXES):
            continue

        absolute_url = resolve_url(href, base_url)
        if absolute_url is None:
            logger.debug(f"Dropping unresolvable href {href!r}")
            continue

        links.append(LinkRef(
            url=absolute_url,
            text=anchor.get_text().strip(),
            is_external=hostname_of(absolute_url) != base_host,
            nofollow="nofollow" in (attr_text(anchor, "rel") or ""),
        ))

    return links


def select_links_to_check(
    links: List[LinkRef],
    max_checks: int,
    max_external: int,
) -> List[LinkRef]:
    """Liveness sample: every internal link, then the first max_external
    external links, truncated to max_checks overall."""
    internal = [link for link in links if not link.is_external]
    external = [link for link in links if link.is_external]
    return (internal + external[:max_external])[:max_checks]


async def check_links(fetcher, links: List[LinkRef]) -> List[ProbeResult]:
    """Probe links with bounded concurrency; results follow input order."""
    semaphore = asyncio.Semaphore(max(1, fetcher.config.max_concurrent_requests))

    async def check_one(link: LinkRef) -> ProbeResult:
        async with semaphore:
            return await fetcher.probe(link.url, timeout=fetcher.config.link_check_timeout)

    return list(await asyncio.gather(*(check_one(link) for link in links)))


async def analyze_links(doc: Document, base_url: str, fetcher) -> LinkGraphFacts:
    """Count, classify and sample-check the links of a page.

    Args:
        doc: Parsed page
        base_url: URL the page was fetched as
        fetcher: HttpFetcher inside its context

    Returns:
        LinkGraphFacts. external_links lists every external link; only the
        ones in the checked sample carry a verified status, the rest report
        a placeholder 200 with verified=False.
    """
    config = fetcher.config
    links = collect_links(doc, base_url)
    to_check = select_links_to_check(
        links,
        max_checks=config.max_link_checks,
        max_external=config.max_external_link_checks,
    )

    results = await check_links(fetcher, to_check)

    broken: List[BrokenLink] = []
    verified_status = {}
    for link, result in zip(to_check, results):
        verified_status[link.url] = result.status
        if result.is_broken:
            broken.append(BrokenLink(
                url=link.url,
                text=link.text,
                status=result.status,
                error=result.error,
            ))

    internal_count = sum(1 for link in links if not link.is_external)
    external_links = [
        ExternalLink(
            url=link.url,
            text=link.text,
            nofollow=link.nofollow,
            status=verified_status.get(link.url, UNVERIFIED_LINK_STATUS),
            verified=link.url in verified_status,
        )
        for link in links
        if link.is_external
    ]

    if broken:
        logger.info(f"Found {len(broken)} broken links out of {len(to_check)} checked on {base_url}")

    return LinkGraphFacts(
        total=len(links),
        internal=internal_count,
        external=len(links) - internal_count,
        broken=broken,
        external_links=external_links,
        checked=len(to_check),
    )
