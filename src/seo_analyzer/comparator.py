"""Side-by-side comparison of the AMP and regular versions of a page."""

import asyncio
import logging
from typing import List

from seo_analyzer.document import parse
from seo_analyzer.exceptions import AnalysisFailed
from seo_analyzer.extraction import extract_page_facts
from seo_analyzer.models import AmpComparison, AmpDifference, PageFacts
from seo_analyzer.scorer import score

logger = logging.getLogger(__name__)

POSITIVE = "positive"
NEGATIVE = "negative"
NEUTRAL = "neutral"


def _kilobytes(size_bytes: int) -> int:
    # Half rounds up
    return int(size_bytes / 1024 + 0.5)


def compare_facts(amp: PageFacts, regular: PageFacts) -> List[AmpDifference]:
    """Per-category differences; impact is judged from the AMP side."""
    amp_perf = amp.performance
    regular_perf = regular.performance

    return [
        AmpDifference(
            category="Load Time",
            amp_value=f"{amp_perf.load_time_ms}ms",
            regular_value=f"{regular_perf.load_time_ms}ms",
            impact=POSITIVE if amp_perf.load_time_ms < regular_perf.load_time_ms else NEGATIVE,
        ),
        AmpDifference(
            category="Page Size",
            amp_value=f"{_kilobytes(amp_perf.page_size_bytes)}KB",
            regular_value=f"{_kilobytes(regular_perf.page_size_bytes)}KB",
            impact=POSITIVE if amp_perf.page_size_bytes < regular_perf.page_size_bytes else NEGATIVE,
        ),
        AmpDifference(
            category="Schema Markup",
            amp_value="Present" if amp.schema.found else "Missing",
            regular_value="Present" if regular.schema.found else "Missing",
            impact=(
                NEUTRAL if amp.schema.found == regular.schema.found
                else POSITIVE if amp.schema.found
                else NEGATIVE
            ),
        ),
    ]


async def _fetch_facts(fetcher, url: str) -> PageFacts:
    outcome = await fetcher.fetch(url)
    status = outcome.performance.status_code
    if status >= 400:
        raise AnalysisFailed(f"HTTP {status}", url=url)
    # Link liveness and robots.txt are left empty on both sides
    return extract_page_facts(parse(outcome.html), url, outcome.performance)


async def compare_amp_and_regular(fetcher, amp_url: str, regular_url: str) -> AmpComparison:
    """Re-fetch both versions and compare them.

    Args:
        fetcher: HttpFetcher inside its context
        amp_url: URL of the AMP version
        regular_url: URL of the regular version

    Returns:
        AmpComparison with paired scores and differences

    Raises:
        FetchError: If either version cannot be fetched
        AnalysisFailed: If either version answers with an HTTP error status
    """
    logger.info(f"Comparing AMP {amp_url} with regular {regular_url}")
    results = await asyncio.gather(
        _fetch_facts(fetcher, amp_url),
        _fetch_facts(fetcher, regular_url),
        return_exceptions=True,
    )
    for result in results:
        if isinstance(result, BaseException):
            raise result
    amp_facts, regular_facts = results

    amp_scores = score(amp_facts)
    regular_scores = score(regular_facts)

    return AmpComparison(
        amp_score=amp_scores.score,
        regular_score=regular_scores.score,
        amp_issues=amp_scores.issues,
        regular_issues=regular_scores.issues,
        differences=compare_facts(amp_facts, regular_facts),
    )
