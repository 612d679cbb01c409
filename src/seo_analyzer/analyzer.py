"""Analysis orchestrator: fetch, extract, resolve AMP, score, compare.

    Idle -> Fetching -> Extracting -> ResolvingAmp -> Scoring -> [ComparingAmp] -> Done
                |
                +-> FetchFailed

Only a transport failure of the primary fetch aborts a run. Every other
network step (robots.txt, link probes, AMP probes, AMP comparison) degrades
to an absent/empty section instead.
"""

import asyncio
import logging
from dataclasses import replace
from enum import Enum
from typing import Awaitable, Callable, Optional, TypeVar

import httpx

from seo_analyzer.amp import resolve_amp
from seo_analyzer.comparator import compare_amp_and_regular
from seo_analyzer.config import Config
from seo_analyzer.document import parse
from seo_analyzer.exceptions import AnalysisFailed, FetchError
from seo_analyzer.extraction import extract_page_facts
from seo_analyzer.fetcher import HttpFetcher
from seo_analyzer.links import analyze_links
from seo_analyzer.models import (
    AmpComparison,
    AmpResolution,
    AnalysisResult,
    LinkGraphFacts,
    RobotsTxtFacts,
)
from seo_analyzer.robots_txt import fetch_robots_txt
from seo_analyzer.scorer import score
from seo_analyzer.urls import ensure_absolute_http_url, normalize_url

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AnalysisState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    EXTRACTING = "extracting"
    RESOLVING_AMP = "resolving_amp"
    SCORING = "scoring"
    COMPARING_AMP = "comparing_amp"
    DONE = "done"
    FETCH_FAILED = "fetch_failed"


StateCallback = Callable[[str, AnalysisState], None]


async def _best_effort(step: Awaitable[T], fallback: T, what: str, url: str) -> T:
    try:
        return await step
    except Exception as e:
        logger.warning(f"{what} failed for {url}, continuing without it: {e}")
        return fallback


def _is_distinct_pair(amp_url: Optional[str], regular_url: Optional[str]) -> bool:
    if not amp_url or not regular_url:
        return False
    try:
        return normalize_url(amp_url) != normalize_url(regular_url)
    except ValueError:
        return amp_url != regular_url


class SEOAnalyzer:
    """Analyzes a single page for on-page SEO signals."""

    def __init__(
        self,
        config: Optional[Config] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        on_state_change: Optional[StateCallback] = None,
    ):
        """Initialize the analyzer.

        Args:
            config: Analyzer configuration; defaults are used when omitted
            transport: Optional httpx transport shared by every request of a run
            on_state_change: Called with (url, state) at every state transition
        """
        self.config = config or Config()
        self.transport = transport
        self.on_state_change = on_state_change

    def _enter(self, url: str, state: AnalysisState) -> None:
        logger.debug(f"[{url}] -> {state.value}")
        if self.on_state_change is not None:
            self.on_state_change(url, state)

    async def analyze(self, url: str) -> AnalysisResult:
        """Analyze one URL.

        Runs share no state, so concurrent calls are safe. Cancelling the
        calling task cancels every outstanding request of the run.

        Args:
            url: Page URL; a bare host is assumed to be https

        Returns:
            AnalysisResult

        Raises:
            InvalidUrlError: If url is not an http(s) URL
            FetchError: If the page cannot be retrieved at the transport level
            AnalysisFailed: If the configured analysis_timeout expires
        """
        normalized_url = ensure_absolute_http_url(url)

        budget = self.config.analysis_timeout
        if not budget:
            return await self._run(normalized_url)

        try:
            return await asyncio.wait_for(self._run(normalized_url), timeout=budget)
        except asyncio.TimeoutError:
            raise AnalysisFailed(f"Analysis exceeded {budget}s time budget", url=normalized_url)

    async def _run(self, url: str) -> AnalysisResult:
        self._enter(url, AnalysisState.IDLE)
        logger.info(f"Analyzing {url}")

        async with HttpFetcher(self.config, transport=self.transport) as fetcher:
            self._enter(url, AnalysisState.FETCHING)
            try:
                outcome = await fetcher.fetch(url)
            except FetchError as e:
                self._enter(url, AnalysisState.FETCH_FAILED)
                logger.error(f"Failed to fetch {url}: {e.reason}")
                raise

            self._enter(url, AnalysisState.EXTRACTING)
            doc = parse(outcome.html)
            facts = extract_page_facts(doc, url, outcome.performance)

            # AMP resolution overlaps with link and robots.txt checks
            self._enter(url, AnalysisState.RESOLVING_AMP)
            links, robots_txt, amp = await asyncio.gather(
                _best_effort(analyze_links(doc, url, fetcher), LinkGraphFacts(), "Link analysis", url),
                _best_effort(fetch_robots_txt(fetcher, url), RobotsTxtFacts(), "robots.txt fetch", url),
                _best_effort(
                    resolve_amp(doc, url, fetcher),
                    AmpResolution(is_amp=False, amp_url=None, regular_url=url),
                    "AMP resolution",
                    url,
                ),
            )
            facts = replace(facts, links=links, robots_txt=robots_txt)

            self._enter(url, AnalysisState.SCORING)
            result = AnalysisResult.from_facts(url, facts)
            result.apply_scores(score(facts))
            result.is_amp = amp.is_amp
            result.amp_url = amp.amp_url
            result.regular_url = amp.regular_url

            if _is_distinct_pair(amp.amp_url, amp.regular_url):
                self._enter(url, AnalysisState.COMPARING_AMP)
                result.amp_comparison = await self._compare(fetcher, amp.amp_url, amp.regular_url)

        self._enter(url, AnalysisState.DONE)
        logger.info(
            f"Analysis of {url} complete: score {result.overall_score}/100 "
            f"({result.issues} issues, {result.warnings} warnings, {result.passed} passed)"
        )
        return result

    async def _compare(self, fetcher, amp_url: str, regular_url: str) -> Optional[AmpComparison]:
        try:
            return await compare_amp_and_regular(fetcher, amp_url, regular_url)
        except Exception as e:
            logger.warning(f"AMP comparison failed, continuing without it: {e}")
            return None


async def analyze(url: str, config: Optional[Config] = None) -> AnalysisResult:
    """Analyze one URL with a fresh SEOAnalyzer."""
    return await SEOAnalyzer(config=config).analyze(url)
