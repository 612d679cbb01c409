# tests/conftest.py
"""Shared fixtures: a fake web served through httpx.MockTransport."""

from dataclasses import replace
from typing import Callable, Dict, List, Optional, Union

import httpx
import pytest

from seo_analyzer.config import Config
from seo_analyzer.models import (
    AccessibilityFacts,
    AmpComparison,
    AmpDifference,
    AnalysisResult,
    AuthorFacts,
    BreadcrumbFacts,
    BrokenLink,
    DatesFacts,
    ExternalLink,
    LinkGraphFacts,
    MetaTagsFacts,
    OpenGraphFacts,
    PageFacts,
    PerformanceFacts,
    RobotsTxtFacts,
    SchemaEntry,
    SchemaFacts,
    TwitterCardFacts,
)
from seo_analyzer.scorer import score

pytest_plugins = ('pytest_asyncio',)


def _route_key(url: Union[str, httpx.URL]) -> str:
    url = httpx.URL(url) if isinstance(url, str) else url
    return f"{url.scheme}://{url.host}{url.raw_path.decode('ascii')}"


class FakeSite:
    """Routes requests to canned responses; unknown URLs answer 404.

    A route is either a Response-building tuple (status, body, headers)
    or a callable taking the request, which may raise httpx exceptions.
    """

    def __init__(self):
        self.routes: Dict[str, Union[tuple, Callable]] = {}
        self.requests: List[httpx.Request] = []

    def add(
        self,
        url: str,
        body: str = "",
        status: int = 200,
        headers: Optional[dict] = None,
    ) -> None:
        self.routes[_route_key(url)] = (status, body, headers or {})

    def add_page(self, url: str, html: str) -> None:
        self.add(url, html, headers={"content-type": "text/html; charset=utf-8"})

    def add_handler(self, url: str, handler: Callable) -> None:
        self.routes[_route_key(url)] = handler

    def add_redirect(self, url: str, location: str, status: int = 301) -> None:
        self.add(url, status=status, headers={"location": location})

    def requested(self, method: Optional[str] = None) -> List[str]:
        return [
            str(r.url) for r in self.requests
            if method is None or r.method == method
        ]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(_route_key(request.url))
        if route is None:
            return httpx.Response(404, text="not found")
        if callable(route):
            return route(request)
        status, body, headers = route
        if request.method == "HEAD":
            return httpx.Response(status, headers=headers)
        return httpx.Response(status, text=body, headers=headers)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


def raise_timeout(request: httpx.Request):
    raise httpx.ReadTimeout("timed out", request=request)


def raise_connect_error(request: httpx.Request):
    raise httpx.ConnectError("connection refused", request=request)


@pytest.fixture
def site():
    return FakeSite()


@pytest.fixture
def config():
    return Config()


def make_facts(**overrides) -> PageFacts:
    """An all-absent fact bundle with selected sections replaced."""
    facts = PageFacts(
        meta_tags=MetaTagsFacts(),
        dates=DatesFacts(),
        author=AuthorFacts(),
        breadcrumbs=BreadcrumbFacts(),
        schema=SchemaFacts(),
        open_graph=OpenGraphFacts(),
        twitter_card=TwitterCardFacts(),
        accessibility=AccessibilityFacts(),
        robots_txt=RobotsTxtFacts(),
        links=LinkGraphFacts(),
        performance=PerformanceFacts(),
    )
    return replace(facts, **overrides)


@pytest.fixture
def sample_result() -> AnalysisResult:
    """A scored result with nested sections populated."""
    facts = make_facts(
        meta_tags=MetaTagsFacts(title="Story", title_length=5, html_lang="en"),
        schema=SchemaFacts(
            found=True,
            types=[SchemaEntry(type="Article", format="JSON-LD", data={"@type": "Article", "headline": "Story"})],
        ),
        links=LinkGraphFacts(
            total=2,
            internal=1,
            external=1,
            broken=[BrokenLink(url="https://example.com/missing", text="Missing", status=404)],
            external_links=[ExternalLink(url="https://other.com/", text="Other")],
            checked=1,
        ),
        performance=PerformanceFacts(load_time_ms=420, page_size_bytes=2048, is_ssl=True),
    )
    result = AnalysisResult.from_facts("https://example.com/story", facts, timestamp="2024-03-01T12:00:00+00:00")
    result.apply_scores(score(facts))
    result.amp_url = "https://example.com/amp/story"
    result.regular_url = "https://example.com/story"
    result.amp_comparison = AmpComparison(
        amp_score=60,
        regular_score=40,
        amp_issues=1,
        regular_issues=3,
        differences=[AmpDifference(category="Load Time", amp_value="200ms", regular_value="420ms", impact="positive")],
    )
    return result
