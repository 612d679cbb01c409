# tests/test_links.py
"""Tests for link collection, sampling and liveness checking."""

import pytest

from seo_analyzer.config import Config
from seo_analyzer.document import parse
from seo_analyzer.fetcher import HttpFetcher
from seo_analyzer.links import LinkRef, analyze_links, collect_links, select_links_to_check

from conftest import raise_timeout

BASE_URL = "https://example.com/blog"


def _anchors(hrefs) -> str:
    return "".join(f'<a href="{href}">link {i}</a>' for i, href in enumerate(hrefs))


class TestCollectLinks:
    """Test suite for collect_links."""

    def test_classification(self):
        html = '<a href="/about">About</a><a href="https://other.com">Other</a><a href="#top">Top</a>'
        links = collect_links(parse(html), BASE_URL)

        assert links == [
            LinkRef(url="https://example.com/about", text="About", is_external=False, nofollow=False),
            LinkRef(url="https://other.com", text="Other", is_external=True, nofollow=False),
        ]

    def test_skipped_schemes_and_unresolvable(self):
        html = _anchors([
            "mailto:me@example.com",
            "tel:+15551234",
            "javascript:void(0)",
            "",
            "page2",
        ])
        links = collect_links(parse(html), BASE_URL)

        assert [link.url for link in links] == ["https://example.com/page2"]

    def test_nofollow(self):
        html = '<a href="https://other.com/x" rel="nofollow noopener">x</a>'
        links = collect_links(parse(html), BASE_URL)

        assert links[0].nofollow is True
        assert links[0].is_external is True

    def test_subdomain_is_external(self):
        links = collect_links(parse(_anchors(["https://blog.example.com/"])), BASE_URL)

        assert links[0].is_external is True


class TestSelectLinksToCheck:
    """Test suite for select_links_to_check."""

    def _links(self, internal: int, external: int):
        links = [
            LinkRef(url=f"https://example.com/p{i}", text="", is_external=False, nofollow=False)
            for i in range(internal)
        ]
        links += [
            LinkRef(url=f"https://ext{i}.com/", text="", is_external=True, nofollow=False)
            for i in range(external)
        ]
        return links

    def test_internal_links_come_first(self):
        selected = select_links_to_check(self._links(30, 15), max_checks=20, max_external=10)

        assert len(selected) == 20
        assert all(not link.is_external for link in selected)

    def test_external_cap(self):
        selected = select_links_to_check(self._links(3, 15), max_checks=20, max_external=10)

        assert len(selected) == 13
        assert sum(1 for link in selected if link.is_external) == 10

    def test_fewer_links_than_cap(self):
        assert len(select_links_to_check(self._links(2, 1), max_checks=20, max_external=10)) == 3


class TestAnalyzeLinks:
    """Test suite for analyze_links."""

    @pytest.mark.asyncio
    async def test_broken_link_accounting(self, site, config):
        site.add("https://example.com/ok", "fine")
        site.add_handler("https://example.com/slow", raise_timeout)
        html = _anchors(["/ok", "/missing", "/slow"])

        async with HttpFetcher(config, transport=site.transport) as fetcher:
            facts = await analyze_links(parse(html), BASE_URL, fetcher)

        assert facts.total == 3
        assert facts.internal == 3
        assert facts.external == 0
        assert facts.checked == 3

        broken = {link.url: link for link in facts.broken}
        assert set(broken) == {"https://example.com/missing", "https://example.com/slow"}
        assert broken["https://example.com/missing"].status == 404
        assert broken["https://example.com/missing"].error is None
        assert broken["https://example.com/slow"].status == 0
        assert broken["https://example.com/slow"].error is not None

    @pytest.mark.asyncio
    async def test_check_cap(self, site, config):
        internal = [f"/p{i}" for i in range(30)]
        external = [f"https://ext{i}.com/" for i in range(15)]
        for href in internal:
            site.add(f"https://example.com{href}")
        for href in external:
            site.add(href)

        async with HttpFetcher(config, transport=site.transport) as fetcher:
            facts = await analyze_links(parse(_anchors(internal + external)), BASE_URL, fetcher)

        probed = site.requested("HEAD")
        assert len(probed) == 20
        assert sorted(probed) == sorted(f"https://example.com{href}" for href in internal[:20])
        assert facts.checked == 20
        assert facts.total == 45
        assert facts.internal == 30
        assert facts.external == 15
        assert facts.broken == []
        assert len(facts.external_links) == 15
        assert all(not link.verified and link.status == 200 for link in facts.external_links)

    @pytest.mark.asyncio
    async def test_checked_external_links_carry_real_status(self, site, config):
        site.add("https://gone.com/", status=410)
        html = _anchors(["https://gone.com/", "https://fine.com/"])
        site.add("https://fine.com/")

        async with HttpFetcher(config, transport=site.transport) as fetcher:
            facts = await analyze_links(parse(html), BASE_URL, fetcher)

        statuses = {link.url: (link.status, link.verified) for link in facts.external_links}
        assert statuses == {"https://gone.com/": (410, True), "https://fine.com/": (200, True)}
        assert [link.url for link in facts.broken] == ["https://gone.com/"]

    @pytest.mark.asyncio
    async def test_configurable_limits(self, site):
        config = Config(max_link_checks=2, max_external_link_checks=1)
        html = _anchors(["https://a.com/", "https://b.com/", "/one"])

        async with HttpFetcher(config, transport=site.transport) as fetcher:
            facts = await analyze_links(parse(html), BASE_URL, fetcher)

        assert sorted(site.requested("HEAD")) == ["https://a.com/", "https://example.com/one"]
        assert facts.checked == 2
