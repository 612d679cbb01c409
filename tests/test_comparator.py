# tests/test_comparator.py
"""Tests for the AMP/regular comparator."""

import json

import pytest

from seo_analyzer.comparator import compare_amp_and_regular, compare_facts
from seo_analyzer.exceptions import AnalysisFailed, FetchError
from seo_analyzer.fetcher import HttpFetcher
from seo_analyzer.models import PerformanceFacts, SchemaEntry, SchemaFacts

from conftest import raise_connect_error
from conftest import make_facts


def _side(load_time_ms: int, size: int, schema: bool):
    return make_facts(
        performance=PerformanceFacts(load_time_ms=load_time_ms, page_size_bytes=size),
        schema=SchemaFacts(found=schema, types=[SchemaEntry(type="Article", format="JSON-LD")] if schema else []),
    )


class TestCompareFacts:
    """Test suite for compare_facts."""

    def test_amp_faster_smaller_with_schema(self):
        diffs = compare_facts(_side(400, 10240, True), _side(1200, 51200, False))

        assert [(d.category, d.amp_value, d.regular_value, d.impact) for d in diffs] == [
            ("Load Time", "400ms", "1200ms", "positive"),
            ("Page Size", "10KB", "50KB", "positive"),
            ("Schema Markup", "Present", "Missing", "positive"),
        ]

    def test_amp_slower_and_larger(self):
        diffs = compare_facts(_side(900, 4096, False), _side(300, 2048, True))

        assert [d.impact for d in diffs] == ["negative", "negative", "negative"]

    def test_ties(self):
        diffs = compare_facts(_side(500, 1024, True), _side(500, 1024, True))

        # Equal load time and size are not an improvement
        assert [d.impact for d in diffs] == ["negative", "negative", "neutral"]

    def test_kilobytes_round_half_up(self):
        diffs = compare_facts(_side(1, 1536, False), _side(2, 1535, False))

        assert diffs[1].amp_value == "2KB"
        assert diffs[1].regular_value == "1KB"


class TestCompareAmpAndRegular:
    """Test suite for compare_amp_and_regular."""

    @pytest.mark.asyncio
    async def test_scores_both_sides(self, site, config):
        schema = json.dumps({"@type": "Article"})
        site.add_page(
            "https://example.com/amp/story",
            f'<html amp lang="en"><head><title>Story</title>'
            f'<script type="application/ld+json">{schema}</script></head></html>',
        )
        site.add_page("https://example.com/story", "<html><head><title>Story</title></head></html>")

        async with HttpFetcher(config, transport=site.transport) as fetcher:
            comparison = await compare_amp_and_regular(
                fetcher, "https://example.com/amp/story", "https://example.com/story"
            )

        assert comparison.amp_score > comparison.regular_score
        assert comparison.regular_issues == comparison.amp_issues + 1
        schema_diff = [d for d in comparison.differences if d.category == "Schema Markup"][0]
        assert schema_diff.impact == "positive"
        # Neither side is checked for robots.txt or link liveness
        assert len(site.requested()) == 2

    @pytest.mark.asyncio
    async def test_fetch_failure_propagates(self, site, config):
        site.add_page("https://example.com/story", "<html></html>")
        site.add_handler("https://example.com/amp/story", raise_connect_error)

        async with HttpFetcher(config, transport=site.transport) as fetcher:
            with pytest.raises(FetchError):
                await compare_amp_and_regular(
                    fetcher, "https://example.com/amp/story", "https://example.com/story"
                )

    @pytest.mark.asyncio
    async def test_error_status_aborts_comparison(self, site, config):
        site.add_page("https://example.com/story", "<html><title>Story</title></html>")
        site.add("https://example.com/amp/story", "<html amp><title>Gone</title></html>", status=404)

        async with HttpFetcher(config, transport=site.transport) as fetcher:
            with pytest.raises(AnalysisFailed, match="HTTP 404"):
                await compare_amp_and_regular(
                    fetcher, "https://example.com/amp/story", "https://example.com/story"
                )
