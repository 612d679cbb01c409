"""Runs every document extractor for one fetched page."""

from typing import Optional

from seo_analyzer.accessibility import extract_accessibility
from seo_analyzer.content_signals import extract_author, extract_dates
from seo_analyzer.document import Document
from seo_analyzer.meta_tags import extract_meta_tags
from seo_analyzer.models import LinkGraphFacts, PageFacts, PerformanceFacts, RobotsTxtFacts
from seo_analyzer.schema import extract_breadcrumbs, extract_schema
from seo_analyzer.social import extract_open_graph, extract_twitter_card


def extract_page_facts(
    doc: Document,
    url: str,
    performance: PerformanceFacts,
    links: Optional[LinkGraphFacts] = None,
    robots_txt: Optional[RobotsTxtFacts] = None,
) -> PageFacts:
    """Build the fact bundle of a page from its parsed markup.

    The network-backed signals (links, robots.txt) are passed in; when left
    out they are recorded as empty/absent.
    """
    return PageFacts(
        meta_tags=extract_meta_tags(doc, url),
        dates=extract_dates(doc),
        author=extract_author(doc),
        breadcrumbs=extract_breadcrumbs(doc),
        schema=extract_schema(doc),
        open_graph=extract_open_graph(doc),
        twitter_card=extract_twitter_card(doc),
        accessibility=extract_accessibility(doc),
        robots_txt=robots_txt or RobotsTxtFacts(),
        links=links or LinkGraphFacts(),
        performance=performance,
    )
