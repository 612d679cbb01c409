# src/seo_analyzer/social.py
"""Open Graph and Twitter Card meta tags.

Straight reads: each field is the trimmed content of its tag, or None.
"""

from seo_analyzer.document import Document
from seo_analyzer.models import OpenGraphFacts, TwitterCardFacts


def extract_open_graph(doc: Document) -> OpenGraphFacts:
    return OpenGraphFacts(
        title=doc.meta_content(property="og:title"),
        description=doc.meta_content(property="og:description"),
        image=doc.meta_content(property="og:image"),
        type=doc.meta_content(property="og:type"),
    )


def extract_twitter_card(doc: Document) -> TwitterCardFacts:
    return TwitterCardFacts(
        card=doc.meta_content(name="twitter:card"),
        title=doc.meta_content(name="twitter:title"),
        description=doc.meta_content(name="twitter:description"),
        image=doc.meta_content(name="twitter:image"),
    )
