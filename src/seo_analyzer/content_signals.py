"""Publication dates and authorship signals."""

from seo_analyzer.document import Document, attr_text
from seo_analyzer.models import AuthorFacts, DatesFacts

PUBLISHED_META_SOURCE = "article:published_time meta tag"
MODIFIED_META_SOURCE = "article:modified_time meta tag"
TIME_TAG_SOURCE = "time tag"
REL_AUTHOR_SOURCE = 'rel="author" link'
META_AUTHOR_SOURCE = "meta author tag"


def extract_dates(doc: Document) -> DatesFacts:
    """Published/modified dates, recording where each value came from.

    article:* meta properties win; the first <time datetime> element is the
    fallback for the published date only.
    """
    published = doc.meta_content(property="article:published_time")
    published_source = PUBLISHED_META_SOURCE if published else None

    modified = doc.meta_content(property="article:modified_time")
    modified_source = MODIFIED_META_SOURCE if modified else None

    if not published:
        time_tag = doc.first("time", {"datetime": True})
        if time_tag is not None:
            published = (attr_text(time_tag, "datetime") or "").strip() or None
            published_source = TIME_TAG_SOURCE if published else None

    return DatesFacts(
        published=published,
        published_source=published_source,
        modified=modified,
        modified_source=modified_source,
    )


def extract_author(doc: Document) -> AuthorFacts:
    """Author name and profile link.

    A rel="author" <link> or <a> wins (name from its text or title
    attribute); <meta name="author"> fills in the name otherwise.
    """
    name = None
    link = None
    source = None

    author_element = doc.first(["link", "a"], {"rel": "author"})
    if author_element is not None:
        name = (
            author_element.get_text().strip()
            or (attr_text(author_element, "title") or "").strip()
            or None
        )
        link = attr_text(author_element, "href") or None
        source = REL_AUTHOR_SOURCE

    if not name:
        meta_author = doc.meta_content(name="author")
        if meta_author:
            name = meta_author
            source = META_AUTHOR_SOURCE

    return AuthorFacts(name=name, link=link, source=source)
