"""Read-only query surface over parsed HTML.

Extractors only ever see a Document, never the BeautifulSoup tree itself,
so every lookup they need is spelled out here.
"""

from typing import Dict, List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag


class Document:
    """Parsed page markup.

    Parsing is best effort: malformed or truncated markup yields whatever
    well-formed fragments exist, never an exception.
    """

    def __init__(self, html: str):
        self._soup = BeautifulSoup(html or "", "html.parser")
        self._root = self._soup.find("html")

    def first(self, tag, attrs: Optional[Dict] = None) -> Optional[Tag]:
        """First element matching tag name(s) and attribute filters."""
        return self._soup.find(tag, attrs=attrs or {})

    def all(self, tag=None, attrs: Optional[Dict] = None) -> List[Tag]:
        """All elements matching tag name(s) and attribute filters, in document order."""
        return self._soup.find_all(tag, attrs=attrs or {})

    def has_root_attr(self, name: str) -> bool:
        return self._root is not None and self._root.has_attr(name)

    def root_attr(self, name: str) -> Optional[str]:
        if self._root is None:
            return None
        return attr_text(self._root, name)

    def meta_content(self, name: Optional[str] = None, property: Optional[str] = None) -> Optional[str]:
        """Trimmed content of the first matching meta tag, None when absent or empty."""
        attrs = {"name": name} if name else {"property": property}
        meta = self.first("meta", attrs)
        if meta is None:
            return None
        content = (attr_text(meta, "content") or "").strip()
        return content or None

    def link_href(self, rel: str) -> Optional[str]:
        """href of the first <link> whose rel includes the given token."""
        link = self.first("link", {"rel": rel})
        if link is None:
            return None
        return attr_text(link, "href") or None

    def title_text(self) -> Optional[str]:
        title = self.first("title")
        if title is None:
            return None
        return title.get_text().strip() or None

    def json_ld_blocks(self) -> List[str]:
        """Raw text of every application/ld+json script block."""
        return [
            script.string or ""
            for script in self.all("script", {"type": "application/ld+json"})
        ]


def attr_text(element: Tag, name: str) -> Optional[str]:
    """Attribute value as a string; multi-valued attributes are space-joined."""
    value = element.get(name)
    if value is None:
        return None
    if isinstance(value, list):
        return " ".join(value)
    return value


def parse(html: str) -> Document:
    return Document(html)
