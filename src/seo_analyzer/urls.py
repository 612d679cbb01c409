"""URL helpers shared by the extractors and the orchestrator."""

import re
from typing import Optional
from urllib.parse import quote, urljoin, urlsplit, urlunsplit

from seo_analyzer.exceptions import InvalidUrlError

DEFAULT_PORTS = {"http": 80, "https": 443}
WEB_SCHEMES = ("http", "https")

# Characters left as-is when percent-encoding; existing escapes are kept
PATH_SAFE = "/%:@!$&'()*+,;=~"
QUERY_SAFE = PATH_SAFE + "?"

# A leading "name:" that is not followed by a port, as in mailto:x or tel:+1
NON_WEB_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.-]*:(?!\d+(?:[/?#]|$))", re.IGNORECASE)


def normalize_url(url: str) -> str:
    """Canonical string form of an absolute URL, used for equality checks.

    Lowercases scheme and host, drops default ports, gives an empty
    http(s) path a trailing slash and percent-encodes non-ASCII characters
    and spaces in the path and query. Raises ValueError on malformed input
    (e.g. bad port or unbalanced IPv6 brackets).
    """
    parts = urlsplit(url.strip())
    scheme = parts.scheme.lower()
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    netloc = host
    if parts.username is not None:
        userinfo = parts.username
        if parts.password is not None:
            userinfo += f":{parts.password}"
        netloc = f"{userinfo}@{netloc}"
    if port is not None and DEFAULT_PORTS.get(scheme) != port:
        netloc += f":{port}"
    path = quote(parts.path, safe=PATH_SAFE)
    if not path and scheme in WEB_SCHEMES:
        path = "/"
    query = quote(parts.query, safe=QUERY_SAFE)
    return urlunsplit((scheme, netloc, path, query, parts.fragment))


def resolve_url(href: str, base: str) -> Optional[str]:
    """Resolve href against base; None when the result is not an http(s) URL with a host."""
    try:
        absolute = urljoin(base, href.strip())
        parts = urlsplit(absolute)
        if parts.scheme.lower() not in WEB_SCHEMES or not parts.hostname:
            return None
        parts.port  # raises ValueError on a malformed port
    except ValueError:
        return None
    return absolute


def hostname_of(url: str) -> str:
    return urlsplit(url).hostname or ""


def origin_of(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}"


def ensure_absolute_http_url(url: str) -> str:
    """Turn user input into an absolute http(s) URL.

    A bare host such as ``example.com/page`` is assumed to be https.

    Raises:
        InvalidUrlError: If the input cannot be made into an http(s) URL with a host
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidUrlError(str(url), "empty URL")
    candidate = url.strip()
    if not candidate.lower().startswith(("http://", "https://")):
        if "://" in candidate or NON_WEB_SCHEME_RE.match(candidate):
            raise InvalidUrlError(url, "only http and https URLs can be analyzed")
        candidate = f"https://{candidate}"
    try:
        parts = urlsplit(candidate)
        parts.port
    except ValueError as e:
        raise InvalidUrlError(url, str(e))
    if not parts.hostname or any(ch.isspace() for ch in candidate):
        raise InvalidUrlError(url, "missing or malformed host")
    if parts.username is not None:
        raise InvalidUrlError(url, "credentials in URLs are not supported")
    return candidate
