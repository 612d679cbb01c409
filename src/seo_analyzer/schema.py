# src/seo_analyzer/schema.py
"""Structured data (schema.org) detection: JSON-LD, Microdata and breadcrumbs.

Malformed JSON-LD blocks are skipped; a page with only broken blocks simply
has no structured data.
"""

import json
import logging
from typing import Any, Iterator, List

from seo_analyzer.document import Document, attr_text
from seo_analyzer.models import BreadcrumbFacts, SchemaEntry, SchemaFacts

logger = logging.getLogger(__name__)

JSON_LD_FORMAT = "JSON-LD"
MICRODATA_FORMAT = "Microdata"
BREADCRUMB_LIST = "BreadcrumbList"
BREADCRUMB_SCHEMA_TYPE = "schema.org/BreadcrumbList"
BREADCRUMB_ARIA_TYPE = 'aria-label="breadcrumb"'


def iter_json_ld(doc: Document) -> Iterator[Any]:
    """Parsed payload of each well-formed JSON-LD block, in document order."""
    for raw in doc.json_ld_blocks():
        if not raw.strip():
            continue
        try:
            yield json.loads(raw)
        except (json.JSONDecodeError, ValueError) as e:
            logger.debug(f"Skipping malformed JSON-LD block: {str(e)[:100]}")


def _type_names(type_val: Any) -> List[str]:
    if isinstance(type_val, str):
        return [type_val]
    if isinstance(type_val, list):
        return [t for t in type_val if isinstance(t, str)]
    return []


def _has_type(item: Any, type_name: str) -> bool:
    return isinstance(item, dict) and type_name in _type_names(item.get("@type"))


def extract_breadcrumbs(doc: Document) -> BreadcrumbFacts:
    """Breadcrumb navigation, preferring a schema.org BreadcrumbList.

    The BreadcrumbList may be the JSON-LD payload itself or one element of a
    top-level array. Any element labelled aria-label="breadcrumb" is the
    fallback (found, but without structured data).
    """
    for data in iter_json_ld(doc):
        items = data if isinstance(data, list) else [data]
        if any(_has_type(item, BREADCRUMB_LIST) for item in items):
            return BreadcrumbFacts(found=True, type=BREADCRUMB_SCHEMA_TYPE, data=items)

    if doc.first(True, {"aria-label": "breadcrumb"}) is not None:
        return BreadcrumbFacts(found=True, type=BREADCRUMB_ARIA_TYPE, data=[])

    return BreadcrumbFacts(found=False, type=None, data=[])


def _jsonld_entries(data: Any) -> Iterator[SchemaEntry]:
    """Typed entries of one JSON-LD payload; arrays and @graph are flattened."""
    if isinstance(data, list):
        for item in data:
            yield from _jsonld_entries(item)
        return
    if not isinstance(data, dict):
        return

    for type_name in _type_names(data.get("@type")):
        yield SchemaEntry(type=type_name, format=JSON_LD_FORMAT, data=data)

    graph = data.get("@graph")
    if isinstance(graph, list):
        yield from _jsonld_entries(graph)


def extract_schema(doc: Document) -> SchemaFacts:
    """Collect every schema.org type declared on the page.

    Microdata types are reported by the last path segment of itemtype
    (https://schema.org/Product -> Product).
    """
    types: List[SchemaEntry] = []

    for data in iter_json_ld(doc):
        types.extend(_jsonld_entries(data))

    for element in doc.all(True, {"itemtype": True}):
        itemtype = (attr_text(element, "itemtype") or "").strip()
        if not itemtype:
            continue
        type_name = itemtype.split("/")[-1] or itemtype
        types.append(
            SchemaEntry(type=type_name, format=MICRODATA_FORMAT, data={"itemtype": itemtype})
        )

    return SchemaFacts(found=len(types) > 0, types=types)
