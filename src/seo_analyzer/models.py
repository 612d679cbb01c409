"""Data models for single-page SEO analysis.

Fact bundles are frozen: each one is produced once per analysis run and never
touched again. AnalysisResult is the only mutable record, because the
orchestrator fills it in step by step before handing it to the caller.

Serialized form (``to_dict``) uses camelCase keys, which is what storage and
the reporting UI consume.
"""

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Optional, Union, get_args, get_origin, get_type_hints
from datetime import datetime, timezone
import json


# ============================================================================
# Fetch Models
# ============================================================================

@dataclass(frozen=True)
class PerformanceFacts:
    """Timing and transfer facts recorded for one fetch."""

    load_time_ms: int = 0  # Wall clock, request start to body read
    response_time_ms: int = 0  # Server elapsed for the final response
    redirect_count: int = 0  # Hops followed, not a final-URL-differs flag
    is_ssl: bool = False  # Scheme based, no certificate validation
    page_size_bytes: int = 0
    status_code: int = 200
    final_url: Optional[str] = None


@dataclass(frozen=True)
class FetchOutcome:
    """Raw body plus performance facts, whatever the HTTP status was."""

    html: str
    performance: PerformanceFacts


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a HEAD-style existence probe.

    status 0 with an error message means the request failed at the
    transport layer.
    """

    status: int
    error: Optional[str] = None

    @property
    def is_broken(self) -> bool:
        return self.status == 0 or self.status >= 400


# ============================================================================
# Extracted Signal Models
# ============================================================================

@dataclass(frozen=True)
class MetaTagsFacts:
    title: Optional[str] = None
    title_length: int = 0
    description: Optional[str] = None
    description_length: int = 0
    keywords: Optional[str] = None
    keywords_length: int = 0
    canonical: Optional[str] = None
    canonical_matches: bool = False
    robots: Optional[str] = None
    robots_valid: bool = False
    html_lang: Optional[str] = None
    max_image_preview: bool = False


@dataclass(frozen=True)
class DatesFacts:
    published: Optional[str] = None
    published_source: Optional[str] = None
    modified: Optional[str] = None
    modified_source: Optional[str] = None


@dataclass(frozen=True)
class AuthorFacts:
    name: Optional[str] = None
    link: Optional[str] = None
    source: Optional[str] = None


@dataclass(frozen=True)
class BreadcrumbFacts:
    found: bool = False
    type: Optional[str] = None  # 'schema.org/BreadcrumbList' or 'aria-label="breadcrumb"'
    data: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class SchemaEntry:
    type: str
    format: str  # 'JSON-LD' or 'Microdata'
    data: Any = None


@dataclass(frozen=True)
class SchemaFacts:
    found: bool = False
    types: list[SchemaEntry] = field(default_factory=list)


@dataclass(frozen=True)
class OpenGraphFacts:
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    type: Optional[str] = None


@dataclass(frozen=True)
class TwitterCardFacts:
    card: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None


@dataclass(frozen=True)
class AccessibilityFacts:
    has_alt_tags: bool = True
    has_headings: bool = False
    contrast_ratio: Optional[str] = None  # Not analyzed
    image_count: int = 0
    images_with_alt: int = 0


@dataclass(frozen=True)
class RobotsRule:
    user_agent: str
    directive: str  # 'allow', 'disallow' or 'sitemap'
    path: str


@dataclass(frozen=True)
class RobotsTxtFacts:
    found: bool = False
    content: Optional[str] = None
    rules: list[RobotsRule] = field(default_factory=list)


# ============================================================================
# Link Graph Models
# ============================================================================

@dataclass(frozen=True)
class BrokenLink:
    url: str
    text: str
    status: int  # 0 when the probe failed at the transport layer
    error: Optional[str] = None


@dataclass(frozen=True)
class ExternalLink:
    url: str
    text: str
    nofollow: bool = False
    status: int = 200
    verified: bool = False  # False: status is a placeholder, link was not probed


@dataclass(frozen=True)
class LinkGraphFacts:
    total: int = 0
    internal: int = 0
    external: int = 0
    broken: list[BrokenLink] = field(default_factory=list)
    external_links: list[ExternalLink] = field(default_factory=list)
    checked: int = 0  # Number of liveness probes actually performed


# ============================================================================
# Scoring Models
# ============================================================================

@dataclass(frozen=True)
class Finding:
    """One rubric check and how the page fared."""

    check: str
    level: str  # 'issue', 'warning' or 'passed'
    message: str
    points: int = 0


@dataclass(frozen=True)
class ScoreFacts:
    score: int = 0  # 0-100
    issues: int = 0
    warnings: int = 0
    passed: int = 0
    findings: list[Finding] = field(default_factory=list)


@dataclass(frozen=True)
class PageFacts:
    """Every signal extracted for one page; the scorer's input."""

    meta_tags: MetaTagsFacts
    dates: DatesFacts
    author: AuthorFacts
    breadcrumbs: BreadcrumbFacts
    schema: SchemaFacts
    open_graph: OpenGraphFacts
    twitter_card: TwitterCardFacts
    accessibility: AccessibilityFacts
    robots_txt: RobotsTxtFacts
    links: LinkGraphFacts
    performance: PerformanceFacts


# ============================================================================
# AMP Models
# ============================================================================

@dataclass(frozen=True)
class AmpResolution:
    is_amp: bool = False
    amp_url: Optional[str] = None
    regular_url: Optional[str] = None


@dataclass(frozen=True)
class AmpDifference:
    category: str
    amp_value: Any
    regular_value: Any
    impact: str  # 'positive', 'negative' or 'neutral', relative to the AMP side


@dataclass(frozen=True)
class AmpComparison:
    amp_score: int
    regular_score: int
    amp_issues: int
    regular_issues: int
    differences: list[AmpDifference] = field(default_factory=list)


# ============================================================================
# Top-level Result
# ============================================================================

@dataclass
class AnalysisResult:
    """Result of analyzing one URL."""

    url: str
    timestamp: str
    meta_tags: MetaTagsFacts
    dates: DatesFacts
    author: AuthorFacts
    breadcrumbs: BreadcrumbFacts
    schema: SchemaFacts
    robots_txt: RobotsTxtFacts
    links: LinkGraphFacts
    performance: PerformanceFacts
    accessibility: AccessibilityFacts
    open_graph: OpenGraphFacts
    twitter_card: TwitterCardFacts
    overall_score: int = 0
    issues: int = 0
    warnings: int = 0
    passed: int = 0
    findings: list[Finding] = field(default_factory=list)
    is_amp: bool = False
    amp_url: Optional[str] = None
    regular_url: Optional[str] = None
    amp_comparison: Optional[AmpComparison] = None

    @classmethod
    def from_facts(cls, url: str, facts: PageFacts, timestamp: Optional[str] = None) -> "AnalysisResult":
        """Start a result from an extracted fact bundle (scores not yet applied)."""
        return cls(
            url=url,
            timestamp=timestamp or datetime.now(timezone.utc).isoformat(),
            meta_tags=facts.meta_tags,
            dates=facts.dates,
            author=facts.author,
            breadcrumbs=facts.breadcrumbs,
            schema=facts.schema,
            robots_txt=facts.robots_txt,
            links=facts.links,
            performance=facts.performance,
            accessibility=facts.accessibility,
            open_graph=facts.open_graph,
            twitter_card=facts.twitter_card,
        )

    def apply_scores(self, scores: ScoreFacts) -> None:
        self.overall_score = scores.score
        self.issues = scores.issues
        self.warnings = scores.warnings
        self.passed = scores.passed
        self.findings = list(scores.findings)

    def to_dict(self) -> dict:
        return to_dict(self)

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, default=str)

    @classmethod
    def from_dict(cls, data: dict) -> "AnalysisResult":
        return from_dict(cls, data)

    @classmethod
    def from_json(cls, text: str) -> "AnalysisResult":
        return cls.from_dict(json.loads(text))


# ============================================================================
# Serialization helpers
# ============================================================================

def _to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def to_dict(value: Any) -> Any:
    """Render a model as plain data with camelCase keys.

    Only dataclass field names are renamed; free-form payloads (JSON-LD data,
    breadcrumb items) are passed through untouched.
    """
    if is_dataclass(value) and not isinstance(value, type):
        return {_to_camel(f.name): to_dict(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, (list, tuple)):
        return [to_dict(item) for item in value]
    return value


def _decode(tp: Any, value: Any) -> Any:
    if value is None:
        return None

    origin = get_origin(tp)
    if origin is Union:
        candidates = [arg for arg in get_args(tp) if arg is not type(None)]
        if len(candidates) == 1:
            return _decode(candidates[0], value)
        return value
    if origin is list:
        args = get_args(tp)
        item_type = args[0] if args else Any
        return [_decode(item_type, item) for item in value]
    if is_dataclass(tp) and isinstance(value, dict):
        return from_dict(tp, value)
    return value


def from_dict(cls: type, data: dict) -> Any:
    """Inverse of to_dict for a given model class. Unknown keys are ignored."""
    hints = get_type_hints(cls)
    kwargs = {}
    for f in fields(cls):
        key = _to_camel(f.name)
        if key in data:
            kwargs[f.name] = _decode(hints[f.name], data[key])
    return cls(**kwargs)
