"""Deterministic SEO score.

Fixed rubric out of 70 raw points, rescaled to 0-100. The issue, warning
and passed counters are tallies of checks, independent of point weights:
a passed check adds one to ``passed`` whatever it is worth.

    Check            Points  Pass                     Otherwise
    ---------------  ------  -----------------------  -----------------------------
    Title            10      length 50-60             present: 5 pts + warning;
                                                      absent: issue
    Description      10      length 150-160           present: 5 pts + warning;
                                                      absent: issue
    Canonical        5       present and matching     warning
    Robots meta      5       present and valid        warning
    HTML lang        5       present                  warning
    Structured data  15      any schema               issue
    robots.txt       5       found                    warning
    Broken links     10      none                     one issue per broken link
    Breadcrumbs      5       found                    warning
"""

from typing import List

from seo_analyzer.constants import (
    TITLE_POINTS,
    TITLE_PARTIAL_POINTS,
    TITLE_MIN_LENGTH,
    TITLE_MAX_LENGTH,
    DESCRIPTION_POINTS,
    DESCRIPTION_PARTIAL_POINTS,
    DESCRIPTION_MIN_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    CANONICAL_POINTS,
    ROBOTS_META_POINTS,
    HTML_LANG_POINTS,
    STRUCTURED_DATA_POINTS,
    ROBOTS_TXT_POINTS,
    BROKEN_LINKS_POINTS,
    BREADCRUMBS_POINTS,
    MAX_RAW_POINTS,
)
from seo_analyzer.models import Finding, PageFacts, ScoreFacts

ISSUE = "issue"
WARNING = "warning"
PASSED = "passed"


class _Tally:
    def __init__(self):
        self.points = 0
        self.issues = 0
        self.warnings = 0
        self.passed = 0
        self.findings: List[Finding] = []

    def passed_check(self, check: str, message: str, points: int) -> None:
        self.points += points
        self.passed += 1
        self.findings.append(Finding(check=check, level=PASSED, message=message, points=points))

    def warn(self, check: str, message: str, points: int = 0) -> None:
        self.points += points
        self.warnings += 1
        self.findings.append(Finding(check=check, level=WARNING, message=message, points=points))

    def issue(self, check: str, message: str, count: int = 1) -> None:
        self.issues += count
        self.findings.append(Finding(check=check, level=ISSUE, message=message, points=0))


def score(facts: PageFacts) -> ScoreFacts:
    """Score an extracted fact bundle.

    Args:
        facts: Anything exposing meta_tags, schema, robots_txt, links and
            breadcrumbs fact bundles (PageFacts or AnalysisResult)

    Returns:
        ScoreFacts with score in [0, 100] and per-check findings
    """
    tally = _Tally()
    meta = facts.meta_tags

    # Title
    if meta.title:
        if TITLE_MIN_LENGTH <= meta.title_length <= TITLE_MAX_LENGTH:
            tally.passed_check("title", f"Title length is {meta.title_length} characters", TITLE_POINTS)
        else:
            tally.warn(
                "title",
                f"Title is {meta.title_length} characters, outside {TITLE_MIN_LENGTH}-{TITLE_MAX_LENGTH}",
                TITLE_PARTIAL_POINTS,
            )
    else:
        tally.issue("title", "Missing title tag")

    # Meta description
    if meta.description:
        if DESCRIPTION_MIN_LENGTH <= meta.description_length <= DESCRIPTION_MAX_LENGTH:
            tally.passed_check(
                "description",
                f"Meta description length is {meta.description_length} characters",
                DESCRIPTION_POINTS,
            )
        else:
            tally.warn(
                "description",
                f"Meta description is {meta.description_length} characters, "
                f"outside {DESCRIPTION_MIN_LENGTH}-{DESCRIPTION_MAX_LENGTH}",
                DESCRIPTION_PARTIAL_POINTS,
            )
    else:
        tally.issue("description", "Missing meta description")

    # Canonical
    if meta.canonical:
        if meta.canonical_matches:
            tally.passed_check("canonical", "Canonical URL matches the page URL", CANONICAL_POINTS)
        else:
            tally.warn("canonical", f"Canonical URL {meta.canonical} does not match the page URL")
    else:
        tally.warn("canonical", "Missing canonical link")

    # Robots meta
    if meta.robots and meta.robots_valid:
        tally.passed_check("robots_meta", f"Robots meta tag: {meta.robots}", ROBOTS_META_POINTS)
    else:
        tally.warn("robots_meta", "Missing or invalid robots meta tag")

    # HTML lang
    if meta.html_lang:
        tally.passed_check("html_lang", f"HTML lang attribute: {meta.html_lang}", HTML_LANG_POINTS)
    else:
        tally.warn("html_lang", "Missing lang attribute on <html>")

    # Structured data
    if facts.schema.found:
        type_names = ", ".join(sorted({entry.type for entry in facts.schema.types}))
        tally.passed_check("structured_data", f"Structured data found: {type_names}", STRUCTURED_DATA_POINTS)
    else:
        tally.issue("structured_data", "No structured data found")

    # robots.txt
    if facts.robots_txt.found:
        tally.passed_check("robots_txt", "robots.txt found", ROBOTS_TXT_POINTS)
    else:
        tally.warn("robots_txt", "robots.txt not found or not accessible")

    # Broken links
    broken_count = len(facts.links.broken)
    if broken_count == 0:
        tally.passed_check("broken_links", "No broken links among checked links", BROKEN_LINKS_POINTS)
    else:
        tally.issue("broken_links", f"{broken_count} broken links found", count=broken_count)

    # Breadcrumbs
    if facts.breadcrumbs.found:
        tally.passed_check("breadcrumbs", f"Breadcrumbs found ({facts.breadcrumbs.type})", BREADCRUMBS_POINTS)
    else:
        tally.warn("breadcrumbs", "No breadcrumbs found")

    normalized = round(tally.points / MAX_RAW_POINTS * 100)

    return ScoreFacts(
        score=max(0, min(100, normalized)),
        issues=tally.issues,
        warnings=tally.warnings,
        passed=tally.passed,
        findings=tally.findings,
    )
