"""Actionable recommendations derived from an analysis result."""

from dataclasses import dataclass
from typing import List

from seo_analyzer.constants import (
    RECOMMENDED_TITLE_MAX,
    RECOMMENDED_TITLE_MIN,
    SLOW_PAGE_MS,
)
from seo_analyzer.models import AnalysisResult

PRIORITY_ORDER = {"high": 3, "medium": 2, "low": 1}


@dataclass(frozen=True)
class Recommendation:
    priority: str  # 'high', 'medium' or 'low'
    category: str
    title: str
    description: str
    impact: str
    action: str


def generate_recommendations(result: AnalysisResult) -> List[Recommendation]:
    """Build recommendations for a result, most urgent first.

    Args:
        result: A scored AnalysisResult

    Returns:
        Recommendations sorted high -> medium -> low; rules keep their
        relative order within a priority
    """
    recommendations: List[Recommendation] = []
    meta = result.meta_tags

    # Title
    if not meta.title:
        recommendations.append(Recommendation(
            priority="high",
            category="Meta Tags",
            title="Missing SEO Title",
            description="Your page is missing a title tag, which is crucial for search rankings.",
            impact="Critical for search visibility",
            action="Add a descriptive, keyword-rich title tag (50-60 characters)",
        ))
    elif meta.title_length < RECOMMENDED_TITLE_MIN or meta.title_length > RECOMMENDED_TITLE_MAX:
        recommendations.append(Recommendation(
            priority="medium",
            category="Meta Tags",
            title="Optimize Title Length",
            description="Your title is either too short or too long for optimal display in search results.",
            impact="Better click-through rates",
            action=f"Adjust title to 50-60 characters (currently {meta.title_length})",
        ))

    if not meta.description:
        recommendations.append(Recommendation(
            priority="high",
            category="Meta Tags",
            title="Missing Meta Description",
            description="Meta descriptions help search engines understand your page content.",
            impact="Improved search result snippets",
            action="Add a compelling meta description (150-160 characters)",
        ))

    if not result.schema.found:
        recommendations.append(Recommendation(
            priority="medium",
            category="Technical SEO",
            title="Add Schema Markup",
            description="Structured data helps search engines understand your content better.",
            impact="Rich snippets and better rankings",
            action="Implement relevant schema.org markup (Article, Organization, etc.)",
        ))

    if result.performance.load_time_ms > SLOW_PAGE_MS:
        recommendations.append(Recommendation(
            priority="high",
            category="Performance",
            title="Improve Page Load Speed",
            description=f"Your page took {result.performance.load_time_ms}ms to load.",
            impact="Better user experience and rankings",
            action="Optimize images, minify CSS/JS, use CDN",
        ))

    if not result.performance.is_ssl:
        recommendations.append(Recommendation(
            priority="high",
            category="Security",
            title="Enable HTTPS",
            description="Search engines prioritize secure websites in search results.",
            impact="SEO boost and user trust",
            action="Install an SSL certificate and redirect HTTP to HTTPS",
        ))

    if not result.open_graph.title:
        recommendations.append(Recommendation(
            priority="low",
            category="Social Media",
            title="Add Open Graph Tags",
            description="Improve how your content appears when shared on social media.",
            impact="Better social media engagement",
            action="Add og:title, og:description, og:image tags",
        ))

    if not result.accessibility.has_alt_tags:
        recommendations.append(Recommendation(
            priority="medium",
            category="Accessibility",
            title="Add Alt Text to Images",
            description=(
                f"Only {result.accessibility.images_with_alt} of "
                f"{result.accessibility.image_count} images have alt text."
            ),
            impact="Better accessibility and image SEO",
            action="Add descriptive alt attributes to all images",
        ))

    broken_count = len(result.links.broken)
    if broken_count > 0:
        recommendations.append(Recommendation(
            priority="medium",
            category="Content",
            title="Fix Broken Links",
            description=f"{broken_count} broken links found on your page.",
            impact="Better user experience and crawlability",
            action="Update or remove broken links",
        ))

    unverified = sum(1 for link in result.links.external_links if not link.verified)
    if unverified:
        recommendations.append(Recommendation(
            priority="low",
            category="Content",
            title="Review Unchecked External Links",
            description=f"{unverified} external links were not checked for availability.",
            impact="Complete picture of outbound link health",
            action="Verify the remaining external links manually or with a full crawl",
        ))

    # sorted() is stable
    return sorted(recommendations, key=lambda r: PRIORITY_ORDER[r.priority], reverse=True)
