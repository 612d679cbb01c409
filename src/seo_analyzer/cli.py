"""Command-line interface for the page analyzer."""

import asyncio
import sys
from typing import Optional

from seo_analyzer.analyzer import SEOAnalyzer
from seo_analyzer.config import Config
from seo_analyzer.database import get_db_client
from seo_analyzer.exceptions import SEOAnalyzerError
from seo_analyzer.logging_config import get_logger, setup_logging
from seo_analyzer.models import AnalysisResult
from seo_analyzer.recommendations import generate_recommendations
from seo_analyzer.urls import ensure_absolute_http_url

logger = get_logger(__name__)


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


def format_result(result: AnalysisResult, analysis_id: Optional[int] = None) -> str:
    """Render a result as a human-readable report.

    Args:
        result: The analysis result
        analysis_id: Storage id, shown when the result was saved

    Returns:
        Multi-line text report
    """
    meta = result.meta_tags
    perf = result.performance
    lines = [
        "=" * 60,
        f"SEO Analysis for: {result.url}",
        "=" * 60,
    ]
    if analysis_id is not None:
        lines.append(f"Saved as analysis #{analysis_id}")

    lines += [
        "",
        f"📊 Overall Score: {result.overall_score}/100",
        f"  Issues: {result.issues}  Warnings: {result.warnings}  Passed: {result.passed}",
        "",
        "Meta Tags:",
        f"  • Title ({meta.title_length}): {meta.title or '-'}",
        f"  • Description ({meta.description_length}): {meta.description or '-'}",
        f"  • Canonical: {meta.canonical or '-'} (matches: {_yes_no(meta.canonical_matches)})",
        f"  • Robots: {meta.robots or '-'}",
        f"  • Language: {meta.html_lang or '-'}",
        "",
        "Performance:",
        f"  • Load time: {perf.load_time_ms}ms (server {perf.response_time_ms}ms)",
        f"  • Page size: {perf.page_size_bytes} bytes",
        f"  • Redirects: {perf.redirect_count}  HTTPS: {_yes_no(perf.is_ssl)}  Status: {perf.status_code}",
        "",
        "Links:",
        f"  • Total: {result.links.total} (internal {result.links.internal}, "
        f"external {result.links.external}), checked {result.links.checked}",
    ]
    for broken in result.links.broken:
        reason = broken.error or f"HTTP {broken.status}"
        lines.append(f"  ❌ {broken.url} ({reason})")

    schema_types = ", ".join(sorted({entry.type for entry in result.schema.types})) or "-"
    lines += [
        "",
        f"Structured data: {schema_types}",
        f"Breadcrumbs: {result.breadcrumbs.type or '-'}",
        f"robots.txt: {'found' if result.robots_txt.found else 'not found'}",
        f"AMP page: {_yes_no(result.is_amp)}  AMP URL: {result.amp_url or '-'}",
    ]

    comparison = result.amp_comparison
    if comparison is not None:
        lines += [
            "",
            f"AMP vs regular: {comparison.amp_score} vs {comparison.regular_score} "
            f"({comparison.amp_issues} vs {comparison.regular_issues} issues)",
        ]
        for diff in comparison.differences:
            lines.append(f"  • {diff.category}: {diff.amp_value} vs {diff.regular_value} ({diff.impact})")

    findings = [f for f in result.findings if f.level != "passed"]
    if findings:
        lines += ["", "⚠️  Findings:"]
        for finding in findings:
            lines.append(f"  • [{finding.level}] {finding.message}")

    recommendations = generate_recommendations(result)
    if recommendations:
        lines += ["", "💡 Recommendations:"]
        for rec in recommendations:
            lines.append(f"  • [{rec.priority}] {rec.title}: {rec.action}")

    lines += ["", "=" * 60]
    return "\n".join(lines)


def _emit(text: str, output_file: Optional[str]) -> None:
    if output_file:
        with open(output_file, "w") as f:
            f.write(text)
        print(f"\nOutput written to {output_file}")
    else:
        print(text)


def _render(result: AnalysisResult, output: str, analysis_id: Optional[int] = None) -> str:
    if output == "json":
        return result.to_json(indent=2)
    return format_result(result, analysis_id=analysis_id)


def analyze_command(args):
    """Analyze a URL and optionally store the result."""
    config = Config.from_env()
    analyzer = SEOAnalyzer(config=config)

    try:
        result = asyncio.run(analyzer.analyze(args.url))
    except SEOAnalyzerError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    analysis_id = None
    if args.save:
        db = get_db_client()
        try:
            analysis_id = db.save(result.url, result)
            logger.info(f"Stored analysis {analysis_id} for {result.url}")
        finally:
            db.close()

    _emit(_render(result, args.output, analysis_id), args.output_file)


def show_command(args):
    """Print a stored analysis."""
    db = get_db_client()
    try:
        result = db.get_by_id(args.id)
    finally:
        db.close()

    if result is None:
        print(f"No analysis found with id {args.id}", file=sys.stderr)
        sys.exit(1)

    _emit(_render(result, args.output, args.id), None)


def history_command(args):
    """List stored analyses for a URL."""
    try:
        url = ensure_absolute_http_url(args.url)
    except SEOAnalyzerError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    db = get_db_client()
    try:
        results = db.get_all_by_url(url)
    finally:
        db.close()

    logger.debug(f"Found {len(results)} stored analyses for {url}")
    if not results:
        print(f"No stored analyses for: {url}")
        return

    if args.output == "json":
        print("[" + ",\n".join(r.to_json(indent=2) for r in results) + "]")
        return

    print(f"\n{'=' * 60}")
    print(f"Analysis history for: {url}")
    print(f"{'=' * 60}\n")
    for result in results:
        print(f"{result.timestamp}  score {result.overall_score}/100  "
              f"issues {result.issues}  warnings {result.warnings}  passed {result.passed}")


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(
        description="SEO Page Analyzer - Analyze a single page for on-page SEO signals"
    )

    # Global flags (before subcommands)
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set logging verbosity (default: INFO)",
    )
    parser.add_argument(
        "--log-file",
        help="Write logs to file in addition to console",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    analyze_parser = subparsers.add_parser("analyze", help="Analyze a URL for SEO.")
    analyze_parser.add_argument("url", help="URL to analyze (bare hosts get https://)")
    analyze_parser.add_argument(
        "--output",
        "-o",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    analyze_parser.add_argument(
        "--output-file",
        "-f",
        help="Write output to file instead of stdout",
    )
    analyze_parser.add_argument(
        "--save",
        action="store_true",
        help="Store the result in the configured database",
    )
    analyze_parser.set_defaults(func=analyze_command)

    show_parser = subparsers.add_parser("show", help="Show a stored analysis.")
    show_parser.add_argument("id", type=int, help="Analysis id")
    show_parser.add_argument(
        "--output", "-o", choices=["text", "json"], default="text",
        help="Output format (default: text)",
    )
    show_parser.set_defaults(func=show_command)

    history_parser = subparsers.add_parser("history", help="List stored analyses for a URL.")
    history_parser.add_argument("url", help="URL as it was analyzed")
    history_parser.add_argument(
        "--output", "-o", choices=["text", "json"], default="text",
        help="Output format (default: text)",
    )
    history_parser.set_defaults(func=history_command)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(
        level=args.log_level,
        log_file=getattr(args, "log_file", None),
    )

    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
