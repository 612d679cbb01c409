"""Single-page SEO analysis: signal extraction, scoring and AMP comparison."""

__version__ = "0.1.0"

from seo_analyzer.analyzer import SEOAnalyzer, AnalysisState, analyze
from seo_analyzer.config import Config, settings
from seo_analyzer.database import (
    AbstractDatabase,
    LocalSqliteDatabase,
    InMemoryDatabase,
    get_db_client,
)
from seo_analyzer.exceptions import (
    SEOAnalyzerError,
    InvalidUrlError,
    AnalysisFailed,
    FetchError,
)
from seo_analyzer.models import (
    AnalysisResult,
    AmpComparison,
    AmpDifference,
    PageFacts,
    ScoreFacts,
)
from seo_analyzer.recommendations import Recommendation, generate_recommendations
from seo_analyzer.scorer import score

__all__ = [
    # Core
    "SEOAnalyzer",
    "AnalysisState",
    "analyze",
    "score",
    "generate_recommendations",
    "Recommendation",
    "Config",
    "settings",
    # Storage
    "AbstractDatabase",
    "LocalSqliteDatabase",
    "InMemoryDatabase",
    "get_db_client",
    # Errors
    "SEOAnalyzerError",
    "InvalidUrlError",
    "AnalysisFailed",
    "FetchError",
    # Models
    "AnalysisResult",
    "AmpComparison",
    "AmpDifference",
    "PageFacts",
    "ScoreFacts",
]
