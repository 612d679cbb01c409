# src/seo_analyzer/constants.py
"""Centralized constants for the page analyzer.

Scoring weights and thresholds are fixed and not part of Config.
Network limits below are only defaults, see config.py.
"""

# =============================================================================
# HTTP Constants
# =============================================================================

# Identifying client token sent with every request
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; SEO-Analyzer/1.0)"

# Per-request timeouts (seconds)
PAGE_TIMEOUT_SECONDS = 15.0
ROBOTS_TIMEOUT_SECONDS = 5.0
LINK_CHECK_TIMEOUT_SECONDS = 5.0
AMP_PROBE_TIMEOUT_SECONDS = 3.0

# Redirect cap for every request
MAX_REDIRECTS = 5

# Status codes for which a HEAD probe is retried as GET
HEAD_NOT_SUPPORTED_CODES = (405, 501)


# =============================================================================
# Link Analysis Constants
# =============================================================================

# Hard ceiling on liveness checks per analysis
MAX_LINK_CHECKS = 20

# External links admitted to the check list (before the ceiling above)
MAX_EXTERNAL_LINK_CHECKS = 10

# Concurrent outbound probes
DEFAULT_MAX_CONCURRENT_REQUESTS = 5

# Status reported for external links that were not verified
UNVERIFIED_LINK_STATUS = 200

# href prefixes that are never treated as links
SKIPPED_HREF_PREFIXES = ("#", "mailto:", "tel:")


# =============================================================================
# Scoring Constants
# =============================================================================

TITLE_POINTS = 10
TITLE_PARTIAL_POINTS = 5
TITLE_MIN_LENGTH = 50
TITLE_MAX_LENGTH = 60

DESCRIPTION_POINTS = 10
DESCRIPTION_PARTIAL_POINTS = 5
DESCRIPTION_MIN_LENGTH = 150
DESCRIPTION_MAX_LENGTH = 160

CANONICAL_POINTS = 5
ROBOTS_META_POINTS = 5
HTML_LANG_POINTS = 5
STRUCTURED_DATA_POINTS = 15
ROBOTS_TXT_POINTS = 5
BROKEN_LINKS_POINTS = 10
BREADCRUMBS_POINTS = 5

# Sum of all full weights above
MAX_RAW_POINTS = 70


# =============================================================================
# Accessibility Constants
# =============================================================================

# Fraction of images with an alt attribute that must be exceeded
ALT_COVERAGE_THRESHOLD = 0.8


# =============================================================================
# Recommendation Constants
# =============================================================================

SLOW_PAGE_MS = 3000
RECOMMENDED_TITLE_MIN = 30
RECOMMENDED_TITLE_MAX = 60
