"""robots.txt retrieval and rule extraction."""

import logging
from typing import List

from seo_analyzer.models import RobotsRule, RobotsTxtFacts
from seo_analyzer.urls import origin_of

logger = logging.getLogger(__name__)

RULE_DIRECTIVES = ("allow", "disallow", "sitemap")
DEFAULT_USER_AGENT_GROUP = "*"


def parse_robots_txt(content: str) -> List[RobotsRule]:
    """Extract allow/disallow/sitemap rules in file order.

    Each rule is tagged with the user-agent group it appeared under; rules
    before the first User-agent line belong to '*'. Blank lines, comment
    lines and unknown directives are ignored.

    Args:
        content: Raw robots.txt text

    Returns:
        List of RobotsRule
    """
    rules: List[RobotsRule] = []
    if not content:
        return rules

    current_user_agent = DEFAULT_USER_AGENT_GROUP

    for line in content.split('\n'):
        line = line.strip()

        # Skip comments and empty lines
        if not line or line.startswith('#'):
            continue

        directive, _, value = line.partition(':')
        directive = directive.strip().lower()
        value = value.strip()

        if directive == 'user-agent':
            current_user_agent = value
        elif directive in RULE_DIRECTIVES:
            rules.append(RobotsRule(user_agent=current_user_agent, directive=directive, path=value))

    return rules


async def fetch_robots_txt(fetcher, url: str) -> RobotsTxtFacts:
    """Fetch and parse <origin>/robots.txt for the page at url.

    Any failure (non-2xx status, timeout, connection error, empty body)
    yields an absent RobotsTxtFacts; nothing is raised.

    Args:
        fetcher: HttpFetcher inside its context
        url: Any URL on the site

    Returns:
        RobotsTxtFacts
    """
    robots_url = f"{origin_of(url)}/robots.txt"
    content = await fetcher.get_text(robots_url, timeout=fetcher.config.robots_timeout)

    if not content:
        logger.info(f"No robots.txt found at {robots_url}")
        return RobotsTxtFacts()

    rules = parse_robots_txt(content)
    logger.debug(f"Loaded robots.txt from {robots_url} ({len(rules)} rules)")
    return RobotsTxtFacts(found=True, content=content, rules=rules)
