"""Smart link classification.

Every function here is total: anything that is not a recognised URL is classified as a plain link.
"""

from collections.abc import Iterable
from urllib.parse import urlsplit

from markdown_adf.constants import (
    ATLASSIAN_HOST_SUFFIXES,
    CONFLUENCE_PAGE_PATTERN,
    JIRA_BOARD_PATTERN,
    JIRA_ISSUE_KEY_PATTERN,
    JIRA_ISSUE_PATTERN,
)
from markdown_adf.models import SmartLinkResolver, SmartLinkType


def _hostname(url: str) -> str | None:
    if not isinstance(url, str):
        return None
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    if not parts.scheme or not parts.hostname:
        return None
    return parts.hostname.lower()


def detect_smart_link_type(url: str) -> SmartLinkType:
    """Classify a URL with the built-in Atlassian policy.

    Args:
        url: the link target

    Returns:
        INLINE for Jira issues and boards, BLOCK for Confluence pages, LINK for anything else.
    """
    if not isinstance(url, str):
        return SmartLinkType.LINK

    if JIRA_ISSUE_PATTERN.search(url):
        return SmartLinkType.INLINE

    if CONFLUENCE_PAGE_PATTERN.search(url):
        return SmartLinkType.BLOCK

    if JIRA_BOARD_PATTERN.search(url):
        return SmartLinkType.INLINE

    return SmartLinkType.LINK


def is_atlassian_url(url: str) -> bool:
    hostname = _hostname(url)
    if hostname is None:
        return False
    return hostname.endswith(ATLASSIAN_HOST_SUFFIXES)


def extract_jira_issue_key(url: str) -> str | None:
    """Extract the issue key (e.g. 'PROJ-123') from a `/browse/` URL."""
    if not isinstance(url, str):
        return None
    match = JIRA_ISSUE_KEY_PATTERN.search(url)
    return match.group(1) if match else None


def extract_confluence_page_info(url: str) -> dict[str, str] | None:
    """Extract the space key and page id from a `/wiki/spaces/<KEY>/pages/<ID>` URL.

    Returns:
        A dictionary with `space_key` and/or `page_id`, or None if neither is present.
    """
    if _hostname(url) is None:
        return None

    path_parts = urlsplit(url).path.split('/')
    result: dict[str, str] = {}

    for marker, key in (('spaces', 'space_key'), ('pages', 'page_id')):
        if marker in path_parts:
            index = path_parts.index(marker)
            if index + 1 < len(path_parts) and path_parts[index + 1]:
                result[key] = path_parts[index + 1]

    return result or None


def default_smart_link_resolver(url: str) -> SmartLinkType:
    return detect_smart_link_type(url)


def create_smart_link_resolver(
    inline_domains: Iterable[str] = (),
    block_domains: Iterable[str] = (),
    fallback_to_atlassian_detection: bool = True,
) -> SmartLinkResolver:
    """Create a resolver with explicit domain rules.

    Args:
        inline_domains: hostnames (substring match, case-insensitive) rendered as inline cards
        block_domains: hostnames (substring match, case-insensitive) rendered as block cards
        fallback_to_atlassian_detection: when True, Atlassian URLs matching no domain rule are
            classified with the built-in policy

    Returns:
        The resolver.
    """
    inline_domains = tuple(domain.lower() for domain in inline_domains)
    block_domains = tuple(domain.lower() for domain in block_domains)

    def resolve(url: str) -> SmartLinkType:
        hostname = _hostname(url)
        if hostname is None:
            return SmartLinkType.LINK

        if any(domain in hostname for domain in inline_domains):
            return SmartLinkType.INLINE

        if any(domain in hostname for domain in block_domains):
            return SmartLinkType.BLOCK

        if fallback_to_atlassian_detection and is_atlassian_url(url):
            return detect_smart_link_type(url)

        return SmartLinkType.LINK

    return resolve


def atlassian_inline_resolver(url: str) -> SmartLinkType:
    return SmartLinkType.INLINE if is_atlassian_url(url) else SmartLinkType.LINK


def atlassian_block_resolver(url: str) -> SmartLinkType:
    return SmartLinkType.BLOCK if is_atlassian_url(url) else SmartLinkType.LINK


def no_smart_links_resolver(url: str) -> SmartLinkType:
    return SmartLinkType.LINK
