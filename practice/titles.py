"""Problem URL helpers: normalization and LeetCode title extraction."""

import re
from urllib.parse import urlsplit, urlunsplit

FALLBACK_TITLE = 'LeetCode Problem'

_SLUG_RE = re.compile(r'leetcode\.(?:com|cn)/problems/([^/?#]+)', re.IGNORECASE)


def normalize_url(url: str) -> str:
    """Strip whitespace, query string, fragment and trailing slash."""
    url = url.strip()
    parts = urlsplit(url)
    path = parts.path.rstrip('/')
    return urlunsplit((parts.scheme, parts.netloc, path, '', ''))


def extract_title(url: str) -> str:
    """
    Derive a display title from a LeetCode problem URL.

    https://leetcode.com/problems/two-sum/ -> "Two Sum". Anything that is not
    a problem URL gets the generic fallback title.
    """
    match = _SLUG_RE.search(url or '')
    if not match:
        return FALLBACK_TITLE
    words = [w for w in match.group(1).split('-') if w]
    if not words:
        return FALLBACK_TITLE
    return ' '.join(w[0].upper() + w[1:] for w in words)
