"""URL normalization for spoken navigation targets.

Voice transcripts name sites the way people say them ("youtube",
"github.com/trending"), so the captured fragment has to be turned into a
scheme-qualified URL before it can be handed to the browser.
"""
import re
from urllib.parse import urlparse

DEFAULT_SCHEME = "https://"

# Bare hostnames that resolve to a canonical URL
SITE_ALIASES = {
    "google": "https://www.google.com",
    "youtube": "https://www.youtube.com",
    "facebook": "https://www.facebook.com",
    "twitter": "https://www.twitter.com",
    "github": "https://www.github.com",
    "gmail": "https://mail.google.com",
}

_SCHEME_RE = re.compile(r'^https?://', re.IGNORECASE)
_SCHEME_AND_WWW_RE = re.compile(r'^https?://(?:www\.)?', re.IGNORECASE)


def ensure_scheme(fragment: str) -> str:
    """Prepend the default scheme unless the text already has http(s)://."""
    url = (fragment or "").strip()
    if not _SCHEME_RE.match(url):
        url = DEFAULT_SCHEME + url
    return url


def normalize_url(fragment: str) -> str:
    """Turn a spoken URL fragment into a well-formed URL.

    Site aliases win over whatever path was spoken: "youtube/feed" still
    resolves to the YouTube home page.

    Args:
        fragment: Free text captured after "open", "go to", etc.

    Returns:
        The canonical alias URL, or the scheme-qualified fragment.

    Example:
        >>> normalize_url("youtube")
        'https://www.youtube.com'
        >>> normalize_url("example.com/docs")
        'https://example.com/docs'
    """
    url = ensure_scheme(fragment)

    site_name = _SCHEME_AND_WWW_RE.sub("", url).split("/")[0].lower()
    alias = SITE_ALIASES.get(site_name)
    if alias:
        return alias

    return url


def extract_domain(url: str) -> str:
    """Return the hostname of a URL without a leading ``www.``.

    Falls back to the input when no hostname can be parsed.
    """
    hostname = urlparse(ensure_scheme(url)).hostname
    if not hostname:
        return url
    return re.sub(r'^www\.', '', hostname)


def is_valid_url(url: str) -> bool:
    """Check that the scheme-qualified URL has a network location."""
    if not url or not url.strip():
        return False
    try:
        parsed = urlparse(ensure_scheme(url))
    except ValueError:
        return False
    return bool(parsed.netloc)
