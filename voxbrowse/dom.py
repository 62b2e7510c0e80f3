"""Element description to selector resolution.

Turns phrases like "the sign in button" or "email field" into a selector
expression for the backend's DOM-query layer. The output is permissive:
descriptions that mention no known element kind are passed through as-is
and the backend decides whether anything matches.
"""
import re

BUTTON_KEYWORD = "button"
LINK_KEYWORD = "link"
INPUT_KEYWORDS = ("input", "field", "box")


def _strip_keywords(description: str, pattern: str) -> str:
    return re.sub(pattern, "", description, flags=re.IGNORECASE).strip()


def element_to_selector(description: str) -> str:
    """Convert an element description to a selector expression.

    Keyword detection is case-insensitive, but the residual text is embedded
    with the caller's original casing.

    Args:
        description: Free-text element description.

    Returns:
        A selector string. Never raises.

    Example:
        >>> element_to_selector("button")
        'button'
        >>> element_to_selector("email field")
        'input[name*="email"], input[placeholder*="email"], input[aria-label*="email"]'
    """
    description = description or ""
    lower_desc = description.lower()

    if BUTTON_KEYWORD in lower_desc:
        text = _strip_keywords(description, BUTTON_KEYWORD)
        if text:
            return f'button:contains("{text}"), [aria-label*="{text}"], button[title*="{text}"]'
        return "button"

    if LINK_KEYWORD in lower_desc:
        text = _strip_keywords(description, LINK_KEYWORD)
        if text:
            return f'a:contains("{text}"), a[aria-label*="{text}"]'
        return "a"

    if any(keyword in lower_desc for keyword in INPUT_KEYWORDS):
        text = _strip_keywords(description, "|".join(INPUT_KEYWORDS))
        if text:
            return f'input[name*="{text}"], input[placeholder*="{text}"], input[aria-label*="{text}"]'
        return "input"

    return description.strip()
