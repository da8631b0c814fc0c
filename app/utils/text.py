"""
Text helpers for slugs, excerpts and HTML cleanup.

Markdown is rendered with ``markdown`` and flattened with BeautifulSoup so
that excerpts never leak markup into list views.
"""

from re import IGNORECASE
from re import compile as re_compile

from bs4 import BeautifulSoup
from bs4.formatter import HTMLFormatter
from markdown import markdown

_SLUG_SEPARATORS = re_compile(r"[\s_]+")
_SLUG_INVALID = re_compile(r"[^a-z0-9-]+")
_SLUG_DASHES = re_compile(r"-+")
_WHITESPACE = re_compile(r"\s+")
_MARKDOWN_SYMBOLS = str.maketrans("", "", "#*_`")
_JS_SCHEME = re_compile(r"^\s*javascript:", IGNORECASE)

UNSAFE_TAGS = ("script", "style", "iframe", "object", "embed")


def _escape_markup(value: str) -> str:
    return value.replace("&", "&amp;").replace("<", "&lt;")


# Text nodes keep ">" so markdown quotes survive; "<" and "&" are re-escaped
_MARKDOWN_SAFE = HTMLFormatter(entity_substitution=_escape_markup)


def slugify(value: str) -> str:
    """
    Convert a string to a URL-friendly slug.

    Examples:
    --------
    >>> slugify("Hello World_Again!")
    'hello-world-again'
    """
    value = _SLUG_SEPARATORS.sub("-", value.lower())
    value = _SLUG_INVALID.sub("", value)
    value = _SLUG_DASHES.sub("-", value)
    return value.strip("-")


def truncate(value: str, max_len: int, suffix: str = "...") -> str:
    """Truncate ``value`` to ``max_len`` characters including ``suffix``."""
    if len(value) <= max_len:
        return value
    if len(suffix) >= max_len:
        return value[:max_len]
    return value[: max_len - len(suffix)] + suffix


def collapse_whitespace(value: str) -> str:
    return _WHITESPACE.sub(" ", value).strip()


def strip_html(value: str) -> str:
    """Remove HTML tags and decode entities."""
    if not value:
        return ""
    return BeautifulSoup(value, "html.parser").get_text()


def sanitize_html(value: str) -> str:
    """
    Remove script-capable markup from user supplied HTML.

    Drops unsafe tags entirely, strips ``on*`` event handler attributes and
    neutralizes ``javascript:`` URLs. Everything else is left untouched.
    """
    if "<" not in value:
        return value

    soup = BeautifulSoup(value, "html.parser")
    for tag in soup.find_all(UNSAFE_TAGS):
        tag.decompose()

    for tag in soup.find_all(True):
        for attr in list(tag.attrs):
            if attr.lower().startswith("on"):
                del tag.attrs[attr]
            elif attr.lower() in ("href", "src") and _JS_SCHEME.match(str(tag.attrs[attr])):
                del tag.attrs[attr]

    return soup.decode(formatter=_MARKDOWN_SAFE)


def markdown_to_text(value: str) -> str:
    """Render markdown and return its plain text."""
    if not value:
        return ""
    return BeautifulSoup(markdown(value), "html.parser").get_text(" ")


def extract_excerpt(content: str, max_len: int) -> str:
    """
    Build a plain text excerpt from markdown or HTML content.

    The text is cut at the last word boundary when that boundary lies in the
    second half of the allowed length, otherwise at ``max_len``.

    Args:
        content: Markdown or HTML source
        max_len: Maximum excerpt length before the ellipsis

    Returns:
        str: Plain text excerpt
    """
    text = collapse_whitespace(markdown_to_text(content).translate(_MARKDOWN_SYMBOLS))
    if len(text) <= max_len:
        return text

    last_space = text.rfind(" ", 0, max_len)
    if last_space > max_len // 2:
        return text[:last_space] + "..."
    return text[:max_len] + "..."
