"""Search query parsing, snippets and highlighting."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from re import IGNORECASE, escape
from re import compile as re_compile

from app.utils.text import collapse_whitespace, truncate

_QUOTED_PHRASE = re_compile(r'"([^"]+)"')


@dataclass(frozen=True)
class ParsedQuery:
    """Structured form of a free text search query."""

    terms: list[str] = field(default_factory=list)
    phrases: list[str] = field(default_factory=list)
    excluded: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.terms or self.phrases)

    @property
    def needles(self) -> list[str]:
        """Everything a matching document must contain."""
        return [*self.phrases, *self.terms]


def normalize_search_query(query: str) -> str:
    """Trim, lowercase and collapse whitespace."""
    return collapse_whitespace(query).lower()


def parse_search_query(query: str) -> ParsedQuery:
    """
    Split a query into terms, quoted phrases and excluded terms.

    Examples:
    --------
    >>> parse_search_query('fastapi "async io" -django')
    ParsedQuery(terms=['fastapi'], phrases=['async io'], excluded=['django'])
    """
    normalized = normalize_search_query(query)
    phrases = [p.strip() for p in _QUOTED_PHRASE.findall(normalized) if p.strip()]
    remainder = _QUOTED_PHRASE.sub(" ", normalized)

    terms: list[str] = []
    excluded: list[str] = []
    for token in remainder.split():
        if token.startswith("-") and len(token) > 1:
            excluded.append(token[1:])
        elif token != "-":
            terms.append(token)

    return ParsedQuery(terms=terms, phrases=phrases, excluded=excluded)


def extract_snippet(text: str, query: str, max_len: int = 160) -> str:
    """
    Return a window of ``text`` centered on the first match of ``query``.

    Falls back to a plain truncation when the query does not occur.
    """
    if not query or not text:
        return truncate(text, max_len)

    index = text.lower().find(query.lower())
    if index == -1:
        return truncate(text, max_len)

    start = max(index - max_len // 2, 0)
    end = min(start + max_len, len(text))
    if end - start < max_len and start > 0:
        start = max(end - max_len, 0)

    snippet = text[start:end]
    if start > 0:
        snippet = "..." + snippet
    if end < len(text):
        snippet += "..."
    return snippet


def highlight_matches(
    text: str,
    query: str | Sequence[str],
    prefix: str = "<mark>",
    suffix: str = "</mark>",
) -> str:
    """
    Wrap every case-insensitive occurrence of the query terms in ``prefix``/``suffix``.

    Terms are matched in a single pass, longest first, so overlapping terms
    never nest markers.
    """
    needles = [query] if isinstance(query, str) else list(query)
    needles = sorted({n for n in needles if n}, key=len, reverse=True)
    if not needles:
        return text
    pattern = re_compile("|".join(escape(n) for n in needles), IGNORECASE)
    return pattern.sub(lambda match: f"{prefix}{match.group(0)}{suffix}", text)
