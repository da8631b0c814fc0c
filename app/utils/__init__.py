"""Small helpers shared across layers: time, text, search, network and pagination."""

from app.utils.helpers import as_utc, get_summary, host, utc_now

__all__ = [
    "as_utc",
    "get_summary",
    "host",
    "utc_now",
]
