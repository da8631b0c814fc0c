"""Per-IP post view deduplication backed by the in-memory TTL cache."""

from app.clients.memory_client import MemoryClient
from app.configs import settings


class ViewTracker:
    """
    Remember which IPs viewed which posts for ``ttl`` seconds.

    Args:
        client: TTL cache used as storage.
        ttl: How long a view suppresses further counting, in seconds.
    """

    def __init__(self, client: MemoryClient, ttl: float = settings.VIEW_DEDUP_TTL) -> None:
        self.client = client
        self.ttl = ttl

    @staticmethod
    def key(post_id: int, ip: str) -> str:
        return f"view:{post_id}:{ip}"

    def has_viewed(self, post_id: int, ip: str) -> bool:
        return self.client.exists(self.key(post_id, ip))

    def mark_viewed(self, post_id: int, ip: str) -> None:
        self.client.set(self.key(post_id, ip), True, self.ttl)


memory_client = MemoryClient(cleanup_interval=settings.CACHE_CLEANUP_INTERVAL)
view_tracker = ViewTracker(memory_client)


def get_view_tracker() -> ViewTracker:
    return view_tracker
