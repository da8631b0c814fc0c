# app/clients/__init__.py

"""In-process clients. Only the TTL cache lives here; there are no external services."""

from app.clients.memory_client import MemoryClient

__all__ = ["MemoryClient"]
