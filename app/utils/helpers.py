from collections.abc import MutableMapping
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request
from fastapi.routing import APIRoute
from starlette.routing import BaseRoute, Match, Mount, Route


def host(request: Request) -> str:
    """Return the address of the directly connected peer."""
    return request.client.host if request.client else "unknown"


def utc_now() -> datetime:
    """Return the current timezone-aware UTC time."""
    return datetime.now(tz=UTC)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (as returned by SQLite) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _match_summary(routes: list[BaseRoute], scope: MutableMapping[str, Any]) -> str | None:
    for route in routes:
        match, child_scope = route.matches(scope)
        if match != Match.FULL:
            continue
        if isinstance(route, APIRoute):
            return route.summary or route.name
        if isinstance(route, Mount):
            return _match_summary(route.routes, {**scope, **child_scope})
        if isinstance(route, Route):
            return route.name
    return None


def get_summary(request: Request) -> str | None:
    """Return the summary of the route the request will hit, for request logs."""
    app: FastAPI = request.scope["app"]
    return _match_summary(app.routes, request.scope)
