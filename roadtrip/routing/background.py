from __future__ import annotations

import logging
from concurrent.futures import Executor, ThreadPoolExecutor

from django.db import DatabaseError, close_old_connections
from django.db.models import F
from django.utils import timezone

from .models import RouteCache

logger = logging.getLogger(__name__)

_default_executor: ThreadPoolExecutor | None = None


def increment_route_views(route_id: int) -> None:
    try:
        RouteCache.objects.filter(pk=route_id).update(view_count=F("view_count") + 1, last_accessed_at=timezone.now())
    except DatabaseError:
        logger.warning("Could not increment view count for route %s", route_id, exc_info=True)


class RouteViewRecorder:
    """Counts route page views off the request path.

    The increment runs on ``executor``; callers never wait for it and its
    failures are logged and dropped.
    """

    def __init__(self, executor: Executor, *, close_connections: bool = True):
        self.executor = executor
        self.close_connections = close_connections

    def record(self, route_id: int) -> None:
        try:
            future = self.executor.submit(self._run, route_id)
        except RuntimeError:
            logger.warning("View recorder is shut down; dropping view for route %s", route_id)
            return
        future.add_done_callback(_log_failure)

    def _run(self, route_id: int) -> None:
        try:
            increment_route_views(route_id)
        finally:
            if self.close_connections:
                close_old_connections()


def get_view_recorder() -> RouteViewRecorder:
    global _default_executor
    if _default_executor is None:
        _default_executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="route-views")
    return RouteViewRecorder(_default_executor)


def _log_failure(future) -> None:
    exc = future.exception()
    if exc is not None:
        logger.error("View count task failed: %s", exc)
