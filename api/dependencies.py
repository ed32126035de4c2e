"""Request dependencies."""
from fastapi import Depends, Request

from metrics import MetricsCollector
from services.store import LogisticsStore


def get_store(request: Request) -> LogisticsStore:
    """The process-wide store created at startup."""
    return request.app.state.store


def get_metrics(store: LogisticsStore = Depends(get_store)) -> MetricsCollector:
    """Metrics collector reading the current store."""
    return MetricsCollector(store)
