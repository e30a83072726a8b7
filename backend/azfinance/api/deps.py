from datetime import date
from functools import lru_cache

from azfinance.core.config import get_settings
from azfinance.services.metrics_cache import MetricsCache


@lru_cache
def get_metrics_cache() -> MetricsCache:
    return MetricsCache(max_entries=get_settings().metrics_cache_size)


def resolve_as_of(as_of: date | None) -> date:
    # frozen once per request so every engine call sees the same "today"
    return as_of or date.today()
