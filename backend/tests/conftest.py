from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from azfinance.api.deps import get_metrics_cache
from azfinance.main import app


@pytest.fixture
def client() -> Iterator[TestClient]:
    get_metrics_cache().invalidate()
    with TestClient(app) as test_client:
        yield test_client
