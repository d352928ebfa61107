"""Shared fixtures: isolate the read cache and keep routing off the network."""

import pytest
import requests

from campus_delivery.services import routing
from campus_delivery.services.cache import read_cache


@pytest.fixture(autouse=True)
def clear_read_cache():
    read_cache.clear()
    yield
    read_cache.clear()


@pytest.fixture(autouse=True)
def unreachable_routing_service(monkeypatch):
    def _unreachable(*args, **kwargs):
        raise requests.ConnectionError("routing service unreachable in tests")

    monkeypatch.setattr(routing.requests, "get", _unreachable)
