from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from nearby_events.api.deps import get_events_service
from nearby_events.api.main import create_app
from nearby_events.providers.events.wordpress import WordPressEventsProvider
from nearby_events.services.events_lookup import build_events_service


class DirectoryStub:
    """Serves canned directory payloads and records what was asked for."""

    def __init__(self) -> None:
        self.status_code = 200
        self.payload = {
            "location": {"latitude": 40.7, "longitude": -74.0, "description": "New York"},
            "events": [
                {"type": "meetup", "title": "WordPress NYC", "date": "2099-05-13 19:00:00"},
                {"type": "wordcamp", "title": "WordCamp US", "date": "2099-08-20 09:00:00"},
            ],
        }
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)


@pytest.fixture()
def directory():
    return DirectoryStub()


@pytest.fixture()
def api_client(directory):
    provider = WordPressEventsProvider(transport=httpx.MockTransport(directory))
    service = build_events_service(directory=provider)
    app = create_app(service=service)
    app.dependency_overrides[get_events_service] = lambda: service
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
