from typing import Callable, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from cwa_weather.cwa_client import CWAClient
from cwa_weather.main import app, get_client
from cwa_weather.settings import Settings, get_settings

BASE_URL = "https://opendata.test/api"

SLOTS = [
    ("2024-05-01 18:00:00", "2024-05-02 06:00:00"),
    ("2024-05-02 06:00:00", "2024-05-02 18:00:00"),
    ("2024-05-02 18:00:00", "2024-05-03 06:00:00"),
]

ELEMENT_VALUES = {
    "Wx": ["多雲", "晴時多雲", "多雲時陰"],
    "PoP": ["10", "20", "30"],
    "MinT": ["22", "23", "21"],
    "MaxT": ["28", "31", "27"],
    "CI": ["舒適", "悶熱", "舒適至悶熱"],
}


def make_payload(location: str = "臺北市", elements: Optional[Dict[str, List[str]]] = None,
                 empty: bool = False) -> dict:
    """Build a CWA F-C0032-001 style payload for a single location."""

    elements = ELEMENT_VALUES if elements is None else elements
    weather_elements = [
        {
            "elementName": name,
            "time": [
                {"startTime": start, "endTime": end, "parameter": {"parameterName": value}}
                for (start, end), value in zip(SLOTS, values)
            ],
        }
        for name, values in elements.items()
    ]
    locations = [] if empty else [{"locationName": location, "weatherElement": weather_elements}]
    return {
        "success": "true",
        "records": {"datasetDescription": "三十六小時天氣預報", "location": locations},
    }


class FakeCWA:
    """Records outbound requests and answers with a canned handler."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200, json=make_payload(request.url.params.get("locationName", "")))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def client(self, api_key: str = "test-key") -> CWAClient:
        return CWAClient(api_key=api_key, base_url=BASE_URL, timeout=5, transport=httpx.MockTransport(self))


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def fake_cwa():
    return FakeCWA()


@pytest.fixture
def settings():
    return Settings(cwa_api_key="test-key", cwa_api_base_url=BASE_URL, _env_file=None)


@pytest.fixture
def api(fake_cwa, settings):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_client] = lambda: fake_cwa.client(settings.cwa_api_key or "")
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
    app.dependency_overrides.clear()
