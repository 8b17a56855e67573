"""Shared test fixtures and configuration."""

import httpx
import pytest

from ipv6request.cache import TTLCache
from ipv6request.services.bgpview import BGPViewClient
from ipv6request.services.lookups import LookupService
from ipv6request.services.retry import RetryPolicy
from ipv6request.settings import reset_settings_cache

BASE_URL = "https://bgpview.test"


class FakeClock:
    """Monotonic clock that only moves when a test says so."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Async sleep replacement that records the requested delays."""

    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


class StubAPI:
    """Path-keyed canned answers for ``httpx.MockTransport``.

    Each path holds a queue of responses (or exceptions to raise); the last
    item is repeated once the queue is down to one entry.
    """

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, path, *answers):
        self.routes[path] = list(answers)

    def calls_to(self, path):
        return [r for r in self.requests if r.url.path == path]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get(request.url.path)
        if not queue:
            return httpx.Response(404, json={"status": "error"})
        answer = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(answer, Exception):
            raise answer
        return httpx.Response(
            answer.status_code, headers=answer.headers, content=answer.content
        )


def ok(data):
    return httpx.Response(200, json={"status": "ok", "data": data})


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep settings from leaking between tests."""
    monkeypatch.setenv("BGPVIEW_BASE_URL", BASE_URL)
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def stub_api():
    return StubAPI()


@pytest.fixture
def make_service(stub_api, fake_clock, recording_sleep):
    """Build a LookupService wired to ``stub_api`` with fake time."""

    def _make(max_attempts: int = 3) -> LookupService:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(stub_api.handler))
        client = BGPViewClient(
            http_client,
            base_url=BASE_URL,
            retry_policy=RetryPolicy(max_attempts, sleep=recording_sleep),
        )
        return LookupService(
            client,
            ip_cache=TTLCache(clock=fake_clock, name="ip_cache"),
            prefix_cache=TTLCache(clock=fake_clock, name="prefix_cache"),
            details_cache=TTLCache(clock=fake_clock, name="details_cache"),
            ip_ttl=1800,
            prefix_ttl=3600,
            details_ttl=7200,
        )

    return _make


@pytest.fixture
def ok_response():
    return ok
