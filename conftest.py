# conftest.py
import json
from typing import Any, AsyncGenerator, Callable, Dict, List, Optional, Union

import pytest
import pytest_asyncio
import requests
from httpx import ASGITransport, AsyncClient

from app.core.config import Settings
from app.main import app
from media.services.file_proxy_service import FileProxyService
from media.services.provider_registry import ProviderRegistry, build_default_registry
from shared import wiring


# ---- Fakes ------------------------------------------------------------------

class FakeResponse:
    """Just enough of requests.Response for the code under test."""

    def __init__(
        self,
        body: Union[str, bytes, dict, list, None] = "",
        status_code: int = 200,
        url: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        self._raw = body.encode("utf-8") if isinstance(body, str) else (body or b"")
        self.status_code = status_code
        self.url = url
        self.headers = dict(headers or {})
        self.encoding: Optional[str] = None
        self.closed = False

    @property
    def text(self) -> str:
        return self._raw.decode("utf-8", errors="replace")

    @property
    def is_redirect(self) -> bool:
        return "Location" in self.headers and self.status_code in (301, 302, 303, 307, 308)

    @property
    def content(self) -> bytes:
        return self._raw

    def json(self) -> Any:
        return json.loads(self.text)

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def iter_content(self, chunk_size: int = 1):
        for i in range(0, len(self._raw), chunk_size):
            yield self._raw[i:i + chunk_size]

    def close(self) -> None:
        self.closed = True


Route = Union[FakeResponse, Exception, Callable[..., FakeResponse]]


class FakeSession:
    """
    Stands in for requests.Session. Routes are keyed by URL; unknown URLs fail
    with ConnectionError like an unreachable host would. Every call is recorded.
    """

    def __init__(self) -> None:
        self.routes: Dict[str, Route] = {}
        self.calls: List[Dict[str, Any]] = []
        self.headers: Dict[str, str] = {}
        self.max_redirects = 30
        self.closed = False

    def route(self, url: str, response: Route) -> None:
        self.routes[url] = response

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        route = self.routes.get(url)
        if route is None:
            raise requests.ConnectionError(f"no route to {url}")
        if isinstance(route, Exception):
            raise route
        if callable(route):
            return route(method, url, **kwargs)
        if route.url is None:
            route.url = url
        return route

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        return self.request("POST", url, **kwargs)

    def close(self) -> None:
        self.closed = True

    # handy helpers used by tests
    def urls(self) -> List[str]:
        return [c["url"] for c in self.calls]


# ---- Fixtures -----------------------------------------------------------------

@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def registry() -> ProviderRegistry:
    # explicit settings so a RAPIDAPI_KEY in the environment does not change the chain
    return build_default_registry(Settings(rapidapi_key=None, provider_timeout_seconds=15))


@pytest.fixture
def override_wiring(fake_session: FakeSession, registry: ProviderRegistry):
    """
    Route every outbound call of the app through the fake session.
    """
    def _session_override():
        yield fake_session

    app.dependency_overrides[wiring.get_http_session] = _session_override
    app.dependency_overrides[wiring.get_provider_registry] = lambda: registry
    app.dependency_overrides[wiring.get_file_proxy_service] = lambda: FileProxyService(fake_session, timeout=45)
    try:
        yield
    finally:
        app.dependency_overrides.pop(wiring.get_http_session, None)
        app.dependency_overrides.pop(wiring.get_provider_registry, None)
        app.dependency_overrides.pop(wiring.get_file_proxy_service, None)


# ---- HTTP client -------------------------------------------------------------

@pytest_asyncio.fixture(scope="function")
async def client(override_wiring) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as c:
        yield c
