# File: tests/conftest.py
"""Test configuration and a fake nginx deployment built on httpx.MockTransport."""

import os
from typing import Optional, Set

import httpx
import pytest

from nginx_smoke.config import Settings

# Set test environment variables
os.environ.update({
    "NGINX_HOST": "nginx",
    "LOG_LEVEL": "WARNING",
    "REPORT_FORMAT": "text",
})

HTML_PAGE = "<!DOCTYPE html>\n<html><head><title>Welcome to nginx!</title></head><body></body></html>"

_DEFAULT_PORTS = {"http": 80, "https": 443}


class FakeNginx:
    """Routes requests by port the way the nginx under test is configured.

    The HTTP port serves ``http_body``; once more than ``limit_after`` requests
    have hit it, it answers ``rate_limit_status``. Ports listed in ``down``
    refuse connections.
    """

    def __init__(
        self,
        http_status: int = 200,
        http_body: str = HTML_PAGE,
        https_status: int = 200,
        error_status: int = 403,
        limit_after: Optional[int] = 5,
        rate_limit_status: int = 503,
        down: Optional[Set[int]] = None,
    ):
        self.http_status = http_status
        self.http_body = http_body
        self.https_status = https_status
        self.error_status = error_status
        self.limit_after = limit_after
        self.rate_limit_status = rate_limit_status
        self.down = down or set()
        self.http_hits = 0
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        port = request.url.port or _DEFAULT_PORTS[request.url.scheme]

        if port in self.down:
            raise httpx.ConnectError("Connection refused", request=request)

        if request.url.scheme == "https" and port == 443:
            return httpx.Response(self.https_status, text="<html>secure</html>")
        if port == 80:
            self.http_hits += 1
            if self.limit_after is not None and self.http_hits > self.limit_after:
                return httpx.Response(self.rate_limit_status, text="<html>503 Service Temporarily Unavailable</html>")
            return httpx.Response(
                self.http_status,
                text=self.http_body,
                headers={"Content-Type": "text/html"},
            )
        if port == 8080:
            return httpx.Response(self.error_status, text="<html>403 Forbidden</html>")
        raise httpx.ConnectError(f"No route to port {port}", request=request)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def settings():
    """Settings matching the default deployment, without the inter-request sleep."""
    return Settings(rate_limit_interval=0)


@pytest.fixture
def fake_nginx():
    """A correctly configured fake deployment."""
    return FakeNginx()


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "asyncio: mark test as async"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as integration test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


@pytest.fixture
def make_nginx():
    """Factory for fake deployments with custom behaviour."""
    return FakeNginx
