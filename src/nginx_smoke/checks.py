"""
Nginx Smoke - smoke tests for a running nginx deployment

Copyright (C) 2025 Nginx Smoke Contributors

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""

"""Checks run against the nginx deployment.

Each check returns ``(message, details)`` when it passes and raises
``CheckFailedError`` otherwise. Transport errors fail a check immediately;
nothing is retried.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

import httpx

from .config import Settings
from .logging_config import get_logger

logger = get_logger(__name__)

CheckOutcome = Tuple[str, Dict[str, Any]]
ClientFactory = Callable[..., httpx.AsyncClient]


class CheckFailedError(Exception):
    """Raised when a check does not observe the expected behaviour."""

    def __init__(self, message: str, hint: Optional[str] = None, **details):
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.details = details


class CheckContext:
    """Everything a check needs to talk to the target."""

    def __init__(
        self,
        settings: Settings,
        client_factory: ClientFactory,
        progress: Optional[Callable[[str], None]] = None
    ):
        self.settings = settings
        self.client_factory = client_factory
        self._progress = progress

    def progress(self, message: str) -> None:
        """Report an intermediate step of a running check."""
        if self._progress is not None:
            self._progress(message)


async def _get(client: httpx.AsyncClient, url: str) -> httpx.Response:
    try:
        return await client.get(url)
    except httpx.HTTPError as e:
        raise CheckFailedError(f"Could not connect to {url}: {e}", url=url) from e


def _expect_status(response: httpx.Response, expected: int) -> None:
    if response.status_code != expected:
        raise CheckFailedError(
            f"Expected status {expected}, got {response.status_code}",
            status_code=response.status_code,
        )


async def check_http_server(ctx: CheckContext) -> CheckOutcome:
    """GET the plain HTTP port and expect 200 with an HTML body."""
    url = ctx.settings.http_url

    async with ctx.client_factory(timeout=ctx.settings.request_timeout) as client:
        try:
            async with client.stream("GET", url) as response:
                _expect_status(response, 200)
                try:
                    body = await response.aread()
                except httpx.HTTPError as e:
                    raise CheckFailedError(f"Could not read response body: {e}") from e
        except httpx.HTTPError as e:
            raise CheckFailedError(f"Could not connect to {url}: {e}", url=url) from e

    text = response.text
    if "<html" not in text and "<HTML" not in text:
        raise CheckFailedError("Response does not appear to be HTML", body_length=len(body))

    return "Received 200 OK with HTML content", {
        "url": url,
        "status_code": response.status_code,
        "body_length": len(body),
    }


async def check_https_server(ctx: CheckContext) -> CheckOutcome:
    """GET the TLS port and expect 200. Certificates are not verified by default."""
    url = ctx.settings.https_url

    async with ctx.client_factory(
        timeout=ctx.settings.request_timeout,
        verify=ctx.settings.verify_tls
    ) as client:
        response = await _get(client, url)

    _expect_status(response, 200)
    return "HTTPS server responding with 200 OK", {
        "url": url,
        "status_code": response.status_code,
        "http_version": response.http_version,
    }


async def check_error_server(ctx: CheckContext) -> CheckOutcome:
    """GET the error port and expect 403."""
    url = ctx.settings.error_url

    async with ctx.client_factory(timeout=ctx.settings.request_timeout) as client:
        response = await _get(client, url)

    _expect_status(response, 403)
    return "Error server returning 403 Forbidden", {
        "url": url,
        "status_code": response.status_code,
    }


async def check_rate_limiting(ctx: CheckContext) -> CheckOutcome:
    """Send rapid requests to the HTTP port and expect at least one rejection."""
    settings = ctx.settings
    url = settings.http_url
    limited_status = settings.rate_limit_status

    success_count = 0
    rate_limit_count = 0
    other_count = 0

    ctx.progress(f"Sending {settings.rate_limit_requests} rapid requests...")
    async with ctx.client_factory(timeout=settings.rate_limit_timeout) as client:
        for i in range(settings.rate_limit_requests):
            try:
                response = await client.get(url)
            except httpx.HTTPError as e:
                raise CheckFailedError(
                    f"Request {i + 1} failed: {e}",
                    successful=success_count,
                    rate_limited=rate_limit_count,
                ) from e

            if response.status_code == 200:
                success_count += 1
            elif response.status_code == limited_status:
                rate_limit_count += 1
            else:
                other_count += 1

            await asyncio.sleep(settings.rate_limit_interval)

    details = {
        "url": url,
        "requests": settings.rate_limit_requests,
        "successful": success_count,
        "rate_limited": rate_limit_count,
        "other": other_count,
    }
    logger.info("rate_limit_probe_finished", **details)

    if rate_limit_count == 0:
        raise CheckFailedError(
            "Rate limiting not triggered (all requests succeeded)",
            hint=f"Expected at least one {limited_status} response",
            **details,
        )

    return (
        f"Rate limiting working ({success_count} successful, {rate_limit_count} rate-limited)",
        details,
    )


class Check:
    """A named check with a title rendered from the settings."""

    def __init__(
        self,
        name: str,
        title: str,
        run: Callable[[CheckContext], Awaitable[CheckOutcome]]
    ):
        self.name = name
        self.title = title
        self.run = run

    def render_title(self, settings: Settings) -> str:
        return self.title.format(**settings.model_dump())


DEFAULT_CHECKS: List[Check] = [
    Check("http", "HTTP Server (port {http_port})", check_http_server),
    Check("https", "HTTPS Server (port {https_port})", check_https_server),
    Check("error", "Error Server (port {error_port})", check_error_server),
    Check("rate_limit", "Rate Limiting", check_rate_limiting),
]
