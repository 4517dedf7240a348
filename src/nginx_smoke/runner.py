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

"""Sequential runner for the smoke test checks."""

import time
from datetime import datetime
from typing import List, Optional

import httpx

from . import __version__
from .checks import DEFAULT_CHECKS, Check, CheckContext, CheckFailedError
from .config import Settings
from .logging_config import error_tracker, get_logger, log_request, log_response
from .models import CheckResult, CheckStatus, SuiteReport
from .reporting import ConsoleReporter, Reporter


class SmokeTestRunner:
    """Runs every check in order and collects the results."""

    def __init__(
        self,
        settings: Settings,
        reporter: Optional[Reporter] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        checks: Optional[List[Check]] = None
    ):
        """Initialize the runner.

        Args:
            settings: Target host, ports and probe parameters
            reporter: Receives progress and results; defaults to a ConsoleReporter
            transport: Transport used by every HTTP client (tests pass httpx.MockTransport)
            checks: Checks to run, in order; defaults to DEFAULT_CHECKS
        """
        self.settings = settings
        self.reporter = reporter or ConsoleReporter()
        self.transport = transport
        self.checks = checks if checks is not None else DEFAULT_CHECKS
        self.logger = get_logger(__name__, target=settings.nginx_host)

    def client_factory(self, timeout: Optional[float], verify: bool = True) -> httpx.AsyncClient:
        """Build a fresh client; each check owns its client for its whole run.

        ``timeout=None`` disables timeouts entirely; it is passed explicitly
        because httpx otherwise applies its own 5 second default.
        """
        return httpx.AsyncClient(
            timeout=timeout,
            verify=verify,
            transport=self.transport,
            headers={"User-Agent": f"nginx-smoke/{__version__}"},
            event_hooks={"request": [log_request], "response": [log_response]},
        )

    async def run_check(self, check: Check) -> CheckResult:
        """Run one check, converting every failure into a failed result."""
        title = check.render_title(self.settings)
        ctx = CheckContext(self.settings, self.client_factory, self.reporter.check_progress)

        self.logger.info("check_started", check=check.name)
        start_time = time.time()

        try:
            message, details = await check.run(ctx)
            result = CheckResult(
                name=check.name,
                title=title,
                status=CheckStatus.PASS,
                message=message,
                details=details,
            )
        except CheckFailedError as e:
            result = CheckResult(
                name=check.name,
                title=title,
                status=CheckStatus.FAIL,
                message=e.message,
                hint=e.hint,
                details=e.details,
            )
        except Exception as e:
            error_id = error_tracker.track_error(
                e,
                context={"check": check.name},
                user_message=f"Check {check.name} crashed"
            )
            result = CheckResult(
                name=check.name,
                title=title,
                status=CheckStatus.FAIL,
                message=f"Unexpected error: {e}",
                details={"error_id": error_id, "error_type": type(e).__name__},
            )

        result.duration_seconds = time.time() - start_time

        if result.passed:
            self.logger.info("check_passed", check=check.name, duration=result.duration_seconds)
        else:
            self.logger.warning(
                "check_failed",
                check=check.name,
                reason=result.message,
                duration=result.duration_seconds
            )
        return result

    async def run_all(self) -> SuiteReport:
        """Run every check sequentially; a failing check never stops the rest."""
        report = SuiteReport(target_host=self.settings.nginx_host)
        self.reporter.suite_started(report)

        for index, check in enumerate(self.checks, start=1):
            self.reporter.check_started(index, check.render_title(self.settings))
            result = await self.run_check(check)
            report.results.append(result)
            self.reporter.check_finished(result)

        report.finished_at = datetime.now()
        self.logger.info(
            "suite_finished",
            passed=report.passed_count,
            failed=report.failed_count,
            all_passed=report.all_passed
        )
        self.reporter.suite_finished(report)
        return report


async def run_smoke_tests(
    settings: Settings,
    reporter: Optional[Reporter] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> SuiteReport:
    """
    Run the smoke test suite and return the report.

    Args:
        settings: Smoke test settings
        reporter: Optional reporter (ConsoleReporter by default)
        transport: Optional httpx transport shared by all clients

    Returns:
        The completed SuiteReport
    """
    runner = SmokeTestRunner(settings, reporter=reporter, transport=transport)
    return await runner.run_all()
