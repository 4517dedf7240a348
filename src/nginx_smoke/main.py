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

"""Command-line entry point for the nginx smoke tests."""

import asyncio
import sys

from pydantic import ValidationError

from .config import get_settings
from .logging_config import configure_structured_logging, get_logger
from .reporting import create_reporter
from .runner import run_smoke_tests

logger = get_logger(__name__)


def main() -> int:
    """Run every check once and return the process exit code."""
    try:
        settings = get_settings()
    except (ValidationError, ValueError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    configure_structured_logging(
        log_level=settings.log_level,
        enable_json=settings.log_json,
    )
    logger.info(
        "smoke_tests_starting",
        host=settings.nginx_host,
        http_port=settings.http_port,
        https_port=settings.https_port,
        error_port=settings.error_port,
    )

    reporter = create_reporter(settings.report_format)
    report = asyncio.run(run_smoke_tests(settings, reporter=reporter))
    return report.exit_code


if __name__ == "__main__":
    sys.exit(main())
