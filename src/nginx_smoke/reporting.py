"""Plain-text and JSON reporters for smoke test runs."""

import sys
from typing import Optional, Protocol, TextIO

from .models import CheckResult, SuiteReport


class Reporter(Protocol):
    """Receives progress and results from a smoke test run."""

    def suite_started(self, report: SuiteReport) -> None: ...

    def check_started(self, index: int, title: str) -> None: ...

    def check_progress(self, message: str) -> None: ...

    def check_finished(self, result: CheckResult) -> None: ...

    def suite_finished(self, report: SuiteReport) -> None: ...


class ConsoleReporter:
    """Prints human-readable progress and results as the checks run."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout

    def _write(self, line: str = "") -> None:
        print(line, file=self.stream, flush=True)

    def suite_started(self, report: SuiteReport) -> None:
        self._write("=== Nginx Test Suite ===")
        self._write(f"Target host: {report.target_host}")
        self._write()

    def check_started(self, index: int, title: str) -> None:
        self._write(f"[Test {index}] {title}")

    def check_progress(self, message: str) -> None:
        self._write(f"  {message}")

    def check_finished(self, result: CheckResult) -> None:
        label = "PASS" if result.passed else "FAIL"
        self._write(f"  {label}: {result.message}")
        if result.hint:
            self._write(f"     {result.hint}")

    def suite_finished(self, report: SuiteReport) -> None:
        self._write()
        self._write("=== Test Summary ===")
        if report.all_passed:
            self._write("All tests passed!")
        else:
            self._write(f"Some tests failed ({report.failed_count} of {len(report.results)})")


class JsonReporter:
    """Prints nothing while running, then the whole report as one JSON document."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout

    def suite_started(self, report: SuiteReport) -> None:
        pass

    def check_started(self, index: int, title: str) -> None:
        pass

    def check_progress(self, message: str) -> None:
        pass

    def check_finished(self, result: CheckResult) -> None:
        pass

    def suite_finished(self, report: SuiteReport) -> None:
        print(report.model_dump_json(indent=2), file=self.stream, flush=True)


def create_reporter(report_format: str = "text", stream: Optional[TextIO] = None) -> Reporter:
    """Build the reporter for the configured output format."""
    if report_format == "json":
        return JsonReporter(stream)
    if report_format == "text":
        return ConsoleReporter(stream)
    raise ValueError(f"Unknown report format: {report_format}")
