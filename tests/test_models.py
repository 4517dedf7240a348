"""Tests for Pydantic result models."""

import json

import pytest
from pydantic import ValidationError

from nginx_smoke.models import CheckResult, CheckStatus, SuiteReport


def make_result(name="http", status=CheckStatus.PASS, message="ok"):
    return CheckResult(name=name, title=name.upper(), status=status, message=message)


class TestCheckResult:
    """Test CheckResult model."""

    def test_check_status_enum(self):
        assert CheckStatus.PASS == "pass"
        assert CheckStatus.FAIL == "fail"

    def test_defaults(self):
        result = make_result()

        assert result.passed is True
        assert result.hint is None
        assert result.details == {}
        assert result.duration_seconds == 0.0

    def test_failed_result(self):
        result = make_result(status=CheckStatus.FAIL, message="Expected status 200, got 500")

        assert result.passed is False

    def test_status_from_string(self):
        result = CheckResult(name="error", title="Error", status="fail", message="x")

        assert result.status == CheckStatus.FAIL

    def test_negative_duration_rejected(self):
        with pytest.raises(ValidationError):
            CheckResult(name="x", title="x", status="pass", message="x", duration_seconds=-1)


class TestSuiteReport:
    """Test SuiteReport aggregation."""

    def test_all_passed(self):
        report = SuiteReport(target_host="nginx", results=[make_result("http"), make_result("https")])

        assert report.all_passed is True
        assert report.passed_count == 2
        assert report.failed_count == 0
        assert report.exit_code == 0

    def test_one_failure_fails_run(self):
        report = SuiteReport(
            target_host="nginx",
            results=[make_result("http"), make_result("error", CheckStatus.FAIL)]
        )

        assert report.all_passed is False
        assert report.failed_count == 1
        assert report.exit_code == 1

    def test_empty_report_is_not_a_pass(self):
        report = SuiteReport(target_host="nginx")

        assert report.all_passed is False
        assert report.exit_code == 1

    def test_json_serialization(self):
        report = SuiteReport(target_host="nginx", results=[make_result()])

        data = json.loads(report.model_dump_json())

        assert data["all_passed"] is True
        assert data["passed_count"] == 1
        assert data["results"][0]["status"] == "pass"
        assert "exit_code" not in data
