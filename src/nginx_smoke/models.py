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

"""Result models for smoke test runs."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, computed_field


class CheckStatus(str, Enum):
    """Outcome of a single check."""
    PASS = "pass"
    FAIL = "fail"


class CheckResult(BaseModel):
    """Result of running one check against the target."""
    name: str = Field(..., description="Short identifier of the check (e.g., http, rate_limit)")
    title: str = Field(..., description="Human-readable title printed before the check runs")
    status: CheckStatus = Field(..., description="Whether the check passed or failed")
    message: str = Field(..., description="One-line description of the outcome")
    hint: Optional[str] = Field(None, description="Extra line explaining a failure")
    details: Dict[str, Any] = Field(default_factory=dict, description="Check-specific measurements")
    duration_seconds: float = Field(default=0.0, ge=0, description="Wall time spent in the check")
    timestamp: datetime = Field(default_factory=datetime.now, description="When the check finished")

    @property
    def passed(self) -> bool:
        return self.status == CheckStatus.PASS


class SuiteReport(BaseModel):
    """Aggregated results of a smoke test run."""
    target_host: str = Field(..., description="Host the checks were run against")
    started_at: datetime = Field(default_factory=datetime.now, description="When the run started")
    finished_at: Optional[datetime] = Field(None, description="When the run finished")
    results: List[CheckResult] = Field(default_factory=list, description="Per-check results in run order")

    @computed_field
    @property
    def all_passed(self) -> bool:
        return bool(self.results) and all(result.passed for result in self.results)

    @computed_field
    @property
    def passed_count(self) -> int:
        return sum(1 for result in self.results if result.passed)

    @computed_field
    @property
    def failed_count(self) -> int:
        return len(self.results) - self.passed_count

    @property
    def exit_code(self) -> int:
        """Process exit code: 0 when every check passed, 1 otherwise."""
        return 0 if self.all_passed else 1
