"""Validation metrics — bounded in-memory history of validation runs.

For production with multiple instances, export these records to a real
metrics backend instead of reading them from process memory.
"""

from collections import deque
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

import structlog
from pydantic import BaseModel, Field

from aec_validation.config import get_settings

if TYPE_CHECKING:
    from aec_validation.validators.models import ValidationReport

logger = structlog.get_logger()


class ValidatorScore(BaseModel):
    """One validator's contribution to a recorded run."""

    validator: str
    score: float
    passed: bool
    duration_ms: Optional[float] = None


class ValidationMetric(BaseModel):
    """Snapshot of a single validation run."""

    ticket_id: Optional[str] = None
    workspace_id: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    overall_score: float
    passed: bool
    validator_scores: list[ValidatorScore] = Field(default_factory=list)
    total_validators: int
    passed_validators: int
    failed_validators: int
    total_issues: int
    critical_issues: int
    duration_ms: float

    @classmethod
    def from_report(
        cls,
        report: "ValidationReport",
        ticket_id: Optional[str] = None,
        workspace_id: Optional[str] = None,
    ) -> "ValidationMetric":
        summary = report.summary
        return cls(
            ticket_id=ticket_id,
            workspace_id=workspace_id,
            overall_score=summary.overall_score,
            passed=summary.passed,
            validator_scores=[
                ValidatorScore(
                    validator=r.criterion.value,
                    score=r.score,
                    passed=r.passed,
                    duration_ms=r.duration_ms,
                )
                for r in report.results
            ],
            total_validators=summary.total_validators,
            passed_validators=summary.passed_validators,
            failed_validators=summary.failed_validators,
            total_issues=summary.total_issues,
            critical_issues=summary.critical_issues,
            duration_ms=report.duration_ms,
        )


class ValidatorStats(BaseModel):
    average_score: float = 0.0
    pass_rate: float = 0.0
    total_runs: int = 0


class ValidationMetrics:
    """Keeps the last ``max_metrics`` validation runs and answers aggregate queries."""

    def __init__(self, max_metrics: Optional[int] = None):
        self.max_metrics = max_metrics or get_settings().METRICS_MAX_RECORDS
        self._metrics: deque[ValidationMetric] = deque(maxlen=self.max_metrics)

    def __len__(self) -> int:
        return len(self._metrics)

    def record(self, metric: ValidationMetric) -> None:
        """Record a validation run, evicting the oldest when full."""
        self._metrics.append(metric)
        logger.info(
            "validation_metric_recorded",
            ticket_id=metric.ticket_id,
            workspace_id=metric.workspace_id,
            overall_score=round(metric.overall_score, 3),
            passed=metric.passed,
            duration_ms=metric.duration_ms,
            validators_passed=f"{metric.passed_validators}/{metric.total_validators}",
            total_issues=metric.total_issues,
            critical_issues=metric.critical_issues,
        )

    def recent(self, count: int = 10) -> list[ValidationMetric]:
        if count <= 0:
            return []
        return list(self._metrics)[-count:]

    def for_workspace(self, workspace_id: str) -> list[ValidationMetric]:
        return [m for m in self._metrics if m.workspace_id == workspace_id]

    def _select(self, workspace_id: Optional[str]) -> list[ValidationMetric]:
        return self.for_workspace(workspace_id) if workspace_id else list(self._metrics)

    def average_score(self, workspace_id: Optional[str] = None) -> float:
        metrics = self._select(workspace_id)
        if not metrics:
            return 0.0
        return sum(m.overall_score for m in metrics) / len(metrics)

    def pass_rate(self, workspace_id: Optional[str] = None) -> float:
        metrics = self._select(workspace_id)
        if not metrics:
            return 0.0
        return sum(1 for m in metrics if m.passed) / len(metrics)

    def average_duration(self, workspace_id: Optional[str] = None) -> float:
        metrics = self._select(workspace_id)
        if not metrics:
            return 0.0
        return sum(m.duration_ms for m in metrics) / len(metrics)

    def validator_stats(self, validator: str) -> ValidatorStats:
        """Average score and pass rate for one criterion across all recorded runs."""
        scores = [
            v for m in self._metrics for v in m.validator_scores if v.validator == validator
        ]
        if not scores:
            return ValidatorStats()
        return ValidatorStats(
            average_score=sum(v.score for v in scores) / len(scores),
            pass_rate=sum(1 for v in scores if v.passed) / len(scores),
            total_runs=len(scores),
        )

    def summary_stats(self, workspace_id: Optional[str] = None) -> dict:
        metrics = self._select(workspace_id)
        validator_names = sorted({v.validator for m in metrics for v in m.validator_scores})
        return {
            "total_validations": len(metrics),
            "average_score": self.average_score(workspace_id),
            "pass_rate": self.pass_rate(workspace_id),
            "average_duration_ms": self.average_duration(workspace_id),
            "validator_stats": {
                name: self.validator_stats(name).model_dump() for name in validator_names
            },
        }

    def clear(self) -> None:
        self._metrics.clear()
