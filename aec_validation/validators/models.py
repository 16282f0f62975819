"""Validation models — criteria, per-criterion results, summary and report structure.

All scoring is deterministic for a given ticket snapshot: same input → same
output, no randomness.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field, field_validator


class ValidatorType(str, Enum):
    """The seven fixed validation criteria."""

    COMPLETENESS = "completeness"
    TESTABILITY = "testability"
    CLARITY = "clarity"
    FEASIBILITY = "feasibility"
    CONSISTENCY = "consistency"
    CONTEXT_ALIGNMENT = "context_alignment"
    SCOPE = "scope"


class ConfigurationError(ValueError):
    """A validator or engine was configured with values outside their contract."""


class ValidatorTimeoutError(Exception):
    """A validator did not produce a result within the configured time budget."""


class ValidationResult(BaseModel):
    """Outcome of one validator run against one ticket snapshot."""

    criterion: ValidatorType
    score: float = Field(ge=0.0, le=1.0)
    weight: float = Field(ge=0.0, le=1.0)
    pass_threshold: float = Field(ge=0.0, le=1.0)
    issues: tuple[str, ...] = ()
    blockers: tuple[str, ...] = ()
    message: str
    error: Optional[str] = None            # Set only when the validator crashed
    duration_ms: Optional[float] = None

    model_config = {"frozen": True}

    @field_validator("message")
    @classmethod
    def _message_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Message cannot be empty")
        return value

    @computed_field
    @property
    def weighted_score(self) -> float:
        return self.score * self.weight

    @computed_field
    @property
    def passed(self) -> bool:
        return self.error is None and self.score >= self.pass_threshold

    def has_critical_issues(self) -> bool:
        """True when any blocker was found."""
        return len(self.blockers) > 0

    def to_plain_object(self) -> dict:
        """JSON-ready dict including the derived fields."""
        return self.model_dump(mode="json")

    @classmethod
    def failure(
        cls,
        criterion: ValidatorType,
        weight: float,
        pass_threshold: float,
        error: str,
        duration_ms: Optional[float] = None,
    ) -> "ValidationResult":
        """Result recorded for a validator that raised instead of scoring."""
        return cls(
            criterion=criterion,
            score=0.0,
            weight=weight,
            pass_threshold=pass_threshold,
            issues=("Validator encountered an error",),
            blockers=("Validation could not complete",),
            message=f"{ValidatorType(criterion).value} validation failed due to error",
            error=error or "unknown error",
            duration_ms=duration_ms,
        )


class ValidationSummary(BaseModel):
    """Aggregate view over a full set of per-criterion results."""

    overall_score: float = Field(ge=0.0, le=1.0)
    passed: bool
    total_validators: int
    passed_validators: int
    failed_validators: int
    critical_issues: int = Field(description="Results with at least one blocker")
    total_issues: int = Field(description="Non-blocker issues across all results")


class ValidationReport(BaseModel):
    """Complete validation report — results, summary and a human-readable verdict."""

    results: list[ValidationResult] = Field(default_factory=list)
    summary: ValidationSummary
    verdict: str = Field(default="", description="Human-readable verdict")
    duration_ms: float = 0.0

    @classmethod
    def build(
        cls,
        results: list[ValidationResult],
        summary: ValidationSummary,
        duration_ms: float = 0.0,
    ) -> "ValidationReport":
        """Build a report and its verdict from results and their summary."""
        score = summary.overall_score * 100
        blocked = [r.criterion.value for r in results if r.has_critical_issues()]

        if summary.passed and not blocked:
            verdict = f"PASS — Ticket is ready (score: {score:.0f}/100)."
        elif summary.passed:
            verdict = (
                f"PASS — Ticket score {score:.0f}/100 but {len(blocked)} criterion(s) "
                f"report blockers: {', '.join(blocked)}."
            )
        elif blocked:
            verdict = (
                f"FAIL — {len(blocked)} criterion(s) report blockers ({', '.join(blocked)}). "
                f"Score: {score:.0f}/100."
            )
        else:
            verdict = f"FAIL — Score {score:.0f}/100 is below the readiness threshold."

        return cls(
            results=list(results),
            summary=summary,
            verdict=verdict,
            duration_ms=round(duration_ms, 2),
        )

    def blocked_criteria(self) -> set[str]:
        """Criteria whose result carries at least one blocker."""
        return {r.criterion.value for r in self.results if r.has_critical_issues()}
