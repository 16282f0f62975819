"""Validation Engine — runs all validators concurrently and aggregates their results.

This is the main entry point for ticket validation. It fans out to the seven
registered validators, isolates individual validator failures, and computes
the weighted overall score.

Usage:
    engine = ValidationEngine()
    results = await engine.validate(ticket)
    summary = engine.get_validation_summary(results)
"""

import asyncio
import inspect
import time
from functools import lru_cache
from typing import Awaitable, Optional, Sequence

import structlog

from aec_validation.analysis import build_clarity_analyzer
from aec_validation.config import get_settings
from aec_validation.models.ticket import Ticket
from aec_validation.services.metrics import ValidationMetric, ValidationMetrics
from aec_validation.validators.base import Validator
from aec_validation.validators.models import (
    ConfigurationError,
    ValidationReport,
    ValidationResult,
    ValidationSummary,
    ValidatorTimeoutError,
    ValidatorType,
)

# Import all validators
from aec_validation.validators.completeness_validator import CompletenessValidator
from aec_validation.validators.testability_validator import TestabilityValidator
from aec_validation.validators.clarity_validator import ClarityValidator
from aec_validation.validators.feasibility_validator import FeasibilityValidator
from aec_validation.validators.consistency_validator import ConsistencyValidator
from aec_validation.validators.context_alignment_validator import ContextAlignmentValidator
from aec_validation.validators.scope_validator import ScopeValidator

logger = structlog.get_logger()


class ValidationEngine:
    """Orchestrates all validators and produces per-criterion results plus a summary.

    Design principles:
        - Deterministic: same ticket → same scores
        - Isolated: one crashing validator never aborts the batch
        - Stable: output order always matches registration order
        - Stateless: safe to call validate() concurrently
    """

    def __init__(
        self,
        validators: Optional[Sequence[Validator]] = None,
        *,
        pass_threshold: Optional[float] = None,
        validator_timeout: Optional[float] = None,
        metrics: Optional[ValidationMetrics] = None,
    ):
        """Initialize with the default validators or a custom registration.

        Args:
            validators: Exactly one validator per criterion. If None, uses all defaults.
            pass_threshold: Overall score needed to pass. Defaults to settings.
            validator_timeout: Seconds a single validator may run. Defaults to
                settings; None disables the bound.
            metrics: Optional collector that records every run() call.
        """
        settings = get_settings()
        self.validators: tuple[Validator, ...] = tuple(
            self._default_validators() if validators is None else validators
        )
        self.pass_threshold = (
            settings.OVERALL_PASS_THRESHOLD if pass_threshold is None else pass_threshold
        )
        self.validator_timeout = (
            settings.VALIDATOR_TIMEOUT_SECONDS if validator_timeout is None else validator_timeout
        )
        self.metrics = metrics
        self._check_registration()

    @staticmethod
    def _default_validators() -> list[Validator]:
        """Create the default validator set in registration order."""
        return [
            CompletenessValidator(),
            TestabilityValidator(),
            ClarityValidator(analyzer=build_clarity_analyzer()),
            FeasibilityValidator(),
            ConsistencyValidator(),
            ContextAlignmentValidator(),
            ScopeValidator(),
        ]

    def _check_registration(self) -> None:
        if not 0.0 <= self.pass_threshold <= 1.0:
            raise ConfigurationError(f"Invalid overall pass_threshold {self.pass_threshold}")
        if self.validator_timeout is not None and self.validator_timeout <= 0:
            raise ConfigurationError(f"Invalid validator_timeout {self.validator_timeout}")

        criteria = [ValidatorType(v.criterion) for v in self.validators]
        duplicates = sorted({c.value for c in criteria if criteria.count(c) > 1})
        if duplicates:
            raise ConfigurationError(f"Duplicate validators registered for: {', '.join(duplicates)}")

        missing = sorted(c.value for c in ValidatorType if c not in criteria)
        if missing:
            raise ConfigurationError(f"No validator registered for: {', '.join(missing)}")

    async def validate(self, ticket: Ticket) -> list[ValidationResult]:
        """Run every validator against the ticket concurrently.

        Args:
            ticket: Read-only ticket snapshot

        Returns:
            One result per registered validator, in registration order
        """
        start_time = time.perf_counter()
        logger.info(
            "validation_started",
            ticket_id=ticket.id,
            validators=len(self.validators),
        )

        results = await asyncio.gather(*(self._run_validator(v, ticket) for v in self.validators))

        summary = self.get_validation_summary(results)
        logger.info(
            "validation_complete",
            ticket_id=ticket.id,
            overall_score=round(summary.overall_score, 3),
            passed=summary.passed,
            validators_passed=f"{summary.passed_validators}/{summary.total_validators}",
            critical_issues=summary.critical_issues,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )

        return list(results)

    async def _run_validator(self, validator: Validator, ticket: Ticket) -> ValidationResult:
        """Run one validator, converting any error into a failing result."""
        criterion = ValidatorType(validator.criterion)
        v_start = time.perf_counter()
        try:
            if inspect.iscoroutinefunction(validator.validate):
                result = await self._bounded(validator.validate(ticket), criterion)
            else:
                # Blocking validators run in a worker thread, under the same timeout
                result = await self._bounded(asyncio.to_thread(validator.validate, ticket), criterion)
                if inspect.isawaitable(result):
                    result = await self._bounded(result, criterion)
            if not isinstance(result, ValidationResult):
                raise TypeError(f"{criterion.value} validator returned {type(result).__name__}")
        except Exception as e:
            duration_ms = round((time.perf_counter() - v_start) * 1000, 2)
            logger.error(
                "validator_failed",
                criterion=criterion.value,
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=duration_ms,
            )
            # Don't let one broken validator kill the whole batch
            return ValidationResult.failure(
                criterion=criterion,
                weight=validator.weight,
                pass_threshold=validator.pass_threshold,
                error=f"{type(e).__name__}: {e}",
                duration_ms=duration_ms,
            )

        duration_ms = round((time.perf_counter() - v_start) * 1000, 2)
        logger.debug(
            "validator_completed",
            criterion=criterion.value,
            score=round(result.score, 3),
            passed=result.passed,
            duration_ms=duration_ms,
        )
        return result.model_copy(update={"duration_ms": duration_ms})

    async def _bounded(self, pending: Awaitable[ValidationResult], criterion: ValidatorType) -> ValidationResult:
        if self.validator_timeout is None:
            return await pending
        try:
            return await asyncio.wait_for(pending, self.validator_timeout)
        except asyncio.TimeoutError as e:
            raise ValidatorTimeoutError(
                f"{criterion.value} validator exceeded {self.validator_timeout}s"
            ) from e

    def get_validation_summary(self, results: Sequence[ValidationResult]) -> ValidationSummary:
        """Aggregate per-criterion results into summary statistics."""
        overall_score = self._calculate_overall_score(results)
        passed_validators = sum(1 for r in results if r.passed)

        return ValidationSummary(
            overall_score=overall_score,
            passed=overall_score >= self.pass_threshold,
            total_validators=len(results),
            passed_validators=passed_validators,
            failed_validators=len(results) - passed_validators,
            critical_issues=sum(1 for r in results if r.has_critical_issues()),
            total_issues=sum(len(r.issues) for r in results),
        )

    @staticmethod
    def _calculate_overall_score(results: Sequence[ValidationResult]) -> float:
        """Weighted mean: sum(score * weight) / sum(weight)."""
        if not results:
            return 0.0
        total_weight = sum(r.weight for r in results)
        if total_weight == 0:
            return 0.0
        weighted_sum = sum(r.weighted_score for r in results)
        return max(0.0, min(1.0, weighted_sum / total_weight))

    async def run(self, ticket: Ticket) -> ValidationReport:
        """Validate, summarize, and build a report with a verdict."""
        start_time = time.perf_counter()
        results = await self.validate(ticket)
        summary = self.get_validation_summary(results)
        report = ValidationReport.build(
            results,
            summary,
            duration_ms=(time.perf_counter() - start_time) * 1000,
        )

        if self.metrics is not None:
            self.metrics.record(
                ValidationMetric.from_report(
                    report, ticket_id=ticket.id, workspace_id=ticket.workspace_id
                )
            )

        return report

    async def validate_with_context(
        self,
        ticket: Ticket,
        previous_report: Optional[ValidationReport] = None,
    ) -> ValidationReport:
        """Validate with awareness of the previous round (for revision loops).

        Checks whether the same criteria still report blockers after a revision.

        Args:
            ticket: Current ticket snapshot
            previous_report: Report from the previous validation round

        Returns:
            ValidationReport whose verdict names any persisting blockers
        """
        report = await self.run(ticket)

        if previous_report:
            recurring = sorted(previous_report.blocked_criteria() & report.blocked_criteria())
            if recurring:
                logger.warning("blockers_persist", ticket_id=ticket.id, criteria=recurring)
                report = report.model_copy(update={
                    "verdict": (
                        f"{report.verdict} WARNING: {len(recurring)} criterion(s) still report "
                        f"blockers after revision: {', '.join(recurring)}"
                    )
                })

        return report


@lru_cache
def get_validation_engine() -> ValidationEngine:
    """Default engine built from settings."""
    return ValidationEngine()
