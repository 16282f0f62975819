"""Base validator — abstract class implementing the Template Method pattern.

Each validator is a standalone, independently testable unit. The base class
owns the shared lifecycle (score → pass/fail → message → result) and each
concrete validator supplies only its scoring rules.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

import structlog

from aec_validation.models.ticket import Ticket
from aec_validation.validators.models import ConfigurationError, ValidationResult, ValidatorType

logger = structlog.get_logger()


@runtime_checkable
class Validator(Protocol):
    """Anything the engine can run against a ticket."""

    @property
    def criterion(self) -> ValidatorType: ...

    @property
    def weight(self) -> float: ...

    @property
    def pass_threshold(self) -> float: ...

    async def validate(self, ticket: Ticket) -> ValidationResult: ...


@dataclass
class ScoreCard:
    """Raw output of a validator's scoring rules."""

    score: float
    issues: list[str] = field(default_factory=list)
    blockers: list[str] = field(default_factory=list)


class BaseValidator(ABC):
    """Abstract base for all ticket validators.

    Contract:
        - validate() is deterministic for a given ticket snapshot
        - validate() never mutates the ticket or the validator
        - errors raised while scoring propagate; the engine isolates them
    """

    def __init__(self, criterion: ValidatorType, weight: float, pass_threshold: float):
        self._criterion = ValidatorType(criterion)
        self._weight = weight
        self._pass_threshold = pass_threshold
        self._validate_config()

    def _validate_config(self) -> None:
        if not 0.0 <= self._weight <= 1.0:
            raise ConfigurationError(
                f"Invalid weight {self._weight} for {self._criterion.value} validator"
            )
        if not 0.0 <= self._pass_threshold <= 1.0:
            raise ConfigurationError(
                f"Invalid pass_threshold {self._pass_threshold} for {self._criterion.value} validator"
            )

    @property
    def criterion(self) -> ValidatorType:
        return self._criterion

    @property
    def weight(self) -> float:
        return self._weight

    @property
    def pass_threshold(self) -> float:
        return self._pass_threshold

    @property
    def name(self) -> str:
        """Human-readable name for logging."""
        return type(self).__name__

    async def validate(self, ticket: Ticket) -> ValidationResult:
        """Score the ticket and wrap the outcome in a ValidationResult."""
        card = await self._score(ticket)
        score = card.score  # out-of-range scores are rejected by ValidationResult
        passed = score >= self._pass_threshold
        message = self._message(score, passed, card.issues, card.blockers)

        logger.debug(
            "validator_scored",
            validator=self.name,
            score=round(score, 3),
            passed=passed,
            issues=len(card.issues),
            blockers=len(card.blockers),
        )

        return ValidationResult(
            criterion=self._criterion,
            score=score,
            weight=self._weight,
            pass_threshold=self._pass_threshold,
            issues=tuple(card.issues),
            blockers=tuple(card.blockers),
            message=message,
        )

    @abstractmethod
    async def _score(self, ticket: Ticket) -> ScoreCard:
        """Run the criterion-specific rules.

        Args:
            ticket: Read-only ticket snapshot

        Returns:
            ScoreCard with a score in [0, 1] plus issue and blocker findings
        """
        ...

    def _message(self, score: float, passed: bool, issues: list[str], blockers: list[str]) -> str:
        """Build the result message. Override for criterion-specific wording."""
        percentage = round(score * 100)
        criterion = self._criterion.value

        if passed and not issues:
            return f"{criterion} validation passed with {percentage}% score"
        if passed:
            return f"{criterion} validation passed with {percentage}% score, but has {len(issues)} issue(s)"
        if blockers:
            return f"{criterion} validation failed ({percentage}%) with {len(blockers)} critical blocker(s)"
        return f"{criterion} validation failed with {percentage}% score"

    # ── Helper Methods ──

    @staticmethod
    def _clamp(value: float) -> float:
        return max(0.0, min(1.0, value))

    @staticmethod
    def _contains_any(text: str, keywords: list[str]) -> bool:
        """Check if text contains any of the keywords (case-insensitive)."""
        text_lower = text.lower()
        return any(kw.lower() in text_lower for kw in keywords)
