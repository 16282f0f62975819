"""Feasibility Validator — catches requirements no real system can meet."""

import structlog

from aec_validation.models.ticket import Ticket
from aec_validation.validators.base import BaseValidator, ScoreCard
from aec_validation.validators.models import ValidatorType
from aec_validation.validators.reference_data import IMPOSSIBILITY_PATTERNS

logger = structlog.get_logger()

MAX_REASONABLE_CRITERIA = 10


class FeasibilityValidator(BaseValidator):
    """Assumes feasible, then subtracts for impossible claims and scope creep."""

    def __init__(self, weight: float = 0.7, pass_threshold: float = 0.7):
        super().__init__(ValidatorType.FEASIBILITY, weight, pass_threshold)

    async def _score(self, ticket: Ticket) -> ScoreCard:
        issues: list[str] = []
        blockers: list[str] = []
        text = ticket.combined_text()
        score = 0.9

        matched = [p for p in IMPOSSIBILITY_PATTERNS if p.search(text)]
        for pattern in matched:
            score -= 0.3
            issues.append(f"Potentially unrealistic requirement detected: {pattern.pattern}")

        if len(ticket.acceptance_criteria) > MAX_REASONABLE_CRITERIA:
            score -= 0.1
            issues.append("Large number of acceptance criteria may indicate overly broad scope")

        if score < 0.5:
            blockers.append("Requirements contain technical impossibilities or unrealistic expectations")

        logger.debug(
            "feasibility_checked",
            unrealistic_patterns=len(matched),
            acceptance_criteria=len(ticket.acceptance_criteria),
        )

        return ScoreCard(score=self._clamp(score), issues=issues, blockers=blockers)

    def _message(self, score: float, passed: bool, issues: list[str], blockers: list[str]) -> str:
        if blockers:
            return f"Requirements are not feasible: {blockers[0]}"
        if passed and not issues:
            return "Requirements appear technically feasible"
        if passed:
            return "Requirements are feasible but may have concerns"
        return f"Requirements may not be feasible ({round(score * 100)}% feasibility)"
