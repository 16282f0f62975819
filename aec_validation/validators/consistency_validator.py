"""Consistency Validator — detects internal contradictions within a ticket.

Two checks over lower-cased text:
    1. Term pairs that should never both appear in one ticket
    2. Opposite verbs split across two different acceptance criteria
"""

from itertools import combinations

import structlog

from aec_validation.models.ticket import Ticket
from aec_validation.validators.base import BaseValidator, ScoreCard
from aec_validation.validators.models import ValidatorType
from aec_validation.validators.reference_data import CONTRADICTORY_TERMS, OPPOSITE_VERBS

logger = structlog.get_logger()

PENALTY_PER_CONTRADICTION = 0.2
MAX_TOLERATED_CONTRADICTIONS = 2


class ConsistencyValidator(BaseValidator):
    """Counts contradictions; each one costs a fixed share of the score."""

    def __init__(self, weight: float = 0.8, pass_threshold: float = 0.7):
        super().__init__(ValidatorType.CONSISTENCY, weight, pass_threshold)

    async def _score(self, ticket: Ticket) -> ScoreCard:
        issues: list[str] = []
        blockers: list[str] = []

        flat_text = ticket.combined_text(include_assumptions=True).lower()
        contradictions = 0

        # ── 1. Contradictory terms anywhere in the ticket ──
        for first, second in CONTRADICTORY_TERMS:
            if first in flat_text and second in flat_text:
                contradictions += 1
                issues.append(f'Potential contradiction: both "{first}" and "{second}" mentioned')

        # ── 2. Opposite verbs across acceptance criteria ──
        criteria = [ac.lower() for ac in ticket.acceptance_criteria]
        for (i, left), (j, right) in combinations(enumerate(criteria), 2):
            if self._are_opposed(left, right):
                contradictions += 1
                issues.append(f"AC {i + 1} and AC {j + 1} may be contradictory")

        score = max(0.0, 1.0 - contradictions * PENALTY_PER_CONTRADICTION)

        if contradictions > MAX_TOLERATED_CONTRADICTIONS:
            blockers.append("Multiple contradictions detected - requirements must be reconciled")

        logger.debug("consistency_checked", contradictions=contradictions)

        return ScoreCard(score=score, issues=issues, blockers=blockers)

    @staticmethod
    def _are_opposed(left: str, right: str) -> bool:
        """True when one criterion uses a verb and the other uses its opposite."""
        return any(
            (a in left and b in right) or (b in left and a in right)
            for a, b in OPPOSITE_VERBS
        )

    def _message(self, score: float, passed: bool, issues: list[str], blockers: list[str]) -> str:
        if blockers:
            return f"Requirements contain contradictions: {blockers[0]}"
        if passed and not issues:
            return "Requirements are internally consistent"
        if passed:
            return "Requirements are mostly consistent with minor conflicts"
        return f"Requirements have contradictions ({round(score * 100)}% consistent)"
