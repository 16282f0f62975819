"""Testability Validator — can QA verify each acceptance criterion?

Works per criterion: measurable vocabulary earns credit, vague vocabulary
costs credit, and Given/When/Then or When/Then narratives earn a bonus.
"""

import structlog

from aec_validation.models.ticket import Ticket
from aec_validation.validators.base import BaseValidator, ScoreCard
from aec_validation.validators.models import ValidatorType
from aec_validation.validators.reference_data import (
    MEASURABLE_KEYWORDS,
    TESTABLE_TICKET_TYPES,
    VAGUE_WORDS,
)

logger = structlog.get_logger()


class TestabilityValidator(BaseValidator):
    """Checks that acceptance criteria describe observable, measurable outcomes."""

    def __init__(self, weight: float = 0.9, pass_threshold: float = 0.8):
        super().__init__(ValidatorType.TESTABILITY, weight, pass_threshold)

    async def _score(self, ticket: Ticket) -> ScoreCard:
        issues: list[str] = []
        blockers: list[str] = []
        criteria = ticket.acceptance_criteria

        if not criteria:
            blockers.append("No acceptance criteria to test against")
            return ScoreCard(score=0.0, issues=issues, blockers=blockers)

        measurable_count = 0
        vague_count = 0
        narrative_count = 0

        for criterion in criteria:
            if self._contains_any(criterion, MEASURABLE_KEYWORDS):
                measurable_count += 1
            if self._contains_any(criterion, VAGUE_WORDS):
                vague_count += 1
            if self._has_narrative_shape(criterion.lower()):
                narrative_count += 1

        score = 0.0

        # ── 1. Measurable language ──
        measurable_ratio = measurable_count / len(criteria)
        if measurable_ratio >= 0.8:
            score += 0.4
        elif measurable_ratio >= 0.5:
            score += 0.25
            issues.append("Some acceptance criteria lack measurable language")
        else:
            score += 0.1
            issues.append("Most acceptance criteria are not measurable")

        # ── 2. Vague language ──
        if vague_count > 0:
            issues.append(f"{vague_count} AC(s) contain vague words that are hard to test")
            score -= vague_count * 0.05

        # ── 3. Expected-behaviour narratives ──
        if narrative_count > 0:
            score += min(0.3, narrative_count * 0.1)
        else:
            issues.append('ACs could benefit from "Given-When-Then" or "When-Then" format')

        # ── 4. Naturally testable ticket types ──
        ticket_type = ticket.type.value if ticket.type else None
        score += 0.2 if ticket_type in TESTABLE_TICKET_TYPES else 0.1

        # ── 5. Detailed description ──
        if ticket.description and len(ticket.description) > 50:
            score += 0.1

        score = self._clamp(score)
        if score < 0.4:
            blockers.append("Acceptance criteria are not testable - add measurable outcomes")

        logger.debug(
            "testability_checked",
            acceptance_criteria=len(criteria),
            measurable=measurable_count,
            vague=vague_count,
            narratives=narrative_count,
        )

        return ScoreCard(score=score, issues=issues, blockers=blockers)

    @staticmethod
    def _has_narrative_shape(text: str) -> bool:
        """When/Then or Given/When phrasing in a lower-cased criterion."""
        return ("when" in text and "then" in text) or ("given" in text and "when" in text)

    def _message(self, score: float, passed: bool, issues: list[str], blockers: list[str]) -> str:
        if blockers:
            return f"Ticket is not testable: {'; '.join(blockers)}"
        if passed and not issues:
            return "Acceptance criteria are clear and testable"
        if passed:
            return f"Ticket is testable but could be clearer: {'; '.join(issues)}"
        return f"Acceptance criteria need more measurable outcomes ({round(score * 100)}% testable)"
