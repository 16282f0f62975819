"""Completeness Validator — are all required ticket sections present and long enough?"""

import structlog

from aec_validation.models.ticket import Ticket
from aec_validation.validators.base import BaseValidator, ScoreCard
from aec_validation.validators.models import ValidatorType

logger = structlog.get_logger()


class CompletenessValidator(BaseValidator):
    """Awards partial credit per section; missing title, type or criteria are blockers."""

    def __init__(self, weight: float = 1.0, pass_threshold: float = 0.9):
        super().__init__(ValidatorType.COMPLETENESS, weight, pass_threshold)

    async def _score(self, ticket: Ticket) -> ScoreCard:
        issues: list[str] = []
        blockers: list[str] = []
        score = 0.0

        # ── 1. Title (required) ──
        title_length = len(ticket.title or "")
        if title_length < 3:
            blockers.append("Title is missing or too short (minimum 3 characters)")
        elif title_length < 10:
            issues.append("Title is very short, consider adding more context")
            score += 0.15
        else:
            score += 0.25

        # ── 2. Ticket type (required) ──
        if ticket.type is None:
            blockers.append("Ticket type not detected (feature/bug/refactor/docs)")
        else:
            score += 0.15

        # ── 3. Acceptance criteria (required) ──
        ac_count = len(ticket.acceptance_criteria)
        if ac_count == 0:
            blockers.append("No acceptance criteria defined")
        elif ac_count < 2:
            issues.append("Only 1 acceptance criterion - consider adding more detail")
            score += 0.15
        elif ac_count < 3:
            score += 0.2
        else:
            score += 0.25

        # ── 4. Description or assumptions (recommended) ──
        has_description = bool(ticket.description and ticket.description.strip())
        has_assumptions = len(ticket.assumptions) > 0
        if not has_description and not has_assumptions:
            issues.append("No description or assumptions - adds helpful context")
            score += 0.05
        else:
            score += 0.15

        # ── 5. Repository paths (optional) ──
        score += 0.1 if ticket.repo_paths else 0.05

        # ── 6. Repository context (optional) ──
        if ticket.repository_context is not None:
            score += 0.1

        logger.debug(
            "completeness_checked",
            title_length=title_length,
            ticket_type=ticket.type.value if ticket.type else None,
            acceptance_criteria=ac_count,
            has_description=has_description,
            has_assumptions=has_assumptions,
        )

        return ScoreCard(score=self._clamp(score), issues=issues, blockers=blockers)

    def _message(self, score: float, passed: bool, issues: list[str], blockers: list[str]) -> str:
        if blockers:
            return f"Ticket is incomplete: {'; '.join(blockers)}"
        if passed and not issues:
            return "Ticket is complete with all required sections"
        if passed:
            return f"Ticket is complete but could be improved: {'; '.join(issues)}"
        return f"Ticket needs more detail ({round(score * 100)}% complete)"
