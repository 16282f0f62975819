"""Scope Validator — is this one ticket's worth of work?"""

import structlog

from aec_validation.models.ticket import Ticket
from aec_validation.validators.base import BaseValidator, ScoreCard
from aec_validation.validators.models import ValidatorType
from aec_validation.validators.reference_data import BROAD_SCOPE_PATTERNS

logger = structlog.get_logger()

IDEAL_CRITERIA_RANGE = (2, 6)
BROAD_CRITERIA_COUNT = 8
SPLIT_CRITERIA_COUNT = 12
MAX_REPO_PATHS = 10


class ScopeValidator(BaseValidator):
    """Judges scope from criteria count, broad-scope language and path count."""

    def __init__(self, weight: float = 0.6, pass_threshold: float = 0.6):
        super().__init__(ValidatorType.SCOPE, weight, pass_threshold)

    async def _score(self, ticket: Ticket) -> ScoreCard:
        issues: list[str] = []
        blockers: list[str] = []
        score = 0.7
        ac_count = len(ticket.acceptance_criteria)

        if ac_count == 0:
            blockers.append("No acceptance criteria - cannot assess scope")
            return ScoreCard(score=0.0, issues=issues, blockers=blockers)

        # ── 1. Acceptance criteria count ──
        if ac_count == 1:
            issues.append("Single acceptance criterion - scope may be too narrow or needs more detail")
            score -= 0.2

        if ac_count > BROAD_CRITERIA_COUNT:
            issues.append(
                f"Large number of acceptance criteria ({ac_count} > {BROAD_CRITERIA_COUNT}) - "
                "too many for one ticket, consider breaking into multiple tickets"
            )
            score -= 0.3
            if ac_count > SPLIT_CRITERIA_COUNT:
                blockers.append("Scope too broad - must be split into multiple tickets")

        low, high = IDEAL_CRITERIA_RANGE
        if low <= ac_count <= high:
            score += 0.3

        # ── 2. Broad-scope language ──
        text = ticket.combined_text()
        broad_matches = sum(1 for p in BROAD_SCOPE_PATTERNS if p.search(text))
        for _ in range(broad_matches):
            issues.append("Language suggests broad scope - consider narrowing")
            score -= 0.15

        # ── 3. Number of affected paths ──
        if len(ticket.repo_paths) > MAX_REPO_PATHS:
            issues.append(f"Many file paths affected (>{MAX_REPO_PATHS}) - scope may be too broad")
            score -= 0.1

        logger.debug(
            "scope_checked",
            acceptance_criteria=ac_count,
            broad_language=broad_matches,
            repo_paths=len(ticket.repo_paths),
        )

        return ScoreCard(score=self._clamp(score), issues=issues, blockers=blockers)

    def _message(self, score: float, passed: bool, issues: list[str], blockers: list[str]) -> str:
        if blockers:
            return f"Scope issues: {blockers[0]}"
        if passed and not issues:
            return "Ticket scope is appropriate for a single ticket"
        if passed:
            return "Scope is acceptable but could be refined"
        return f"Scope needs adjustment ({round(score * 100)}% appropriate)"
