"""Clarity Validator — is the ticket written specifically enough to implement?

Hybrid: the qualitative judgement comes from an injected TextAnalyzer (an LLM
or anything else returning a ClarityAnalysis); the built-in heuristic is
used when nothing richer is configured.
"""

from typing import Optional

import structlog

from aec_validation.analysis.base import ClarityAnalysis, TextAnalyzer
from aec_validation.analysis.heuristic import HeuristicClarityAnalyzer
from aec_validation.models.ticket import Ticket
from aec_validation.validators.base import BaseValidator, ScoreCard
from aec_validation.validators.models import ValidatorType

logger = structlog.get_logger()


class ClarityValidator(BaseValidator):
    """Flags vague phrasing and ambiguous statements."""

    def __init__(
        self,
        analyzer: Optional[TextAnalyzer] = None,
        weight: float = 0.8,
        pass_threshold: float = 0.7,
    ):
        super().__init__(ValidatorType.CLARITY, weight, pass_threshold)
        self.analyzer = analyzer or HeuristicClarityAnalyzer()

    async def _score(self, ticket: Ticket) -> ScoreCard:
        issues: list[str] = []
        blockers: list[str] = []

        text = "\n".join([
            ticket.title,
            ticket.description or "",
            *ticket.acceptance_criteria,
            *ticket.assumptions,
        ])
        # Analyzers may return a ClarityAnalysis or a plain mapping with the same keys
        analysis = ClarityAnalysis.model_validate(await self.analyzer.analyze(text))

        if analysis.vague_phrases:
            examples = ", ".join(analysis.vague_phrases[:3])
            issues.append(f"Found {len(analysis.vague_phrases)} vague phrase(s): {examples}")

        if analysis.ambiguous_statements:
            issues.append(f"Found {len(analysis.ambiguous_statements)} ambiguous statement(s)")

        issues.extend(analysis.suggestions)

        if analysis.score < 0.4:
            blockers.append("Requirements are too vague to implement - needs significant clarification")

        logger.debug(
            "clarity_checked",
            analyzer=type(self.analyzer).__name__,
            characters=len(text),
            score=analysis.score,
        )

        return ScoreCard(score=analysis.score, issues=issues, blockers=blockers)

    def _message(self, score: float, passed: bool, issues: list[str], blockers: list[str]) -> str:
        if blockers:
            return f"Requirements lack clarity: {blockers[0]}"
        if passed and not issues:
            return "Requirements are clear and specific"
        if passed:
            return "Requirements are mostly clear but could be improved"
        return f"Requirements need clarification ({round(score * 100)}% clarity)"
