"""Context Alignment Validator — do the suggested file paths fit the repository?

Only meaningful when the ticket carries repository context; without it the
validator passes vacuously.
"""

import structlog

from aec_validation.models.ticket import Ticket
from aec_validation.validators.base import BaseValidator, ScoreCard
from aec_validation.validators.models import ValidatorType

logger = structlog.get_logger()


class ContextAlignmentValidator(BaseValidator):
    """Checks suggested repository paths for presence, format and coverage."""

    def __init__(self, weight: float = 0.7, pass_threshold: float = 0.7):
        super().__init__(ValidatorType.CONTEXT_ALIGNMENT, weight, pass_threshold)

    async def _score(self, ticket: Ticket) -> ScoreCard:
        issues: list[str] = []
        blockers: list[str] = []

        if ticket.repository_context is None:
            return ScoreCard(score=1.0)

        paths = ticket.repo_paths
        score = 0.8

        if not paths:
            issues.append("Repository context provided but no specific file paths suggested")
            score -= 0.2
        else:
            invalid = [p for p in paths if not self._is_valid_path(p)]
            if invalid:
                issues.append(f"{len(invalid)} path(s) have invalid format")
                score -= len(invalid) * 0.1

            if len(paths) >= 3:
                score += 0.2

            unknown = self._unknown_paths(ticket, [p for p in paths if self._is_valid_path(p)])
            if unknown:
                issues.append(
                    f"{len(unknown)} path(s) not found in the indexed code snapshot: "
                    f"{', '.join(unknown[:3])}"
                )

        logger.debug(
            "context_alignment_checked",
            repository=ticket.repository_context.repository_full_name,
            paths=len(paths),
        )

        return ScoreCard(score=self._clamp(score), issues=issues, blockers=blockers)

    @staticmethod
    def _is_valid_path(path: str) -> bool:
        """Relative, non-empty, and no parent-directory traversal."""
        if not path or not path.strip():
            return False
        if ".." in path:
            return False
        if path.startswith("/") or path.startswith("\\"):
            return False
        return True

    @staticmethod
    def _unknown_paths(ticket: Ticket, paths: list[str]) -> list[str]:
        """Valid paths missing from the code snapshot index, when one is attached."""
        snapshot = ticket.code_snapshot
        if snapshot is None or not snapshot.indexed_paths:
            return []
        indexed = set(snapshot.indexed_paths)
        return [p for p in paths if p not in indexed]

    def _message(self, score: float, passed: bool, issues: list[str], blockers: list[str]) -> str:
        if blockers:
            return f"Repository context alignment issues: {blockers[0]}"
        if passed and not issues:
            return "Suggested paths align well with repository context"
        if passed:
            return "Repository context mostly aligned with minor issues"
        return f"Repository context alignment needs improvement ({round(score * 100)}% aligned)"
