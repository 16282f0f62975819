"""Built-in clarity heuristic — used whenever no richer analyzer is configured."""

import re

from aec_validation.analysis.base import ClarityAnalysis

SPECIFICITY_PATTERN = re.compile(r"\b(must|should|will|when|then|given)\b", re.IGNORECASE)
DIGIT_PATTERN = re.compile(r"\d")


class HeuristicClarityAnalyzer:
    """Scores clarity from word count, numbers and specificity keywords.

    No I/O, no randomness; safe to share between concurrent validations.
    """

    BASE_SCORE = 0.5
    MIN_DETAILED_WORDS = 50

    async def analyze(self, text: str) -> ClarityAnalysis:
        word_count = len(text.split())
        score = self.BASE_SCORE

        if word_count > self.MIN_DETAILED_WORDS:
            score += 0.2
        if DIGIT_PATTERN.search(text):
            score += 0.15
        if SPECIFICITY_PATTERN.search(text):
            score += 0.15

        score = min(1.0, score)

        return ClarityAnalysis(
            score=score,
            suggestions=["Add more specific details and measurable outcomes"] if score < 0.7 else [],
        )
