"""Text analyzers the clarity validator can delegate to."""

from aec_validation.analysis.base import AnalyzerError, ClarityAnalysis, TextAnalyzer
from aec_validation.analysis.heuristic import HeuristicClarityAnalyzer
from aec_validation.config import get_settings


def build_clarity_analyzer() -> TextAnalyzer:
    """Pick the analyzer named by ``Settings.CLARITY_ANALYZER``."""
    if get_settings().CLARITY_ANALYZER == "llm":
        from aec_validation.analysis.llm_analyzer import LLMClarityAnalyzer

        return LLMClarityAnalyzer()
    return HeuristicClarityAnalyzer()


__all__ = [
    "AnalyzerError",
    "ClarityAnalysis",
    "TextAnalyzer",
    "HeuristicClarityAnalyzer",
    "build_clarity_analyzer",
]
