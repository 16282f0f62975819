"""Text analysis contract used by the clarity validator."""

from typing import Any, Mapping, Protocol, Union, runtime_checkable

from pydantic import BaseModel, Field


class AnalyzerError(Exception):
    """A text analyzer could not produce a usable analysis."""


class ClarityAnalysis(BaseModel):
    """Qualitative judgement of how clearly a ticket is written."""

    score: float = Field(ge=0.0, le=1.0)
    vague_phrases: list[str] = Field(default_factory=list)
    ambiguous_statements: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


@runtime_checkable
class TextAnalyzer(Protocol):
    """Anything that can judge the clarity of a block of ticket text.

    The result is either a ClarityAnalysis or a mapping with its keys.
    """

    async def analyze(self, text: str) -> Union[ClarityAnalysis, Mapping[str, Any]]: ...
