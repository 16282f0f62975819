"""LLM-backed clarity analyzer with retry logic and tolerant JSON parsing.

Optional collaborator for the clarity validator. The validator works without
it; this analyzer only adds a qualitative reading of vague and ambiguous
wording when an OpenAI key is configured.
"""

import json
import re
import time
from typing import Any, Optional

import structlog
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from aec_validation.analysis.base import AnalyzerError, ClarityAnalysis
from aec_validation.config import get_settings

logger = structlog.get_logger()

SYSTEM_PROMPT = """You are a senior QA lead reviewing a software ticket before it is handed to an engineer.

Judge how CLEAR the ticket is: could an engineer implement it and a tester verify it
without asking follow-up questions?

ALWAYS respond with a valid JSON object (no markdown, no explanation outside JSON):

{
  "score": 0.0,
  "vague_phrases": ["Exact phrases from the ticket that are vague"],
  "ambiguous_statements": ["Statements that can be read more than one way"],
  "suggestions": ["Concrete rewrites or missing details, one per entry"]
}

Scoring guide:
- 0.9-1.0: specific, measurable, nothing left to interpretation
- 0.7-0.9: clear with minor gaps
- 0.4-0.7: important details missing or vague
- 0.0-0.4: too vague to implement"""


def _strip_code_fences(text: str) -> str:
    cleaned = text.strip()
    cleaned = re.sub(r"^```(?:json)?", "", cleaned)
    cleaned = re.sub(r"```$", "", cleaned)
    return cleaned.strip()


def _remove_trailing_commas(text: str) -> str:
    return re.sub(r",\s*([}\]])", r"\1", text)


def _first_json_object(text: str) -> Optional[str]:
    """Slice out the first balanced {...} block, ignoring braces inside strings."""
    start = text.find("{")
    if start < 0:
        return None
    depth, in_string, escaped = 0, False, False
    for i in range(start, len(text)):
        ch = text[i]
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == '"':
            in_string = not in_string
        elif not in_string and ch == "{":
            depth += 1
        elif not in_string and ch == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return None


def parse_json_response(text: str) -> dict:
    """Parse a model response into a dict, repairing common LLM formatting slips.

    Raises:
        AnalyzerError: if no attempt yields a JSON object
    """
    cleaned = _strip_code_fences(text)
    extracted = _first_json_object(cleaned)
    candidates = [cleaned, _remove_trailing_commas(cleaned)]
    if extracted:
        candidates.append(_remove_trailing_commas(extracted))

    for attempt, candidate in enumerate(candidates, start=1):
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError as e:
            logger.debug("clarity_json_parse_failed", attempt=attempt, error=str(e))
            continue
        if isinstance(parsed, dict):
            return parsed

    logger.error(
        "clarity_json_unparseable",
        response_length=len(text),
        response_preview=cleaned[:500],
    )
    raise AnalyzerError("Clarity analyzer returned a response that is not a JSON object")


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if str(item).strip()]


def _normalise_score(value: Any) -> float:
    try:
        score = float(value)
    except (TypeError, ValueError) as e:
        raise AnalyzerError(f"Clarity analyzer returned a non-numeric score: {value!r}") from e
    if 1.0 < score <= 100.0:
        score /= 100.0  # percentage instead of fraction
    return max(0.0, min(1.0, score))


class LLMClarityAnalyzer:
    """Asks a chat model for a structured clarity judgement."""

    def __init__(
        self,
        model_name: Optional[str] = None,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
        llm: Any = None,
    ):
        settings = get_settings()
        self.model_name = model_name or settings.CLARITY_MODEL
        self.temperature = settings.CLARITY_TEMPERATURE if temperature is None else temperature
        self.max_output_tokens = max_output_tokens or settings.CLARITY_MAX_OUTPUT_TOKENS
        self._llm = llm

    @property
    def llm(self):
        """Lazy-initialize the chat model client."""
        if self._llm is None:
            self._llm = self._create_llm()
        return self._llm

    def _create_llm(self):
        settings = get_settings()
        return ChatOpenAI(
            model=self.model_name,
            api_key=settings.OPENAI_API_KEY,
            temperature=self.temperature,
            max_tokens=self.max_output_tokens,
            model_kwargs={"response_format": {"type": "json_object"}},
        )

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        retry=retry_if_exception_type((Exception,)),
        reraise=True,
        before_sleep=lambda retry_state: logger.warning(
            "clarity_llm_retry",
            attempt=retry_state.attempt_number,
            wait=retry_state.next_action.sleep,
        ),
    )
    async def _call_llm(self, text: str) -> str:
        messages = [
            SystemMessage(content=SYSTEM_PROMPT),
            HumanMessage(content=f"Ticket to review:\n\n{text}"),
        ]
        response = await self.llm.ainvoke(messages)
        return response.content

    async def analyze(self, text: str) -> ClarityAnalysis:
        start_time = time.perf_counter()
        try:
            content = await self._call_llm(text)
        except Exception as e:
            logger.error("clarity_llm_failed", model=self.model_name, error=str(e))
            raise AnalyzerError(f"Clarity analysis failed: {e}") from e

        parsed = parse_json_response(content)
        analysis = ClarityAnalysis(
            score=_normalise_score(parsed.get("score")),
            vague_phrases=_string_list(parsed.get("vague_phrases")),
            ambiguous_statements=_string_list(parsed.get("ambiguous_statements")),
            suggestions=_string_list(parsed.get("suggestions")),
        )

        logger.info(
            "clarity_llm_completed",
            model=self.model_name,
            score=analysis.score,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return analysis
