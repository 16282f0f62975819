"""Engine configuration via environment variables."""

from typing import Literal, Optional

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Validation engine settings loaded from environment variables."""

    # Logging
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    # Engine
    OVERALL_PASS_THRESHOLD: float = 0.7
    VALIDATOR_TIMEOUT_SECONDS: Optional[float] = None  # None = wait as long as it takes

    # Clarity analysis
    CLARITY_ANALYZER: Literal["heuristic", "llm"] = "heuristic"
    OPENAI_API_KEY: str = ""
    CLARITY_MODEL: str = "gpt-4o-mini"
    CLARITY_TEMPERATURE: float = 0.0
    CLARITY_MAX_OUTPUT_TOKENS: int = 1024

    # Metrics
    METRICS_MAX_RECORDS: int = 1000

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
