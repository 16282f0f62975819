"""Ticket Validator — multi-criteria validation layer for generated tickets (AECs).

Usage:
    from aec_validation.validators import get_validation_engine

    engine = get_validation_engine()
    results = await engine.validate(ticket)
    summary = engine.get_validation_summary(results)
    if not summary.passed:
        # Send the ticket back for clarification with the blockers
"""

from aec_validation.validators.engine import ValidationEngine, get_validation_engine
from aec_validation.validators.base import BaseValidator, ScoreCard, Validator
from aec_validation.validators.models import (
    ConfigurationError,
    ValidationReport,
    ValidationResult,
    ValidationSummary,
    ValidatorTimeoutError,
    ValidatorType,
)
from aec_validation.validators.completeness_validator import CompletenessValidator
from aec_validation.validators.testability_validator import TestabilityValidator
from aec_validation.validators.clarity_validator import ClarityValidator
from aec_validation.validators.feasibility_validator import FeasibilityValidator
from aec_validation.validators.consistency_validator import ConsistencyValidator
from aec_validation.validators.context_alignment_validator import ContextAlignmentValidator
from aec_validation.validators.scope_validator import ScopeValidator

__all__ = [
    "ValidationEngine",
    "get_validation_engine",
    "BaseValidator",
    "ScoreCard",
    "Validator",
    "ConfigurationError",
    "ValidationReport",
    "ValidationResult",
    "ValidationSummary",
    "ValidatorTimeoutError",
    "ValidatorType",
    "CompletenessValidator",
    "TestabilityValidator",
    "ClarityValidator",
    "FeasibilityValidator",
    "ConsistencyValidator",
    "ContextAlignmentValidator",
    "ScopeValidator",
]
