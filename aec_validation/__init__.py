"""AEC Validation — multi-criteria readiness checks for generated ticket specifications."""

from aec_validation.models.ticket import ApiSnapshot, CodeSnapshot, RepositoryContext, Ticket, TicketType
from aec_validation.validators import (
    ValidationEngine,
    ValidationReport,
    ValidationResult,
    ValidationSummary,
    ValidatorType,
    get_validation_engine,
)

__version__ = "0.1.0"

__all__ = [
    "ApiSnapshot",
    "CodeSnapshot",
    "RepositoryContext",
    "Ticket",
    "TicketType",
    "ValidationEngine",
    "ValidationReport",
    "ValidationResult",
    "ValidationSummary",
    "ValidatorType",
    "get_validation_engine",
]
