"""
Shared pytest fixtures for the validation engine tests.

The engine is built with the heuristic clarity analyzer so no test
touches the network.
"""

import pytest

from aec_validation.analysis.heuristic import HeuristicClarityAnalyzer
from aec_validation.config import get_settings
from aec_validation.models.ticket import RepositoryContext, Ticket, TicketType
from aec_validation.validators import (
    ClarityValidator,
    CompletenessValidator,
    ConsistencyValidator,
    ContextAlignmentValidator,
    FeasibilityValidator,
    ScopeValidator,
    TestabilityValidator as Testability,
    ValidationEngine,
)


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate tests from any CLARITY_ANALYZER / threshold set in the shell."""
    for key in ("CLARITY_ANALYZER", "OVERALL_PASS_THRESHOLD", "VALIDATOR_TIMEOUT_SECONDS"):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def default_validators():
    return [
        CompletenessValidator(),
        Testability(),
        ClarityValidator(analyzer=HeuristicClarityAnalyzer()),
        FeasibilityValidator(),
        ConsistencyValidator(),
        ContextAlignmentValidator(),
        ScopeValidator(),
    ]


@pytest.fixture
def engine(default_validators):
    return ValidationEngine(default_validators)


@pytest.fixture
def minimal_ticket():
    return Ticket(id="aec_minimal", workspace_id="ws_test", title="Fix bug")


@pytest.fixture
def well_formed_ticket():
    return Ticket(
        id="aec_oauth",
        workspace_id="ws_test",
        title="Implement user authentication with OAuth",
        description="Users need to be able to log in using Google OAuth 2.0",
        type=TicketType.FEATURE,
        acceptance_criteria=[
            'When user clicks "Login with Google", they should be redirected to Google OAuth',
            "When OAuth succeeds, user session should be created with JWT token",
            "When user accesses protected route, system should validate JWT token",
        ],
        assumptions=["Google OAuth credentials are configured", "HTTPS is available"],
    )


@pytest.fixture
def repository_context():
    return RepositoryContext(
        repository_full_name="acme/web-app",
        branch_name="main",
        commit_sha="a" * 40,
    )
