import pytest

from aec_validation.models.ticket import Ticket
from aec_validation.validators import ConsistencyValidator


@pytest.fixture
def validator():
    return ConsistencyValidator()


@pytest.mark.asyncio
async def test_consistent_ticket_scores_full(validator, well_formed_ticket):
    result = await validator.validate(well_formed_ticket)

    assert result.score == 1.0
    assert result.issues == ()
    assert result.message == "Requirements are internally consistent"


@pytest.mark.asyncio
async def test_contradictory_terms_across_criteria(validator):
    ticket = Ticket(
        title="Feature flag",
        acceptance_criteria=["Feature must always be enabled", "Feature should never show to users"],
    )
    result = await validator.validate(ticket)

    assert result.score == pytest.approx(0.8)
    assert result.issues == ('Potential contradiction: both "always" and "never" mentioned',)
    assert result.passed is True
    assert result.message == "Requirements are mostly consistent with minor conflicts"


@pytest.mark.asyncio
async def test_opposite_verbs_in_different_criteria(validator):
    ticket = Ticket(
        title="Exports",
        acceptance_criteria=["Admins can enable exports", "Users can disable exports"],
    )
    result = await validator.validate(ticket)

    assert result.score == pytest.approx(0.8)
    assert result.issues == ("AC 1 and AC 2 may be contradictory",)


@pytest.mark.asyncio
async def test_assumptions_are_searched(validator):
    ticket = Ticket(
        title="Sharing",
        acceptance_criteria=["Shared links are public"],
        assumptions=["Drafts stay private"],
    )
    result = await validator.validate(ticket)

    assert result.issues == ('Potential contradiction: both "public" and "private" mentioned',)


@pytest.mark.asyncio
async def test_many_contradictions_are_blocked(validator):
    ticket = Ticket(
        title="Public API",
        description="Endpoint is always public but never private",
        acceptance_criteria=["Auth token is required", "Rate limit is optional"],
    )
    result = await validator.validate(ticket)

    assert len(result.issues) == 3
    assert result.score == pytest.approx(0.4)
    assert result.blockers == ("Multiple contradictions detected - requirements must be reconciled",)
    assert result.message.startswith("Requirements contain contradictions: ")


@pytest.mark.asyncio
async def test_score_never_drops_below_zero(validator):
    ticket = Ticket(
        title="Always never public private required optional must read-only editable",
        acceptance_criteria=["enable show allow create", "disable hide prevent delete"],
    )
    result = await validator.validate(ticket)

    assert result.score == 0.0
