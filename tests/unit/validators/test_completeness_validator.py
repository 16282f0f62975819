import pytest

from aec_validation.models.ticket import Ticket, TicketType
from aec_validation.validators import CompletenessValidator


@pytest.fixture
def validator():
    return CompletenessValidator()


class TestCompletenessValidator:

    def test_defaults(self, validator):
        assert validator.weight == 1.0
        assert validator.pass_threshold == 0.9

    @pytest.mark.asyncio
    async def test_minimal_ticket_is_blocked(self, validator, minimal_ticket):
        result = await validator.validate(minimal_ticket)

        assert result.score == pytest.approx(0.25)
        assert result.passed is False
        assert result.blockers == (
            "Ticket type not detected (feature/bug/refactor/docs)",
            "No acceptance criteria defined",
        )
        assert "Title is very short, consider adding more context" in result.issues
        assert "No description or assumptions - adds helpful context" in result.issues
        assert result.message.startswith("Ticket is incomplete: Ticket type not detected")

    @pytest.mark.asyncio
    async def test_well_formed_ticket_without_repository_info(self, validator, well_formed_ticket):
        result = await validator.validate(well_formed_ticket)

        assert result.score == pytest.approx(0.85)
        assert result.passed is False
        assert result.issues == ()
        assert result.blockers == ()
        assert result.message == "Ticket needs more detail (85% complete)"

    @pytest.mark.asyncio
    async def test_repository_info_completes_the_ticket(
        self, validator, well_formed_ticket, repository_context
    ):
        ticket = well_formed_ticket.model_copy(update={
            "repo_paths": ("src/auth/oauth.py",),
            "repository_context": repository_context,
        })
        result = await validator.validate(ticket)

        assert result.score == pytest.approx(1.0)
        assert result.passed is True
        assert result.message == "Ticket is complete with all required sections"

    @pytest.mark.asyncio
    async def test_missing_title_is_a_blocker(self, validator):
        ticket = Ticket(title="", type=TicketType.BUG, acceptance_criteria=["Returns 404"])
        result = await validator.validate(ticket)

        assert "Title is missing or too short (minimum 3 characters)" in result.blockers

    @pytest.mark.asyncio
    async def test_single_criterion_is_an_issue(self, validator):
        ticket = Ticket(
            title="Add CSV export to reports",
            type=TicketType.FEATURE,
            acceptance_criteria=["Export button downloads a CSV"],
            assumptions=["Reports fit in memory"],
        )
        result = await validator.validate(ticket)

        assert "Only 1 acceptance criterion - consider adding more detail" in result.issues
        # 0.25 + 0.15 + 0.15 + 0.15 + 0.05
        assert result.score == pytest.approx(0.75)
        assert result.message == "Ticket needs more detail (75% complete)"
