"""End-to-end runs of the default validator set against realistic tickets."""

import pytest

from aec_validation import Ticket, TicketType, ValidatorType
from aec_validation.validators import ValidationEngine
from tests.fakes import DEFAULT_WEIGHTS, FailingValidator

TOTAL_WEIGHT = 5.5


def by_criterion(results):
    return {r.criterion: r for r in results}


class TestMinimalTicket:

    @pytest.mark.asyncio
    async def test_minimal_ticket_fails(self, engine, minimal_ticket):
        results = await engine.validate(minimal_ticket)
        summary = engine.get_validation_summary(results)
        scores = by_criterion(results)

        assert [r.criterion for r in results] == list(ValidatorType)
        assert scores[ValidatorType.COMPLETENESS].score == pytest.approx(0.25)
        assert scores[ValidatorType.TESTABILITY].score == 0.0
        assert scores[ValidatorType.CLARITY].score == pytest.approx(0.5)
        assert scores[ValidatorType.FEASIBILITY].score == pytest.approx(0.9)
        assert scores[ValidatorType.CONSISTENCY].score == 1.0
        assert scores[ValidatorType.CONTEXT_ALIGNMENT].score == 1.0
        assert scores[ValidatorType.SCOPE].score == 0.0

        assert summary.overall_score == pytest.approx(2.78 / TOTAL_WEIGHT)
        assert summary.passed is False
        assert summary.critical_issues == 3

    @pytest.mark.asyncio
    async def test_minimal_ticket_report(self, engine, minimal_ticket):
        report = await engine.run(minimal_ticket)

        assert report.verdict.startswith("FAIL — 3 criterion(s) report blockers")
        assert report.blocked_criteria() == {"completeness", "testability", "scope"}


class TestWellFormedTicket:

    @pytest.mark.asyncio
    async def test_well_formed_ticket_passes(self, engine, well_formed_ticket):
        results = await engine.validate(well_formed_ticket)
        summary = engine.get_validation_summary(results)
        scores = by_criterion(results)

        assert scores[ValidatorType.COMPLETENESS].score == pytest.approx(0.85)
        assert scores[ValidatorType.TESTABILITY].score == pytest.approx(0.7)
        assert scores[ValidatorType.CLARITY].score == pytest.approx(1.0)
        assert scores[ValidatorType.SCOPE].score == pytest.approx(1.0)
        assert summary.overall_score == pytest.approx(5.01 / TOTAL_WEIGHT)
        assert summary.passed is True
        assert summary.critical_issues == 0

    @pytest.mark.asyncio
    async def test_summary_counts_are_consistent(self, engine, well_formed_ticket):
        results = await engine.validate(well_formed_ticket)
        summary = engine.get_validation_summary(results)

        assert summary.total_validators == len(ValidatorType)
        assert summary.passed_validators + summary.failed_validators == summary.total_validators
        assert summary.passed_validators == sum(1 for r in results if r.passed)
        assert summary.total_issues == sum(len(r.issues) for r in results)

    @pytest.mark.asyncio
    async def test_weighted_scores_use_default_weights(self, engine, well_formed_ticket):
        results = await engine.validate(well_formed_ticket)

        for r in results:
            weight, threshold = DEFAULT_WEIGHTS[r.criterion]
            assert r.weight == weight
            assert r.pass_threshold == threshold
            assert r.weighted_score == pytest.approx(r.score * weight)

    @pytest.mark.asyncio
    async def test_validation_is_idempotent(self, engine, well_formed_ticket):
        first = await engine.validate(well_formed_ticket)
        second = await engine.validate(well_formed_ticket)

        strip = lambda rs: [r.model_dump(exclude={"duration_ms"}) for r in rs]
        assert strip(first) == strip(second)


class TestProblemTickets:

    @pytest.mark.asyncio
    async def test_contradictory_ticket(self, engine):
        ticket = Ticket(
            title="Public API",
            description="Endpoint is always public but never private",
            type=TicketType.FEATURE,
            acceptance_criteria=["Auth token is required", "Rate limit is optional"],
        )
        results = by_criterion(await engine.validate(ticket))
        consistency = results[ValidatorType.CONSISTENCY]

        assert consistency.score == pytest.approx(0.4)
        assert consistency.has_critical_issues()
        assert consistency.passed is False

    @pytest.mark.asyncio
    async def test_too_many_criteria(self, engine):
        ticket = Ticket(
            title="Billing overhaul",
            type=TicketType.FEATURE,
            acceptance_criteria=[f"Invoice rule {n} is applied" for n in range(15)],
        )
        results = by_criterion(await engine.validate(ticket))

        scope = results[ValidatorType.SCOPE]
        assert scope.score == pytest.approx(0.4)
        assert any("many" in issue for issue in scope.issues)
        assert scope.has_critical_issues()

        feasibility = results[ValidatorType.FEASIBILITY]
        assert feasibility.score == pytest.approx(0.8)


class TestFaultInjection:

    @pytest.mark.asyncio
    async def test_crashing_validator_does_not_abort_batch(self, default_validators, well_formed_ticket):
        validators = [
            FailingValidator(ValidatorType.TESTABILITY) if v.criterion is ValidatorType.TESTABILITY else v
            for v in default_validators
        ]
        engine = ValidationEngine(validators)
        results = await engine.validate(well_formed_ticket)
        summary = engine.get_validation_summary(results)
        scores = by_criterion(results)

        testability = scores[ValidatorType.TESTABILITY]
        assert testability.score == 0.0
        assert testability.error is not None
        assert testability.blockers == ("Validation could not complete",)
        assert scores[ValidatorType.CLARITY].score == pytest.approx(1.0)
        # 0.63 from testability is lost but its weight stays in the denominator
        assert summary.overall_score == pytest.approx((5.01 - 0.63) / TOTAL_WEIGHT)
        assert summary.critical_issues == 1
