import pytest

from aec_validation.models.ticket import CodeSnapshot, Ticket
from aec_validation.validators import ContextAlignmentValidator


@pytest.fixture
def validator():
    return ContextAlignmentValidator()


@pytest.mark.asyncio
async def test_without_repository_context_passes_vacuously(validator, minimal_ticket):
    result = await validator.validate(minimal_ticket)

    assert result.score == 1.0
    assert result.passed is True
    assert result.issues == ()
    assert result.message == "Suggested paths align well with repository context"


@pytest.mark.asyncio
async def test_context_without_paths(validator, repository_context):
    ticket = Ticket(title="Fix login", repository_context=repository_context)
    result = await validator.validate(ticket)

    assert result.score == pytest.approx(0.6)
    assert result.issues == ("Repository context provided but no specific file paths suggested",)
    assert result.passed is False


@pytest.mark.asyncio
async def test_invalid_paths_are_penalised(validator, repository_context):
    ticket = Ticket(
        title="Fix login",
        repository_context=repository_context,
        repo_paths=["src/a.py", "../etc/passwd", "/abs/path"],
    )
    result = await validator.validate(ticket)

    # 0.8 - 2 * 0.1 + 0.2 for three suggested paths
    assert result.score == pytest.approx(0.8)
    assert result.issues == ("2 path(s) have invalid format",)


@pytest.mark.asyncio
async def test_single_valid_path_keeps_base_score(validator, repository_context):
    ticket = Ticket(
        title="Fix login",
        repository_context=repository_context,
        repo_paths=["src/auth/login.ts"],
    )
    result = await validator.validate(ticket)

    assert result.score == pytest.approx(0.8)
    assert result.passed is True
    assert result.message == "Suggested paths align well with repository context"


@pytest.mark.asyncio
async def test_paths_missing_from_snapshot_are_reported(validator, repository_context):
    ticket = Ticket(
        title="Fix login",
        repository_context=repository_context,
        code_snapshot=CodeSnapshot(
            commit_sha="a" * 40,
            indexed_paths=("src/auth/login.ts", "src/auth/session.ts"),
        ),
        repo_paths=["src/auth/login.ts", "src/auth/session.ts", "src/auth/ghost.ts"],
    )
    result = await validator.validate(ticket)

    assert result.score == pytest.approx(1.0)
    assert result.issues == ("1 path(s) not found in the indexed code snapshot: src/auth/ghost.ts",)
    assert result.message == "Repository context mostly aligned with minor issues"


@pytest.mark.parametrize(
    "path, valid",
    [
        ("src/app.py", True),
        ("", False),
        ("   ", False),
        ("src/../secrets", False),
        ("/etc/hosts", False),
        ("\\windows\\system32", False),
    ],
)
def test_path_format(path, valid):
    assert ContextAlignmentValidator._is_valid_path(path) is valid
