"""Ticket snapshot models — the read-only input to the validation engine.

A ticket (AEC) is produced and owned by the caller. Validators only read it;
the models are frozen so a snapshot cannot change while validators run.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class TicketType(str, Enum):
    """Declared ticket type."""

    FEATURE = "feature"
    BUG = "bug"
    TASK = "task"
    REFACTOR = "refactor"
    DOCS = "docs"


class RepositoryContext(BaseModel):
    """Repository and branch the ticket was generated against."""

    repository_full_name: str = Field(pattern=r"^[a-zA-Z0-9_-]+/[a-zA-Z0-9_.-]+$")
    branch_name: str = "main"
    commit_sha: Optional[str] = Field(default=None, pattern=r"^[a-f0-9]{40}$")
    is_default_branch: bool = True

    model_config = {"frozen": True}

    @property
    def owner(self) -> str:
        return self.repository_full_name.split("/")[0]

    @property
    def repo(self) -> str:
        return self.repository_full_name.split("/")[1]


class CodeSnapshot(BaseModel):
    """Code index state captured when the ticket was generated."""

    commit_sha: str
    indexed_paths: tuple[str, ...] = ()

    model_config = {"frozen": True}


class ApiSnapshot(BaseModel):
    """API spec state captured when the ticket was generated."""

    spec_url: str
    hash: str

    model_config = {"frozen": True}


class Ticket(BaseModel):
    """Immutable snapshot of a generated ticket specification."""

    id: Optional[str] = None
    workspace_id: Optional[str] = None
    title: str = ""
    description: Optional[str] = None
    type: Optional[TicketType] = None
    acceptance_criteria: tuple[str, ...] = ()
    assumptions: tuple[str, ...] = ()
    repo_paths: tuple[str, ...] = ()
    repository_context: Optional[RepositoryContext] = None
    code_snapshot: Optional[CodeSnapshot] = None
    api_snapshot: Optional[ApiSnapshot] = None

    model_config = {"frozen": True}

    @field_validator("acceptance_criteria", "assumptions", "repo_paths", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return () if value is None else value

    def combined_text(self, include_assumptions: bool = False, separator: str = " ") -> str:
        """Join the free-text fields validators search through."""
        parts = [self.title, self.description or "", *self.acceptance_criteria]
        if include_assumptions:
            parts.extend(self.assumptions)
        return separator.join(parts)
