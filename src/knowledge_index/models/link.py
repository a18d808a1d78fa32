"""Data models describing the outcome of dependency linking."""

from enum import Enum

from pydantic import BaseModel, Field, computed_field


class SkipReason(str, Enum):
    """Why a declared dependency reference produced no link."""

    MALFORMED = "malformed"
    UNRESOLVED = "unresolved"


class SkippedReference(BaseModel):
    """A dependency reference that was ignored during linking."""

    task_key: str = Field(..., description="Task template declaring the reference")
    reference: str = Field(..., description="Reference exactly as declared")
    reason: SkipReason = Field(..., description="Why the reference was skipped")


class LinkReport(BaseModel):
    """Summary of one linking pass."""

    tasks_processed: int = Field(default=0, ge=0, description="Task templates inspected")
    links_created: int = Field(default=0, ge=0, description="Task-to-knowledge links created")
    skipped: list[SkippedReference] = Field(default_factory=list, description="References that were ignored")

    @computed_field
    @property
    def skipped_count(self) -> int:
        """Count of ignored references."""
        return len(self.skipped)
