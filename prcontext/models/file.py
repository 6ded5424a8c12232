"""File touched by a pull request."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class FileStatus(str, Enum):
    """How a pull request changes a file. Exactly one per file per snapshot."""

    MODIFIED = "modified"
    ADDED = "added"
    DELETED = "deleted"


class File(BaseModel):
    """One file in the changed-files snapshot of a pull request."""

    model_config = ConfigDict(frozen=True)

    filename: str = Field(min_length=1)
    status: FileStatus
    additions: int = Field(default=0, ge=0)
    deletions: int = Field(default=0, ge=0)
