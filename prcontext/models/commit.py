"""Commit reachable from a pull request head or its target branch."""

from datetime import datetime
from typing import Iterable, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Commit(BaseModel):
    """Commit snapshot.

    ``author`` and ``committer`` are platform logins. ``None`` means the
    commit is not linked to a real platform user (for example an email-only
    identity); an empty string is accepted on input and stored as ``None``
    so this state has exactly one representation.
    """

    model_config = ConfigDict(frozen=True)

    sha: str = Field(min_length=1)
    parents: tuple[str, ...] = ()
    created_at: datetime
    committed_via_web: bool = False
    author: str | None = None
    committer: str | None = None

    @field_validator("author", "committer", mode="before")
    @classmethod
    def _empty_login_is_unlinked(cls, value: str | None) -> str | None:
        if value == "":
            return None
        return value

    def users(self) -> List[str]:
        """Return the linked logins of this commit, author before committer."""
        return [login for login in (self.author, self.committer) if login is not None]


def commits_by_creation_time(commits: Iterable[Commit]) -> List[Commit]:
    """Return commits in ascending ``created_at`` order.

    Ties keep their input order (stable sort), so re-sorting is a no-op.
    """
    return sorted(commits, key=lambda c: c.created_at)
