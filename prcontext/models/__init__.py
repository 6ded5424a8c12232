"""Value entities describing pull request state (Pydantic)."""

from prcontext.models.comment import Comment
from prcontext.models.commit import Commit, commits_by_creation_time
from prcontext.models.file import File, FileStatus
from prcontext.models.review import Review, ReviewState, active_approvals, latest_reviews

__all__ = [
    "Comment",
    "Commit",
    "File",
    "FileStatus",
    "Review",
    "ReviewState",
    "active_approvals",
    "commits_by_creation_time",
    "latest_reviews",
]
