"""Host-agnostic pull request context for policy evaluation."""

from prcontext.context import Context, MembershipContext
from prcontext.errors import BackendError, ContextError, ContractViolation, IdentityLookupError
from prcontext.models import (
    Comment,
    Commit,
    File,
    FileStatus,
    Review,
    ReviewState,
    active_approvals,
    commits_by_creation_time,
    latest_reviews,
)

__all__ = [
    "BackendError",
    "Comment",
    "Commit",
    "Context",
    "ContextError",
    "ContractViolation",
    "File",
    "FileStatus",
    "IdentityLookupError",
    "MembershipContext",
    "Review",
    "ReviewState",
    "active_approvals",
    "commits_by_creation_time",
    "latest_reviews",
]
