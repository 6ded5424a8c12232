"""Abstract contracts implemented by hosting-service adapters.

A Context is bound to exactly one pull request. Implementations are not
required to be safe for concurrent use: callers that need parallel access
serialize their calls or build one Context per caller.
"""

from abc import ABC, abstractmethod
from typing import List, Tuple

from prcontext.models import Comment, Commit, File, Review


class MembershipContext(ABC):
    """Answers org, team and repository membership questions for a user.

    Adapters raise IdentityLookupError when the user, org, team or
    repository does not exist and return False when it exists but the user
    is not a member. Backend failures raise BackendError.
    """

    @abstractmethod
    def is_team_member(self, team: str, user: str) -> bool:
        """Return True if user is a member of team.

        Args:
            team: Team in format org-name/team-name
            user: User login

        Raises:
            IdentityLookupError: If team is malformed or cannot be resolved
        """
        ...

    @abstractmethod
    def is_org_member(self, org: str, user: str) -> bool:
        """Return True if user is a member of the organization."""
        ...

    @abstractmethod
    def is_collaborator(self, org: str, repo: str, user: str, desired_perm: str) -> bool:
        """Return True if user's permission on org/repo meets or exceeds desired_perm.

        The ordering of permission tokens is defined and documented by each
        adapter. Unknown tokens raise IdentityLookupError.
        """
        ...


class Context(MembershipContext):
    """Pull request scoped view of a hosting service.

    Every accessor returns a complete result or raises; order of returned
    sequences is implementation dependent unless stated otherwise.
    """

    @abstractmethod
    def locator(self) -> str:
        """Return the pull request locator, formatted owner/repository#number."""
        ...

    @abstractmethod
    def repository_owner(self) -> str:
        """Return the owner of the repository the pull request targets."""
        ...

    @abstractmethod
    def repository_name(self) -> str:
        """Return the name of the repository the pull request targets."""
        ...

    @abstractmethod
    def author(self) -> str:
        """Return the login of the user who opened the pull request."""
        ...

    @abstractmethod
    def changed_files(self) -> List[File]:
        """Return the files changed by the pull request."""
        ...

    @abstractmethod
    def commits(self) -> List[Commit]:
        """Return the commits of the pull request.

        Use commits_by_creation_time for a deterministic order.
        """
        ...

    @abstractmethod
    def comments(self) -> List[Comment]:
        """Return all discussion comments on the pull request."""
        ...

    @abstractmethod
    def reviews(self) -> List[Review]:
        """Return all reviews on the pull request."""
        ...

    @abstractmethod
    def branches(self) -> Tuple[str, str]:
        """Return (base, head) branch names.

        The base branch is never prefixed. The head branch is prefixed with
        the fork owner and a colon (owner:branch) when the pull request comes
        from a fork.
        """
        ...

    @abstractmethod
    def target_commits(self) -> List[Commit]:
        """Return recent commits on the target branch.

        The number of commits is an adapter detail; the list is not complete
        history.
        """
        ...
