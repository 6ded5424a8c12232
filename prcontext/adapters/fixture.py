"""In-memory Context for testing policy code without a hosting service.

Every accessor returns the configured values, or raises the matching
``*_error`` when one is set. Membership follows the same convention as real
adapters: unknown orgs, teams and repos raise IdentityLookupError.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from prcontext.context import Context
from prcontext.errors import IdentityLookupError
from prcontext.formats import format_head_branch, format_locator, split_team
from prcontext.models import Comment, Commit, File, Review

DEFAULT_PERMISSION_ORDER = ("none", "read", "triage", "write", "maintain", "admin")


@dataclass
class FixtureContext(Context):
    """Static pull request context.

    teams maps "org/team" to member logins, orgs maps org to member logins,
    permissions maps "org/repo" to {login: permission}. head_owner is the fork
    owner; leave it empty for same-repository pull requests.
    """

    owner: str = "owner"
    repo: str = "repo"
    number: int = 1
    author_login: str = "author"
    base_branch: str = "main"
    head_branch: str = "feature"
    head_owner: str = ""

    files: List[File] = field(default_factory=list)
    commit_list: List[Commit] = field(default_factory=list)
    comment_list: List[Comment] = field(default_factory=list)
    review_list: List[Review] = field(default_factory=list)
    target_commit_list: List[Commit] = field(default_factory=list)

    teams: Dict[str, List[str]] = field(default_factory=dict)
    orgs: Dict[str, List[str]] = field(default_factory=dict)
    permissions: Dict[str, Dict[str, str]] = field(default_factory=dict)
    permission_order: Tuple[str, ...] = DEFAULT_PERMISSION_ORDER

    author_error: Exception | None = None
    changed_files_error: Exception | None = None
    commits_error: Exception | None = None
    comments_error: Exception | None = None
    reviews_error: Exception | None = None
    branches_error: Exception | None = None
    target_commits_error: Exception | None = None
    membership_error: Exception | None = None

    def _raise(self, error: Exception | None) -> None:
        if error is not None:
            raise error

    def _rank(self, perm: str) -> int:
        try:
            return self.permission_order.index(perm)
        except ValueError:
            raise IdentityLookupError(f"Unknown permission {perm!r}") from None

    def is_team_member(self, team: str, user: str) -> bool:
        self._raise(self.membership_error)
        split_team(team)
        if team not in self.teams:
            raise IdentityLookupError(f"Team {team} not found")
        return user in self.teams[team]

    def is_org_member(self, org: str, user: str) -> bool:
        self._raise(self.membership_error)
        if org not in self.orgs:
            raise IdentityLookupError(f"Organization {org} not found")
        return user in self.orgs[org]

    def is_collaborator(self, org: str, repo: str, user: str, desired_perm: str) -> bool:
        self._raise(self.membership_error)
        wanted = self._rank(desired_perm)
        key = f"{org}/{repo}"
        if key not in self.permissions:
            raise IdentityLookupError(f"Repository {key} not found")
        return self._rank(self.permissions[key].get(user, "none")) >= wanted

    def locator(self) -> str:
        return format_locator(self.owner, self.repo, self.number)

    def repository_owner(self) -> str:
        return self.owner

    def repository_name(self) -> str:
        return self.repo

    def author(self) -> str:
        self._raise(self.author_error)
        return self.author_login

    def changed_files(self) -> List[File]:
        self._raise(self.changed_files_error)
        return list(self.files)

    def commits(self) -> List[Commit]:
        self._raise(self.commits_error)
        return list(self.commit_list)

    def comments(self) -> List[Comment]:
        self._raise(self.comments_error)
        return list(self.comment_list)

    def reviews(self) -> List[Review]:
        self._raise(self.reviews_error)
        return list(self.review_list)

    def branches(self) -> Tuple[str, str]:
        self._raise(self.branches_error)
        head = format_head_branch(self.head_branch, self.head_owner, not self.head_owner)
        return self.base_branch, head

    def target_commits(self) -> List[Commit]:
        self._raise(self.target_commits_error)
        return list(self.target_commit_list)
