"""String formats shared by every Context: locator, team id, fork head."""

import re
from typing import Tuple

from prcontext.errors import IdentityLookupError

LOCATOR_RE = re.compile(r"^(?P<owner>[^/#\s]+)/(?P<repo>[^/#\s]+)#(?P<number>[0-9]+)$")


def format_locator(owner: str, repo: str, number: int) -> str:
    """Return owner/repo#number."""
    return f"{owner}/{repo}#{number}"


def parse_locator(locator: str) -> Tuple[str, str, int]:
    """Split owner/repo#number into its parts.

    Raises:
        ValueError: If locator does not match the format exactly
    """
    m = LOCATOR_RE.match(locator)
    if not m:
        raise ValueError(f"Invalid locator {locator!r}, expected owner/repo#number")
    return m.group("owner"), m.group("repo"), int(m.group("number"))


def split_team(team: str) -> Tuple[str, str]:
    """Split org-name/team-name into (org, team).

    Raises:
        IdentityLookupError: If team is not exactly two non-empty parts
    """
    parts = team.split("/")
    if len(parts) != 2 or not all(p.strip() for p in parts):
        raise IdentityLookupError(f"Invalid team {team!r}, expected org-name/team-name")
    return parts[0], parts[1]


def format_head_branch(ref: str, head_owner: str, same_repository: bool) -> str:
    """Return the head branch name, prefixed with owner: for forks."""
    if same_repository:
        return ref
    return f"{head_owner}:{ref}"
