"""Checks that detect adapters returning malformed data.

Each check raises ContractViolation; verify_context runs every accessor of a
Context and checks what it returns.
"""

import logging
from typing import Tuple

from prcontext.context import Context
from prcontext.errors import ContractViolation
from prcontext.formats import LOCATOR_RE
from prcontext.models import Commit, File, Review

LOG = logging.getLogger("prcontext.contract")


def check_locator(locator: str) -> str:
    """Ensure locator is formatted owner/repository#number."""
    if not isinstance(locator, str) or not LOCATOR_RE.match(locator):
        raise ContractViolation(f"Locator {locator!r} is not owner/repository#number")
    return locator


def check_branches(base: str, head: str) -> Tuple[str, str]:
    """Ensure base is a plain branch and head is plain or owner:branch."""
    if not base:
        raise ContractViolation("Base branch is empty")
    if ":" in base:
        raise ContractViolation(f"Base branch {base!r} must not be prefixed")
    if not head:
        raise ContractViolation("Head branch is empty")
    if ":" in head:
        owner, _, branch = head.partition(":")
        if not owner or not branch:
            raise ContractViolation(f"Head branch {head!r} is not owner:branch")
    return base, head


def check_commit(commit: Commit) -> Commit:
    """Ensure commit carries its identity and unlinked users are None."""
    if not commit.sha:
        raise ContractViolation("Commit has an empty SHA")
    if "" in (commit.author, commit.committer):
        raise ContractViolation(f"Commit {commit.sha} uses an empty login instead of None")
    return commit


def check_review(review: Review) -> Review:
    """Ensure review has the id needed to resolve dismissals."""
    if not review.id:
        raise ContractViolation("Review has an empty id")
    return review


def check_file(file: File) -> File:
    if not file.filename:
        raise ContractViolation("Changed file has an empty filename")
    return file


def verify_context(ctx: Context) -> None:
    """Call every accessor on ctx and check the returned values.

    Backend errors propagate unchanged.
    """
    locator = check_locator(ctx.locator())
    expected_prefix = f"{ctx.repository_owner()}/{ctx.repository_name()}#"
    if not locator.startswith(expected_prefix):
        raise ContractViolation(f"Locator {locator!r} does not match repository {expected_prefix[:-1]}")
    if ctx.locator() != locator:
        raise ContractViolation(f"Locator of {locator} changed between calls")
    if not ctx.author():
        raise ContractViolation(f"{locator}: author is empty")
    check_branches(*ctx.branches())
    for f in ctx.changed_files():
        check_file(f)
    for c in ctx.commits():
        check_commit(c)
    for c in ctx.target_commits():
        check_commit(c)
    for r in ctx.reviews():
        check_review(r)
    ctx.comments()
    LOG.debug("Context %s satisfies the contract", locator)
