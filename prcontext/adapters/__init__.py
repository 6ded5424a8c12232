"""Context adapters (hosting services and in-memory fixtures)."""

from prcontext.adapters.fixture import FixtureContext
from prcontext.adapters.github import GitHubClient, GitHubContext, GitHubMembershipContext

__all__ = ["FixtureContext", "GitHubClient", "GitHubContext", "GitHubMembershipContext"]
