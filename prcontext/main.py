"""prcontext entry point.

Prints a JSON snapshot of a GitHub pull request as seen through the
Context contract. Usage: prcontext show OWNER/REPO#NUMBER.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from prcontext.adapters.github import GitHubClient, GitHubContext
from prcontext.config import AppConfig, load_config
from prcontext.context import Context
from prcontext.errors import ContextError
from prcontext.formats import parse_locator
from prcontext.logging import setup_logging
from prcontext.models import active_approvals, commits_by_creation_time


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI: show subcommand with a pull request locator."""
    parser = argparse.ArgumentParser(
        prog="prcontext",
        description="Inspect pull request state through the prcontext contract",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    sub = parser.add_subparsers(dest="command")
    show = sub.add_parser("show", help="Print a JSON snapshot of a pull request")
    show.add_argument("locator", help="Pull request as owner/repo#number")
    return parser.parse_args(argv)


def build_context(config: AppConfig, locator: str) -> GitHubContext:
    """Create a GitHubContext for locator from config."""
    owner, repo, number = parse_locator(locator)
    client = GitHubClient(
        token=config.github_token_resolved,
        api_url=config.github.api_url,
        timeout=config.github.timeout,
        per_page=config.github.per_page,
    )
    return GitHubContext(client, owner, repo, number, target_commits_limit=config.github.target_commits_limit)


def snapshot(ctx: Context) -> Dict[str, Any]:
    """Collect every accessor of ctx into a JSON-serialisable dict."""
    base, head = ctx.branches()
    reviews = ctx.reviews()
    return {
        "locator": ctx.locator(),
        "author": ctx.author(),
        "base": base,
        "head": head,
        "files": [f.model_dump(mode="json") for f in ctx.changed_files()],
        "commits": [c.model_dump(mode="json") for c in commits_by_creation_time(ctx.commits())],
        "comments": [c.model_dump(mode="json") for c in ctx.comments()],
        "reviews": [r.model_dump(mode="json") for r in reviews],
        "active_approvals": sorted(r.author for r in active_approvals(reviews)),
    }


def main(argv: list[str] | None = None) -> int:
    """Entry point."""
    args = parse_args(argv)
    config = load_config(args.config)
    setup_logging(config.logging)
    log = logging.getLogger("prcontext.main")

    if args.check:
        print("Config OK:", config.github.api_url)
        return 0

    if args.command != "show":
        log.error("No command given, expected: show OWNER/REPO#NUMBER")
        return 2

    try:
        ctx = build_context(config, args.locator)
    except ValueError as e:
        log.error("%s", e)
        return 2

    try:
        data = snapshot(ctx)
    except ContextError as e:
        log.error("Failed to read %s: %s", ctx.locator(), e)
        return 1
    print(json.dumps(data, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
