"""GitHub REST API adapter.

Permission order used by is_collaborator (lowest to highest):
none < read < triage < write < maintain < admin. The legacy tokens pull and
push are accepted as read and write.

Commits created through the GitHub UI are committed by the web-flow account;
they are reported with committed_via_web=True and no committer login.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Tuple, TypeVar

import requests

from prcontext.context import Context, MembershipContext
from prcontext.errors import BackendError, ContractViolation, IdentityLookupError
from prcontext.formats import format_head_branch, format_locator, split_team
from prcontext.models import Comment, Commit, File, FileStatus, Review, ReviewState

LOG = logging.getLogger("prcontext.adapters.github")

T = TypeVar("T")

PERMISSION_ORDER = ("none", "read", "triage", "write", "maintain", "admin")
PERMISSION_ALIASES = {"pull": "read", "push": "write"}
WEB_FLOW_LOGIN = "web-flow"

_FILE_STATUSES = {
    "added": FileStatus.ADDED,
    "removed": FileStatus.DELETED,
}


def _parse_iso(s: str) -> datetime:
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def _map_api(locator: str, what: str, mapper: Callable[[Dict[str, Any]], T], items: List[Dict[str, Any]]) -> List[T]:
    """Apply mapper to every item; malformed items raise ContractViolation."""
    try:
        return [mapper(d) for d in items]
    # pydantic's ValidationError is a ValueError
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ContractViolation(f"{locator}: malformed {what}: {e}") from e


def _expect_list(page: Any, url: str) -> List[Dict[str, Any]]:
    if page is None:
        return []
    if not isinstance(page, list):
        raise BackendError(f"Expected a list from {url}, got {type(page).__name__}")
    return page


def permission_rank(perm: str) -> int:
    """Return the position of perm in PERMISSION_ORDER.

    Raises:
        IdentityLookupError: If perm is not a known permission token
    """
    token = perm.strip().lower()
    token = PERMISSION_ALIASES.get(token, token)
    try:
        return PERMISSION_ORDER.index(token)
    except ValueError:
        raise IdentityLookupError(f"Unknown permission {perm!r}, expected one of {', '.join(PERMISSION_ORDER)}") from None


def _file_from_api(data: Dict[str, Any]) -> File:
    return File(
        filename=data["filename"],
        status=_FILE_STATUSES.get(data.get("status", ""), FileStatus.MODIFIED),
        additions=data.get("additions") or 0,
        deletions=data.get("deletions") or 0,
    )


def _commit_from_api(data: Dict[str, Any]) -> Commit:
    git_commit = data.get("commit") or {}
    dates = git_commit.get("committer") or git_commit.get("author") or {}
    author = (data.get("author") or {}).get("login")
    committer = (data.get("committer") or {}).get("login")
    via_web = committer == WEB_FLOW_LOGIN
    return Commit(
        sha=data["sha"],
        parents=tuple(p["sha"] for p in data.get("parents") or []),
        created_at=_parse_iso(dates["date"]),
        committed_via_web=via_web,
        author=author,
        committer=None if via_web else committer,
    )


def _comment_from_api(data: Dict[str, Any]) -> Comment:
    user = data.get("user") or {}
    return Comment(
        created_at=_parse_iso(data["created_at"]),
        author=user.get("login", ""),
        body=data.get("body") or "",
    )


def _review_from_api(data: Dict[str, Any], fetched_at: datetime) -> Review:
    user = data.get("user") or {}
    submitted = data.get("submitted_at")
    return Review(
        id=data.get("node_id") or str(data["id"]),
        state=ReviewState(data["state"].lower()),
        # pending reviews are not submitted yet and carry no timestamp
        created_at=_parse_iso(submitted) if submitted else fetched_at,
        author=user.get("login", ""),
        body=data.get("body") or "",
    )


class GitHubClient:
    """Thin requests session for the GitHub REST API."""

    def __init__(
        self,
        token: str | None,
        api_url: str = "https://api.github.com",
        timeout: int = 30,
        per_page: int = 100,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._per_page = per_page
        self._session = requests.Session()
        if token:
            self._session.headers["Authorization"] = f"token {token}"
        self._session.headers["Accept"] = "application/vnd.github.v3+json"

    def _url(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"

    def request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] | None = None,
        allowed: Tuple[int, ...] = (),
    ) -> requests.Response:
        """Send a request; status >= 400 not listed in allowed raises BackendError."""
        url = self._url(path)
        LOG.debug("%s %s params=%s", method, url, params)
        try:
            resp = self._session.request(method, url, params=params, timeout=self._timeout)
        except requests.RequestException as e:
            LOG.warning("%s %s failed: %s", method, url, e)
            raise BackendError(f"{method} {url}: {e}") from e
        if resp.status_code >= 400 and resp.status_code not in allowed:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                msg = resp.json().get("message", msg)
            except (ValueError, AttributeError):
                pass
            LOG.warning("%s %s returned %s: %s", method, url, resp.status_code, msg)
            raise BackendError(f"{resp.status_code}: {msg}", status_code=resp.status_code)
        return resp

    def get(self, path: str, params: Dict[str, Any] | None = None, allowed: Tuple[int, ...] = ()) -> requests.Response:
        return self.request("GET", path, params=params, allowed=allowed)

    def get_json(self, path: str, params: Dict[str, Any] | None = None) -> Any:
        return _json(self.get(path, params=params))

    def get_all(self, path: str, params: Dict[str, Any] | None = None) -> List[Dict[str, Any]]:
        """Fetch every page of a list endpoint by following Link rel=next."""
        items: List[Dict[str, Any]] = []
        url: str | None = path
        page_params: Dict[str, Any] | None = {"per_page": self._per_page, **(params or {})}
        while url:
            resp = self.get(url, params=page_params)
            items.extend(_expect_list(_json(resp), url))
            url = (resp.links.get("next") or {}).get("url")
            # the next link already carries the query string
            page_params = None
        return items


def _json(resp: requests.Response) -> Any:
    try:
        return resp.json()
    except ValueError as e:
        raise BackendError(f"Invalid JSON in response: {e}", status_code=resp.status_code) from e


class GitHubMembershipContext(MembershipContext):
    """Membership queries against GitHub.

    A 404 on a membership endpoint is ambiguous; the org, team and user are
    then looked up so that missing entities raise IdentityLookupError and
    existing ones without membership return False.
    """

    def __init__(self, client: GitHubClient) -> None:
        self._client = client

    def _require(self, path: str, what: str) -> None:
        resp = self._client.get(path, allowed=(404,))
        if resp.status_code == 404:
            raise IdentityLookupError(f"{what} not found")

    def is_team_member(self, team: str, user: str) -> bool:
        org, slug = split_team(team)
        resp = self._client.get(f"/orgs/{org}/teams/{slug}/memberships/{user}", allowed=(404,))
        if resp.status_code == 404:
            self._require(f"/orgs/{org}/teams/{slug}", f"Team {team}")
            self._require(f"/users/{user}", f"User {user}")
            return False
        # pending invitations are not memberships
        return (_json(resp) or {}).get("state") == "active"

    def is_org_member(self, org: str, user: str) -> bool:
        resp = self._client.get(f"/orgs/{org}/members/{user}", allowed=(404,))
        if resp.status_code == 404:
            self._require(f"/orgs/{org}", f"Organization {org}")
            self._require(f"/users/{user}", f"User {user}")
            return False
        return resp.status_code == 204

    def is_collaborator(self, org: str, repo: str, user: str, desired_perm: str) -> bool:
        wanted = permission_rank(desired_perm)
        resp = self._client.get(f"/repos/{org}/{repo}/collaborators/{user}/permission", allowed=(404,))
        if resp.status_code == 404:
            raise IdentityLookupError(f"Repository {org}/{repo} or user {user} not found")
        data = _json(resp) or {}
        role = data.get("role_name")
        if role not in PERMISSION_ORDER:
            role = data.get("permission") or "none"
        return permission_rank(role) >= wanted


class GitHubContext(GitHubMembershipContext, Context):
    """Context for one GitHub pull request.

    The pull request object is fetched once and reused; it is fetched again
    only when a list comes back shorter than the count it reports. Not
    thread-safe.
    """

    def __init__(
        self,
        client: GitHubClient,
        owner: str,
        repo: str,
        number: int,
        target_commits_limit: int = 100,
    ) -> None:
        super().__init__(client)
        self._owner = owner
        self._repo = repo
        self._number = number
        self._target_commits_limit = target_commits_limit
        self._pull_data: Dict[str, Any] | None = None

    @property
    def _pr_path(self) -> str:
        return f"/repos/{self._owner}/{self._repo}/pulls/{self._number}"

    def _pull(self, refresh: bool = False) -> Dict[str, Any]:
        if self._pull_data is None or refresh:
            resp = self._client.get(self._pr_path, allowed=(404,))
            if resp.status_code == 404:
                raise IdentityLookupError(f"Pull request {self.locator()} not found")
            data = _json(resp)
            if not isinstance(data, dict):
                raise ContractViolation(f"{self.locator()}: malformed pull request payload")
            self._pull_data = data
        return self._pull_data

    def _check_complete(self, what: str, got: int, count_field: str) -> None:
        expected = self._pull().get(count_field)
        if expected is None or got >= expected:
            return
        # cached counts may predate a force-push
        LOG.debug("%s: got %s of %s %s, refetching pull request", self.locator(), got, expected, what)
        expected = self._pull(refresh=True).get(count_field)
        if expected is not None and got < expected:
            raise BackendError(f"{self.locator()}: API returned {got} of {expected} {what}")

    def locator(self) -> str:
        return format_locator(self._owner, self._repo, self._number)

    def repository_owner(self) -> str:
        return self._owner

    def repository_name(self) -> str:
        return self._repo

    def author(self) -> str:
        login = (self._pull().get("user") or {}).get("login")
        if not login:
            raise ContractViolation(f"{self.locator()}: pull request has no author login")
        return login

    def changed_files(self) -> List[File]:
        data = self._client.get_all(f"{self._pr_path}/files")
        self._check_complete("changed files", len(data), "changed_files")
        return _map_api(self.locator(), "changed file", _file_from_api, data)

    def commits(self) -> List[Commit]:
        data = self._client.get_all(f"{self._pr_path}/commits")
        self._check_complete("commits", len(data), "commits")
        return _map_api(self.locator(), "commit", _commit_from_api, data)

    def comments(self) -> List[Comment]:
        data = self._client.get_all(f"/repos/{self._owner}/{self._repo}/issues/{self._number}/comments")
        return _map_api(self.locator(), "comment", _comment_from_api, data)

    def reviews(self) -> List[Review]:
        fetched_at = datetime.now(timezone.utc)
        data = self._client.get_all(f"{self._pr_path}/reviews")
        return _map_api(self.locator(), "review", lambda d: _review_from_api(d, fetched_at), data)

    def branches(self) -> Tuple[str, str]:
        pull = self._pull()
        base = pull.get("base") or {}
        head = pull.get("head") or {}
        base_repo = base.get("repo") or {}
        head_repo = head.get("repo") or {}
        # a deleted fork leaves head.repo null; it is still a fork
        same_repository = bool(head_repo) and head_repo.get("full_name") == base_repo.get("full_name")
        head_owner = (head.get("user") or {}).get("login") or head.get("label", "").partition(":")[0]
        return base.get("ref", ""), format_head_branch(head.get("ref", ""), head_owner, same_repository)

    def target_commits(self) -> List[Commit]:
        base, _ = self.branches()
        path = f"/repos/{self._owner}/{self._repo}/commits"
        data = self._client.get_json(path, params={"sha": base, "per_page": self._target_commits_limit})
        return _map_api(self.locator(), "target commit", _commit_from_api, _expect_list(data, path))
