from __future__ import annotations

import logging
from typing import Iterator, Protocol

from github import Auth, Github

from prnotify_core.models import LinkedIssue, PullInfo

logger = logging.getLogger(__name__)

_PER_PAGE = 100

_LINKED_ISSUES_QUERY = """
query($owner: String!, $repo: String!, $prNumber: Int!) {
  repository(owner: $owner, name: $repo) {
    pullRequest(number: $prNumber) {
      closingIssuesReferences(first: 100) {
        nodes {
          number
          state
        }
      }
    }
  }
}
"""


class IssueTracker(Protocol):
    """The slice of the GitHub API the notifiers depend on."""

    @property
    def repo(self) -> str: ...

    def iter_comment_bodies(self, issue_number: int) -> Iterator[str]:
        """Yield comment bodies page by page; pagination stays lazy."""

    def create_comment(self, issue_number: int, body: str) -> None: ...

    def get_linked_issues(self, pr_number: int) -> list[LinkedIssue]:
        """Issues the PR will close when merged. Raises on query failure."""

    def get_pull(self, pr_number: int) -> PullInfo: ...


class GithubIssueTracker:
    """IssueTracker backed by PyGithub."""

    def __init__(self, gh: Github, repo_name: str):
        self._gh = gh
        self._repo_name = repo_name
        self._repo = None

    @property
    def repo(self) -> str:
        return self._repo_name

    def _get_repo(self):
        if self._repo is None:
            self._repo = self._gh.get_repo(self._repo_name)
        return self._repo

    def iter_comment_bodies(self, issue_number: int) -> Iterator[str]:
        for comment in self._get_repo().get_issue(issue_number).get_comments():
            yield comment.body or ""

    def create_comment(self, issue_number: int, body: str) -> None:
        self._get_repo().get_issue(issue_number).create_comment(body)

    def get_linked_issues(self, pr_number: int) -> list[LinkedIssue]:
        owner, _, name = self._repo_name.partition("/")
        _, data = self._gh.requester.graphql_query(
            _LINKED_ISSUES_QUERY,
            {"owner": owner, "repo": name, "prNumber": pr_number},
        )
        pull = ((data.get("data") or {}).get("repository") or {}).get("pullRequest")
        if pull is None:
            raise LookupError(f"Pull request #{pr_number} not found in {self._repo_name}.")
        nodes = (pull.get("closingIssuesReferences") or {}).get("nodes") or []
        return [LinkedIssue(number=n["number"], state=n["state"]) for n in nodes if n]

    def get_pull(self, pr_number: int) -> PullInfo:
        pr = self._get_repo().get_pull(pr_number)
        user = pr.user
        return PullInfo(
            number=pr_number,
            author_login=user.login if user else None,
            author_type=user.type if user else None,
            head_sha=pr.head.sha,
        )


def connect(repo_name: str, token: str) -> GithubIssueTracker:
    return GithubIssueTracker(Github(auth=Auth.Token(token), per_page=_PER_PAGE), repo_name)
