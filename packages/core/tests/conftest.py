"""Shared fixtures: an in-memory IssueTracker and a clean CI environment."""

from __future__ import annotations

import pytest

from prnotify_core.config import ENV_INPUTS
from prnotify_core.models import PullInfo


class FakeTracker:
    """In-memory IssueTracker. Posted comments become visible to later scans."""

    def __init__(self, repo="owner/repo"):
        self._repo = repo
        self.comments: dict[int, list[str]] = {}
        self.created: list[tuple[int, str]] = []
        self.linked_issues = []
        self.pulls: dict[int, PullInfo] = {}
        self.list_error: Exception | None = None
        self.linked_error: Exception | None = None
        self.create_error: Exception | None = None
        self.scanned = 0

    @property
    def repo(self) -> str:
        return self._repo

    def iter_comment_bodies(self, issue_number):
        if self.list_error is not None:
            raise self.list_error
        for body in list(self.comments.get(issue_number, [])):
            self.scanned += 1
            yield body

    def create_comment(self, issue_number, body):
        if self.create_error is not None:
            raise self.create_error
        self.comments.setdefault(issue_number, []).append(body)
        self.created.append((issue_number, body))

    def get_linked_issues(self, pr_number):
        if self.linked_error is not None:
            raise self.linked_error
        return list(self.linked_issues)

    def get_pull(self, pr_number):
        return self.pulls[pr_number]


@pytest.fixture
def tracker():
    return FakeTracker()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """CI runners export the same variables the config reads; isolate from them."""
    for env_name in ENV_INPUTS.values():
        monkeypatch.delenv(env_name, raising=False)
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
