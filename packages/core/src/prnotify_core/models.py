"""Per-invocation data models.

Everything here is created once from CI inputs and never mutated. The only
state that outlives a run is the comment thread on the pull request itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ValidationStatus(str, Enum):
    PASSED = "passed"
    SKIPPED = "skipped"

    @classmethod
    def parse(cls, value: str | None) -> ValidationStatus:
        """Anything other than "skipped" counts as a passed validation run."""
        if (value or "").strip().lower() == cls.SKIPPED.value:
            return cls.SKIPPED
        return cls.PASSED


class Outcome(str, Enum):
    NO_PULL_REQUEST = "no_pull_request"
    MISSING_INPUT = "missing_input"
    BOT_AUTHOR = "bot_author"
    LINK_STATE_UNKNOWN = "link_state_unknown"
    HAS_LINKED_ISSUE = "has_linked_issue"
    EMPTY_DIFF = "empty_diff"
    ALREADY_POSTED = "already_posted"
    DRY_RUN = "dry_run"
    POSTED = "posted"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class ReviewContext:
    repo: str  # "owner/name"
    pr_number: int
    base_sha: str = ""
    head_sha: str = ""
    scope_mode: str = "full"
    scope_reason: str = ""
    validation_status: ValidationStatus = ValidationStatus.PASSED
    validation_checks: tuple[str, ...] = ()
    dry_run: bool = False


@dataclass(frozen=True)
class PullInfo:
    number: int
    author_login: str | None
    author_type: str | None
    head_sha: str = ""

    @property
    def is_bot(self) -> bool:
        if self.author_type == "Bot":
            return True
        return bool(self.author_login and self.author_login.endswith("[bot]"))


@dataclass(frozen=True)
class LinkedIssue:
    number: int
    state: str  # GraphQL IssueState: "OPEN" | "CLOSED"

    @property
    def is_open(self) -> bool:
        return self.state == "OPEN"


@dataclass(frozen=True)
class Excerpt:
    text: str
    truncated: bool = False


@dataclass
class NotifyResult:
    """What a single notifier invocation decided, for logging and tests."""

    kind: str
    outcome: Outcome
    pr_number: int | None = None
    marker: str | None = None
    body: str | None = None

    @property
    def commented(self) -> bool:
        return self.outcome == Outcome.POSTED
