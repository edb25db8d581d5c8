"""Notifier orchestration.

Both notifiers follow the same short-circuiting pipeline:

    resolve PR → validate inputs → (kind-specific checks) → dedup guard
               → compose body → dry-run preview or post

Every early exit is a legitimate no-op, not a failure. The only error that
escapes is a comment-creation failure other than a permissions rejection.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from github import GithubException
from rich.console import Console

from prnotify_core.composer import DEFAULT_MENTION, MAX_FILES_TO_LIST, build_linkbot_body, build_protobuf_body
from prnotify_core.guard import MAX_COMMENTS_TO_SCAN, already_posted
from prnotify_core.kinds import LINKBOT, build_marker, legacy_markers, search_marker
from prnotify_core.models import NotifyResult, Outcome, PullInfo, ReviewContext, ValidationStatus
from prnotify_core.utils.text import (
    MAX_DIFF_CHARS,
    parse_check_names,
    parse_unique_lines,
    read_text_file_or_empty,
    truncate,
)

if TYPE_CHECKING:
    from prnotify_core.gh.client import IssueTracker
    from prnotify_core.kinds import NotificationKind

console = Console()
logger = logging.getLogger(__name__)

# Expected when the token cannot comment in this context, e.g. fork-triggered runs.
_FORBIDDEN_STATUSES = {403, 404}


def _event_pr_number(event: dict) -> int | None:
    pull = event.get("pull_request") or {}
    if pull.get("number"):
        return pull["number"]
    issue = event.get("issue") or {}
    # issue_comment events carry the PR as an issue with a pull_request link.
    if issue.get("pull_request") and issue.get("number"):
        return issue["number"]
    return None


def _event_pull(event: dict, pr_number: int) -> dict:
    """The payload's pull_request, or {} when it describes a different PR than the one processed."""
    pull = event.get("pull_request") or {}
    if pull.get("number") != pr_number:
        return {}
    return pull


def build_context(config: dict, event: dict, repo: str) -> ReviewContext | None:
    """Resolve the per-invocation context, or None when no PR can be identified."""
    pr_number = config.get("pr_number") or _event_pr_number(event)
    if not pr_number:
        return None

    pull = _event_pull(event, int(pr_number))
    return ReviewContext(
        repo=repo,
        pr_number=int(pr_number),
        base_sha=config.get("base_sha") or (pull.get("base") or {}).get("sha") or "",
        head_sha=config.get("head_sha") or (pull.get("head") or {}).get("sha") or "",
        scope_mode=config.get("scope_mode") or "full",
        scope_reason=config.get("scope_reason") or "",
        validation_status=ValidationStatus.parse(config.get("validation_status")),
        validation_checks=tuple(parse_check_names(config.get("validation_checks") or "")),
        dry_run=bool(config.get("dry_run", False)),
    )


def _deliver(
    kind: NotificationKind,
    tracker: IssueTracker,
    context: ReviewContext,
    marker: str,
    body: str,
) -> NotifyResult:
    if context.dry_run:
        logger.info("[DRY RUN] Would create %s comment on %s#%d.", kind.name, context.repo, context.pr_number)
        console.rule(f"[bold]DRY RUN: {kind.name} comment (not posted)[/bold]")
        console.print(body, markup=False, highlight=False, soft_wrap=True)
        console.rule()
        return NotifyResult(kind.name, Outcome.DRY_RUN, context.pr_number, marker, body)

    try:
        tracker.create_comment(context.pr_number, body)
    except GithubException as e:
        if e.status in _FORBIDDEN_STATUSES:
            logger.warning(
                "Insufficient permissions to comment on %s#%d (status %s). Skipping %s comment.",
                context.repo,
                context.pr_number,
                e.status,
                kind.name,
            )
            return NotifyResult(kind.name, Outcome.FORBIDDEN, context.pr_number, marker, body)
        logger.error(
            "Failed to create %s comment on %s#%d (head %s): %s",
            kind.name,
            context.repo,
            context.pr_number,
            context.head_sha or "unknown",
            e,
        )
        raise

    logger.info("Posted %s comment on %s#%d.", kind.name, context.repo, context.pr_number)
    return NotifyResult(kind.name, Outcome.POSTED, context.pr_number, marker, body)


def run_protobuf(kind: NotificationKind, config: dict, event: dict, tracker: IssueTracker) -> NotifyResult:
    """Post a protobuf review trigger comment for the PR's head commit, at most once."""
    context = build_context(config, event, tracker.repo)
    if context is None:
        logger.info("No pull request found in the triggering event. Skipping %s.", kind.name)
        return NotifyResult(kind.name, Outcome.NO_PULL_REQUEST)

    files_path = config.get("files_path") or ""
    missing = [
        name
        for name, value in (
            ("base_sha", context.base_sha),
            ("head_sha", context.head_sha),
            ("files_path", files_path),
        )
        if not value
    ]
    if missing:
        logger.warning(
            "Missing required inputs (%s) for %s on %s#%d. Skipping.",
            ", ".join(missing),
            kind.name,
            context.repo,
            context.pr_number,
        )
        return NotifyResult(kind.name, Outcome.MISSING_INPUT, context.pr_number)

    full_diff = read_text_file_or_empty(config.get("diff_path"))
    if kind.require_diff and not full_diff.strip():
        logger.info(
            "Diff is empty for %s#%d at %s; nothing to flag.", context.repo, context.pr_number, context.head_sha
        )
        return NotifyResult(kind.name, Outcome.EMPTY_DIFF, context.pr_number)

    changed_files = parse_unique_lines(read_text_file_or_empty(files_path))
    excerpt = truncate(full_diff, config.get("max_diff_chars", MAX_DIFF_CHARS))
    marker = build_marker(kind, context.head_sha)

    if already_posted(
        tracker,
        context.pr_number,
        search_marker(kind, context.head_sha),
        kind.policy,
        config.get("max_comments_to_scan", MAX_COMMENTS_TO_SCAN),
        also_match=legacy_markers(kind, context.head_sha),
    ):
        logger.info(
            "%s comment already posted for %s#%d at head %s.",
            kind.name,
            context.repo,
            context.pr_number,
            context.head_sha,
        )
        return NotifyResult(kind.name, Outcome.ALREADY_POSTED, context.pr_number, marker)

    body = build_protobuf_body(
        kind,
        marker,
        context,
        changed_files,
        excerpt,
        max_files=config.get("max_files_to_list", MAX_FILES_TO_LIST),
        mention=config.get("mention") or DEFAULT_MENTION,
    )
    return _deliver(kind, tracker, context, marker, body)


def _pull_from_event(pull: dict, pr_number: int) -> PullInfo:
    user = pull.get("user") or {}
    return PullInfo(
        number=pr_number,
        author_login=user.get("login"),
        author_type=user.get("type"),
        head_sha=(pull.get("head") or {}).get("sha") or "",
    )


def _open_linked_issues(tracker: IssueTracker, pr_number: int):
    """Return open closing-issue references, or None when the query failed."""
    try:
        issues = tracker.get_linked_issues(pr_number)
    except Exception as e:
        logger.warning(
            "Failed to fetch linked issues for %s#%d (%s: %s).",
            tracker.repo,
            pr_number,
            type(e).__name__,
            e,
        )
        return None
    return [issue for issue in issues if issue.is_open]


def run_linkbot(config: dict, event: dict, tracker: IssueTracker) -> NotifyResult:
    """Remind the author of a PR with no open linked issue, once per PR."""
    kind = LINKBOT
    context = build_context(config, event, tracker.repo)
    if context is None:
        logger.info("No pull request found in the triggering event. Skipping %s.", kind.name)
        return NotifyResult(kind.name, Outcome.NO_PULL_REQUEST)

    logger.info("Processing %s#%d (dry run: %s).", context.repo, context.pr_number, context.dry_run)

    event_pull = _event_pull(event, context.pr_number)
    if event_pull:
        pull = _pull_from_event(event_pull, context.pr_number)
    else:
        # workflow_dispatch, or an explicit PR number naming another PR: fetch it.
        try:
            pull = tracker.get_pull(context.pr_number)
        except GithubException as e:
            logger.error("Could not fetch %s#%d: %s", context.repo, context.pr_number, e)
            raise

    if pull.is_bot:
        logger.info("Skipping %s#%d: PR created by bot (%s).", context.repo, context.pr_number, pull.author_login)
        return NotifyResult(kind.name, Outcome.BOT_AUTHOR, context.pr_number)

    linked = _open_linked_issues(tracker, context.pr_number)
    if linked is None:
        logger.info("Could not determine linked issues for %s#%d. Skipping comment.", context.repo, context.pr_number)
        return NotifyResult(kind.name, Outcome.LINK_STATE_UNKNOWN, context.pr_number)
    if linked:
        logger.info(
            "%s#%d is linked to open issue(s) %s; no comment needed.",
            context.repo,
            context.pr_number,
            ", ".join(f"#{issue.number}" for issue in linked),
        )
        return NotifyResult(kind.name, Outcome.HAS_LINKED_ISSUE, context.pr_number)

    revision = pull.head_sha or context.head_sha or "unknown"
    marker = build_marker(kind, revision)
    if already_posted(
        tracker,
        context.pr_number,
        search_marker(kind, revision),
        kind.policy,
        config.get("max_comments_to_scan", MAX_COMMENTS_TO_SCAN),
    ):
        logger.info("LinkBot reminder already posted on %s#%d.", context.repo, context.pr_number)
        return NotifyResult(kind.name, Outcome.ALREADY_POSTED, context.pr_number, marker)

    body = build_linkbot_body(
        marker,
        pull.author_login,
        context.repo,
        docs_branch=config.get("docs_branch") or "main",
        link_guide=config.get("link_guide") or "docs/sdk_developers/how_to_link_issues.md",
        create_issue_guide=config.get("create_issue_guide") or "docs/sdk_developers/creating_issues.md",
    )
    return _deliver(kind, tracker, context, marker, body)
