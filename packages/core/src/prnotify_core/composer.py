"""Comment body composition.

Pure functions of their inputs so bodies can be compared verbatim in tests.
The hidden marker is always the first line; the guard searches for it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prnotify_core.models import ValidationStatus

if TYPE_CHECKING:
    from prnotify_core.kinds import NotificationKind
    from prnotify_core.models import Excerpt, ReviewContext

MAX_FILES_TO_LIST = 80
DEFAULT_MENTION = "@coderabbitai full review"
DEFAULT_VALIDATION_CHECKS = (
    "buf lint",
    'buf breaking --against ".git#ref=origin/main"',
    "buf build",
)


def _validation_summary(status: ValidationStatus, checks: tuple[str, ...] | list[str]) -> str:
    if status == ValidationStatus.SKIPPED:
        return (
            "Protobuf contract validation was intentionally skipped for this pull request.\n"
            "\n"
            "Reason:\n"
            "- No protobuf-impacting files changed, so buf lint/breaking/build were not required."
        )
    names = list(checks) or list(DEFAULT_VALIDATION_CHECKS)
    check_lines = "\n".join(f"- `{name}`" for name in names)
    return f"Protobuf contract validation passed for this pull request.\n\nValidation checks passed:\n{check_lines}"


def _review_focus(status: ValidationStatus) -> str:
    if status == ValidationStatus.SKIPPED:
        return (
            "Please perform a full review for this PR.\n"
            "\n"
            "Protobuf contract gate was skipped intentionally for this head commit because no "
            "protobuf-impacting files changed.\n"
            "If you identify code changes that implicitly alter protobuf contracts, flag them explicitly."
        )
    return (
        "Please review this PR with a protobuf-first contract focus:\n"
        "- PR changes must comply with protobuf compatibility rules.\n"
        "- Do not allow field renumbering/reuse, enum value reuse, or incompatible type changes.\n"
        "- Flag package/service renames unless accompanied by a migration strategy.\n"
        "- Verify generated protobuf artifacts and application logic align with updated message/service definitions."
    )


def _file_list(kind: NotificationKind, changed_files: list[str], max_files: int) -> str:
    shown = changed_files[:max_files]
    if not shown:
        return f"- {kind.files_placeholder}"
    lines = [f"- `{path}`" for path in shown]
    hidden = len(changed_files) - len(shown)
    if hidden > 0:
        lines.append(f"- ...and {hidden} more files")
    return "\n".join(lines)


def _diff_section(kind: NotificationKind, excerpt: Excerpt) -> str:
    if not excerpt.text.strip():
        return kind.no_diff_notice
    suffix = " (truncated)" if excerpt.truncated else ""
    return f"{kind.diff_heading}{suffix}:\n```diff\n{excerpt.text}\n```"


def build_protobuf_body(
    kind: NotificationKind,
    marker: str,
    context: ReviewContext,
    changed_files: list[str],
    excerpt: Excerpt,
    max_files: int = MAX_FILES_TO_LIST,
    mention: str = DEFAULT_MENTION,
) -> str:
    """Build the review-trigger comment for a protobuf notifier.

    Sections, in order: marker, mention directive, validation summary,
    metadata, review focus, file list, diff excerpt.
    """
    metadata = [
        f"- Base commit: `{context.base_sha}`",
        f"- Head commit: `{context.head_sha}`",
        f"- {kind.files_heading}: {len(changed_files)}",
        f"- Scope mode: `{context.scope_mode}`",
    ]
    if context.scope_reason:
        metadata.append(f"- Scope detail: {context.scope_reason}")

    sections = [
        f"{marker}\n{mention}",
        _validation_summary(context.validation_status, context.validation_checks),
        "\n".join(metadata),
        _review_focus(context.validation_status),
        f"{kind.files_heading}:\n{_file_list(kind, changed_files, max_files)}",
        _diff_section(kind, excerpt),
    ]
    return "\n\n".join(sections) + "\n"


def build_linkbot_body(
    marker: str,
    author_login: str | None,
    repo: str,
    docs_branch: str = "main",
    link_guide: str = "docs/sdk_developers/how_to_link_issues.md",
    create_issue_guide: str = "docs/sdk_developers/creating_issues.md",
) -> str:
    """Build the reminder posted on PRs that have no open linked issue."""
    greeting = f"Hi @{author_login}" if author_login else "Hi there"
    base_url = f"https://github.com/{repo}/blob/{docs_branch}"
    lines = [
        marker,
        f"{greeting}, this is **LinkBot** 👋",
        "",
        "Linking pull requests to issues helps us significantly with reviewing pull requests "
        "and keeping the repository healthy.",
        "",
        "🚨 **This pull request does not have an issue linked.**",
        "If this PR remains unlinked, it will be automatically closed.",
        "",
        "Please link an issue using the following format:",
        "```",
        "Fixes #123",
        "```",
        "",
        "📖 Guide:",
        f"[{link_guide}]({base_url}/{link_guide})",
        "",
        "If no issue exists yet, please create one:",
        f"[{create_issue_guide}]({base_url}/{create_issue_guide})",
        "",
        "Thanks!",
    ]
    return "\n".join(lines)
