"""Notification kinds.

Each notifier is the same pipeline configured differently: which guard
policy resolves an uncertain scan, whether the marker is tied to the head
commit or to the whole pull request, and the labels the composer uses.
"""

from __future__ import annotations

from dataclasses import dataclass

from prnotify_core.guard import GuardPolicy

SCOPE_REVISION = "revision"
SCOPE_PULL_REQUEST = "pull_request"


@dataclass(frozen=True)
class NotificationKind:
    name: str
    title: str  # rendered into the hidden marker
    policy: GuardPolicy
    dedup_scope: str = SCOPE_REVISION
    require_diff: bool = False
    files_heading: str = "Changed files"
    files_placeholder: str = "(no files changed in this PR)"
    diff_heading: str = "Diff excerpt"
    no_diff_notice: str = "No diff was detected for this head commit."
    # str.format template with {revision}, for comments posted before the current marker form
    legacy_marker: str = ""

    @property
    def marker_prefix(self) -> str:
        return f"<!-- {self.title}"


# A duplicate reminder is a nuisance; a reminder that never appears means the
# PR gets auto-closed without warning. Resolve uncertainty toward posting.
LINKBOT = NotificationKind(
    name="linkbot",
    title="LinkBot Missing Issue",
    policy=GuardPolicy.FAIL_OPEN,
    dedup_scope=SCOPE_PULL_REQUEST,
)

# Every trigger comment starts a full agent review, so both protobuf
# variants resolve uncertainty toward staying quiet.
PROTOBUF_REVIEW = NotificationKind(
    name="protobuf-review",
    title="CodeRabbit Protobuf Review",
    policy=GuardPolicy.FAIL_CLOSED,
    files_heading="Changed .proto files",
    files_placeholder="(no .proto files changed in this PR)",
    diff_heading="Protobuf contract diff excerpt",
    no_diff_notice="No .proto diff was detected for this head commit.",
    legacy_marker="<!-- CodeRabbit Protobuf Review Trigger: {revision} -->",
)

PROTOBUF_GENERATED = NotificationKind(
    name="protobuf-generated",
    title="CodeRabbit Protobuf Generated Diff",
    policy=GuardPolicy.FAIL_CLOSED,
    require_diff=True,
    files_heading="Changed generated protobuf files",
    files_placeholder="(no generated protobuf files differ)",
    diff_heading="Generated protobuf artifact diff excerpt",
    no_diff_notice="No generated protobuf drift was detected for this head commit.",
)

KINDS = {k.name: k for k in (LINKBOT, PROTOBUF_REVIEW, PROTOBUF_GENERATED)}


def get_kind(name: str) -> NotificationKind:
    try:
        return KINDS[name]
    except KeyError:
        raise ValueError(f"Unknown notification kind: {name!r}. Choose one of {', '.join(sorted(KINDS))}.")


def build_marker(kind: NotificationKind, revision: str) -> str:
    return f"{kind.marker_prefix} Marker: {revision} -->"


def search_marker(kind: NotificationKind, revision: str) -> str:
    """The substring the guard looks for.

    PR-scoped kinds match any earlier comment of that kind, including ones
    posted before the head commit was part of the marker.
    """
    if kind.dedup_scope == SCOPE_PULL_REQUEST:
        return kind.marker_prefix
    return build_marker(kind, revision)


def legacy_markers(kind: NotificationKind, revision: str) -> tuple[str, ...]:
    if not kind.legacy_marker:
        return ()
    return (kind.legacy_marker.format(revision=revision),)
