"""Marker-based deduplication guard.

A notifier embeds a hidden marker in every comment it posts. Before posting
again it scans the existing comments on the issue for that marker. The
thread is the only record of what was posted, so the check is a plain
read-then-decide step with no local cache.

When the answer is uncertain (listing failed, or the scan hit its cap before
finding the marker) the caller's GuardPolicy decides:

    FAIL_CLOSED  → assume it was posted; may miss a notification
    FAIL_OPEN    → assume it was not; may post one duplicate
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prnotify_core.gh.client import IssueTracker

logger = logging.getLogger(__name__)

MAX_COMMENTS_TO_SCAN = 500


class GuardPolicy(str, Enum):
    FAIL_CLOSED = "fail_closed"
    FAIL_OPEN = "fail_open"

    @property
    def fallback(self) -> bool:
        return self is GuardPolicy.FAIL_CLOSED


def already_posted(
    tracker: IssueTracker,
    issue_number: int,
    marker: str,
    policy: GuardPolicy,
    max_scan: int = MAX_COMMENTS_TO_SCAN,
    also_match: tuple[str, ...] = (),
) -> bool:
    """Return True if any comment on the issue contains marker, or one of also_match.

    Never raises: listing errors and scan-cap exhaustion resolve to the
    policy's fallback value.
    """
    if not marker:
        raise ValueError("marker must be a non-empty string")

    markers = (marker, *(m for m in also_match if m))
    scanned = 0
    try:
        for body in tracker.iter_comment_bodies(issue_number):
            scanned += 1
            if body and any(m in body for m in markers):
                return True
            if scanned >= max_scan:
                logger.warning(
                    "Stopped scanning %s#%d after %d comments without finding the marker; assuming %s (%s).",
                    tracker.repo,
                    issue_number,
                    scanned,
                    "already posted" if policy.fallback else "not posted",
                    policy.value,
                )
                return policy.fallback
    except Exception as e:
        logger.warning(
            "Failed while checking existing comments on %s#%d for %r (%s: %s); assuming %s (%s).",
            tracker.repo,
            issue_number,
            marker,
            type(e).__name__,
            e,
            "already posted" if policy.fallback else "not posted",
            policy.value,
        )
        return policy.fallback

    logger.debug("Scanned %d comment(s) on %s#%d; marker not found.", scanned, tracker.repo, issue_number)
    return False
