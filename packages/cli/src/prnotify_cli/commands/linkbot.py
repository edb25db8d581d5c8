"""linkbot command — remind authors to link an issue to their PR."""

from __future__ import annotations

import click

from prnotify_cli.commands.common import prepare, report
from prnotify_core.notifier import run_linkbot


@click.command("linkbot")
@click.option("--repo", default=None, help="GitHub repository in owner/name format. Defaults to GITHUB_REPOSITORY.")
@click.option("--pr", "pr_number", type=int, default=None, help="Pull request number. Defaults to the event payload.")
@click.option("--dry-run", "dry_run", is_flag=True, help="Print the comment instead of posting it.")
@click.pass_context
def linkbot_cmd(ctx, repo: str | None, pr_number: int | None, dry_run: bool):
    """Post a one-time reminder on a PR that has no open linked issue.

    PRs opened by bot accounts are skipped. When the linked-issue lookup
    fails nothing is posted.

    \b
    Environment variables:
      GITHUB_TOKEN        token with pull-requests: write (or GH_TOKEN)
      GITHUB_REPOSITORY   owner/name (set by GitHub Actions)
      GITHUB_EVENT_PATH   triggering event payload (set by GitHub Actions)
      PR_NUMBER           overrides the payload PR, e.g. for workflow_dispatch
      DRY_RUN             "true" to print instead of post
    """
    config, event, tracker = prepare(
        ctx,
        {"repository": repo, "pr_number": pr_number, "dry_run": dry_run or None},
    )
    report(run_linkbot(config, event, tracker))
