"""protobuf command — trigger a contract-focused review for protobuf changes."""

from __future__ import annotations

import click

from prnotify_cli.commands.common import prepare, report
from prnotify_core.kinds import get_kind
from prnotify_core.notifier import run_protobuf

_VARIANTS = ("generated", "review")


@click.command("protobuf")
@click.option(
    "--variant",
    type=click.Choice(_VARIANTS),
    default="review",
    show_default=True,
    help="review: .proto contract changes. generated: drift in generated artifacts (skipped on empty diff).",
)
@click.option("--repo", default=None, help="GitHub repository in owner/name format. Defaults to GITHUB_REPOSITORY.")
@click.option("--pr", "pr_number", type=int, default=None, help="Pull request number. Defaults to the event payload.")
@click.option("--base-sha", default=None, help="Base commit. Overrides BASE_SHA.")
@click.option("--head-sha", default=None, help="Head commit. Overrides HEAD_SHA.")
@click.option("--diff-path", default=None, help="File holding the diff. Overrides PROTOBUF_DIFF_PATH.")
@click.option("--files-path", default=None, help="File listing changed paths. Overrides PROTOBUF_FILES_PATH.")
@click.option("--dry-run", "dry_run", is_flag=True, help="Print the comment instead of posting it.")
@click.pass_context
def protobuf_cmd(
    ctx,
    variant: str,
    repo: str | None,
    pr_number: int | None,
    base_sha: str | None,
    head_sha: str | None,
    diff_path: str | None,
    files_path: str | None,
    dry_run: bool,
):
    """Ask the review agent for a protobuf-focused review, once per head commit.

    \b
    Environment variables:
      GITHUB_TOKEN                  token with pull-requests: write
      BASE_SHA, HEAD_SHA            commits under review (required)
      PROTOBUF_FILES_PATH           changed-file list, one path per line (required)
      PROTOBUF_DIFF_PATH            diff excerpt source
      PROTOBUF_SCOPE_MODE           e.g. full, partial
      PROTOBUF_SCOPE_REASON         free-text scope detail
      PROTOBUF_VALIDATION_STATUS    passed | skipped
      PROTOBUF_VALIDATION_CHECKS    comma- or newline-separated check names
      DRY_RUN                       "true" to print instead of post
    """
    config, event, tracker = prepare(
        ctx,
        {
            "repository": repo,
            "pr_number": pr_number,
            "base_sha": base_sha,
            "head_sha": head_sha,
            "diff_path": diff_path,
            "files_path": files_path,
            "dry_run": dry_run or None,
        },
    )
    report(run_protobuf(get_kind(f"protobuf-{variant}"), config, event, tracker))
