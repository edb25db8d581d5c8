"""Setup shared by every notifier command."""

from __future__ import annotations

import click
from rich.console import Console

from prnotify_core.gh.client import connect

console = Console()


def prepare(ctx: click.Context, overrides: dict):
    """Resolve config, the triggering event and a GitHub client.

    Raises click.UsageError when the run cannot reach GitHub at all.
    """
    from prnotify_core.config import load_config, load_event
    from prnotify_cli.auth import resolve_github_token

    config_path = (ctx.obj or {}).get("config_path", ".prnotify.yml")
    config = load_config(config_path, cli_overrides=overrides)

    token = resolve_github_token()
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.\n"
            "Create a token at https://github.com/settings/tokens"
        )
    config["github_token"] = token

    repo = config.get("repository")
    if not repo or "/" not in repo:
        raise click.UsageError("No repository given. Pass --repo owner/name or set GITHUB_REPOSITORY.")

    event = load_event(config.get("event_path"))
    return config, event, connect(repo, token)


def report(result) -> None:
    color = "green" if result.commented else "yellow"
    target = f" on #{result.pr_number}" if result.pr_number else ""
    console.print(f"[{color}]{result.kind}{target}: {result.outcome.value}[/{color}]")
