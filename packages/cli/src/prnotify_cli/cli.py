"""CLI entry point for prnotify.

Commands:
  linkbot   — remind authors of PRs that have no open linked issue
  protobuf  — trigger a protobuf-focused agent review of a PR's head commit
"""

from __future__ import annotations

import importlib.metadata
import logging

import click

from prnotify_cli.commands.linkbot import linkbot_cmd
from prnotify_cli.commands.protobuf import protobuf_cmd


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@click.group()
@click.version_option(
    version=importlib.metadata.version("prnotify"),
    prog_name="prnotify",
)
@click.option(
    "--config",
    "config_path",
    default=".prnotify.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRNOTIFY_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Idempotent pull request notifications for CI."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


main.add_command(linkbot_cmd)
main.add_command(protobuf_cmd)
