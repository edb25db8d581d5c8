"""GitHub token resolution for notifier runs.

Workflows export the job token as GITHUB_TOKEN, or as GH_TOKEN when the same
step also shells out to the GitHub CLI. Local dry runs can reuse a `gh auth
login` session instead of a PAT.

Resolution order (stops at first success):
  1. GITHUB_TOKEN
  2. GH_TOKEN
  3. `gh auth token`
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

_TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN")


def _token_from_gh_cli() -> str | None:
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def resolve_github_token() -> str | None:
    """Return a GitHub token, or None when no source has one.

    Never raises; the command layer turns None into a UsageError.
    """
    for env_name in _TOKEN_ENV_VARS:
        token = os.environ.get(env_name)
        if token:
            logger.debug("Using GitHub token from %s.", env_name)
            return token

    token = _token_from_gh_cli()
    if token:
        logger.debug("Resolved GitHub token via gh CLI session.")
    return token
