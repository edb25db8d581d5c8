import json
import logging
import os
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict = {
    "dry_run": False,
    "max_comments_to_scan": 500,
    "max_files_to_list": 80,
    "max_diff_chars": 12000,
    "mention": "@coderabbitai full review",
    "docs_branch": "main",
    "link_guide": "docs/sdk_developers/how_to_link_issues.md",
    "create_issue_guide": "docs/sdk_developers/creating_issues.md",
    "scope_mode": "full",
    "scope_reason": "",
    "validation_status": "passed",
    "validation_checks": "",
}

# CI inputs, as the workflow exports them. Empty values are treated as unset.
ENV_INPUTS: dict = {
    "dry_run": "DRY_RUN",
    "pr_number": "PR_NUMBER",
    "base_sha": "BASE_SHA",
    "head_sha": "HEAD_SHA",
    "diff_path": "PROTOBUF_DIFF_PATH",
    "files_path": "PROTOBUF_FILES_PATH",
    "scope_mode": "PROTOBUF_SCOPE_MODE",
    "scope_reason": "PROTOBUF_SCOPE_REASON",
    "validation_status": "PROTOBUF_VALIDATION_STATUS",
    "validation_checks": "PROTOBUF_VALIDATION_CHECKS",
    "repository": "GITHUB_REPOSITORY",
    "event_path": "GITHUB_EVENT_PATH",
}


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def _parse_pr_number(value) -> Optional[int]:
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def load_config(config_path: str = ".prnotify.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .prnotify.yml in the current directory
      3. CI environment inputs (DRY_RUN, PR_NUMBER, BASE_SHA, ...)
      4. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    for key, env_name in ENV_INPUTS.items():
        value = os.environ.get(env_name)
        if value:
            config[key] = value

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    config["dry_run"] = _parse_bool(config.get("dry_run", False))
    config["pr_number"] = _parse_pr_number(config.get("pr_number"))

    config["github_token"] = os.environ.get("GITHUB_TOKEN")

    return config


def load_event(event_path: Optional[str]) -> dict:
    """
    Load the triggering event payload written by the CI runner.

    A missing path means there is no triggering event; an unreadable payload is
    logged and treated the same way so the caller can no-op.
    """
    if not event_path:
        return {}
    p = Path(event_path)
    if not p.exists():
        logger.warning("Event payload not found at %s.", event_path)
        return {}
    try:
        payload = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not read event payload %s: %s", event_path, e)
        return {}
    return payload if isinstance(payload, dict) else {}
