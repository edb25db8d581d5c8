from __future__ import annotations

import re
from pathlib import Path

from prnotify_core.models import Excerpt

MAX_DIFF_CHARS = 12000
TRUNCATION_NOTICE = "... (diff truncated in CI comment)"

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def read_text_file_or_empty(path: str | None) -> str:
    """Return the file's text, or "" when no path is given or the file is absent."""
    if not path:
        return ""
    p = Path(path)
    if not p.is_file():
        return ""
    # CI artifacts are not guaranteed to be valid UTF-8; undecodable bytes become U+FFFD.
    return p.read_text(encoding="utf-8", errors="replace")


def parse_unique_lines(text: str) -> list[str]:
    """Split text into trimmed, non-empty lines, keeping the first occurrence of each."""
    seen: set[str] = set()
    lines: list[str] = []
    for raw_line in _LINE_BREAK_RE.split(text or ""):
        line = raw_line.strip()
        if not line or line in seen:
            continue
        seen.add(line)
        lines.append(line)
    return lines


def parse_check_names(text: str | list[str] | None) -> list[str]:
    """Validation check names arrive comma- or newline-delimited, or as a YAML list."""
    if isinstance(text, (list, tuple)):
        text = "\n".join(str(name) for name in text)
    return parse_unique_lines((text or "").replace(",", "\n"))


def truncate(text: str, max_chars: int = MAX_DIFF_CHARS) -> Excerpt:
    """Bound text to max_chars without cutting a line in half.

    When the slice holds no usable line break the raw slice is kept, so a
    single huge line still yields something to show.
    """
    if len(text) <= max_chars:
        return Excerpt(text=text, truncated=False)

    head = text[:max_chars]
    cut = head.rfind("\n")
    if cut > 0:
        head = head[:cut]
    return Excerpt(text=f"{head}\n{TRUNCATION_NOTICE}", truncated=True)
