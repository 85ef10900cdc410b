"""Version string helpers for report display."""

from __future__ import annotations

import re

# "go1.21.5", "v20.11.0", "2.4.1", "13.0" - the first match in the output wins
_VERSION_RE = re.compile(r"\b(?:go|v)?\d+(?:\.\d+)+(?:[-+][0-9A-Za-z.]+)?\b")


def short_version(raw: str, width: int) -> str:
    """Return a compact version token for `raw` command output.

    Examples:
        "go version go1.21.5 linux/amd64" -> "go1.21.5"
        "v20.11.0" -> "v20.11.0"
        "/Library/Developer/CommandLineTools" -> "/Library/Deve..." (width 16)

    Args:
        raw: Raw detected version (command output or environment value)
        width: Maximum length of the returned string

    Returns:
        The first version-looking token, else the first line of `raw` cut to `width`.
    """
    text = raw.strip()
    if not text:
        return ""
    match = _VERSION_RE.search(text)
    token = match.group(0) if match else text.splitlines()[0].strip()
    return truncate(token, width)


def truncate(text: str, width: int, marker: str = "...") -> str:
    """Cut `text` to `width` characters, ending with `marker` when cut."""
    if len(text) <= width:
        return text
    if width <= len(marker):
        return text[:width]
    return text[: width - len(marker)] + marker
