"""Utilities for generating Markdown blocks."""

from collections.abc import Sequence

MAX_HEADING_LEVEL = 6


def heading_level(level: int) -> int:
    """Clamp a requested heading level to what Markdown supports."""
    return max(1, min(level, MAX_HEADING_LEVEL))


def heading(level: int, text: str) -> str:
    """Generate an ATX heading, capped at level 6."""
    return f"{'#' * heading_level(level)} {text}"


def md_codeblock(lang: str, code: str) -> str:
    """Generate a fenced code block."""
    return f"```{lang}\n{code.rstrip()}\n```"


def md_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Generate a Markdown table; no rows renders nothing."""
    if not rows:
        return ""
    out = [
        "| " + " | ".join(headers) + " |",
        "|" + "|".join("-" * (len(h) + 2) for h in headers) + "|",
    ]
    out.extend("| " + " | ".join(r) + " |" for r in rows)
    return "\n".join(out)


def md_code(text: str) -> str:
    """Wrap text in an inline code span, widening the fence for backticks."""
    if "`" not in text:
        return f"`{text}`"
    return f"`` {text} ``"
