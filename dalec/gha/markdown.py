"""Markdown fragments for job summaries."""

from __future__ import annotations

from typing import Any


def md_bold(text: str) -> str:
    """Return ``text`` in bold."""
    return "**" + text + "**"


def md_details(text: str) -> str:
    """Wrap ``text`` in a collapsible details block."""
    return f"\n<details>\n{text}\n</details>\n"


def md_summary(text: str) -> str:
    """Return a summary line for a details block."""
    return "<summary>" + text + "</summary>\n"


def md_preformat(text: str) -> str:
    """Wrap ``text`` in a fenced code block."""
    return f"\n```\n{text}\n```\n"


def md_log(head: str, content: Any) -> str:
    """Return a collapsible log titled ``head`` holding ``content`` preformatted."""
    return md_details(md_summary(head) + md_preformat(str(content)))