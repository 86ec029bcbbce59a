"""Logic for rewriting intra-doc links in documentation text."""

import logging
import re

from rustdoc_md.link_resolvers import LinkResolver
from rustdoc_md.models import Id

logger = logging.getLogger(__name__)

FENCE_RE = re.compile(r"(^```.*?^```[^\n]*$)", re.MULTILINE | re.DOTALL)
INLINE_LINK_RE = re.compile(r"\[([^\[\]]+)\]\(([^()\s]+)\)")  # [label](path::Item)
SHORTCUT_LINK_RE = re.compile(r"\[(`[^`\[\]]+`|[^\[\]`]+)\](?![(\[:])")  # [`Item`]
LINK_TARGET_RE = re.compile(r"\]\(([^()]*)\)$")


def _lookup(key: str, links: dict[str, Id]) -> Id | None:
    if key in links:
        return links[key]
    return links.get(key.strip("`"))


def _rewrite_segment(text: str, links: dict[str, Id], link_resolver: LinkResolver) -> str:
    def repl_inline(m: re.Match) -> str:
        target_id = _lookup(m.group(2), links)
        if target_id is None:
            return m.group(0)
        link = link_resolver(target_id)
        target = LINK_TARGET_RE.search(link) if link else None
        if not target:
            logger.debug("Cannot link %r: target %s has no path", m.group(2), target_id)
            return m.group(0)
        return f"[{m.group(1)}]({target.group(1)})"

    def repl_shortcut(m: re.Match) -> str:
        target_id = _lookup(m.group(1), links)
        if target_id is None:
            return m.group(0)
        link = link_resolver(target_id)
        if not link:
            logger.debug("Cannot link %r: target %s has no path", m.group(1), target_id)
            return m.group(0)
        return link

    text = INLINE_LINK_RE.sub(repl_inline, text)
    return SHORTCUT_LINK_RE.sub(repl_shortcut, text)


def render_docs_with_links(
    docs: str | None,
    links: dict[str, Id],
    link_resolver: LinkResolver,
) -> str:
    """Replace intra-doc links declared in `links` with resolved links.

    Only link texts present in the item's own link map are rewritten; other
    bracketed text and fenced code blocks are left untouched.
    """
    if not docs:
        return ""
    if not links:
        return docs
    parts = FENCE_RE.split(docs)
    # Odd indices are fenced code blocks captured by the split.
    return "".join(
        part if i % 2 else _rewrite_segment(part, links, link_resolver)
        for i, part in enumerate(parts)
    )


def table_docs(
    docs: str | None,
    links: dict[str, Id],
    link_resolver: LinkResolver,
    *,
    first_line_only: bool = True,
) -> str:
    """Render documentation for a single Markdown table cell."""
    text = render_docs_with_links(docs, links, link_resolver).strip()
    if first_line_only and text:
        text = text.splitlines()[0]
    return text.replace("|", "\\|").replace("\n", "<br>")
