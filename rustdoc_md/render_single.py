"""Logic for rendering a whole crate as one Markdown document."""

import logging
from pathlib import Path
from typing import Any

from rustdoc_md.item_kind import is_module_kind
from rustdoc_md.link_resolvers import AnchorLinkResolver
from rustdoc_md.load_config import resolve_config
from rustdoc_md.load_crate import CrateFormatError
from rustdoc_md.models import Crate, Item, ResolvedItemInfo
from rustdoc_md.render_item_page import render_item_page
from rustdoc_md.resolve_items import resolve_items

logger = logging.getLogger(__name__)


def render_front_matter(krate: Crate, config: dict[str, Any]) -> list[str]:
    """Render the document title and version lines."""
    parts = [f"# {config['title']}", ""]
    if krate.crate_version:
        parts += [f"**Version:** {krate.crate_version}", ""]
    parts += [f"**Format Version:** {krate.format_version}", ""]
    return parts


def _child_modules(module: Item, krate: Crate) -> list[Item]:
    """Modules listed by a module, directly or through re-exports."""
    resolved = resolve_items(module.inner.get("items") or [], krate)
    return [info.item for info in resolved.items if is_module_kind(info.item.kind)]


def _render_module_tree(
    parts: list[str],
    module: Item,
    krate: Crate,
    level: int,
    resolver: AnchorLinkResolver,
    config: dict[str, Any],
    visited: set[str],
) -> None:
    visited.add(module.id)
    render_item_page(parts, ResolvedItemInfo(module, module.name), krate, level, resolver, config)
    for child in _child_modules(module, krate):
        if child.id in visited:
            logger.debug("Module %s already rendered, skipping", child.id)
            continue
        _render_module_tree(parts, child, krate, level + 1, resolver, config, visited)


def render_crate(krate: Crate, config: dict[str, Any] | None = None) -> str:
    """Render the crate depth-first from its root module."""
    config = resolve_config(config)
    root = krate.get(krate.root)
    if root is None:
        msg = f"root item {krate.root} is missing from the index"
        raise CrateFormatError(msg)

    parts = render_front_matter(krate, config)
    resolver = AnchorLinkResolver(krate)
    _render_module_tree(parts, root, krate, 1, resolver, config, set())
    return "\n".join(parts).rstrip() + "\n"


def write_single_file(
    krate: Crate, out_file: Path, config: dict[str, Any] | None = None
) -> Path:
    """Render the crate and write it to `out_file`."""
    md = render_crate(krate, config)
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(md, encoding="utf-8")
    print(f"Generated documentation into: {out_file}")
    return out_file
