"""Logic for writing one Markdown page per documented item."""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from rustdoc_md.item_kind import is_module_kind, is_page_worthy
from rustdoc_md.item_paths import build_path_table
from rustdoc_md.link_resolvers import LOCAL_CRATE_ID, PathLinkResolver
from rustdoc_md.load_config import resolve_config
from rustdoc_md.models import Crate, Id, Item, ResolvedItemInfo
from rustdoc_md.render_item_page import render_page_text

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 50


def page_items(krate: Crate) -> list[Item]:
    """Enumerate the items that get a page, once each, in `paths` order."""
    items = []
    for item_id, summary in krate.paths.items():
        if summary.crate_id != LOCAL_CRATE_ID:
            continue
        item = krate.get(item_id)
        if item is None:
            logger.warning(
                "No index entry for %s (%s), skipping its page",
                summary.canonical_path,
                item_id,
            )
            continue
        if item.kind == "use":
            continue
        if not (item.is_public or item.id == krate.root):
            continue
        if is_page_worthy(item.kind) or is_module_kind(item.kind):
            items.append(item)
    return items


def write_page(
    item: Item,
    krate: Crate,
    path_table: dict[Id, Path],
    config: dict[str, Any],
    page_ids: frozenset[Id] | None = None,
) -> Path:
    """Render a single item page and write it to its precomputed file."""
    out_file = path_table[item.id]
    resolver = PathLinkResolver(krate, path_table, out_file, page_ids)
    md = render_page_text(ResolvedItemInfo(item, item.name), krate, resolver, config)
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(md, encoding="utf-8")
    return out_file


def write_pages(krate: Crate, out_dir: Path, config: dict[str, Any] | None = None) -> int:
    """Write every in-scope item page under `out_dir`; return the page count."""
    config = resolve_config(config)
    path_table = build_path_table(krate, out_dir)
    items = page_items(krate)
    page_ids = frozenset(item.id for item in items)
    total = len(items)
    print(f"Writing {total} item pages...")

    written = 0
    workers = max(1, int(config["workers"]))
    if workers == 1:
        for item in items:
            write_page(item, krate, path_table, config, page_ids)
            written += 1
            if written % PROGRESS_EVERY == 0:
                print(f"  ... wrote {written}/{total} pages")
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(write_page, item, krate, path_table, config, page_ids)
                for item in items
            ]
            for future in as_completed(futures):
                future.result()
                written += 1
                if written % PROGRESS_EVERY == 0:
                    print(f"  ... wrote {written}/{total} pages")

    print(f"Generated {written} Markdown pages into: {out_dir}")
    return written
