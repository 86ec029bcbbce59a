"""Utilities for computing page file paths and anchors for items."""

import re
from pathlib import Path

from rustdoc_md.item_kind import kind_name
from rustdoc_md.models import Crate, Id, ItemSummary

FILE_PREFIXES = {
    "struct": "struct",
    "enum": "enum",
    "union": "union",
    "trait": "trait",
    "trait_alias": "trait_alias",
    "function": "fn",
    "type_alias": "type",
    "constant": "const",
    "static": "static",
    "macro": "macro",
    "proc_attribute": "proc_attribute",
    "proc_derive": "proc_derive",
}
MODULE_FILE = "index.md"


def item_file_name(summary: ItemSummary) -> str:
    """Generate the file name of an item page, e.g. `struct.Point.md`."""
    if summary.kind == "module":
        return MODULE_FILE
    prefix = FILE_PREFIXES.get(summary.kind, "item")
    name = summary.path[-1] if summary.path else "unknown"
    return f"{prefix}.{name}.md"


def item_fs_path(summary: ItemSummary, base_dir: Path) -> Path:
    """Determine the output file for an item.

    Modules are an `index.md` inside a directory named by their full path;
    other items live in the directory of their parent module.
    """
    if summary.kind == "module":
        parent = summary.path
    elif len(summary.path) > 1:
        parent = summary.path[:-1]
    else:
        parent = summary.path[:1]
    return base_dir.joinpath(*parent) / item_file_name(summary)


def slug(s: str) -> str:
    """Lowercase and hyphenate a string for use inside an anchor id."""
    s = s.strip().lower()
    s = re.sub(r"[^a-z0-9_]+", "-", s)
    return re.sub(r"-{2,}", "-", s).strip("-")


def item_anchor(summary: ItemSummary) -> str:
    """Generate a stable anchor id for single-document output."""
    kind = slug(kind_name(summary.kind))
    path = "-".join(slug(segment) for segment in summary.path)
    return f"{kind}-{path}"


def build_path_table(krate: Crate, base_dir: Path) -> dict[Id, Path]:
    """Precompute the output file of every item with a path summary."""
    return {
        item_id: item_fs_path(summary, base_dir)
        for item_id, summary in krate.paths.items()
    }
