"""Link resolution strategies: in-page anchors or relative file paths.

A link resolver is any callable mapping an item id to a Markdown link, or to
None when the target cannot be linked. The page renderer only ever calls it,
so output-mode specifics stay here.
"""

import os
from collections.abc import Callable, Collection
from pathlib import Path

from rustdoc_md.item_kind import is_module_kind, is_page_worthy
from rustdoc_md.item_paths import item_anchor
from rustdoc_md.models import Crate, Id, ItemSummary

LinkResolver = Callable[[Id], str | None]

# Items of other crates never get an anchor or a page of their own.
LOCAL_CRATE_ID = 0


def link_text(name: str, target: str) -> str:
    """Format a code-styled Markdown link."""
    return f"[`{name}`]({target})"


def is_linkable(summary: ItemSummary | None) -> bool:
    """Check if the summary names a local item that gets an anchor or a page."""
    if summary is None or summary.crate_id != LOCAL_CRATE_ID:
        return False
    return is_page_worthy(summary.kind) or is_module_kind(summary.kind)


class AnchorLinkResolver:
    """Resolve links to anchors within one Markdown document."""

    def __init__(self, krate: Crate) -> None:
        """Initialize with the crate whose path summaries provide anchors."""
        self.krate = krate

    def __call__(self, target_id: Id) -> str | None:
        """Return `[`name`](#anchor)` for the target, if it is rendered with one."""
        summary = self.krate.summary(target_id)
        if summary is None or not is_linkable(summary):
            return None
        return link_text(summary.path[-1], f"#{item_anchor(summary)}")


class PathLinkResolver:
    """Resolve links to other pages, relative to the page being written."""

    def __init__(
        self,
        krate: Crate,
        path_table: dict[Id, Path],
        from_file: Path,
        page_ids: Collection[Id] | None = None,
    ) -> None:
        """Initialize with the precomputed path table and the current page.

        When `page_ids` is given, only those items are linked; every other
        target has no page written for it.
        """
        self.krate = krate
        self.path_table = path_table
        self.from_dir = from_file.parent
        self.page_ids = page_ids

    def __call__(self, target_id: Id) -> str | None:
        """Return a link to the target page, if both summary and page exist."""
        key = str(target_id)
        summary = self.krate.summary(key)
        target = self.path_table.get(key)
        if summary is None or target is None or not is_linkable(summary):
            return None
        if self.page_ids is not None and key not in self.page_ids:
            return None
        rel = Path(os.path.relpath(target, self.from_dir)).as_posix()
        return link_text(summary.path[-1], rel)
