"""Data models for representing rustdoc JSON items."""

from dataclasses import dataclass, field
from typing import Any

Id = str


@dataclass
class Deprecation:
    """Deprecation record attached to an item."""

    since: str | None = None
    note: str | None = None


@dataclass
class Item:
    """Represents a documented item (struct, function, impl, etc.)."""

    id: Id
    crate_id: int
    name: str | None
    visibility: Any  # "public" / "crate" / "default" / {"restricted": {...}}
    docs: str | None
    links: dict[str, Id]
    attrs: list[str]
    deprecation: Deprecation | None
    kind: str  # tag of the inner payload, e.g. "struct" or "assoc_const"
    inner: Any  # payload of the tag, usually a mapping

    @property
    def is_public(self) -> bool:
        """Whether the item is declared `pub`."""
        return self.visibility == "public"


@dataclass(frozen=True)
class ItemSummary:
    """Canonical path and kind of any item that can be named externally."""

    crate_id: int
    path: tuple[str, ...]
    kind: str

    @property
    def canonical_path(self) -> str:
        """The `::` joined path of the original definition."""
        return "::".join(self.path)


@dataclass
class Crate:
    """A whole rustdoc JSON document, read-only during rendering."""

    root: Id
    format_version: int
    index: dict[Id, Item]
    paths: dict[Id, ItemSummary]
    crate_version: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    def get(self, item_id: Id | None) -> Item | None:
        """Look up an item, tolerating dangling or missing ids."""
        if item_id is None:
            return None
        return self.index.get(str(item_id))

    def summary(self, item_id: Id | None) -> ItemSummary | None:
        """Look up the path summary of an item."""
        if item_id is None:
            return None
        return self.paths.get(str(item_id))


@dataclass(frozen=True)
class ResolvedItemInfo:
    """An item as presented in the current rendering context."""

    item: Item
    effective_name: str | None
    reexport_source: str | None = None  # canonical path when reached via `use`
