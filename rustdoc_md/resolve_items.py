"""Expand a container's item list into the effective set of documented items.

Re-exports are inlined here: a glob `pub use m::*` contributes every public
child of `m`, a named `pub use path::Thing as Alias` contributes `Thing` under
the name `Alias`. Anything that cannot be resolved is dropped and logged;
nothing in this module raises for bad data.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from rustdoc_md.format_type import format_path
from rustdoc_md.item_kind import is_module_kind, is_page_worthy
from rustdoc_md.models import Crate, Item, ResolvedItemInfo

logger = logging.getLogger(__name__)

# Fixed bucket order; the trailing "Other Items" bucket collects the rest.
ITEM_GROUPS: list[tuple[str, frozenset[str]]] = [
    ("Modules", frozenset({"module"})),
    ("Types", frozenset({"struct", "enum", "union", "type_alias"})),
    ("Traits", frozenset({"trait", "trait_alias"})),
    ("Functions", frozenset({"function"})),
    ("Constants and Statics", frozenset({"constant", "static"})),
    ("Macros", frozenset({"macro", "proc_macro"})),
]
OTHER_GROUP = "Other Items"

# Impl blocks are documented on the type they implement, not in module lists.
_NOT_LISTED = frozenset({"impl"})


@dataclass
class ResolvedItems:
    """The effective items of a container plus its `pub use` declarations."""

    items: list[ResolvedItemInfo] = field(default_factory=list)
    reexports: list[Item] = field(default_factory=list)


@dataclass
class ImplPartition:
    """Impl blocks of a type split by how they are presented."""

    inherent: list[Item] = field(default_factory=list)
    trait_impls: list[Item] = field(default_factory=list)
    blanket_traits: list[str] = field(default_factory=list)


def canonical_path(item: Item, krate: Crate) -> str:
    """Path of the original definition, falling back to the bare name."""
    summary = krate.summary(item.id)
    if summary:
        return summary.canonical_path
    return item.name or ""


def _resolve_glob(use: dict[str, Any], krate: Crate) -> list[ResolvedItemInfo]:
    target = krate.get(use.get("id"))
    if target is None or not is_module_kind(target.kind):
        logger.debug("Glob re-export of %r does not resolve to a module", use.get("source"))
        return []
    resolved = []
    for child_id in target.inner.get("items") or []:
        child = krate.get(child_id)
        if child is None or not child.is_public or child.kind in _NOT_LISTED:
            continue
        if child.kind == "use":
            # Nested re-exports are expanded where they are declared.
            continue
        resolved.append(
            ResolvedItemInfo(
                item=child,
                effective_name=child.name,
                reexport_source=canonical_path(child, krate),
            )
        )
    return resolved


def _resolve_named(use: dict[str, Any], krate: Crate) -> ResolvedItemInfo | None:
    target = krate.get(use.get("id"))
    if target is None:
        logger.debug("Re-export of %r has no target in the index", use.get("source"))
        return None
    if not target.is_public:
        logger.debug("Re-export of %r points at a non-public item", use.get("source"))
        return None
    if not is_page_worthy(target.kind):
        return None
    return ResolvedItemInfo(
        item=target,
        effective_name=use.get("name") or target.name,
        reexport_source=canonical_path(target, krate),
    )


def resolve_items(item_ids: Iterable[Any], krate: Crate) -> ResolvedItems:
    """Resolve a container's declared item ids, in declaration order."""
    result = ResolvedItems()
    for item_id in item_ids:
        item = krate.get(item_id)
        if item is None:
            logger.debug("Skipping dangling item id %s", item_id)
            continue
        if item.kind == "use":
            if not item.is_public or not isinstance(item.inner, dict):
                continue
            result.reexports.append(item)
            if item.inner.get("is_glob"):
                result.items.extend(_resolve_glob(item.inner, krate))
            else:
                info = _resolve_named(item.inner, krate)
                if info is not None:
                    result.items.append(info)
            continue
        if item.kind in _NOT_LISTED:
            continue
        result.items.append(ResolvedItemInfo(item=item, effective_name=item.name))
    return result


def group_items(
    items: Iterable[ResolvedItemInfo],
) -> list[tuple[str, list[ResolvedItemInfo]]]:
    """Partition resolved items into the fixed, non-empty labelled buckets."""
    buckets: dict[str, list[ResolvedItemInfo]] = {label: [] for label, _ in ITEM_GROUPS}
    buckets[OTHER_GROUP] = []
    for info in items:
        label = next(
            (label for label, kinds in ITEM_GROUPS if info.item.kind in kinds),
            OTHER_GROUP,
        )
        buckets[label].append(info)
    return [(label, infos) for label, infos in buckets.items() if infos]


def trait_path(impl: Item, krate: Crate) -> str | None:
    """Display path of the trait an impl block implements, if any."""
    trait = impl.inner.get("trait") if isinstance(impl.inner, dict) else None
    if not trait:
        return None
    return format_path(trait, krate)


def partition_impls(impl_ids: Iterable[Any], krate: Crate) -> ImplPartition:
    """Split a type's impls into inherent, trait and blanket implementations."""
    partition = ImplPartition()
    blanket: set[str] = set()
    for impl_id in impl_ids:
        impl = krate.get(impl_id)
        if impl is None or impl.kind != "impl":
            logger.debug("Skipping impl id %s: not an impl in the index", impl_id)
            continue
        path = trait_path(impl, krate)
        if impl.inner.get("blanket_impl") is not None:
            if path:
                blanket.add(path)
        elif path:
            partition.trait_impls.append(impl)
        else:
            partition.inherent.append(impl)
    partition.blanket_traits = sorted(blanket)
    return partition


def implemented_traits(
    impl_ids: Iterable[Any], krate: Crate
) -> list[tuple[str, list[Item]]]:
    """Group concrete trait impls by trait path, sorted by that path."""
    grouped: dict[str, list[Item]] = {}
    for impl in partition_impls(impl_ids, krate).trait_impls:
        grouped.setdefault(trait_path(impl, krate) or "", []).append(impl)
    return sorted(grouped.items(), key=lambda kv: kv[0])
