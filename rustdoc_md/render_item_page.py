"""Logic for rendering one item's documentation page.

Rendering is plain recursive descent: every helper appends lines to a
`parts` list and passes the heading level down by value. Headings are capped
at level 6 wherever they are emitted, however deep impls and associated
items nest.
"""

from dataclasses import dataclass
from typing import Any

from rustdoc_md.format_generics import format_generics
from rustdoc_md.format_signature import format_item_signature, format_use
from rustdoc_md.format_type import format_type
from rustdoc_md.item_kind import is_module_kind, kind_name
from rustdoc_md.item_paths import item_anchor
from rustdoc_md.link_resolvers import LinkResolver
from rustdoc_md.load_config import resolve_config
from rustdoc_md.markdown import heading, md_code, md_codeblock
from rustdoc_md.models import Crate, Item, ResolvedItemInfo
from rustdoc_md.render_docs import render_docs_with_links
from rustdoc_md.render_fields import (
    render_enum_variants,
    render_struct_fields,
    render_union_fields,
)
from rustdoc_md.resolve_items import group_items, partition_impls, resolve_items, trait_path

ASSOC_GROUPS = [
    ("Associated Types", "assoc_type"),
    ("Associated Constants", "assoc_const"),
    ("Methods", "function"),
]
STRIPPED_MODULE_NOTE = (
    "> **Note:** This module is marked as stripped. Some items may be omitted."
)


@dataclass(frozen=True)
class PageContext:
    """Read-only state shared by one page render."""

    krate: Crate
    link_resolver: LinkResolver
    config: dict[str, Any]


def render_item_page(
    out: list[str],
    info: ResolvedItemInfo,
    krate: Crate,
    level: int,
    link_resolver: LinkResolver,
    config: dict[str, Any] | None = None,
) -> None:
    """Append the Markdown for an item (and everything nested in it) to `out`."""
    ctx = PageContext(krate, link_resolver, resolve_config(config))
    _render_item(out, info, ctx, level)


def render_page_text(
    info: ResolvedItemInfo,
    krate: Crate,
    link_resolver: LinkResolver,
    config: dict[str, Any] | None = None,
) -> str:
    """Render an item as a standalone Markdown page."""
    parts: list[str] = []
    render_item_page(parts, info, krate, 1, link_resolver, config)
    return "\n".join(parts).rstrip() + "\n"


def item_heading(info: ResolvedItemInfo, krate: Crate) -> str:
    """Heading text for an item in its current rendering context."""
    item = info.item
    name = info.effective_name or item.name
    kind = kind_name(item.kind)
    if name:
        if info.reexport_source:
            return f"Re-exported {kind} {md_code(name)} (from {md_code(info.reexport_source)})"
        return f"{kind} {md_code(name)}"
    if item.kind == "impl":
        for_type = md_code(format_type(item.inner.get("for"), krate))
        trait = trait_path(item, krate)
        if trait:
            return f"Implementation of {md_code(trait)} for {for_type}"
        return f"Implementation for {for_type}"
    return kind


def _render_deprecation(item: Item) -> list[str]:
    deprecation = item.deprecation
    if deprecation is None:
        return []
    line = "**⚠️ Deprecated"
    if deprecation.since:
        line += f" since {deprecation.since}"
    line += "**"
    if deprecation.note:
        line += f": {deprecation.note}"
    return [line, ""]


def _render_attributes(item: Item, ctx: PageContext) -> list[str]:
    if not item.attrs or not ctx.config["sections"]["attributes"]:
        return []
    return ["**Attributes:**", "", *(f"- {md_code(a)}" for a in item.attrs), ""]


def _render_item(
    parts: list[str],
    info: ResolvedItemInfo,
    ctx: PageContext,
    level: int,
    *,
    brief: bool = False,
) -> None:
    """Render an item section; `brief` sections skip nested details."""
    item = info.item
    summary = ctx.krate.summary(item.id)
    if summary is not None and not info.reexport_source and not brief:
        parts += [f'<a id="{item_anchor(summary)}"></a>', ""]
    parts += [heading(level, item_heading(info, ctx.krate)), ""]

    parts.extend(_render_attributes(item, ctx))
    parts.extend(_render_deprecation(item))

    docs = render_docs_with_links(item.docs, item.links, ctx.link_resolver)
    if docs:
        parts += [docs, ""]

    signature = format_item_signature(item, ctx.krate)
    parts += [md_codeblock(ctx.config["code_lang"], signature), ""]

    if brief:
        link = ctx.link_resolver(item.id)
        if link:
            parts += [f"See {link} for its contents.", ""]
        return

    details = _DETAILS.get(item.kind)
    if details is not None:
        details(parts, item, ctx, level + 1)


def _render_module(parts: list[str], item: Item, ctx: PageContext, level: int) -> None:
    module = item.inner
    if module.get("is_stripped"):
        parts += [STRIPPED_MODULE_NOTE, ""]

    resolved = resolve_items(module.get("items") or [], ctx.krate)
    for label, infos in group_items(resolved.items):
        parts += [heading(level, label), ""]
        for info in infos:
            # Submodules are rendered in full by the output driver.
            _render_item(parts, info, ctx, level + 1, brief=is_module_kind(info.item.kind))

    if resolved.reexports and ctx.config["sections"]["reexports"]:
        parts += [heading(level, "Re-exports"), ""]
        for use_item in resolved.reexports:
            _render_reexport(parts, use_item, ctx, level + 1)


def _render_reexport(parts: list[str], item: Item, ctx: PageContext, level: int) -> None:
    """Render a `pub use` declaration for the Re-exports listing."""
    statement = format_use(item)
    parts += [heading(level, md_code(statement.rstrip(";"))), ""]
    docs = render_docs_with_links(item.docs, item.links, ctx.link_resolver)
    if docs:
        parts += [docs, ""]
    code = format_item_signature(item, ctx.krate)
    parts += [md_codeblock(ctx.config["code_lang"], code), ""]
    link = ctx.link_resolver(item.inner.get("id")) if item.inner.get("id") is not None else None
    if link:
        parts += [f"Re-exports {link}.", ""]


def _assoc_items(item_ids: list[Any], ctx: PageContext) -> dict[str, list[Item]]:
    grouped: dict[str, list[Item]] = {kind: [] for _, kind in ASSOC_GROUPS}
    for item_id in item_ids:
        assoc = ctx.krate.get(item_id)
        if assoc is not None and assoc.kind in grouped:
            grouped[assoc.kind].append(assoc)
    return grouped


def _render_assoc_groups(
    parts: list[str],
    grouped: dict[str, list[Item]],
    ctx: PageContext,
    level: int,
) -> None:
    for label, kind in ASSOC_GROUPS:
        items = grouped[kind]
        if not items:
            continue
        parts += [heading(level, label), ""]
        for assoc in items:
            _render_item(parts, ResolvedItemInfo(assoc, assoc.name), ctx, level + 1)


def _trait_is_resolvable(impl: Item, ctx: PageContext) -> bool:
    trait_id = (impl.inner.get("trait") or {}).get("id")
    if trait_id is None:
        return False
    return ctx.krate.get(trait_id) is not None or ctx.krate.summary(trait_id) is not None


def _render_blanket_impls(traits: list[str]) -> list[str]:
    return [
        "<details><summary>Blanket Implementations</summary>",
        "",
        "This type is implemented for the following traits through blanket implementations:",
        "",
        *(f"- {md_code(t)}" for t in traits),
        "",
        "</details>",
        "",
    ]


def _render_impls(parts: list[str], impl_ids: list[Any], ctx: PageContext, level: int) -> None:
    """Render inherent items, implemented traits and blanket impls of a type."""
    partition = partition_impls(impl_ids, ctx.krate)
    show_blanket = ctx.config["sections"]["blanket_impls"] and partition.blanket_traits
    if not (partition.inherent or partition.trait_impls or show_blanket):
        return
    parts += [heading(level, "Implementations"), ""]

    inherent: dict[str, list[Item]] = {kind: [] for _, kind in ASSOC_GROUPS}
    for impl in partition.inherent:
        for kind, items in _assoc_items(impl.inner.get("items") or [], ctx).items():
            inherent[kind].extend(items)
    for items in inherent.values():
        items.sort(key=lambda i: i.name or "")
    _render_assoc_groups(parts, inherent, ctx, level + 1)

    if partition.trait_impls:
        paths = sorted({trait_path(impl, ctx.krate) or "" for impl in partition.trait_impls})
        parts += [heading(level + 1, "Implemented Traits"), ""]
        parts += [f"- {md_code(p)}" for p in paths]
        parts.append("")
        for impl in partition.trait_impls:
            if not _trait_is_resolvable(impl, ctx):
                _render_item(parts, ResolvedItemInfo(impl, None), ctx, level + 2)

    if show_blanket:
        parts.extend(_render_blanket_impls(partition.blanket_traits))


def _render_struct(parts: list[str], item: Item, ctx: PageContext, level: int) -> None:
    parts.extend(
        render_struct_fields(item, ctx.krate, level, ctx.link_resolver, ctx.config)
    )
    _render_impls(parts, item.inner.get("impls") or [], ctx, level)


def _render_enum(parts: list[str], item: Item, ctx: PageContext, level: int) -> None:
    parts.extend(
        render_enum_variants(item, ctx.krate, level, ctx.link_resolver, ctx.config)
    )
    _render_impls(parts, item.inner.get("impls") or [], ctx, level)


def _render_union(parts: list[str], item: Item, ctx: PageContext, level: int) -> None:
    parts.extend(
        render_union_fields(item, ctx.krate, level, ctx.link_resolver, ctx.config)
    )
    _render_impls(parts, item.inner.get("impls") or [], ctx, level)


def is_provided(item: Item) -> bool:
    """Whether a trait item has a default body or value."""
    if item.kind == "function":
        return bool(item.inner.get("has_body"))
    if item.kind == "assoc_const":
        return item.inner.get("value", item.inner.get("default")) is not None
    if item.kind == "assoc_type":
        return item.inner.get("type", item.inner.get("default")) is not None
    return False


def _render_trait(parts: list[str], item: Item, ctx: PageContext, level: int) -> None:
    trait = item.inner
    if trait.get("is_auto"):
        parts += ["> This is an auto trait.", ""]
    if trait.get("is_unsafe"):
        parts += ["> This trait is unsafe to implement.", ""]
    if not trait.get("is_dyn_compatible", trait.get("is_object_safe", True)):
        parts += [
            "> This trait is not object-safe and cannot be used in dynamic trait objects.",
            "",
        ]

    required: list[Any] = []
    provided: list[Any] = []
    for item_id in trait.get("items") or []:
        assoc = ctx.krate.get(item_id)
        if assoc is None:
            continue
        (provided if is_provided(assoc) else required).append(item_id)

    for label, ids in (("Required Items", required), ("Provided Items", provided)):
        if ids:
            parts += [heading(level, label), ""]
            _render_assoc_groups(parts, _assoc_items(ids, ctx), ctx, level + 1)

    implementors = []
    for impl_id in trait.get("implementations") or []:
        impl = ctx.krate.get(impl_id)
        if impl is None or impl.kind != "impl":
            continue
        line = f"- {md_code(format_type(impl.inner.get('for'), ctx.krate))}"
        generics = format_generics(impl.inner.get("generics"), ctx.krate)
        if generics:
            line += f" with {md_code(generics)}"
        implementors.append(line)
    if implementors:
        parts += [heading(level, "Implementors"), ""]
        parts += ["This trait is implemented for the following types:", ""]
        parts += implementors
        parts.append("")


def _render_impl(parts: list[str], item: Item, ctx: PageContext, level: int) -> None:
    impl = item.inner
    _render_assoc_groups(parts, _assoc_items(impl.get("items") or [], ctx), ctx, level)

    provided = impl.get("provided_trait_methods") or []
    if impl.get("trait") and provided:
        parts += [heading(level, "Provided Trait Methods (Not Overridden)"), ""]
        parts += [f"- {md_code(name)}" for name in provided]
        parts.append("")

    if impl.get("blanket_impl") is not None:
        blanket = format_type(impl["blanket_impl"], ctx.krate)
        parts += [
            f"This is a blanket implementation for types matching: {md_code(blanket)}",
            "",
        ]


_DETAILS = {
    "module": _render_module,
    "struct": _render_struct,
    "enum": _render_enum,
    "union": _render_union,
    "trait": _render_trait,
    "impl": _render_impl,
}
