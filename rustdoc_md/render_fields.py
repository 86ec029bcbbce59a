"""Logic for rendering field tables and enum variants."""

import logging
from typing import Any

from rustdoc_md.format_signature import field_type, format_variant
from rustdoc_md.link_resolvers import LinkResolver
from rustdoc_md.markdown import heading, md_code, md_codeblock, md_table
from rustdoc_md.models import Crate, Item
from rustdoc_md.render_docs import render_docs_with_links, table_docs
from rustdoc_md.tagged import split_tagged

logger = logging.getLogger(__name__)

TUPLE_HEADERS = ["Index", "Type", "Documentation"]
NAMED_HEADERS = ["Name", "Type", "Documentation"]
PRIVATE_FIELD_ROW = ["`private`", "*Private field*"]
STRIPPED_FIELDS_ROW = ["*private fields*", "...", "*Some fields have been omitted*"]
STRIPPED_VARIANTS_NOTE = (
    "*Note: Some variants have been omitted because they are private or hidden.*"
)


def _docs_cell(field: Item, link_resolver: LinkResolver, config: dict[str, Any]) -> str:
    return table_docs(
        field.docs,
        field.links,
        link_resolver,
        first_line_only=config["tables"]["first_line_only"],
    )


def tuple_field_rows(
    field_ids: list[Any],
    krate: Crate,
    link_resolver: LinkResolver,
    config: dict[str, Any],
) -> list[list[str]]:
    """One row per positional field; hidden fields get a placeholder row."""
    rows = []
    for i, field_id in enumerate(field_ids):
        field = krate.get(field_id)
        ty = field_type(field, krate)
        if field is None or ty is None:
            rows.append([str(i), *PRIVATE_FIELD_ROW])
            continue
        rows.append([str(i), md_code(ty), _docs_cell(field, link_resolver, config)])
    return rows


def named_field_rows(
    field_ids: list[Any],
    krate: Crate,
    link_resolver: LinkResolver,
    config: dict[str, Any],
    *,
    has_stripped: bool = False,
) -> list[list[str]]:
    """One row per named field, plus one summary row for stripped fields."""
    rows = []
    for field_id in field_ids:
        field = krate.get(field_id)
        ty = field_type(field, krate)
        if field is None or ty is None or not field.name:
            logger.debug("Skipping field id %s: not a named field in the index", field_id)
            continue
        rows.append(
            [md_code(field.name), md_code(ty), _docs_cell(field, link_resolver, config)]
        )
    if has_stripped:
        rows.append(list(STRIPPED_FIELDS_ROW))
    return rows


def field_table(
    kind: Any,
    krate: Crate,
    link_resolver: LinkResolver,
    config: dict[str, Any],
) -> str:
    """Render the table for a struct or variant `kind` payload."""
    tag, payload = split_tagged(kind)
    if tag == "tuple":
        return md_table(
            TUPLE_HEADERS, tuple_field_rows(payload or [], krate, link_resolver, config)
        )
    if tag in ("plain", "struct"):
        payload = payload or {}
        rows = named_field_rows(
            payload.get("fields") or [],
            krate,
            link_resolver,
            config,
            has_stripped=bool(payload.get("has_stripped_fields")),
        )
        return md_table(NAMED_HEADERS, rows)
    return ""


def render_struct_fields(
    item: Item,
    krate: Crate,
    level: int,
    link_resolver: LinkResolver,
    config: dict[str, Any],
) -> list[str]:
    """Render the Fields section of a struct."""
    table = field_table(item.inner.get("kind"), krate, link_resolver, config)
    if not table:
        return []
    return [heading(level, "Fields"), "", table, ""]


def render_union_fields(
    item: Item,
    krate: Crate,
    level: int,
    link_resolver: LinkResolver,
    config: dict[str, Any],
) -> list[str]:
    """Render the Fields section of a union."""
    union = item.inner
    rows = named_field_rows(
        union.get("fields") or [],
        krate,
        link_resolver,
        config,
        has_stripped=bool(union.get("has_stripped_fields")),
    )
    if not rows:
        return []
    return [heading(level, "Fields"), "", md_table(NAMED_HEADERS, rows), ""]


def _render_variant(
    variant: Item,
    krate: Crate,
    level: int,
    link_resolver: LinkResolver,
    config: dict[str, Any],
) -> list[str]:
    parts = [heading(level, md_code(variant.name or "")), ""]
    docs = render_docs_with_links(variant.docs, variant.links, link_resolver)
    if docs:
        parts += [docs, ""]
    parts += [md_codeblock(config["code_lang"], format_variant(variant, krate)), ""]

    table = field_table(variant.inner.get("kind"), krate, link_resolver, config)
    if table:
        parts += ["Fields:", "", table, ""]

    discriminant = variant.inner.get("discriminant")
    if discriminant:
        parts += [f"Discriminant Value: {md_code(str(discriminant.get('value')))}", ""]
    return parts


def render_enum_variants(
    item: Item,
    krate: Crate,
    level: int,
    link_resolver: LinkResolver,
    config: dict[str, Any],
) -> list[str]:
    """Render the Variants section of an enum."""
    enum = item.inner
    variants = [
        v
        for v in (krate.get(vid) for vid in enum.get("variants") or [])
        if v is not None and v.kind == "variant" and v.name
    ]
    if not variants and not enum.get("has_stripped_variants"):
        return []

    parts = [heading(level, "Variants"), ""]
    for variant in variants:
        parts += _render_variant(variant, krate, level + 1, link_resolver, config)
    if enum.get("has_stripped_variants"):
        parts += [STRIPPED_VARIANTS_NOTE, ""]
    return parts
