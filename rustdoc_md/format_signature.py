"""Render the top-level declaration of an item, as shown in its code block."""

from collections.abc import Callable
from typing import Any

from rustdoc_md.format_fn_header import format_fn_header
from rustdoc_md.format_generics import format_generics, generics_where
from rustdoc_md.format_type import format_bounds, format_fn_inputs, format_path, format_type
from rustdoc_md.models import Crate, Item
from rustdoc_md.tagged import split_tagged

INDENT = "    "
PRIVATE_FIELD = "/* private field */"
STRIPPED_FIELDS = "// Some fields omitted"
STRIPPED_VARIANTS = "// Some variants omitted"
BODY = "{ /* ... */ }"
ASSOC_BODY = "{\n    /* Associated items */\n}"

# Declarations that never start with a visibility keyword.
_NO_VISIBILITY = frozenset({"impl", "macro", "proc_macro", "primitive", "variant"})


def format_visibility(visibility: Any) -> str:
    """Render `pub `, `pub(crate) `, `pub(in path) ` or nothing."""
    if visibility == "public":
        return "pub "
    if visibility == "crate":
        return "pub(crate) "
    tag, payload = split_tagged(visibility)
    if tag == "restricted":
        return f"pub(in {(payload or {}).get('path', 'self')}) "
    return ""


def field_type(field: Item | None, krate: Crate) -> str | None:
    """Render the type of a struct field item, or None if it is not a field."""
    if field is None or field.kind != "struct_field":
        return None
    return format_type(field.inner, krate)


def format_tuple_fields(
    field_ids: list[Any], krate: Crate, *, with_visibility: bool = False
) -> str:
    """Render `(A, pub B, /* private field */)` for tuple structs and variants."""
    parts = []
    for field_id in field_ids:
        field = krate.get(field_id)
        ty = field_type(field, krate)
        if field is None or ty is None:
            parts.append(PRIVATE_FIELD)
        elif with_visibility:
            parts.append(format_visibility(field.visibility) + ty)
        else:
            parts.append(ty)
    return f"({', '.join(parts)})"


def format_named_fields(
    field_ids: list[Any],
    krate: Crate,
    *,
    indent: str = INDENT,
    closing_indent: str = "",
    with_visibility: bool = True,
    has_stripped: bool = False,
) -> str:
    """Render a braced `{ name: T, ... }` field list, one field per line."""
    lines = []
    for field_id in field_ids:
        field = krate.get(field_id)
        ty = field_type(field, krate)
        if field is None or ty is None or not field.name:
            continue
        vis = format_visibility(field.visibility) if with_visibility else ""
        lines.append(f"{indent}{vis}{field.name}: {ty},\n")
    if has_stripped:
        lines.append(f"{indent}{STRIPPED_FIELDS}\n")
    return "{\n" + "".join(lines) + closing_indent + "}"


def format_variant(item: Item, krate: Crate, *, indent: str = "") -> str:
    """Render one enum variant, e.g. `Some(T)` or `Point { x: i32 } = 3`."""
    out = item.name or ""
    tag, payload = split_tagged(item.inner.get("kind"))
    if tag == "tuple":
        out += format_tuple_fields(payload or [], krate)
    elif tag == "struct":
        payload = payload or {}
        out += " " + format_named_fields(
            payload.get("fields") or [],
            krate,
            indent=indent + INDENT,
            closing_indent=indent,
            with_visibility=False,
            has_stripped=bool(payload.get("has_stripped_fields")),
        )
    discriminant = item.inner.get("discriminant")
    if discriminant:
        out += f" = {discriminant.get('expr')}"
    return out


def format_use(item: Item) -> str:
    """Render `use path::to::Thing as Alias;` for a re-export."""
    use = item.inner
    source = str(use.get("source", ""))
    out = f"use {source}"
    if use.get("is_glob"):
        out += "::*"
    elif use.get("name") and use["name"] != source.split("::")[-1]:
        out += f" as {use['name']}"
    return out + ";"


def _module(item: Item, _krate: Crate) -> str:
    return f"mod {item.name} {BODY}"


def _struct(item: Item, krate: Crate) -> str:
    struct = item.inner
    head = f"struct {item.name}{format_generics(struct.get('generics'), krate)}"
    where = generics_where(struct.get("generics"), krate)
    tag, payload = split_tagged(struct.get("kind"))
    if tag == "tuple":
        fields = format_tuple_fields(payload or [], krate, with_visibility=True)
        return f"{head}{fields}{where};"
    if tag == "plain":
        payload = payload or {}
        body = format_named_fields(
            payload.get("fields") or [],
            krate,
            has_stripped=bool(payload.get("has_stripped_fields")),
        )
        return f"{head}{where} {body}"
    return f"{head}{where};"


def _enum(item: Item, krate: Crate) -> str:
    enum = item.inner
    head = f"enum {item.name}{format_generics(enum.get('generics'), krate)}"
    head += generics_where(enum.get("generics"), krate)
    lines = []
    for variant_id in enum.get("variants") or []:
        variant = krate.get(variant_id)
        if variant is None or variant.kind != "variant" or not variant.name:
            continue
        lines.append(f"{INDENT}{format_variant(variant, krate, indent=INDENT)},\n")
    if enum.get("has_stripped_variants"):
        lines.append(f"{INDENT}{STRIPPED_VARIANTS}\n")
    return f"{head} {{\n{''.join(lines)}}}"


def _union(item: Item, krate: Crate) -> str:
    union = item.inner
    head = f"union {item.name}{format_generics(union.get('generics'), krate)}"
    head += generics_where(union.get("generics"), krate)
    body = format_named_fields(
        union.get("fields") or [],
        krate,
        has_stripped=bool(union.get("has_stripped_fields")),
    )
    return f"{head} {body}"


def _function(item: Item, krate: Crate) -> str:
    function = item.inner
    generics = function.get("generics")
    out = format_fn_header(function.get("header"))
    out += f"fn {item.name}{format_generics(generics, krate)}"
    out += format_fn_inputs(function.get("sig") or {}, krate)
    out += generics_where(generics, krate)
    return out + (f" {BODY}" if function.get("has_body") else ";")


def _trait(item: Item, krate: Crate) -> str:
    trait = item.inner
    out = ""
    if trait.get("is_auto"):
        out += "auto "
    if trait.get("is_unsafe"):
        out += "unsafe "
    out += f"trait {item.name}{format_generics(trait.get('generics'), krate)}"
    bounds = format_bounds(trait.get("bounds"), krate)
    if bounds:
        out += f": {bounds}"
    out += generics_where(trait.get("generics"), krate)
    return f"{out} {ASSOC_BODY}"


def _trait_alias(item: Item, krate: Crate) -> str:
    alias = item.inner
    out = f"trait {item.name}{format_generics(alias.get('generics'), krate)}"
    out += f" = {format_bounds(alias.get('params'), krate)}"
    return out + generics_where(alias.get("generics"), krate) + ";"


def _impl(item: Item, krate: Crate) -> str:
    impl = item.inner
    out = "unsafe " if impl.get("is_unsafe") else ""
    out += f"impl{format_generics(impl.get('generics'), krate)} "
    if impl.get("trait"):
        if impl.get("is_negative"):
            out += "!"
        out += f"{format_path(impl['trait'], krate)} for "
    out += format_type(impl.get("for"), krate)
    out += generics_where(impl.get("generics"), krate)
    out += f" {ASSOC_BODY}"
    if impl.get("is_synthetic"):
        out += "\n// Note: This impl is compiler-generated"
    return out


def _type_alias(item: Item, krate: Crate) -> str:
    alias = item.inner
    out = f"type {item.name}{format_generics(alias.get('generics'), krate)}"
    out += generics_where(alias.get("generics"), krate)
    return f"{out} = {format_type(alias.get('type'), krate)};"


def _constant(item: Item, krate: Crate) -> str:
    constant = item.inner
    const = constant.get("const") or constant
    ty = format_type(constant.get("type"), krate)
    return f"const {item.name}: {ty} = {const.get('expr', '_')};"


def _static(item: Item, krate: Crate) -> str:
    static = item.inner
    out = "static "
    if static.get("is_mutable"):
        out += "mut "
    if static.get("is_unsafe"):
        out += "/* unsafe */ "
    ty = format_type(static.get("type"), krate)
    return f"{out}{item.name}: {ty} = {static.get('expr', '_')};"


def _macro(item: Item, _krate: Crate) -> str:
    source = item.inner if isinstance(item.inner, str) else ""
    if source.startswith("macro_rules!"):
        return source
    return f"macro_rules! {item.name} {{\n{INDENT}/* {source} */\n}}"


def _proc_macro(item: Item, _krate: Crate) -> str:
    proc_macro = item.inner
    kind = proc_macro.get("kind")
    if kind == "attr":
        attr = "#[proc_macro_attribute]"
    elif kind == "derive":
        helpers = proc_macro.get("helpers") or []
        extra = f", attributes({', '.join(helpers)})" if helpers else ""
        attr = f"#[proc_macro_derive({item.name}{extra})]"
    else:
        attr = "#[proc_macro]"
    return f"{attr}\npub fn {item.name}(/* ... */) -> /* ... */ {BODY}"


def _extern_crate(item: Item, _krate: Crate) -> str:
    extern = item.inner
    out = f"extern crate {extern.get('name')}"
    if extern.get("rename"):
        out += f" as {extern['rename']}"
    return out + ";"


def _struct_field(item: Item, krate: Crate) -> str:
    ty = format_type(item.inner, krate)
    return f"{item.name}: {ty}" if item.name else ty


def _primitive(item: Item, _krate: Crate) -> str:
    return f"// Primitive type: {item.inner.get('name', item.name)}"


def _extern_type(item: Item, _krate: Crate) -> str:
    return f"extern type {item.name};"


def _assoc_const(item: Item, krate: Crate) -> str:
    const = item.inner
    out = f"const {item.name}: {format_type(const.get('type'), krate)}"
    value = const.get("value", const.get("default"))
    if value is not None:
        out += f" = {value}"
    return out + ";"


def _assoc_type(item: Item, krate: Crate) -> str:
    assoc = item.inner
    out = f"type {item.name}{format_generics(assoc.get('generics'), krate)}"
    bounds = format_bounds(assoc.get("bounds"), krate)
    if bounds:
        out += f": {bounds}"
    default = assoc.get("type", assoc.get("default"))
    if default is not None:
        out += f" = {format_type(default, krate)}"
    return out + generics_where(assoc.get("generics"), krate) + ";"


_SIGNATURES: dict[str, Callable[[Item, Crate], str]] = {
    "module": _module,
    "struct": _struct,
    "enum": _enum,
    "union": _union,
    "function": _function,
    "trait": _trait,
    "trait_alias": _trait_alias,
    "impl": _impl,
    "type_alias": _type_alias,
    "constant": _constant,
    "static": _static,
    "macro": _macro,
    "proc_macro": _proc_macro,
    "extern_crate": _extern_crate,
    "use": lambda item, _krate: format_use(item),
    "struct_field": _struct_field,
    "variant": lambda item, krate: format_variant(item, krate),
    "primitive": _primitive,
    "extern_type": _extern_type,
    "assoc_const": _assoc_const,
    "assoc_type": _assoc_type,
}


def format_item_signature(item: Item, krate: Crate) -> str:
    """Render the declaration of an item as Rust source text."""
    render = _SIGNATURES.get(item.kind)
    if render is None:
        return f"/* {item.kind} */"
    vis = "" if item.kind in _NO_VISIBILITY else format_visibility(item.visibility)
    return vis + render(item, krate)
