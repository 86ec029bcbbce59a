"""Render generic parameter lists and where-clauses."""

from typing import Any

from rustdoc_md.format_type import (
    BOUND_SEPARATOR,
    format_binder,
    format_bounds,
    format_term,
    format_type,
    lifetime,
)
from rustdoc_md.models import Crate
from rustdoc_md.tagged import split_tagged

WHERE_INDENT = "    "


def is_synthetic(param: dict[str, Any]) -> bool:
    """Check if a type parameter was desugared from argument-position `impl Trait`."""
    kind, payload = split_tagged(param.get("kind"))
    return kind == "type" and bool((payload or {}).get("is_synthetic"))


def format_generic_param(param: dict[str, Any], krate: Crate) -> str:
    """Render one lifetime, type or const parameter declaration."""
    name = str(param.get("name", ""))
    kind, payload = split_tagged(param.get("kind"))
    payload = payload or {}
    if kind == "lifetime":
        out = lifetime(name)
        outlives = payload.get("outlives") or []
        if outlives:
            out += ": " + BOUND_SEPARATOR.join(lifetime(o) for o in outlives)
        return out
    if kind == "const":
        out = f"const {name}: {format_type(payload.get('type'), krate)}"
        if payload.get("default") is not None:
            out += f" = {payload['default']}"
        return out
    out = name
    bounds = format_bounds(payload.get("bounds"), krate)
    if bounds:
        out += f": {bounds}"
    if payload.get("default") is not None:
        out += f" = {format_type(payload['default'], krate)}"
    return out


def format_generics(generics: dict[str, Any] | None, krate: Crate) -> str:
    """Render `<'a, T: Clone, const N: usize>`; no parameters renders ``""``."""
    params = [p for p in (generics or {}).get("params") or [] if not is_synthetic(p)]
    if not params:
        return ""
    return f"<{', '.join(format_generic_param(p, krate) for p in params)}>"


def format_where_predicate(predicate: Any, krate: Crate) -> str:
    """Render one predicate of a where-clause."""
    tag, payload = split_tagged(predicate)
    payload = payload or {}
    if tag == "bound_predicate":
        out = format_binder(payload.get("generic_params"))
        out += format_type(payload.get("type"), krate)
        bounds = format_bounds(payload.get("bounds"), krate)
        return f"{out}: {bounds}" if bounds else out
    if tag == "lifetime_predicate":
        out = lifetime(str(payload.get("lifetime", "")))
        outlives = payload.get("outlives") or []
        if outlives:
            out += ": " + BOUND_SEPARATOR.join(lifetime(o) for o in outlives)
        return out
    if tag == "eq_predicate":
        lhs = format_type(payload.get("lhs"), krate)
        return f"{lhs} = {format_term(payload.get('rhs'), krate)}"
    return "_"


def format_where_clause(predicates: list[Any] | None, krate: Crate) -> str:
    """Render a trailing where-clause, one predicate per indented line."""
    if not predicates:
        return ""
    lines = [format_where_predicate(p, krate) for p in predicates]
    return f"\nwhere\n{WHERE_INDENT}" + f",\n{WHERE_INDENT}".join(lines)


def generics_where(generics: dict[str, Any] | None, krate: Crate) -> str:
    """Render the where-clause attached to a generics block."""
    return format_where_clause((generics or {}).get("where_predicates"), krate)
