"""Render rustdoc type expressions back into Rust declaration syntax.

Every function here is a pure function of its arguments. The crate is only
consulted to recover a path name when the model leaves it empty; links are
never produced, so the output can be placed inside code blocks.
"""

import logging
from collections.abc import Callable
from typing import Any

from rustdoc_md.format_fn_header import format_fn_header
from rustdoc_md.models import Crate
from rustdoc_md.tagged import split_tagged

logger = logging.getLogger(__name__)

BOUND_SEPARATOR = " + "

MODIFIER_PREFIXES = {
    "none": "",
    "maybe": "?",
    "maybe_const": "~const ",
}


def lifetime(name: str) -> str:
    """Normalise a lifetime name to carry exactly one leading apostrophe."""
    return name if name.startswith("'") else f"'{name}"


def format_binder(generic_params: list[dict[str, Any]] | None) -> str:
    """Render a higher-rank `for<'a, T> ` binder, or nothing."""
    if not generic_params:
        return ""
    names = []
    for param in generic_params:
        kind, _ = split_tagged(param.get("kind"))
        name = str(param.get("name", ""))
        names.append(lifetime(name) if kind == "lifetime" else name)
    return f"for<{', '.join(names)}> "


def format_path(path: dict[str, Any] | None, krate: Crate) -> str:
    """Render a resolved path (`Vec<T>`, `std::fmt::Display`) with its args."""
    if not path:
        return "_"
    name = path.get("path") or path.get("name")
    if not name:
        summary = krate.summary(path.get("id"))
        name = summary.path[-1] if summary else "_"
    return f"{name}{format_generic_args(path.get('args'), krate)}"


def format_term(term: Any, krate: Crate) -> str:
    """Render the right-hand side of an equality constraint."""
    tag, payload = split_tagged(term)
    if tag == "type":
        return format_type(payload, krate)
    if tag == "constant":
        return str((payload or {}).get("expr", "_"))
    return "_"


def format_generic_arg(arg: Any, krate: Crate) -> str:
    """Render one generic argument: lifetime, type, const or `_`."""
    tag, payload = split_tagged(arg)
    if tag == "lifetime":
        return lifetime(str(payload))
    if tag == "type":
        return format_type(payload, krate)
    if tag == "const":
        return str((payload or {}).get("expr", "_"))
    return "_"


def format_constraint(constraint: dict[str, Any], krate: Crate) -> str:
    """Render an associated item constraint like `Item = T` or `Item: Clone`."""
    out = str(constraint.get("name", ""))
    out += format_generic_args(constraint.get("args"), krate)
    tag, payload = split_tagged(constraint.get("binding"))
    if tag == "equality":
        out += f" = {format_term(payload, krate)}"
    elif tag == "constraint":
        bounds = format_bounds(payload, krate)
        if bounds:
            out += f": {bounds}"
    return out


def format_generic_args(args: Any, krate: Crate) -> str:
    """Render generic arguments; empty argument lists render as ``""``."""
    if not args:
        return ""
    tag, payload = split_tagged(args)
    if tag == "angle_bracketed":
        payload = payload or {}
        parts = [format_generic_arg(a, krate) for a in payload.get("args") or []]
        parts += [format_constraint(c, krate) for c in payload.get("constraints") or []]
        if not parts:
            return ""
        return f"<{', '.join(parts)}>"
    if tag == "parenthesized":
        payload = payload or {}
        inputs = ", ".join(format_type(t, krate) for t in payload.get("inputs") or [])
        output = payload.get("output")
        ret = f" -> {format_type(output, krate)}" if output is not None else ""
        return f"({inputs}){ret}"
    if tag == "return_type_notation":
        return "(..)"
    return ""


def format_bound(bound: Any, krate: Crate) -> str:
    """Render a single generic bound."""
    tag, payload = split_tagged(bound)
    if tag == "trait_bound":
        modifier = MODIFIER_PREFIXES.get(str(payload.get("modifier") or "none"), "")
        binder = format_binder(payload.get("generic_params"))
        return f"{modifier}{binder}{format_path(payload.get('trait'), krate)}"
    if tag == "outlives":
        return lifetime(str(payload))
    if tag == "use":
        captures = []
        for arg in payload or []:
            arg_tag, arg_payload = split_tagged(arg)
            if arg_tag == "lifetime":
                captures.append(lifetime(str(arg_payload)))
            elif arg_tag == "param":
                captures.append(str(arg_payload))
            else:
                captures.append(str(arg))
        return f"use<{', '.join(captures)}>"
    logger.debug("Unknown bound shape: %r", bound)
    return "_"


def format_bounds(bounds: list[Any] | None, krate: Crate) -> str:
    """Render a `+` separated bound list; empty lists render as ``""``."""
    return BOUND_SEPARATOR.join(format_bound(b, krate) for b in bounds or [])


def format_self_param(type_text: str) -> str | None:
    """Shorten `self: &Self` style receivers to `&self`."""
    if type_text == "Self":
        return "self"
    if type_text.startswith("&") and type_text.endswith("Self"):
        prefix = type_text[: -len("Self")]
        if prefix in ("&", "&mut ") or prefix.startswith("&'"):
            return f"{prefix}self"
    return None


def format_fn_inputs(sig: dict[str, Any], krate: Crate, *, named: bool = True) -> str:
    """Render `(a: A, b: B, ...) -> R` for functions and function pointers.

    Function pointer types omit parameter names. A C-variadic signature ends
    with `...`; a missing output means unit return and renders nothing.
    """
    params = []
    for name, ty in sig.get("inputs") or []:
        type_text = format_type(ty, krate)
        if not named:
            params.append(type_text)
        elif name == "self" and format_self_param(type_text):
            params.append(format_self_param(type_text))
        else:
            params.append(f"{name}: {type_text}")
    if sig.get("is_c_variadic"):
        params.append("...")
    out = f"({', '.join(params)})"
    output = sig.get("output")
    if output is not None:
        out += f" -> {format_type(output, krate)}"
    return out


def _resolved_path(payload: Any, krate: Crate) -> str:
    return format_path(payload, krate)


def _dyn_trait(payload: Any, krate: Crate) -> str:
    traits = [
        format_binder(t.get("generic_params")) + format_path(t.get("trait"), krate)
        for t in payload.get("traits") or []
    ]
    out = "dyn " + BOUND_SEPARATOR.join(traits)
    if payload.get("lifetime"):
        out += BOUND_SEPARATOR + lifetime(payload["lifetime"])
    return out


def _function_pointer(payload: Any, krate: Crate) -> str:
    binder = format_binder(payload.get("generic_params"))
    header = format_fn_header(payload.get("header"), allow_async=False)
    inputs = format_fn_inputs(payload.get("sig") or {}, krate, named=False)
    return f"{binder}{header}fn{inputs}"


def _tuple(payload: Any, krate: Crate) -> str:
    types = [format_type(t, krate) for t in payload or []]
    if len(types) == 1:
        return f"({types[0]},)"
    return f"({', '.join(types)})"


def _slice(payload: Any, krate: Crate) -> str:
    return f"[{format_type(payload, krate)}]"


def _array(payload: Any, krate: Crate) -> str:
    return f"[{format_type(payload.get('type'), krate)}; {payload.get('len', '_')}]"


def _pat(payload: Any, krate: Crate) -> str:
    pattern = payload.get("__pat_unstable_do_not_use", "_")
    return f"{format_type(payload.get('type'), krate)} is {pattern}"


def _impl_trait(payload: Any, krate: Crate) -> str:
    return f"impl {format_bounds(payload, krate)}"


def _raw_pointer(payload: Any, krate: Crate) -> str:
    mutability = "mut" if payload.get("is_mutable") else "const"
    return f"*{mutability} {format_type(payload.get('type'), krate)}"


def _borrowed_ref(payload: Any, krate: Crate) -> str:
    out = "&"
    if payload.get("lifetime"):
        out += f"{lifetime(payload['lifetime'])} "
    if payload.get("is_mutable"):
        out += "mut "
    return out + format_type(payload.get("type"), krate)


def _qualified_path(payload: Any, krate: Crate) -> str:
    out = f"<{format_type(payload.get('self_type'), krate)}"
    if payload.get("trait"):
        out += f" as {format_path(payload['trait'], krate)}"
    out += f">::{payload.get('name', '')}"
    return out + format_generic_args(payload.get("args"), krate)


_TYPE_FORMATTERS: dict[str, Callable[[Any, Crate], str]] = {
    "resolved_path": _resolved_path,
    "dyn_trait": _dyn_trait,
    "generic": lambda payload, _krate: str(payload),
    "primitive": lambda payload, _krate: str(payload),
    "function_pointer": _function_pointer,
    "tuple": _tuple,
    "slice": _slice,
    "array": _array,
    "pat": _pat,
    "impl_trait": _impl_trait,
    "infer": lambda _payload, _krate: "_",
    "raw_pointer": _raw_pointer,
    "borrowed_ref": _borrowed_ref,
    "qualified_path": _qualified_path,
}


def format_type(ty: Any, krate: Crate) -> str:
    """Render a rustdoc `Type` as Rust source text."""
    if ty is None:
        return "()"
    tag, payload = split_tagged(ty)
    formatter = _TYPE_FORMATTERS.get(tag)
    if formatter is None:
        logger.debug("Unknown type shape: %r", ty)
        return "_"
    return formatter(payload, krate)
