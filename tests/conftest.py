"""Shared fixtures: small hand-built rustdoc JSON documents."""

from typing import Any

import pytest

from rustdoc_md.load_crate import crate_from_dict
from rustdoc_md.models import Crate


def prim(name: str) -> dict[str, Any]:
    """Build a primitive type."""
    return {"primitive": name}


def generic(name: str) -> dict[str, Any]:
    """Build a generic type parameter reference."""
    return {"generic": name}


def resolved(path: str, item_id: int | None = None, args: Any = None) -> dict[str, Any]:
    """Build a resolved path type."""
    return {"resolved_path": {"path": path, "id": item_id, "args": args}}


def angle(*types: dict[str, Any]) -> dict[str, Any]:
    """Build angle bracketed generic args holding the given types."""
    return {"angle_bracketed": {"args": [{"type": t} for t in types], "constraints": []}}


def item(
    item_id: int,
    name: str | None,
    inner: Any,
    *,
    visibility: Any = "public",
    docs: str | None = None,
    links: dict[str, int] | None = None,
    crate_id: int = 0,
    **extra: Any,
) -> dict[str, Any]:
    """Build one entry of the rustdoc `index`."""
    raw = {
        "id": item_id,
        "crate_id": crate_id,
        "name": name,
        "visibility": visibility,
        "docs": docs,
        "links": links or {},
        "attrs": [],
        "deprecation": None,
        "inner": inner,
    }
    raw.update(extra)
    return raw


def header(**flags: Any) -> dict[str, Any]:
    """Build a function header with the given qualifier flags."""
    out = {"is_const": False, "is_unsafe": False, "is_async": False, "abi": "Rust"}
    out.update(flags)
    return out


def function(
    inputs: list[tuple[str, Any]],
    output: Any = None,
    *,
    generics: dict[str, Any] | None = None,
    has_body: bool = True,
    **header_flags: Any,
) -> dict[str, Any]:
    """Build a `function` inner payload."""
    return {
        "function": {
            "sig": {"inputs": [list(i) for i in inputs], "output": output, "is_c_variadic": False},
            "generics": generics or {"params": [], "where_predicates": []},
            "header": header(**header_flags),
            "has_body": has_body,
        }
    }


def empty_generics() -> dict[str, Any]:
    """Build a generics block without parameters or predicates."""
    return {"params": [], "where_predicates": []}


def impl(
    for_type: Any,
    items: list[int],
    *,
    trait: dict[str, Any] | None = None,
    blanket: Any = None,
    generics: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build an `impl` inner payload."""
    return {
        "impl": {
            "is_unsafe": False,
            "generics": generics or empty_generics(),
            "provided_trait_methods": [],
            "trait": trait,
            "for": for_type,
            "items": items,
            "is_negative": False,
            "is_synthetic": False,
            "blanket_impl": blanket,
        }
    }


def document(index: list[dict[str, Any]], paths: dict[int, tuple], root: int = 0) -> dict[str, Any]:
    """Assemble a rustdoc JSON document from index entries and path summaries."""
    return {
        "root": root,
        "crate_version": "0.3.1",
        "includes_private": False,
        "index": {str(raw["id"]): raw for raw in index},
        "paths": {
            str(item_id): {"crate_id": crate_id, "path": list(path), "kind": kind}
            for item_id, (crate_id, path, kind) in paths.items()
        },
        "external_crates": {},
        "format_version": 43,
    }


POINT = resolved("Point", 1)


def demo_document() -> dict[str, Any]:
    """A crate exercising structs, enums, traits, impls and re-exports."""
    index = [
        item(0, "demo", {"module": {"is_crate": True, "items": [1, 2, 5, 10, 20, 30, 40], "is_stripped": False}}, docs="Demo crate."),
        item(
            1,
            "Point",
            {
                "struct": {
                    "kind": {"plain": {"fields": [3, 4], "has_stripped_fields": False}},
                    "generics": empty_generics(),
                    "impls": [6, 25, 7, 8],
                }
            },
            docs="A point in 2D space.",
        ),
        item(3, "x", {"struct_field": prim("i32")}, docs="Horizontal coordinate.\nMeasured in pixels."),
        item(4, "y", {"struct_field": prim("i32")}),
        item(6, None, impl(POINT, [9, 27])),
        item(9, "new", function([("x", prim("i32")), ("y", prim("i32"))], generic("Self")), docs="Create a point."),
        item(27, "ORIGIN", {"assoc_const": {"type": generic("Self"), "value": "Point { x: 0, y: 0 }"}}),
        item(7, None, impl(POINT, [], trait={"path": "Clone", "id": 100, "args": None})),
        item(
            8,
            None,
            impl(
                generic("T"),
                [],
                trait={"path": "From", "id": 101, "args": angle(generic("T"))},
                blanket=generic("T"),
                generics={"params": [{"name": "T", "kind": {"type": {"bounds": [], "default": None, "is_synthetic": False}}}], "where_predicates": []},
            ),
        ),
        item(2, "shapes", {"module": {"is_crate": False, "items": [11, 19], "is_stripped": False}}, docs="Geometric shapes."),
        item(
            11,
            "Shape",
            {
                "enum": {
                    "generics": empty_generics(),
                    "has_stripped_variants": False,
                    "variants": [13, 14, 15],
                    "impls": [],
                }
            },
            docs="A drawable shape.",
        ),
        item(13, "Circle", {"variant": {"kind": {"tuple": [16]}, "discriminant": None}}, docs="A circle by radius."),
        item(16, "0", {"struct_field": prim("f64")}),
        item(14, "Rect", {"variant": {"kind": {"struct": {"fields": [17, 18], "has_stripped_fields": False}}, "discriminant": None}}),
        item(17, "w", {"struct_field": prim("f64")}, docs="Width."),
        item(18, "h", {"struct_field": prim("f64")}, docs="Height."),
        item(15, "Empty", {"variant": {"kind": "plain", "discriminant": None}}),
        item(19, "Hidden", {"struct": {"kind": "unit", "generics": empty_generics(), "impls": []}}, visibility="default"),
        item(
            5,
            "Area",
            {
                "trait": {
                    "is_auto": False,
                    "is_unsafe": False,
                    "is_dyn_compatible": True,
                    "items": [21, 22, 23, 24],
                    "generics": empty_generics(),
                    "bounds": [],
                    "implementations": [25],
                }
            },
            docs="Things with an area.",
        ),
        item(21, "area", function([("self", {"borrowed_ref": {"lifetime": None, "is_mutable": False, "type": generic("Self")}})], prim("f64"), has_body=False)),
        item(22, "describe", function([("self", {"borrowed_ref": {"lifetime": None, "is_mutable": False, "type": generic("Self")}})], resolved("String"))),
        item(23, "UNITS", {"assoc_const": {"type": {"borrowed_ref": {"lifetime": "'static", "is_mutable": False, "type": prim("str")}}, "value": '"px"'}}),
        item(24, "Output", {"assoc_type": {"generics": empty_generics(), "bounds": [], "type": None}}),
        item(25, None, impl(POINT, [], trait={"path": "Area", "id": 5, "args": None})),
        item(
            10,
            "distance",
            function(
                [
                    ("a", {"borrowed_ref": {"lifetime": None, "is_mutable": False, "type": POINT}}),
                    ("b", {"borrowed_ref": {"lifetime": None, "is_mutable": False, "type": POINT}}),
                ],
                prim("f64"),
            ),
            docs="Distance between two [`Point`]s. See [Unknown] too.",
            links={"`Point`": 1},
        ),
        item(20, "prelude", {"module": {"is_crate": False, "items": [26], "is_stripped": False}}),
        item(26, None, {"use": {"source": "crate::shapes", "name": "shapes", "id": 2, "is_glob": True}}),
        item(30, None, {"use": {"source": "crate::shapes::Shape", "name": "Figure", "id": 11, "is_glob": False}}),
        item(40, None, {"use": {"source": "crate::missing::Gone", "name": "Gone", "id": 999, "is_glob": False}}),
    ]
    paths = {
        0: (0, ("demo",), "module"),
        1: (0, ("demo", "Point"), "struct"),
        2: (0, ("demo", "shapes"), "module"),
        5: (0, ("demo", "Area"), "trait"),
        10: (0, ("demo", "distance"), "function"),
        11: (0, ("demo", "shapes", "Shape"), "enum"),
        13: (0, ("demo", "shapes", "Shape", "Circle"), "variant"),
        19: (0, ("demo", "shapes", "Hidden"), "struct"),
        20: (0, ("demo", "prelude"), "module"),
        100: (1, ("core", "clone", "Clone"), "trait"),
        101: (1, ("core", "convert", "From"), "trait"),
    }
    return document(index, paths)


@pytest.fixture
def demo_crate() -> Crate:
    """The demo crate as a Crate model."""
    return crate_from_dict(demo_document())


@pytest.fixture
def empty_crate() -> Crate:
    """A crate with only a root module, for formatter tests."""
    return crate_from_dict(
        document(
            [item(0, "empty", {"module": {"is_crate": True, "items": [], "is_stripped": False}})],
            {0: (0, ("empty",), "module")},
        )
    )
