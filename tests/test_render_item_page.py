"""Tests for the page assembler."""

import pytest
from conftest import document, empty_generics, function, generic, impl, item, prim, resolved

from rustdoc_md.link_resolvers import AnchorLinkResolver
from rustdoc_md.load_config import resolve_config
from rustdoc_md.load_crate import crate_from_dict
from rustdoc_md.markdown import heading
from rustdoc_md.models import Crate, ResolvedItemInfo
from rustdoc_md.render_fields import named_field_rows
from rustdoc_md.render_item_page import is_provided, item_heading, render_item_page, render_page_text


def _page(krate: Crate, item_id: str, config: dict | None = None) -> str:
    target = krate.get(item_id)
    return render_page_text(ResolvedItemInfo(target, target.name), krate, AnchorLinkResolver(krate), config)


def _section(text: str, start: str, end: str) -> str:
    """Slice the text between two markers."""
    begin = text.index(start)
    return text[begin : text.index(end, begin)]


def _wrapper_crate(impls: list[dict], extra: list[dict] | None = None, paths: dict | None = None) -> Crate:
    struct = item(
        1,
        "Wrapper",
        {"struct": {"kind": "unit", "generics": empty_generics(), "impls": [i["id"] for i in impls]}},
    )
    root = item(0, "w", {"module": {"is_crate": True, "items": [1], "is_stripped": False}})
    all_paths = {0: (0, ("w",), "module"), 1: (0, ("w", "Wrapper"), "struct")}
    all_paths.update(paths or {})
    return crate_from_dict(document([root, struct, *impls, *(extra or [])], all_paths))


def test_heading_cap() -> None:
    """Test that heading levels are clamped to 1..6."""
    assert heading(1, "A") == "# A"
    assert heading(6, "A") == "###### A"
    assert heading(9, "A") == "###### A"
    assert heading(0, "A") == "# A"


def test_deep_nesting_never_exceeds_six(demo_crate: Crate) -> None:
    """Test that items nested below level 6 keep level 6 headings."""
    point = demo_crate.get("1")
    out: list[str] = []
    render_item_page(out, ResolvedItemInfo(point, "Point"), demo_crate, 5, AnchorLinkResolver(demo_crate))
    text = "\n".join(out)
    assert "#######" not in text
    assert "###### Function `new`" in text
    assert "###### Implementations" in text


def test_struct_fields_table(demo_crate: Crate) -> None:
    """Test a struct with one documented and one undocumented field."""
    text = _page(demo_crate, "1")
    table = _section(text, "| Name | Type | Documentation |", "\n\n")
    rows = table.splitlines()[2:]
    assert rows == [
        "| `x` | `i32` | Horizontal coordinate. |",
        "| `y` | `i32` |  |",
    ]


def test_struct_page_layout(demo_crate: Crate) -> None:
    """Test the anchor, heading, docs and signature of a struct page."""
    text = _page(demo_crate, "1")
    assert text.startswith('<a id="struct-demo-point"></a>\n\n# Struct `Point`\n\nA point in 2D space.\n\n```rust\n')
    assert "## Fields" in text
    assert "## Implementations" in text


def test_inherent_items_flattened(demo_crate: Crate) -> None:
    """Test inherent associated items are listed directly under the type."""
    text = _page(demo_crate, "1")
    assert "### Associated Constants" in text
    assert "#### Associated Constant `ORIGIN`" in text
    assert "### Methods" in text
    assert "#### Function `new`" in text
    assert text.index("### Associated Constants") < text.index("### Methods")
    assert "Implementation for" not in text


def test_implemented_traits_list(demo_crate: Crate) -> None:
    """Test trait impls contribute only their sorted trait paths."""
    text = _page(demo_crate, "1")
    section = _section(text, "### Implemented Traits", "<details>")
    assert section.splitlines()[2:4] == ["- `Area`", "- `Clone`"]
    assert "Implementation of" not in text


def test_blanket_impls_collapsed(demo_crate: Crate) -> None:
    """Test blanket impls end up in one disclosure block."""
    text = _page(demo_crate, "1")
    block = _section(text, "<details><summary>Blanket Implementations</summary>", "</details>")
    assert "- `From<T>`" in block
    assert text.count("<details>") == 1


def test_blanket_impls_can_be_disabled(demo_crate: Crate) -> None:
    """Test the blanket impl section follows the configuration."""
    text = _page(demo_crate, "1", {"sections": {"blanket_impls": False}})
    assert "<details>" not in text


def test_concrete_and_blanket_impl_of_same_trait() -> None:
    """Test a concrete and a blanket impl of one trait path are not merged."""
    into = {"path": "Into", "id": 50, "args": None}
    concrete = item(2, None, impl(resolved("Wrapper", 1), [], trait=into))
    blanket = item(3, None, impl(generic("T"), [], trait=into, blanket=generic("T")))
    krate = _wrapper_crate([concrete, blanket], paths={50: (1, ("core", "convert", "Into"), "trait")})
    text = _page(krate, "1")
    traits = _section(text, "### Implemented Traits", "<details>")
    assert traits.count("- `Into`") == 1
    block = _section(text, "<details>", "</details>")
    assert block.count("- `Into`") == 1
    assert text.count("- `Into`") == 2


def test_unresolvable_trait_falls_back_to_impl_items() -> None:
    """Test an impl of an unknown trait renders its own methods."""
    mystery = {"path": "Mystery", "id": 77, "args": None}
    trait_impl = item(2, None, impl(resolved("Wrapper", 1), [4], trait=mystery))
    method = item(4, "solve", function([("self", generic("Self"))], prim("bool")))
    krate = _wrapper_crate([trait_impl], extra=[method])
    text = _page(krate, "1")
    assert "- `Mystery`" in text
    assert "#### Implementation of `Mystery` for `Wrapper`" in text
    assert "Function `solve`" in text
    assert "pub fn solve(self) -> bool { /* ... */ }" in text


def test_enum_variants(demo_crate: Crate) -> None:
    """Test each variant renders its docs, declaration and field table."""
    text = _page(demo_crate, "11")
    assert "## Variants" in text
    assert "### `Circle`\n\nA circle by radius.\n\n```rust\nCircle(f64)\n```" in text
    assert "| Index | Type | Documentation |" in text
    assert "| 0 | `f64` |  |" in text
    assert "| `w` | `f64` | Width. |" in text
    empty = text[text.index("### `Empty`") :]
    assert "Fields:" not in empty


def test_trait_required_and_provided(demo_crate: Crate) -> None:
    """Test the trait item partition and implementor list."""
    text = _page(demo_crate, "5")
    required = _section(text, "## Required Items", "## Provided Items")
    provided = _section(text, "## Provided Items", "## Implementors")
    assert "Associated Type `Output`" in required
    assert "Function `area`" in required
    assert "Associated Constant `UNITS`" in provided
    assert "Function `describe`" in provided
    assert required.index("Associated Types") < required.index("Methods")
    assert text.rstrip().endswith("This trait is implemented for the following types:\n\n- `Point`")


def test_is_provided(demo_crate: Crate) -> None:
    """Test defaults make associated items provided."""
    assert not is_provided(demo_crate.get("21"))
    assert is_provided(demo_crate.get("22"))
    assert is_provided(demo_crate.get("23"))
    assert not is_provided(demo_crate.get("24"))


def test_reexported_heading(demo_crate: Crate) -> None:
    """Test provenance is shown for items reached through an alias."""
    shape = demo_crate.get("11")
    info = ResolvedItemInfo(shape, "Figure", "demo::shapes::Shape")
    assert item_heading(info, demo_crate) == "Re-exported Enum `Figure` (from `demo::shapes::Shape`)"
    assert item_heading(ResolvedItemInfo(shape, "Shape"), demo_crate) == "Enum `Shape`"


def test_impl_headings(demo_crate: Crate) -> None:
    """Test nameless impl headings with and without a trait."""
    assert item_heading(ResolvedItemInfo(demo_crate.get("6"), None), demo_crate) == "Implementation for `Point`"
    assert item_heading(ResolvedItemInfo(demo_crate.get("7"), None), demo_crate) == "Implementation of `Clone` for `Point`"


def test_module_page(demo_crate: Crate) -> None:
    """Test grouped listings, brief submodules and the re-export section."""
    text = _page(demo_crate, "0")
    assert text.index("## Modules") < text.index("## Types") < text.index("## Traits")
    assert "### Module `shapes`" in text
    assert "See [`shapes`](#module-demo-shapes) for its contents." in text
    assert "Geometric shapes." in text
    assert "A drawable shape." in text
    assert "### Re-exported Enum `Figure` (from `demo::shapes::Shape`)" in text
    assert "A circle by radius." in text
    reexports = text[text.index("## Re-exports") :]
    assert "### `use crate::shapes::Shape as Figure`" in reexports
    assert "Re-exports [`Shape`](#enum-demo-shapes-shape)." in reexports
    assert "### `use crate::missing::Gone`" in reexports
    assert "Gone" not in text[: text.index("## Re-exports")]


def test_reexport_section_can_be_disabled(demo_crate: Crate) -> None:
    """Test the re-export listing follows the configuration."""
    text = _page(demo_crate, "0", {"sections": {"reexports": False}})
    assert "## Re-exports" not in text
    assert "Re-exported Enum `Figure`" in text


def test_doc_links_rewritten(demo_crate: Crate) -> None:
    """Test intra-doc links resolve and unknown brackets stay literal."""
    text = _page(demo_crate, "10")
    assert "Distance between two [`Point`](#struct-demo-point)s. See [Unknown] too." in text
    assert "pub fn distance(a: &Point, b: &Point) -> f64 { /* ... */ }" in text


def test_deprecation_and_attributes() -> None:
    """Test the deprecation notice and the configurable attribute list."""
    old = item(
        2,
        "old",
        function([], None),
        attrs=["#[must_use]"],
        deprecation={"since": "1.2.0", "note": "use `new` instead"},
    )
    root = item(0, "d", {"module": {"is_crate": True, "items": [2], "is_stripped": False}})
    krate = crate_from_dict(document([root, old], {0: (0, ("d",), "module")}))
    text = _page(krate, "2")
    assert "**⚠️ Deprecated since 1.2.0**: use `new` instead" in text
    assert "- `#[must_use]`" in text
    assert "#[must_use]" not in _page(krate, "2", {"sections": {"attributes": False}})


def test_stripped_module_note() -> None:
    """Test the note on modules marked as stripped."""
    root = item(0, "s", {"module": {"is_crate": True, "items": [], "is_stripped": True}})
    krate = crate_from_dict(document([root], {0: (0, ("s",), "module")}))
    assert "This module is marked as stripped" in _page(krate, "0")


def test_render_is_pure(demo_crate: Crate) -> None:
    """Test that repeated renders are identical."""
    assert _page(demo_crate, "0") == _page(demo_crate, "0")


def test_dangling_named_fields_are_logged(demo_crate: Crate, caplog: pytest.LogCaptureFixture) -> None:
    """Test a named field id missing from the index is skipped with a debug line."""
    with caplog.at_level("DEBUG"):
        rows = named_field_rows(["17", "4242"], demo_crate, lambda _id: None, resolve_config(None))
    assert [row[0] for row in rows] == ["`w`"]
    assert "Skipping field id 4242" in caplog.text
