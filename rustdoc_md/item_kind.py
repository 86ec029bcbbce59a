"""Predicates and display names for rustdoc item kinds."""

KIND_NAMES = {
    "module": "Module",
    "struct": "Struct",
    "enum": "Enum",
    "union": "Union",
    "trait": "Trait",
    "trait_alias": "Trait Alias",
    "function": "Function",
    "type_alias": "Type Alias",
    "constant": "Constant",
    "static": "Static",
    "macro": "Macro",
    "proc_macro": "Procedural Macro",
    "proc_attribute": "Procedural Macro",
    "proc_derive": "Procedural Macro",
    "extern_crate": "Extern Crate",
    "use": "Use Statement",
    "struct_field": "Struct Field",
    "variant": "Variant",
    "impl": "Implementation",
    "primitive": "Primitive",
    "extern_type": "Extern Type",
    "assoc_const": "Associated Constant",
    "assoc_type": "Associated Type",
}

# Kinds that receive a page of their own and may be inlined through `use`.
PAGE_WORTHY_KINDS = frozenset(
    {
        "struct",
        "enum",
        "union",
        "trait",
        "trait_alias",
        "function",
        "type_alias",
        "constant",
        "static",
        "macro",
        "proc_macro",
        "proc_attribute",
        "proc_derive",
    }
)


def kind_name(kind: str) -> str:
    """Human readable name of an item kind."""
    return KIND_NAMES.get(kind, kind.replace("_", " ").title())


def is_page_worthy(kind: str) -> bool:
    """Check if the kind gets its own page in multi-file output."""
    return kind in PAGE_WORTHY_KINDS


def is_module_kind(kind: str) -> bool:
    """Check if the kind represents a module."""
    return kind == "module"
