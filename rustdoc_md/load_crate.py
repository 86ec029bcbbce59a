"""Logic for loading a rustdoc JSON document into a Crate model."""

import json
from pathlib import Path
from typing import Any

from rustdoc_md.models import Crate, Deprecation, Item, ItemSummary
from rustdoc_md.tagged import split_tagged


class CrateFormatError(ValueError):
    """Raised when a document does not look like rustdoc JSON output."""


REQUIRED_KEYS = ("root", "index", "paths", "format_version")


def load_crate(path: Path) -> Crate:
    """Load and parse a rustdoc JSON file."""
    doc = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(doc, dict):
        msg = f"{path}: top-level JSON value must be an object"
        raise CrateFormatError(msg)
    try:
        return crate_from_dict(doc)
    except CrateFormatError as e:
        msg = f"{path}: {e}"
        raise CrateFormatError(msg) from e


def crate_from_dict(doc: dict[str, Any]) -> Crate:
    """Build a Crate from an already decoded rustdoc JSON mapping."""
    missing = [k for k in REQUIRED_KEYS if k not in doc]
    if missing:
        msg = f"missing required keys: {', '.join(missing)}"
        raise CrateFormatError(msg)
    for key in ("index", "paths"):
        if doc[key] is not None and not isinstance(doc[key], dict):
            msg = f"`{key}` must be an object, not {type(doc[key]).__name__}"
            raise CrateFormatError(msg)
    try:
        format_version = int(doc["format_version"])
    except (TypeError, ValueError) as e:
        msg = f"invalid format_version: {doc['format_version']!r}"
        raise CrateFormatError(msg) from e

    index: dict[str, Item] = {}
    for key, raw in (doc.get("index") or {}).items():
        if not isinstance(raw, dict):
            continue
        try:
            item = item_from_dict(raw, fallback_id=key)
        except (AttributeError, TypeError, ValueError) as e:
            msg = f"malformed index entry {key}: {e}"
            raise CrateFormatError(msg) from e
        index[item.id] = item

    paths: dict[str, ItemSummary] = {}
    for key, raw in (doc.get("paths") or {}).items():
        if not isinstance(raw, dict) or not raw.get("path"):
            continue
        try:
            paths[str(key)] = ItemSummary(
                crate_id=int(raw.get("crate_id") or 0),
                path=tuple(str(p) for p in raw["path"]),
                kind=str(raw.get("kind") or "item"),
            )
        except (TypeError, ValueError) as e:
            msg = f"malformed paths entry {key}: {e}"
            raise CrateFormatError(msg) from e

    return Crate(
        root=str(doc["root"]),
        format_version=format_version,
        index=index,
        paths=paths,
        crate_version=doc.get("crate_version"),
        raw=doc,
    )


def item_from_dict(raw: dict[str, Any], fallback_id: str = "") -> Item:
    """Convert one entry of the rustdoc `index` into an Item."""
    kind, inner = split_inner(raw.get("inner"))
    deprecation = raw.get("deprecation")
    return Item(
        id=str(raw.get("id", fallback_id)),
        crate_id=int(raw.get("crate_id") or 0),
        name=raw.get("name"),
        visibility=raw.get("visibility") or "default",
        docs=raw.get("docs") or None,
        links={str(k): str(v) for k, v in (raw.get("links") or {}).items()},
        attrs=[attr_text(a) for a in raw.get("attrs") or []],
        deprecation=(
            Deprecation(since=deprecation.get("since"), note=deprecation.get("note"))
            if isinstance(deprecation, dict)
            else None
        ),
        kind=kind,
        inner=inner,
    )


def split_inner(inner: Any) -> tuple[str, Any]:
    """Split the `inner` payload of an item into (kind, value)."""
    kind, value = split_tagged(inner)
    if not kind:
        return "unknown", inner
    # Unit kinds such as `extern_type` carry no payload.
    return kind, {} if value is None else value


def attr_text(attr: Any) -> str:
    """Render an attribute entry as text, across format versions."""
    if isinstance(attr, str):
        return attr
    if isinstance(attr, dict):
        if "other" in attr:
            return str(attr["other"])
        if len(attr) == 1:
            tag, value = next(iter(attr.items()))
            if value in (None, {}, []):
                return f"#[{tag}]"
            return f"#[{tag}({json.dumps(value, sort_keys=True)})]"
    return f"#[{attr}]"
