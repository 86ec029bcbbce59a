"""Qualifier and calling-convention rendering shared by functions and fn pointers."""

from typing import Any

from rustdoc_md.tagged import split_tagged

ABI_NAMES = {
    "c": "C",
    "cdecl": "cdecl",
    "stdcall": "stdcall",
    "fastcall": "fastcall",
    "aapcs": "aapcs",
    "win64": "win64",
    "sysv64": "sysv64",
    "system": "system",
}


def format_abi(abi: Any) -> str:
    """Render the `extern "..." ` prefix, empty for the Rust ABI."""
    tag, payload = split_tagged(abi)
    key = tag.lower()
    if not tag or key == "rust":
        return ""
    if key == "other":
        return f'extern "{payload}" '
    name = ABI_NAMES.get(key, tag)
    unwind = isinstance(payload, dict) and bool(payload.get("unwind"))
    suffix = "-unwind" if unwind else ""
    return f'extern "{name}{suffix}" '


def format_fn_header(header: dict[str, Any] | None, *, allow_async: bool = True) -> str:
    """Render `const async unsafe extern "C" ` qualifiers preceding `fn`.

    Function pointer types cannot be async, so callers rendering them pass
    `allow_async=False`.
    """
    header = header or {}
    out = ""
    if header.get("is_const"):
        out += "const "
    if allow_async and header.get("is_async"):
        out += "async "
    if header.get("is_unsafe"):
        out += "unsafe "
    return out + format_abi(header.get("abi"))
