"""Identifier resolution for generated code."""

import posixpath
from collections.abc import Iterable

from .types import NameCollisionError, PoolNames, SchemaMessage

GO_KEYWORDS = frozenset(
    [
        "break",
        "case",
        "chan",
        "const",
        "continue",
        "default",
        "defer",
        "else",
        "fallthrough",
        "for",
        "func",
        "go",
        "goto",
        "if",
        "import",
        "interface",
        "map",
        "package",
        "range",
        "return",
        "select",
        "struct",
        "switch",
        "type",
        "var",
    ]
)


def pool_names(message: SchemaMessage) -> PoolNames:
    """Return the pool and accessor identifiers for a message."""
    name = message.name
    return PoolNames(
        name=name,
        pool=f"{name}Pool",
        getter=f"Get{name}",
        putter=f"Put{name}",
        type_ref=message.identifier,
    )


def check_unique(names: Iterable[tuple[str, PoolNames]], reserved: dict[str, str]) -> None:
    """Reject identifier collisions within one output file.

    Args:
        names: (message full name, identifiers) pairs in emission order.
        reserved: Identifiers already taken in the output namespace, mapped
            to a description of their owner.
    """
    owners = dict(reserved)
    for full_name, pool in names:
        for ident in pool.identifiers():
            owner = owners.get(ident)
            if owner is not None:
                raise NameCollisionError(
                    f"identifier {ident} generated for message {full_name} "
                    f"collides with {owner}"
                )
            owners[ident] = f"message {full_name}"


def strip_proto(filename: str) -> str:
    """Strip the .proto/.protodevel extension from a file name."""
    for ext in (".protodevel", ".proto"):
        if filename.endswith(ext):
            return filename[: -len(ext)]
    return filename


def relative_name(full_name: str, package: str) -> str:
    """Return a message's dotted name relative to its proto package."""
    if package and full_name.startswith(package + "."):
        return full_name[len(package) + 1 :]
    return full_name


def _is_lower(c: str) -> bool:
    return "a" <= c <= "z"


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def go_camel_case(s: str) -> str:
    """Convert a dotted proto name into a Go identifier.

    Same rules as protoc-gen-go: `.` becomes `_` unless followed by a
    lowercase letter, underscores before a lowercase letter are dropped and
    the letter is capitalized, a leading underscore becomes `X`.
    """
    out: list[str] = []
    i = 0
    n = len(s)
    while i < n:
        c = s[i]
        if c == "." and i + 1 < n and _is_lower(s[i + 1]):
            pass
        elif c == ".":
            out.append("_")
        elif c == "_" and (i == 0 or s[i - 1] == "."):
            out.append("X")
        elif c == "_" and i + 1 < n and _is_lower(s[i + 1]):
            pass
        elif _is_digit(c):
            out.append(c)
        else:
            out.append(c.upper() if _is_lower(c) else c)
            while i + 1 < n and _is_lower(s[i + 1]):
                i += 1
                out.append(s[i])
        i += 1
    return "".join(out)


def go_sanitized(s: str) -> str:
    """Make a string a valid Go identifier."""
    s = "".join(c if c.isalpha() or c.isdigit() else "_" for c in s)
    if not s or s in GO_KEYWORDS or not s[0].isalpha():
        return "_" + s
    return s


def go_package_name(import_path: str) -> str:
    """Derive a Go package name from the last element of an import path."""
    return go_sanitized(posixpath.basename(import_path))


def python_module_name(filename: str) -> str:
    """Return the dotted module the baseline Python generator emits for a file."""
    return strip_proto(filename).replace("-", "_").replace("/", ".") + "_pb2"

