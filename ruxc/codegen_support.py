"""Rendering helpers shared by the code generator."""

from __future__ import annotations

import math
from decimal import Decimal

from .ast import (
    ArrayType,
    BinaryOp,
    FunctionType,
    IdentType,
    Literal,
    LiteralKind,
    OptionType,
    PathType,
    ReferenceType,
    ResultType,
    SliceType,
    TupleType,
    Type,
    UnaryOp,
    UnitType,
)

_BINARY_SYMBOLS: dict[BinaryOp, str] = {
    BinaryOp.ADD: "+",
    BinaryOp.SUB: "-",
    BinaryOp.MUL: "*",
    BinaryOp.DIV: "/",
    BinaryOp.REM: "%",
    BinaryOp.EQ: "==",
    BinaryOp.NE: "!=",
    BinaryOp.LT: "<",
    BinaryOp.LE: "<=",
    BinaryOp.GT: ">",
    BinaryOp.GE: ">=",
    BinaryOp.AND: "&&",
    BinaryOp.OR: "||",
    BinaryOp.BIT_AND: "&",
    BinaryOp.BIT_OR: "|",
    BinaryOp.BIT_XOR: "^",
    BinaryOp.SHL: "<<",
    BinaryOp.SHR: ">>",
}

_UNARY_SYMBOLS: dict[UnaryOp, str] = {
    UnaryOp.NOT: "!",
    UnaryOp.NEG: "-",
    UnaryOp.DEREF: "*",
    UnaryOp.REF: "&",
}

_STRING_ESCAPES = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
)

_CHAR_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def snake_case(name: str) -> str:
    """Lower-case ``name``, putting an underscore before inner capitals."""
    parts: list[str] = []
    for ch in name:
        if ch.isupper() and parts:
            parts.append("_")
        lowered = ch.lower()
        parts.append(lowered[0] if lowered else ch)
    return "".join(parts)


def escape_string(text: str) -> str:
    """Escape ``text`` for use inside a double-quoted string literal."""
    for raw, escaped in _STRING_ESCAPES:
        text = text.replace(raw, escaped)
    return text


def escape_char(ch: str) -> str:
    """Escape a single character for use inside a char literal."""
    return _CHAR_ESCAPES.get(ch, ch)


def binary_op_symbol(op: BinaryOp) -> str:
    """Return the source symbol of a binary operator."""
    return _BINARY_SYMBOLS[op]


def unary_op_symbol(op: UnaryOp) -> str:
    """Return the source symbol of a unary operator."""
    return _UNARY_SYMBOLS[op]


def format_number(value: float) -> str:
    """Format a float as plain decimal digits, dropping a zero fraction."""
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def render_literal(literal: Literal) -> str:
    """Render a literal as generated source text."""
    kind = literal.kind
    if kind is LiteralKind.STRING:
        return f'"{escape_string(literal.value)}"'
    if kind is LiteralKind.NUMBER:
        return format_number(literal.value)
    if kind is LiteralKind.BOOLEAN:
        return "true" if literal.value else "false"
    if kind is LiteralKind.CHAR:
        return f"'{escape_char(literal.value)}'"
    return "()"


def render_type(ty: Type) -> str:
    """Render a type expression as generated source text."""
    if isinstance(ty, IdentType):
        return ty.name
    if isinstance(ty, PathType):
        return "::".join(ty.segments)
    if isinstance(ty, UnitType):
        return "()"
    if isinstance(ty, TupleType):
        inner = ", ".join(render_type(t) for t in ty.elements)
        if len(ty.elements) == 1:
            inner += ","
        return f"({inner})"
    if isinstance(ty, ArrayType):
        return f"Vec<{render_type(ty.element)}>"
    if isinstance(ty, SliceType):
        return f"[{render_type(ty.element)}]"
    if isinstance(ty, FunctionType):
        params = ", ".join(render_type(t) for t in ty.params)
        return f"fn({params}) -> {render_type(ty.return_type)}"
    if isinstance(ty, ReferenceType):
        prefix = "&mut " if ty.mutable else "&"
        return prefix + render_type(ty.inner)
    if isinstance(ty, OptionType):
        return f"Option<{render_type(ty.inner)}>"
    if isinstance(ty, ResultType):
        return f"Result<{render_type(ty.ok)}, {render_type(ty.err)}>"
    raise TypeError(f"Unknown type node: {ty!r}")