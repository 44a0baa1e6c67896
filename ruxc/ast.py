"""Syntax tree produced by the parser and consumed by later stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Union

from .lexer import Span

NO_SPAN = Span(0, 0, 0, 0)


class BinaryOp(Enum):
    ADD = auto()
    SUB = auto()
    MUL = auto()
    DIV = auto()
    REM = auto()
    EQ = auto()
    NE = auto()
    LT = auto()
    GT = auto()
    LE = auto()
    GE = auto()
    AND = auto()
    OR = auto()
    BIT_AND = auto()
    BIT_OR = auto()
    BIT_XOR = auto()
    SHL = auto()
    SHR = auto()


class UnaryOp(Enum):
    NOT = auto()
    NEG = auto()
    DEREF = auto()
    REF = auto()


class LiteralKind(Enum):
    STRING = auto()
    NUMBER = auto()
    BOOLEAN = auto()
    CHAR = auto()
    UNIT = auto()


@dataclass(frozen=True)
class Literal:
    """A literal value; ``value`` is ``None`` for the unit literal."""

    kind: LiteralKind
    value: Union[str, float, bool, None] = None

    @classmethod
    def string(cls, text: str) -> Literal:
        return cls(LiteralKind.STRING, text)

    @classmethod
    def number(cls, value: float) -> Literal:
        return cls(LiteralKind.NUMBER, value)

    @classmethod
    def boolean(cls, value: bool) -> Literal:
        return cls(LiteralKind.BOOLEAN, value)

    @classmethod
    def char(cls, ch: str) -> Literal:
        return cls(LiteralKind.CHAR, ch)

    @classmethod
    def unit(cls) -> Literal:
        return cls(LiteralKind.UNIT)


# Types ---------------------------------------------------------------------


class Type:
    """Base class of every type expression."""


@dataclass
class IdentType(Type):
    name: str
    span: Span = NO_SPAN


@dataclass
class PathType(Type):
    segments: list[str]
    span: Span = NO_SPAN


@dataclass
class TupleType(Type):
    elements: list[Type]
    span: Span = NO_SPAN


@dataclass
class ArrayType(Type):
    element: Type
    span: Span = NO_SPAN


@dataclass
class SliceType(Type):
    element: Type
    span: Span = NO_SPAN


@dataclass
class ReferenceType(Type):
    inner: Type
    mutable: bool = False
    span: Span = NO_SPAN


@dataclass
class FunctionType(Type):
    params: list[Type]
    return_type: Type
    span: Span = NO_SPAN


@dataclass
class OptionType(Type):
    inner: Type
    span: Span = NO_SPAN


@dataclass
class ResultType(Type):
    ok: Type
    err: Type
    span: Span = NO_SPAN


@dataclass
class UnitType(Type):
    span: Span = NO_SPAN


# Statements ----------------------------------------------------------------


@dataclass
class Param:
    name: str
    param_type: Type
    span: Span = NO_SPAN


@dataclass
class Block:
    statements: list[Stmt] = field(default_factory=list)
    span: Span = NO_SPAN


@dataclass
class LetStmt:
    name: str
    value: Expr
    mutable: bool = False
    span: Span = NO_SPAN


@dataclass
class ExprStmt:
    expr: Expr


@dataclass
class ReturnStmt:
    value: Optional[Expr] = None
    span: Span = NO_SPAN


@dataclass
class IfStmt:
    condition: Expr
    then: Stmt
    else_: Optional[Stmt] = None
    span: Span = NO_SPAN


@dataclass
class ForStmt:
    var: str
    iter: Expr
    body: Stmt
    span: Span = NO_SPAN


@dataclass
class WhileStmt:
    condition: Expr
    body: Stmt
    span: Span = NO_SPAN


@dataclass
class MatchStmt:
    expr: Expr
    arms: list[MatchArm]
    span: Span = NO_SPAN


@dataclass
class BlockStmt:
    block: Block


# Patterns ------------------------------------------------------------------


@dataclass
class MatchArm:
    pattern: Pattern
    body: Expr
    guard: Optional[Expr] = None
    span: Span = NO_SPAN


@dataclass
class IdentPattern:
    name: str
    span: Span = NO_SPAN


@dataclass
class LiteralPattern:
    literal: Literal
    span: Span = NO_SPAN


@dataclass
class TuplePattern:
    elements: list[Pattern]
    span: Span = NO_SPAN


@dataclass
class StructPattern:
    name: str
    fields: list[tuple[str, Pattern]]
    span: Span = NO_SPAN


@dataclass
class WildcardPattern:
    span: Span = NO_SPAN


# Expressions ---------------------------------------------------------------


@dataclass
class LiteralExpr:
    literal: Literal
    span: Span = NO_SPAN


@dataclass
class VariableExpr:
    name: str
    span: Span = NO_SPAN


@dataclass
class BinaryExpr:
    left: Expr
    op: BinaryOp
    right: Expr
    span: Span = NO_SPAN


@dataclass
class UnaryExpr:
    op: UnaryOp
    expr: Expr
    span: Span = NO_SPAN


@dataclass
class CallExpr:
    callee: Expr
    args: list[Expr] = field(default_factory=list)
    span: Span = NO_SPAN


@dataclass
class MethodCallExpr:
    receiver: Expr
    method: str
    args: list[Expr] = field(default_factory=list)
    span: Span = NO_SPAN


@dataclass
class FieldAccessExpr:
    object: Expr
    field: str
    span: Span = NO_SPAN


@dataclass
class IndexExpr:
    object: Expr
    index: Expr
    span: Span = NO_SPAN


@dataclass
class JSXExpr:
    element: JSXElement
    span: Span = NO_SPAN


@dataclass
class BlockExpr:
    block: Block
    span: Span = NO_SPAN


@dataclass
class IfExpr:
    condition: Expr
    then: Expr
    else_: Optional[Expr] = None
    span: Span = NO_SPAN


@dataclass
class MatchExpr:
    expr: Expr
    arms: list[MatchArm]
    span: Span = NO_SPAN


@dataclass
class LambdaExpr:
    params: list[Param]
    body: Expr
    span: Span = NO_SPAN


@dataclass
class TupleExpr:
    elements: list[Expr]
    span: Span = NO_SPAN


@dataclass
class ArrayExpr:
    elements: list[Expr]
    span: Span = NO_SPAN


@dataclass
class StructExpr:
    name: str
    fields: list[tuple[str, Expr]]
    span: Span = NO_SPAN


# JSX -----------------------------------------------------------------------


@dataclass
class JSXSelfClosing:
    tag: str
    props: list[JSXProp] = field(default_factory=list)
    span: Span = NO_SPAN


@dataclass
class JSXWithChildren:
    tag: str
    props: list[JSXProp] = field(default_factory=list)
    children: list[JSXChild] = field(default_factory=list)
    span: Span = NO_SPAN


@dataclass
class JSXText:
    text: str
    span: Span = NO_SPAN


@dataclass
class JSXChildElement:
    element: JSXElement


@dataclass
class JSXChildExpr:
    expr: Expr


@dataclass
class JSXProp:
    name: str
    value: JSXPropValue
    span: Span = NO_SPAN


@dataclass
class JSXLiteralValue:
    literal: Literal


@dataclass
class JSXExprValue:
    expr: Expr


@dataclass
class JSXBoolValue:
    value: bool


# Items ---------------------------------------------------------------------


@dataclass
class StructField:
    name: str
    field_type: Type
    span: Span = NO_SPAN


@dataclass
class Struct:
    name: str
    fields: list[StructField] = field(default_factory=list)
    span: Span = NO_SPAN


@dataclass
class EnumVariant:
    """An enum variant: unit, tuple-like (``tuple_types``) or struct-like
    (``struct_fields``)."""

    name: str
    tuple_types: Optional[list[Type]] = None
    struct_fields: Optional[list[StructField]] = None
    span: Span = NO_SPAN

    @property
    def is_unit(self) -> bool:
        return self.tuple_types is None and self.struct_fields is None


@dataclass
class Enum:
    name: str
    variants: list[EnumVariant] = field(default_factory=list)
    span: Span = NO_SPAN


@dataclass
class TraitMethod:
    function: Function


@dataclass
class TraitType:
    name: str
    default: Optional[Type] = None


@dataclass
class Trait:
    name: str
    items: list[Union[TraitMethod, TraitType]] = field(default_factory=list)
    span: Span = NO_SPAN


@dataclass
class Impl:
    type_name: str
    items: list[Function] = field(default_factory=list)
    trait_name: Optional[str] = None
    span: Span = NO_SPAN


@dataclass
class Use:
    path: list[str]
    alias: Optional[str] = None
    span: Span = NO_SPAN


@dataclass
class Mod:
    name: str
    items: list[Item] = field(default_factory=list)
    span: Span = NO_SPAN


@dataclass
class TypeAlias:
    name: str
    aliased_type: Type
    span: Span = NO_SPAN


@dataclass
class Component:
    name: str
    props: list[Param]
    return_type: Type
    body: Expr
    span: Span = NO_SPAN


@dataclass
class Function:
    name: str
    params: list[Param]
    body: Block
    return_type: Optional[Type] = None
    span: Span = NO_SPAN


@dataclass
class Ast:
    items: list[Item] = field(default_factory=list)


Stmt = Union[
    LetStmt, ExprStmt, ReturnStmt, IfStmt, ForStmt, WhileStmt, MatchStmt, BlockStmt
]
Pattern = Union[
    IdentPattern, LiteralPattern, TuplePattern, StructPattern, WildcardPattern
]
Expr = Union[
    LiteralExpr,
    VariableExpr,
    BinaryExpr,
    UnaryExpr,
    CallExpr,
    MethodCallExpr,
    FieldAccessExpr,
    IndexExpr,
    JSXExpr,
    BlockExpr,
    IfExpr,
    MatchExpr,
    LambdaExpr,
    TupleExpr,
    ArrayExpr,
    StructExpr,
]
JSXElement = Union[JSXSelfClosing, JSXWithChildren]
JSXChild = Union[JSXText, JSXChildElement, JSXChildExpr]
JSXPropValue = Union[JSXLiteralValue, JSXExprValue, JSXBoolValue]
Item = Union[Component, Function, Struct, Enum, Trait, Impl, Use, Mod, TypeAlias]