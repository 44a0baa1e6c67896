"""Generation of Rust source text from the syntax tree."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator, Sequence

from .ast import (
    ArrayExpr,
    Ast,
    BinaryExpr,
    Block,
    BlockExpr,
    BlockStmt,
    CallExpr,
    Component,
    Enum,
    Expr,
    ExprStmt,
    FieldAccessExpr,
    ForStmt,
    Function,
    IfExpr,
    IfStmt,
    Impl,
    IndexExpr,
    JSXBoolValue,
    JSXChildElement,
    JSXChildExpr,
    JSXElement,
    JSXExpr,
    JSXExprValue,
    JSXLiteralValue,
    JSXProp,
    JSXPropValue,
    JSXSelfClosing,
    JSXText,
    JSXWithChildren,
    LambdaExpr,
    LetStmt,
    LiteralExpr,
    LiteralKind,
    MatchArm,
    MatchExpr,
    MatchStmt,
    MethodCallExpr,
    Mod,
    ReturnStmt,
    Stmt,
    Struct,
    StructExpr,
    StructField,
    Trait,
    TupleExpr,
    TypeAlias,
    UnaryExpr,
    Use,
    VariableExpr,
    WhileStmt,
)
from .codegen_support import (
    binary_op_symbol,
    escape_string,
    format_number,
    render_literal,
    render_type,
    snake_case,
    unary_op_symbol,
)

_PRELUDE = (
    "use rux_core::virtual_tree::{VirtualNode, NodeType, PropValue};",
    "use std::collections::HashMap;",
)

_TEXT_NODE = (
    "VirtualNode {{ id: rux_core::virtual_tree::NodeId(0), "
    'node_type: NodeType::Text("{}".to_string()), '
    "props: HashMap::new(), children: vec![], key: None }}"
)

# Stand-in emitted for JSX children and prop values that are not rendered yet.
_UNRENDERED = "TODO"
_UNRENDERED_NODE = _TEXT_NODE.format(_UNRENDERED)
_UNRENDERED_PROP = f'PropValue::String("{_UNRENDERED}".to_string())'


def _bool_text(value: bool) -> str:
    return "true" if value else "false"


class CodeGenerator:
    """Turns a syntax tree into Rust source that builds virtual nodes."""

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._indent_level = 0

    def generate_rust_code(self, ast: Ast) -> str:
        """Return the Rust source for every item of ``ast``."""
        self._parts = []
        self._indent_level = 0
        for line in _PRELUDE:
            self._writeln(line)
        self._writeln("")
        for item in ast.items:
            self._item(item)
            self._writeln("")
        return "".join(self._parts)

    # Output helpers ---------------------------------------------------------

    def _write(self, text: str) -> None:
        self._parts.append(text)

    def _writeln(self, text: str) -> None:
        self._parts.append(text)
        self._parts.append("\n")

    def _indent(self) -> None:
        self._parts.append("    " * self._indent_level)

    @contextmanager
    def _indented(self) -> Iterator[None]:
        self._indent_level += 1
        try:
            yield
        finally:
            self._indent_level -= 1

    def _separated(self, exprs: Iterable[Expr]) -> None:
        for i, expr in enumerate(exprs):
            if i:
                self._write(", ")
            self._expression(expr)

    # Items -----------------------------------------------------------------

    def _item(self, item: object) -> None:
        match item:
            case Component():
                self._component(item)
            case Function():
                self._function(item)
            case Struct():
                self._struct(item)
            case Enum():
                self._enum(item)
            case Trait():
                self._writeln(f"pub trait {item.name} {{")
                self._writeln("}")
            case TypeAlias():
                self._writeln(
                    f"pub type {item.name} = {render_type(item.aliased_type)};"
                )
            case Use():
                self._write("use " + "::".join(item.path))
                if item.alias is not None:
                    self._write(" as " + item.alias)
                self._writeln(";")
            case Mod():
                self._writeln(f"pub mod {item.name} {{")
                self._writeln("}")
            case Impl():
                self._writeln("// TODO: impl block")
            case _:
                raise TypeError(f"Unknown item: {item!r}")

    def _component(self, component: Component) -> None:
        self._write(f"pub fn {snake_case(component.name)}() -> VirtualNode {{\n")
        with self._indented():
            self._expression(component.body)
        self._writeln("}")

    def _function(self, function: Function) -> None:
        params = ", ".join(
            f"{snake_case(p.name)}: {render_type(p.param_type)}"
            for p in function.params
        )
        self._write(f"pub fn {snake_case(function.name)}({params})")
        if function.return_type is not None:
            self._write(" -> " + render_type(function.return_type))
        self._writeln(" {")
        with self._indented():
            self._block(function.body)
        self._writeln("}")

    def _fields(self, fields: Sequence[StructField]) -> None:
        with self._indented():
            for fld in fields:
                self._indent()
                self._writeln(f"{fld.name}: {render_type(fld.field_type)},")

    def _struct(self, struct: Struct) -> None:
        self._writeln(f"pub struct {struct.name} {{")
        self._fields(struct.fields)
        self._writeln("}")

    def _enum(self, enum: Enum) -> None:
        self._writeln(f"pub enum {enum.name} {{")
        with self._indented():
            for variant in enum.variants:
                self._indent()
                self._write(variant.name)
                if variant.tuple_types is not None:
                    types = ", ".join(render_type(t) for t in variant.tuple_types)
                    self._write(f"({types})")
                elif variant.struct_fields is not None:
                    self._writeln(" {")
                    self._fields(variant.struct_fields)
                    self._indent()
                    self._write("}")
                self._writeln(",")
        self._writeln("}")

    # Expressions -----------------------------------------------------------

    def _expression(self, expr: Expr) -> None:
        match expr:
            case LiteralExpr():
                self._write(render_literal(expr.literal))
            case VariableExpr():
                self._write(snake_case(expr.name))
            case BinaryExpr():
                self._write("(")
                self._expression(expr.left)
                self._write(f" {binary_op_symbol(expr.op)} ")
                self._expression(expr.right)
                self._write(")")
            case UnaryExpr():
                self._write(unary_op_symbol(expr.op) + "(")
                self._expression(expr.expr)
                self._write(")")
            case CallExpr():
                self._expression(expr.callee)
                self._write("(")
                self._separated(expr.args)
                self._write(")")
            case MethodCallExpr():
                self._expression(expr.receiver)
                self._write(f".{expr.method}(")
                self._separated(expr.args)
                self._write(")")
            case FieldAccessExpr():
                self._expression(expr.object)
                self._write("." + expr.field)
            case IndexExpr():
                self._expression(expr.object)
                self._write("[")
                self._expression(expr.index)
                self._write("]")
            case JSXExpr():
                self._jsx(expr.element)
            case BlockExpr():
                self._writeln("{")
                with self._indented():
                    self._block(expr.block)
                self._indent()
                self._write("}")
            case IfExpr():
                self._write("if ")
                self._expression(expr.condition)
                self._write(" {\n")
                with self._indented():
                    self._expression(expr.then)
                self._indent()
                self._write("}")
                if expr.else_ is not None:
                    self._write(" else {\n")
                    with self._indented():
                        self._expression(expr.else_)
                    self._indent()
                    self._write("}")
            case MatchExpr():
                self._write("match ")
                self._expression(expr.expr)
                self._write(" {\n")
                self._arms(expr.arms)
                self._indent()
                self._write("}")
            case LambdaExpr():
                names = ", ".join(snake_case(p.name) for p in expr.params)
                self._write(f"|{names}| ")
                self._expression(expr.body)
            case TupleExpr():
                self._write("(")
                self._separated(expr.elements)
                if len(expr.elements) == 1:
                    self._write(",")
                self._write(")")
            case ArrayExpr():
                self._write("vec![")
                self._separated(expr.elements)
                self._write("]")
            case StructExpr():
                self._write(expr.name + " {\n")
                with self._indented():
                    for key, value in expr.fields:
                        self._indent()
                        self._write(key + ": ")
                        self._expression(value)
                        self._writeln(",")
                self._indent()
                self._write("}")
            case _:
                raise TypeError(f"Unknown expression: {expr!r}")

    def _arms(self, arms: Sequence[MatchArm]) -> None:
        with self._indented():
            for arm in arms:
                self._indent()
                self._write("_ => ")
                self._expression(arm.body)
                self._writeln(",")

    # JSX -------------------------------------------------------------------

    def _jsx(self, element: JSXElement) -> None:
        if isinstance(element, JSXSelfClosing):
            self._virtual_node(element.tag, element.props, [])
            return
        children: list[str] = []
        for child in element.children:
            if isinstance(child, JSXText):
                children.append(_TEXT_NODE.format(escape_string(child.text)))
            elif isinstance(child, (JSXChildElement, JSXChildExpr)):
                children.append(_UNRENDERED_NODE)
            else:
                raise TypeError(f"Unknown JSX child: {child!r}")
        self._virtual_node(element.tag, element.props, children)

    def _virtual_node(
        self, tag: str, props: Sequence[JSXProp], children: Sequence[str]
    ) -> None:
        self._writeln("VirtualNode {")
        with self._indented():
            self._indent()
            self._writeln("id: rux_core::virtual_tree::NodeId(0),")

            self._indent()
            self._writeln(f'node_type: NodeType::Element("{tag}".to_string()),')

            self._indent()
            self._writeln("props: {")
            with self._indented():
                self._indent()
                self._writeln("let mut props = HashMap::new();")
                for prop in props:
                    self._indent()
                    self._writeln(
                        f'props.insert("{prop.name}".to_string(), '
                        f"{self._prop_value(prop.value)});"
                    )
                self._indent()
                self._writeln("props")
            self._indent()
            self._writeln("},")

            self._indent()
            self._write("children: vec![")
            if children:
                self._writeln("")
                with self._indented():
                    for child in children:
                        self._indent()
                        self._writeln(child + ",")
                self._indent()
            self._writeln("],")

            self._indent()
            self._writeln("key: None,")
        self._indent()
        self._write("}")

    @staticmethod
    def _prop_value(value: JSXPropValue) -> str:
        if isinstance(value, JSXBoolValue):
            return f"PropValue::Boolean({_bool_text(value.value)})"
        if isinstance(value, JSXLiteralValue):
            literal = value.literal
            if literal.kind is LiteralKind.STRING:
                return f'PropValue::String("{escape_string(literal.value)}".to_string())'
            if literal.kind is LiteralKind.NUMBER:
                return f"PropValue::Number({format_number(literal.value)})"
            if literal.kind is LiteralKind.BOOLEAN:
                return f"PropValue::Boolean({_bool_text(literal.value)})"
            return _UNRENDERED_PROP
        if isinstance(value, JSXExprValue):
            return _UNRENDERED_PROP
        raise TypeError(f"Unknown prop value: {value!r}")

    # Statements ------------------------------------------------------------

    def _block(self, block: Block) -> None:
        for stmt in block.statements:
            self._statement(stmt)

    def _statement(self, stmt: Stmt) -> None:
        match stmt:
            case LetStmt():
                self._indent()
                self._write("let mut " if stmt.mutable else "let ")
                self._write(snake_case(stmt.name) + " = ")
                self._expression(stmt.value)
                self._writeln(";")
            case ExprStmt():
                self._indent()
                self._expression(stmt.expr)
                self._writeln(";")
            case ReturnStmt():
                self._indent()
                if stmt.value is None:
                    self._writeln("return;")
                else:
                    self._write("return ")
                    self._expression(stmt.value)
                    self._writeln(";")
            case IfStmt():
                self._indent()
                self._write("if ")
                self._expression(stmt.condition)
                self._write(" {\n")
                with self._indented():
                    self._statement(stmt.then)
                self._indent()
                self._write("}")
                if stmt.else_ is not None:
                    self._write(" else {\n")
                    with self._indented():
                        self._statement(stmt.else_)
                    self._indent()
                    self._write("}")
                self._writeln("")
            case ForStmt():
                self._indent()
                self._write(f"for {snake_case(stmt.var)} in ")
                self._expression(stmt.iter)
                self._write(" {\n")
                with self._indented():
                    self._statement(stmt.body)
                self._indent()
                self._writeln("}")
            case WhileStmt():
                self._indent()
                self._write("while ")
                self._expression(stmt.condition)
                self._write(" {\n")
                with self._indented():
                    self._statement(stmt.body)
                self._indent()
                self._writeln("}")
            case MatchStmt():
                self._indent()
                self._write("match ")
                self._expression(stmt.expr)
                self._write(" {\n")
                self._arms(stmt.arms)
                self._indent()
                self._writeln("}")
            case BlockStmt():
                self._writeln("{")
                with self._indented():
                    self._block(stmt.block)
                self._indent()
                self._writeln("}")
            case _:
                raise TypeError(f"Unknown statement: {stmt!r}")