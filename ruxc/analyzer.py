"""Dependency analysis of components and functions."""

from __future__ import annotations

from typing import Iterator, Optional

from .ast import (
    Ast,
    BinaryExpr,
    Block,
    BlockExpr,
    BlockStmt,
    CallExpr,
    Component,
    Expr,
    ExprStmt,
    ForStmt,
    Function,
    IfExpr,
    IfStmt,
    JSXChildElement,
    JSXChildExpr,
    JSXElement,
    JSXExpr,
    JSXExprValue,
    JSXWithChildren,
    LetStmt,
    MatchExpr,
    MatchStmt,
    ReturnStmt,
    Stmt,
    UnaryExpr,
    VariableExpr,
    WhileStmt,
)


class DependencyAnalyzer:
    """Records which names each component and function refers to."""

    def __init__(self) -> None:
        self._dependencies: dict[str, set[str]] = {}
        self._components: set[str] = set()

    @property
    def components(self) -> frozenset[str]:
        """Names of every component seen so far."""
        return frozenset(self._components)

    def analyze(self, ast: Ast) -> None:
        """Build the dependency graph for the top-level items of ``ast``."""
        for item in ast.items:
            if isinstance(item, Component):
                self._components.add(item.name)
                self._dependencies[item.name] = set(self._names_in_expr(item.body))
            elif isinstance(item, Function):
                self._dependencies[item.name] = set(self._names_in_block(item.body))

    def dependencies_of(self, name: str) -> Optional[set[str]]:
        """Return the names ``name`` depends on, or ``None`` if it is unknown."""
        deps = self._dependencies.get(name)
        return None if deps is None else set(deps)

    def track_reactive_dependencies(self, expr: Expr) -> set[str]:
        """Return the signal accessors that ``expr`` reads."""
        return set(self._signals_in_expr(expr))

    # Dependency collection -------------------------------------------------

    def _names_in_expr(self, expr: Expr) -> Iterator[str]:
        if isinstance(expr, VariableExpr):
            yield expr.name
        elif isinstance(expr, CallExpr):
            if isinstance(expr.callee, VariableExpr):
                yield expr.callee.name
            for arg in expr.args:
                yield from self._names_in_expr(arg)
        elif isinstance(expr, BinaryExpr):
            yield from self._names_in_expr(expr.left)
            yield from self._names_in_expr(expr.right)
        elif isinstance(expr, UnaryExpr):
            yield from self._names_in_expr(expr.expr)
        elif isinstance(expr, JSXExpr):
            yield from self._names_in_jsx(expr.element)
        elif isinstance(expr, BlockExpr):
            yield from self._names_in_block(expr.block)
        elif isinstance(expr, IfExpr):
            yield from self._names_in_expr(expr.condition)
            yield from self._names_in_expr(expr.then)
            if expr.else_ is not None:
                yield from self._names_in_expr(expr.else_)
        elif isinstance(expr, MatchExpr):
            yield from self._names_in_expr(expr.expr)
            for arm in expr.arms:
                yield from self._names_in_expr(arm.body)

    def _names_in_block(self, block: Block) -> Iterator[str]:
        for stmt in block.statements:
            yield from self._names_in_stmt(stmt)

    def _names_in_stmt(self, stmt: Stmt) -> Iterator[str]:
        if isinstance(stmt, LetStmt):
            yield from self._names_in_expr(stmt.value)
        elif isinstance(stmt, ExprStmt):
            yield from self._names_in_expr(stmt.expr)
        elif isinstance(stmt, ReturnStmt):
            if stmt.value is not None:
                yield from self._names_in_expr(stmt.value)
        elif isinstance(stmt, IfStmt):
            yield from self._names_in_expr(stmt.condition)
            yield from self._names_in_stmt(stmt.then)
            if stmt.else_ is not None:
                yield from self._names_in_stmt(stmt.else_)
        elif isinstance(stmt, ForStmt):
            yield from self._names_in_expr(stmt.iter)
            yield from self._names_in_stmt(stmt.body)
        elif isinstance(stmt, WhileStmt):
            yield from self._names_in_expr(stmt.condition)
            yield from self._names_in_stmt(stmt.body)
        elif isinstance(stmt, MatchStmt):
            yield from self._names_in_expr(stmt.expr)
            for arm in stmt.arms:
                yield from self._names_in_expr(arm.body)
        elif isinstance(stmt, BlockStmt):
            yield from self._names_in_block(stmt.block)

    def _names_in_jsx(self, element: JSXElement) -> Iterator[str]:
        yield element.tag
        for prop in element.props:
            if isinstance(prop.value, JSXExprValue):
                yield from self._names_in_expr(prop.value.expr)
        if isinstance(element, JSXWithChildren):
            for child in element.children:
                if isinstance(child, JSXChildElement):
                    yield from self._names_in_jsx(child.element)
                elif isinstance(child, JSXChildExpr):
                    yield from self._names_in_expr(child.expr)

    # Reactive dependencies -------------------------------------------------

    def _signals_in_expr(self, expr: Expr) -> Iterator[str]:
        if isinstance(expr, CallExpr):
            callee = expr.callee
            if isinstance(callee, VariableExpr) and (
                callee.name.startswith("use_") or callee.name.endswith("()")
            ):
                yield callee.name
        elif isinstance(expr, BinaryExpr):
            yield from self._signals_in_expr(expr.left)
            yield from self._signals_in_expr(expr.right)
        elif isinstance(expr, UnaryExpr):
            yield from self._signals_in_expr(expr.expr)
        elif isinstance(expr, JSXExpr):
            yield from self._signals_in_jsx(expr.element)

    def _signals_in_jsx(self, element: JSXElement) -> Iterator[str]:
        for prop in element.props:
            if isinstance(prop.value, JSXExprValue):
                yield from self._signals_in_expr(prop.value.expr)
        if isinstance(element, JSXWithChildren):
            for child in element.children:
                if isinstance(child, JSXChildExpr):
                    yield from self._signals_in_expr(child.expr)