"""Dead-code elimination and constant folding over the syntax tree."""

from __future__ import annotations

import operator
from typing import Callable, Optional

from .ast import (
    Ast,
    BinaryExpr,
    BinaryOp,
    Block,
    BlockExpr,
    BlockStmt,
    CallExpr,
    Component,
    Enum,
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
    Literal,
    LiteralExpr,
    LiteralKind,
    MatchStmt,
    ReturnStmt,
    Stmt,
    Struct,
    UnaryExpr,
    UnaryOp,
    VariableExpr,
    WhileStmt,
)

_NUMBER_OPS: dict[BinaryOp, Callable[[float, float], float]] = {
    BinaryOp.ADD: operator.add,
    BinaryOp.SUB: operator.sub,
    BinaryOp.MUL: operator.mul,
    BinaryOp.DIV: operator.truediv,
}

_BOOLEAN_OPS: dict[BinaryOp, Callable[[bool, bool], bool]] = {
    BinaryOp.AND: lambda left, right: left and right,
    BinaryOp.OR: lambda left, right: left or right,
}


class Optimizer:
    """Rewrites a syntax tree in place to drop unused items and fold constants."""

    def optimize(self, ast: Ast) -> Ast:
        self.eliminate_dead_code(ast)
        self.fold_constants(ast)
        return ast

    # Dead-code elimination -------------------------------------------------

    def eliminate_dead_code(self, ast: Ast) -> Ast:
        """Remove functions, components, structs and enums nothing refers to."""
        used = set(self._used_symbols(ast))
        ast.items = [
            item
            for item in ast.items
            if not isinstance(item, (Function, Component, Struct, Enum))
            or item.name in used
        ]
        return ast

    def _used_symbols(self, ast: Ast):
        for item in ast.items:
            if isinstance(item, Component):
                yield item.name
                yield from self._symbols_in_expr(item.body)
            elif isinstance(item, Function):
                yield item.name
                yield from self._symbols_in_block(item.body)

    def _symbols_in_expr(self, expr: Expr):
        if isinstance(expr, VariableExpr):
            yield expr.name
        elif isinstance(expr, CallExpr):
            yield from self._symbols_in_expr(expr.callee)
            for arg in expr.args:
                yield from self._symbols_in_expr(arg)
        elif isinstance(expr, BinaryExpr):
            yield from self._symbols_in_expr(expr.left)
            yield from self._symbols_in_expr(expr.right)
        elif isinstance(expr, UnaryExpr):
            yield from self._symbols_in_expr(expr.expr)
        elif isinstance(expr, JSXExpr):
            yield from self._symbols_in_jsx(expr.element)
        elif isinstance(expr, BlockExpr):
            yield from self._symbols_in_block(expr.block)
        elif isinstance(expr, IfExpr):
            yield from self._symbols_in_expr(expr.condition)
            yield from self._symbols_in_expr(expr.then)
            if expr.else_ is not None:
                yield from self._symbols_in_expr(expr.else_)

    def _symbols_in_block(self, block: Block):
        for stmt in block.statements:
            yield from self._symbols_in_stmt(stmt)

    def _symbols_in_stmt(self, stmt: Stmt):
        if isinstance(stmt, LetStmt):
            yield from self._symbols_in_expr(stmt.value)
        elif isinstance(stmt, ExprStmt):
            yield from self._symbols_in_expr(stmt.expr)
        elif isinstance(stmt, ReturnStmt):
            if stmt.value is not None:
                yield from self._symbols_in_expr(stmt.value)
        elif isinstance(stmt, IfStmt):
            yield from self._symbols_in_expr(stmt.condition)
            yield from self._symbols_in_stmt(stmt.then)
            if stmt.else_ is not None:
                yield from self._symbols_in_stmt(stmt.else_)
        elif isinstance(stmt, ForStmt):
            yield from self._symbols_in_expr(stmt.iter)
            yield from self._symbols_in_stmt(stmt.body)
        elif isinstance(stmt, WhileStmt):
            yield from self._symbols_in_expr(stmt.condition)
            yield from self._symbols_in_stmt(stmt.body)
        elif isinstance(stmt, MatchStmt):
            yield from self._symbols_in_expr(stmt.expr)
            for arm in stmt.arms:
                yield from self._symbols_in_expr(arm.body)
        elif isinstance(stmt, BlockStmt):
            yield from self._symbols_in_block(stmt.block)

    def _symbols_in_jsx(self, element: JSXElement):
        for prop in element.props:
            if isinstance(prop.value, JSXExprValue):
                yield from self._symbols_in_expr(prop.value.expr)
        if isinstance(element, JSXWithChildren):
            for child in element.children:
                if isinstance(child, JSXChildElement):
                    yield from self._symbols_in_jsx(child.element)
                elif isinstance(child, JSXChildExpr):
                    yield from self._symbols_in_expr(child.expr)

    # Constant folding ------------------------------------------------------

    def fold_constants(self, ast: Ast) -> Ast:
        """Replace constant arithmetic and boolean expressions by their value."""
        for item in ast.items:
            if isinstance(item, Component):
                item.body = self._fold_expr(item.body)
            elif isinstance(item, Function):
                self._fold_block(item.body)
        return ast

    def _fold_expr(self, expr: Expr) -> Expr:
        if isinstance(expr, BinaryExpr):
            expr.left = self._fold_expr(expr.left)
            expr.right = self._fold_expr(expr.right)
            if isinstance(expr.left, LiteralExpr) and isinstance(
                expr.right, LiteralExpr
            ):
                folded = _evaluate_binary(
                    expr.left.literal, expr.op, expr.right.literal
                )
                if folded is not None:
                    return LiteralExpr(folded)
        elif isinstance(expr, UnaryExpr):
            expr.expr = self._fold_expr(expr.expr)
            if isinstance(expr.expr, LiteralExpr):
                folded = _evaluate_unary(expr.expr.literal, expr.op)
                if folded is not None:
                    return LiteralExpr(folded)
        elif isinstance(expr, BlockExpr):
            self._fold_block(expr.block)
        elif isinstance(expr, IfExpr):
            expr.condition = self._fold_expr(expr.condition)
            expr.then = self._fold_expr(expr.then)
            if expr.else_ is not None:
                expr.else_ = self._fold_expr(expr.else_)
        return expr

    def _fold_block(self, block: Block) -> None:
        for stmt in block.statements:
            self._fold_stmt(stmt)

    def _fold_stmt(self, stmt: Stmt) -> None:
        if isinstance(stmt, LetStmt):
            stmt.value = self._fold_expr(stmt.value)
        elif isinstance(stmt, ExprStmt):
            stmt.expr = self._fold_expr(stmt.expr)
        elif isinstance(stmt, ReturnStmt):
            if stmt.value is not None:
                stmt.value = self._fold_expr(stmt.value)
        elif isinstance(stmt, IfStmt):
            stmt.condition = self._fold_expr(stmt.condition)
            self._fold_stmt(stmt.then)
            if stmt.else_ is not None:
                self._fold_stmt(stmt.else_)
        elif isinstance(stmt, ForStmt):
            stmt.iter = self._fold_expr(stmt.iter)
            self._fold_stmt(stmt.body)
        elif isinstance(stmt, WhileStmt):
            stmt.condition = self._fold_expr(stmt.condition)
            self._fold_stmt(stmt.body)
        elif isinstance(stmt, MatchStmt):
            stmt.expr = self._fold_expr(stmt.expr)
            for arm in stmt.arms:
                arm.body = self._fold_expr(arm.body)
        elif isinstance(stmt, BlockStmt):
            self._fold_block(stmt.block)


def _evaluate_binary(left: Literal, op: BinaryOp, right: Literal) -> Optional[Literal]:
    if left.kind is LiteralKind.NUMBER and right.kind is LiteralKind.NUMBER:
        apply = _NUMBER_OPS.get(op)
        if apply is None or (op is BinaryOp.DIV and right.value == 0.0):
            return None
        return Literal.number(apply(left.value, right.value))
    if left.kind is LiteralKind.BOOLEAN and right.kind is LiteralKind.BOOLEAN:
        apply_bool = _BOOLEAN_OPS.get(op)
        if apply_bool is None:
            return None
        return Literal.boolean(apply_bool(left.value, right.value))
    return None


def _evaluate_unary(literal: Literal, op: UnaryOp) -> Optional[Literal]:
    if literal.kind is LiteralKind.NUMBER and op is UnaryOp.NEG:
        return Literal.number(-literal.value)
    if literal.kind is LiteralKind.BOOLEAN and op is UnaryOp.NOT:
        return Literal.boolean(not literal.value)
    return None