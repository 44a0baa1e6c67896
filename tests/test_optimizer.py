import copy

from ruxc.ast import (
    Ast,
    BinaryExpr,
    BinaryOp,
    Block,
    BlockStmt,
    Component,
    ExprStmt,
    Function,
    IdentType,
    IfStmt,
    JSXChildExpr,
    JSXExpr,
    JSXExprValue,
    JSXProp,
    JSXWithChildren,
    LetStmt,
    Literal,
    LiteralExpr,
    LiteralKind,
    MatchArm,
    MatchExpr,
    ReturnStmt,
    Struct,
    UnaryExpr,
    UnaryOp,
    Use,
    VariableExpr,
    WildcardPattern,
)
from ruxc.lexer import Span
from ruxc.optimizer import Optimizer


def num(value):
    return LiteralExpr(Literal.number(value))


def boolean(value):
    return LiteralExpr(Literal.boolean(value))


def function_returning(expr, name="compute"):
    return Function(name, [], Block([ReturnStmt(expr)]))


def folded_return(expr):
    ast = Ast([function_returning(expr)])
    Optimizer().fold_constants(ast)
    return ast.items[0].body.statements[0].value


def test_adds_numbers():
    assert folded_return(BinaryExpr(num(2.0), BinaryOp.ADD, num(3.0))) == num(5.0)


def test_boolean_and():
    result = folded_return(BinaryExpr(boolean(True), BinaryOp.AND, boolean(False)))
    assert result == boolean(False)


def test_not_flips_boolean():
    assert folded_return(UnaryExpr(UnaryOp.NOT, boolean(True))) == boolean(False)


def test_negation_of_number():
    value = 7.0
    result = folded_return(UnaryExpr(UnaryOp.NEG, num(value)))
    assert result.literal == Literal.number(-value)


def test_folded_literal_has_zero_span():
    expr = BinaryExpr(num(1.0), BinaryOp.MUL, num(4.0), Span(5, 10, 1, 6))
    assert folded_return(expr).span == Span(0, 0, 0, 0)


def test_nested_folding_matches_flat_result():
    nested = BinaryExpr(
        BinaryExpr(num(1.0), BinaryOp.ADD, num(2.0)), BinaryOp.MUL, num(3.0)
    )
    flat = BinaryExpr(
        folded_return(BinaryExpr(num(1.0), BinaryOp.ADD, num(2.0))),
        BinaryOp.MUL,
        num(3.0),
    )
    assert folded_return(nested) == folded_return(flat)
    assert folded_return(nested).literal.kind is LiteralKind.NUMBER


def test_division_by_zero_is_left_alone():
    expr = BinaryExpr(num(1.0), BinaryOp.DIV, num(0.0))
    original = copy.deepcopy(expr)
    assert folded_return(expr) == original


def test_unsupported_operator_is_left_alone():
    expr = BinaryExpr(num(6.0), BinaryOp.REM, num(4.0))
    original = copy.deepcopy(expr)
    assert folded_return(expr) == original


def test_mixed_kinds_are_left_alone():
    expr = BinaryExpr(num(1.0), BinaryOp.ADD, boolean(True))
    original = copy.deepcopy(expr)
    assert folded_return(expr) == original


def test_variables_block_folding_but_children_fold():
    expr = BinaryExpr(
        VariableExpr("x"), BinaryOp.ADD, BinaryExpr(num(2.0), BinaryOp.SUB, num(2.0))
    )
    result = folded_return(expr)
    assert isinstance(result, BinaryExpr)
    assert result.left == VariableExpr("x")
    assert isinstance(result.right, LiteralExpr)


def test_folds_inside_let_and_if_statements():
    inner = LetStmt("y", BinaryExpr(num(1.0), BinaryOp.ADD, num(1.0)))
    stmt = IfStmt(
        BinaryExpr(boolean(True), BinaryOp.OR, boolean(False)),
        BlockStmt(Block([inner])),
    )
    ast = Ast([Function("run", [], Block([stmt]))])
    Optimizer().fold_constants(ast)
    assert isinstance(stmt.condition, LiteralExpr)
    assert stmt.condition.literal.kind is LiteralKind.BOOLEAN
    assert isinstance(inner.value, LiteralExpr)


def test_component_body_is_folded():
    comp = Component(
        "App", [], IdentType("Element"), UnaryExpr(UnaryOp.NEG, num(3.0))
    )
    ast = Ast([comp])
    Optimizer().fold_constants(ast)
    assert comp.body == num(-3.0)
    assert comp.body.literal == Literal.number(-3.0)


def test_unused_struct_is_removed_and_others_kept():
    use = Use(["std", "fmt"])
    unused = Struct("Unused")
    fn = function_returning(num(1.0))
    ast = Ast([use, unused, fn])
    Optimizer().eliminate_dead_code(ast)
    assert ast.items == [use, fn]


def test_struct_referenced_by_variable_is_kept():
    config = Struct("Config")
    fn = Function("build", [], Block([ExprStmt(VariableExpr("Config"))]))
    ast = Ast([config, fn])
    Optimizer().eliminate_dead_code(ast)
    assert ast.items == [config, fn]


def test_struct_referenced_from_jsx_is_kept():
    theme = Struct("Theme")
    palette = Struct("Palette")
    element = JSXWithChildren(
        "div",
        [JSXProp("style", JSXExprValue(VariableExpr("Theme")))],
        [JSXChildExpr(VariableExpr("Palette"))],
    )
    comp = Component("App", [], IdentType("Element"), JSXExpr(element))
    ast = Ast([theme, palette, comp])
    Optimizer().eliminate_dead_code(ast)
    assert ast.items == [theme, palette, comp]


def test_match_expression_is_not_searched():
    hidden = Struct("Hidden")
    match = MatchExpr(
        VariableExpr("value"), [MatchArm(WildcardPattern(), VariableExpr("Hidden"))]
    )
    fn = Function("pick", [], Block([ExprStmt(match)]))
    ast = Ast([hidden, fn])
    Optimizer().eliminate_dead_code(ast)
    assert ast.items == [fn]


def test_optimize_runs_both_passes():
    fn = function_returning(BinaryExpr(num(2.0), BinaryOp.ADD, num(3.0)))
    ast = Ast([Struct("Dropped"), fn])
    result = Optimizer().optimize(ast)
    assert result is ast
    assert ast.items == [fn]
    assert isinstance(fn.body.statements[0].value, LiteralExpr)