import pytest

from ruxc.ast import (
    ArrayExpr,
    Ast,
    BinaryExpr,
    BinaryOp,
    Block,
    Component,
    Enum,
    EnumVariant,
    ExprStmt,
    FieldAccessExpr,
    Function,
    IdentType,
    Impl,
    JSXBoolValue,
    JSXChildElement,
    JSXChildExpr,
    JSXExpr,
    JSXExprValue,
    JSXLiteralValue,
    JSXProp,
    JSXSelfClosing,
    JSXText,
    JSXWithChildren,
    LetStmt,
    Literal,
    LiteralExpr,
    Mod,
    Param,
    ReturnStmt,
    Struct,
    StructField,
    Trait,
    TupleExpr,
    TypeAlias,
    Use,
    VariableExpr,
)
from ruxc.codegen import CodeGenerator

PRELUDE = (
    "use rux_core::virtual_tree::{VirtualNode, NodeType, PropValue};\n"
    "use std::collections::HashMap;\n\n"
)


def element_component(name, element):
    return Component(name, [], IdentType("Element"), JSXExpr(element))


def generate(*items):
    return CodeGenerator().generate_rust_code(Ast(list(items)))


def test_empty_ast_yields_prelude_only():
    assert generate() == PRELUDE


def test_component_compiles_to_virtual_node_function():
    inner = JSXWithChildren("h1", children=[JSXText("Hello, RUX!")])
    app = element_component(
        "App", JSXWithChildren("div", children=[JSXChildElement(inner)])
    )
    code = generate(app)
    assert code.startswith(PRELUDE)
    assert "pub fn app() -> VirtualNode {" in code
    assert "VirtualNode" in code
    assert 'NodeType::Element("div".to_string())' in code


def test_multiple_generations_reset_output():
    gen = CodeGenerator()
    first = gen.generate_rust_code(
        Ast([element_component("Component1", JSXWithChildren("div", children=[JSXText("Component 1")]))])
    )
    second = gen.generate_rust_code(
        Ast([element_component("Component2", JSXWithChildren("div", children=[JSXText("Component 2")]))])
    )
    assert "component1" in first
    assert "component2" in second
    assert "component1" not in second
    assert second.count(PRELUDE) == 1


def test_struct_and_component_types():
    props = Struct("Props", [StructField("name", IdentType("String"))])
    greeting = Component(
        "Greeting",
        [Param("props", IdentType("Props"))],
        IdentType("Element"),
        JSXExpr(
            JSXWithChildren(
                "h1",
                children=[
                    JSXText("Hello, "),
                    JSXChildExpr(FieldAccessExpr(VariableExpr("props"), "name")),
                ],
            )
        ),
    )
    code = generate(props, greeting)
    assert "pub struct Props" in code
    assert "pub fn greeting" in code
    assert code == generate(props, greeting)


def test_struct_exact_output():
    code = generate(Struct("Props", [StructField("name", IdentType("String"))]))
    assert code == PRELUDE + "pub struct Props {\n    name: String,\n}\n\n"


def test_text_child_is_escaped():
    app = element_component(
        "App", JSXWithChildren("p", children=[JSXText('say "hi"')])
    )
    code = generate(app)
    assert 'NodeType::Text("say \\"hi\\"".to_string())' in code


def test_nested_element_child_becomes_single_text_entry():
    inner = JSXSelfClosing("span")
    app = element_component(
        "App", JSXWithChildren("div", children=[JSXChildElement(inner)])
    )
    code = generate(app)
    assert code.count("NodeType::Text(") == 1
    assert 'NodeType::Element("span"' not in code


def test_self_closing_has_no_children():
    code = generate(element_component("App", JSXSelfClosing("br")))
    assert "children: vec![]," in code
    assert "key: None," in code
    assert "let mut props = HashMap::new();" in code


def test_prop_values():
    element = JSXSelfClosing(
        "input",
        [
            JSXProp("class", JSXLiteralValue(Literal.string("main"))),
            JSXProp("size", JSXLiteralValue(Literal.number(2.0))),
            JSXProp("disabled", JSXBoolValue(True)),
            JSXProp("value", JSXExprValue(VariableExpr("x"))),
        ],
    )
    code = generate(element_component("App", element))
    assert 'props.insert("class".to_string(), PropValue::String("main".to_string()));' in code
    assert 'props.insert("size".to_string(), PropValue::Number(2));' in code
    assert 'props.insert("disabled".to_string(), PropValue::Boolean(true));' in code
    assert 'props.insert("value".to_string(), PropValue::String("TODO".to_string()));' in code


def test_function_with_params_and_statements():
    body = Block(
        [
            LetStmt(
                "total",
                BinaryExpr(VariableExpr("valueX"), BinaryOp.ADD, LiteralExpr(Literal.number(1.0))),
                mutable=True,
            ),
            ReturnStmt(VariableExpr("total")),
        ]
    )
    func = Function("AddOne", [Param("valueX", IdentType("f64"))], body, IdentType("f64"))
    code = generate(func)
    assert "pub fn add_one(value_x: f64) -> f64 {\n" in code
    assert "    let mut total = (value_x + 1);\n" in code
    assert "    return total;\n" in code


def test_enum_variants():
    enum = Enum(
        "Message",
        [
            EnumVariant("Quit"),
            EnumVariant("Move", tuple_types=[IdentType("i32"), IdentType("i32")]),
            EnumVariant("Write", struct_fields=[StructField("text", IdentType("String"))]),
        ],
    )
    code = generate(enum)
    assert "pub enum Message {\n" in code
    assert "    Quit,\n" in code
    assert "    Move(i32, i32),\n" in code
    assert "    Write {\n        text: String,\n    },\n" in code


def test_use_alias_trait_mod_and_impl():
    code = generate(
        Use(["std", "fmt"], alias="f"),
        TypeAlias("Id", IdentType("u32")),
        Trait("Draw"),
        Mod("widgets"),
        Impl("Props"),
    )
    assert "use std::fmt as f;\n" in code
    assert "pub type Id = u32;\n" in code
    assert "pub trait Draw {\n}\n" in code
    assert "pub mod widgets {\n}\n" in code
    assert "// TODO: impl block\n" in code


def test_tuple_and_array_expressions():
    body = Block(
        [
            ExprStmt(TupleExpr([VariableExpr("x")])),
            ExprStmt(ArrayExpr([LiteralExpr(Literal.number(1.0)), LiteralExpr(Literal.number(2.0))])),
        ]
    )
    code = generate(Function("run", [], body))
    assert "    (x,);\n" in code
    assert "    vec![1, 2];\n" in code


def test_unknown_item_raises():
    with pytest.raises(TypeError):
        CodeGenerator().generate_rust_code(Ast([object()]))