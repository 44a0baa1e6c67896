import pytest

from ruxc.errors import CompileError, LexerError, ParserError, TypeCheckError


def test_lexer_error_message_format():
    err = LexerError("Unterminated string literal", "\"abc", (0, 4))
    assert str(err) == "Lexer error: Unterminated string literal"
    assert err.message == "Unterminated string literal"
    assert err.source_code == "\"abc"
    assert err.span == (0, 4)


def test_parser_error_message_format():
    err = ParserError("Failed to read file: missing", "", (0, 0))
    assert str(err) == "Parser error: Failed to read file: missing"


def test_type_error_message_format():
    err = TypeCheckError("mismatch", "let x = 1;", (4, 1))
    assert str(err) == "Type error: mismatch"
    assert err.offset == 4
    assert err.length == 1


def test_diagnostic_codes():
    assert LexerError("x").code == "rux::lexer"
    assert ParserError("x").code == "rux::parser"
    assert TypeCheckError("x").code == "rux::type_check"


def test_defaults_are_empty_source_and_zero_span():
    err = ParserError("boom")
    assert err.source_code == ""
    assert err.span == (0, 0)


@pytest.mark.parametrize(
    "cls, prefix",
    [
        (LexerError, "Lexer error"),
        (ParserError, "Parser error"),
        (TypeCheckError, "Type error"),
    ],
)
def test_subclasses_are_caught_as_compile_error(cls, prefix):
    caught = None
    try:
        raise cls("problem", "src", (1, 2))
    except CompileError as err:
        caught = err
    assert caught is not None
    assert type(caught) is cls
    assert caught.message == "problem"
    assert caught.source_code == "src"
    assert caught.span == (1, 2)
    assert str(caught) == f"{prefix}: problem"


def test_args_hold_message():
    err = LexerError("bad char", "`", (0, 1))
    assert err.args == ("bad char",)