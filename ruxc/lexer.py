"""Tokenizer for RSX source text."""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Union

from .errors import LexerError


class TokenKind(Enum):
    IDENT = auto()

    FN = auto()
    IF = auto()
    ELSE = auto()
    FOR = auto()
    IN = auto()
    LET = auto()
    MUT = auto()
    RETURN = auto()
    MATCH = auto()
    ENUM = auto()
    STRUCT = auto()
    IMPL = auto()
    TRAIT = auto()
    USE = auto()
    PUB = auto()
    MOD = auto()
    CONST = auto()
    STATIC = auto()
    TYPE = auto()
    WHERE = auto()
    ASYNC = auto()
    AWAIT = auto()
    AS = auto()
    WHILE = auto()

    STRING = auto()
    NUMBER = auto()
    BOOLEAN = auto()
    CHAR = auto()

    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    PERCENT = auto()
    EQ = auto()
    EQ_EQ = auto()
    NE = auto()
    LT = auto()
    GT = auto()
    LE = auto()
    GE = auto()
    AND = auto()
    OR = auto()
    NOT = auto()
    BIT_AND = auto()
    BIT_OR = auto()
    BIT_XOR = auto()
    SHL = auto()
    SHR = auto()
    PLUS_EQ = auto()
    MINUS_EQ = auto()
    STAR_EQ = auto()
    SLASH_EQ = auto()
    PERCENT_EQ = auto()
    ARROW = auto()
    FAT_ARROW = auto()
    DOT = auto()
    DOT_DOT = auto()
    DOT_DOT_DOT = auto()
    COLON = auto()
    COLON_COLON = auto()
    SEMICOLON = auto()
    COMMA = auto()
    QUESTION = auto()

    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    AT = auto()
    HASH = auto()
    DOLLAR = auto()
    UNDERSCORE = auto()

    JSX_OPEN = auto()
    JSX_CLOSE = auto()
    JSX_SLASH = auto()
    JSX_OPEN_TAG = auto()
    JSX_CLOSE_TAG = auto()
    JSX_SELF_CLOSE = auto()

    EOF = auto()
    NEWLINE = auto()
    WHITESPACE = auto()


TokenValue = Union[str, float, bool, None]


@dataclass(frozen=True)
class Token:
    """A token kind with its payload (name, literal value or tag)."""

    kind: TokenKind
    value: TokenValue = None


@dataclass(frozen=True)
class Span:
    """Byte range of a token plus the line and column where it starts."""

    start: int
    end: int
    line: int
    column: int

    def source_span(self) -> tuple[int, int]:
        """Return the span as an ``(offset, length)`` pair."""
        return (self.start, self.end - self.start)


@dataclass(frozen=True)
class TokenWithSpan:
    token: Token
    span: Span


_KEYWORDS: dict[str, Token] = {
    "fn": Token(TokenKind.FN),
    "if": Token(TokenKind.IF),
    "else": Token(TokenKind.ELSE),
    "for": Token(TokenKind.FOR),
    "in": Token(TokenKind.IN),
    "let": Token(TokenKind.LET),
    "mut": Token(TokenKind.MUT),
    "return": Token(TokenKind.RETURN),
    "match": Token(TokenKind.MATCH),
    "enum": Token(TokenKind.ENUM),
    "struct": Token(TokenKind.STRUCT),
    "impl": Token(TokenKind.IMPL),
    "trait": Token(TokenKind.TRAIT),
    "use": Token(TokenKind.USE),
    "pub": Token(TokenKind.PUB),
    "mod": Token(TokenKind.MOD),
    "const": Token(TokenKind.CONST),
    "static": Token(TokenKind.STATIC),
    "type": Token(TokenKind.TYPE),
    "where": Token(TokenKind.WHERE),
    "async": Token(TokenKind.ASYNC),
    "await": Token(TokenKind.AWAIT),
    "as": Token(TokenKind.AS),
    "while": Token(TokenKind.WHILE),
    "true": Token(TokenKind.BOOLEAN, True),
    "false": Token(TokenKind.BOOLEAN, False),
}

_SINGLE: dict[str, TokenKind] = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMICOLON,
    "@": TokenKind.AT,
    "#": TokenKind.HASH,
    "$": TokenKind.DOLLAR,
    "_": TokenKind.UNDERSCORE,
    "^": TokenKind.BIT_XOR,
    "?": TokenKind.QUESTION,
}

# First character -> (alternatives for the following character, fallback).
_COMPOUND: dict[str, tuple[tuple[tuple[str, TokenKind], ...], TokenKind]] = {
    "+": ((("=", TokenKind.PLUS_EQ),), TokenKind.PLUS),
    "-": ((("=", TokenKind.MINUS_EQ), (">", TokenKind.ARROW)), TokenKind.MINUS),
    "*": ((("=", TokenKind.STAR_EQ),), TokenKind.STAR),
    "%": ((("=", TokenKind.PERCENT_EQ),), TokenKind.PERCENT),
    "=": ((("=", TokenKind.EQ_EQ), (">", TokenKind.FAT_ARROW)), TokenKind.EQ),
    "!": ((("=", TokenKind.NE),), TokenKind.NOT),
    ">": ((("=", TokenKind.GE), (">", TokenKind.SHR)), TokenKind.GT),
    "&": ((("&", TokenKind.AND),), TokenKind.BIT_AND),
    "|": ((("|", TokenKind.OR),), TokenKind.BIT_OR),
    ":": (((":", TokenKind.COLON_COLON),), TokenKind.COLON),
}

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    '"': '"',
    "'": "'",
    "0": "\0",
}

_ASCII_LETTERS = frozenset(string.ascii_letters)
_DIGITS = frozenset(string.digits)
_NOT_WHITESPACE = frozenset("\x1c\x1d\x1e\x1f")


def _is_whitespace(ch: str) -> bool:
    return ch.isspace() and ch not in _NOT_WHITESPACE


def _is_tag_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_-"


class Lexer:
    """Splits source text into tokens, skipping whitespace and comments."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._offset = 0
        self._line = 1
        self._column = 1
        self._start = 0
        self._start_line = 1
        self._start_column = 1

    def tokenize(self) -> list[TokenWithSpan]:
        """Return every token up to and including the end-of-file token."""
        return list(self._tokens())

    def _tokens(self) -> Iterator[TokenWithSpan]:
        while True:
            token = self._next_token()
            yield TokenWithSpan(
                token,
                Span(self._start, self._offset, self._start_line, self._start_column),
            )
            if token.kind is TokenKind.EOF:
                return

    def _error(self, message: str) -> LexerError:
        return LexerError(
            message, self._source, (self._start, self._offset - self._start)
        )

    def _peek(self, ahead: int = 0) -> str | None:
        index = self._pos + ahead
        return self._source[index] if index < len(self._source) else None

    def _advance(self) -> str | None:
        ch = self._peek()
        if ch is None:
            return None
        self._pos += 1
        self._offset += len(ch.encode("utf-8"))
        if ch == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch

    def _match(self, expected: str) -> bool:
        if self._peek() == expected:
            self._advance()
            return True
        return False

    def _skip_whitespace(self) -> None:
        while (ch := self._peek()) is not None and _is_whitespace(ch):
            self._advance()

    def _next_token(self) -> Token:
        while True:
            self._skip_whitespace()
            self._start = self._offset
            self._start_line = self._line
            self._start_column = self._column

            ch = self._advance()
            if ch is None:
                return Token(TokenKind.EOF)
            if ch != "/":
                return self._token_from(ch)
            if self._match("="):
                return Token(TokenKind.SLASH_EQ)
            if self._match("/"):
                self._skip_line_comment()
            elif self._match("*"):
                self._skip_block_comment()
            else:
                return Token(TokenKind.SLASH)

    def _token_from(self, ch: str) -> Token:
        if ch in _SINGLE:
            return Token(_SINGLE[ch])
        if ch in _COMPOUND:
            alternatives, fallback = _COMPOUND[ch]
            for follower, kind in alternatives:
                if self._match(follower):
                    return Token(kind)
            return Token(fallback)
        if ch == "<":
            return self._less_than()
        if ch == ".":
            if self._match("."):
                if self._match("."):
                    return Token(TokenKind.DOT_DOT_DOT)
                return Token(TokenKind.DOT_DOT)
            return Token(TokenKind.DOT)
        if ch == '"':
            return self._string()
        if ch == "'":
            return self._char()
        if ch in _DIGITS:
            return self._number(ch)
        if ch in _ASCII_LETTERS:
            return self._identifier(ch)
        raise self._error(f"Unexpected character: {ch}")

    def _less_than(self) -> Token:
        nxt = self._peek()
        if nxt is not None and (nxt in _ASCII_LETTERS or nxt == "/"):
            return self._jsx_element()
        if self._match("="):
            return Token(TokenKind.LE)
        if self._match("<"):
            return Token(TokenKind.SHL)
        return Token(TokenKind.LT)

    def _skip_line_comment(self) -> None:
        while (ch := self._peek()) is not None and ch != "\n":
            self._advance()

    def _skip_block_comment(self) -> None:
        depth = 1
        while depth > 0:
            ch = self._peek()
            if ch is None:
                raise self._error("Unterminated block comment")
            self._advance()
            if ch == "*" and self._match("/"):
                depth -= 1
            elif ch == "/" and self._match("*"):
                depth += 1

    def _string(self) -> Token:
        chars: list[str] = []
        while (ch := self._peek()) is not None:
            if ch == '"':
                self._advance()
                return Token(TokenKind.STRING, "".join(chars))
            if ch == "\n":
                break
            self._advance()
            if ch == "\\":
                escaped = self._advance()
                if escaped is None:
                    break
                chars.append(_ESCAPES.get(escaped, escaped))
            else:
                chars.append(ch)
        raise self._error("Unterminated string literal")

    def _char(self) -> Token:
        ch = self._advance()
        if ch is None:
            raise self._error("Unterminated character literal")
        if ch == "\\":
            escaped = self._advance()
            if escaped is None:
                raise self._error("Unterminated character literal")
            ch = _ESCAPES.get(escaped, escaped)
        if not self._match("'"):
            raise self._error("Unterminated character literal")
        return Token(TokenKind.CHAR, ch)

    def _take_digits(self, into: list[str]) -> None:
        while (ch := self._peek()) is not None and ch in _DIGITS:
            into.append(ch)
            self._advance()

    def _number(self, first: str) -> Token:
        text = [first]
        self._take_digits(text)

        following = self._peek(1)
        if self._peek() == "." and following is not None and following in _DIGITS:
            text.append(".")
            self._advance()
            self._take_digits(text)

        if self._peek() in ("e", "E"):
            text.append(self._advance())
            if self._peek() in ("+", "-"):
                text.append(self._advance())
            self._take_digits(text)

        literal = "".join(text)
        try:
            return Token(TokenKind.NUMBER, float(literal))
        except ValueError:
            raise self._error(f"Invalid number: {literal}") from None

    def _identifier(self, first: str) -> Token:
        chars = [first]
        while (ch := self._peek()) is not None and (ch.isalnum() or ch == "_"):
            chars.append(ch)
            self._advance()
        name = "".join(chars)
        return _KEYWORDS.get(name, Token(TokenKind.IDENT, name))

    def _jsx_element(self) -> Token:
        tag: list[str] = []
        if self._match("/"):
            while (ch := self._peek()) is not None:
                if _is_tag_char(ch):
                    tag.append(ch)
                    self._advance()
                elif ch == ">":
                    self._advance()
                    return Token(TokenKind.JSX_CLOSE_TAG, "".join(tag))
                else:
                    break
            raise self._error("Invalid JSX closing tag")

        while (ch := self._peek()) is not None:
            if _is_tag_char(ch):
                tag.append(ch)
                self._advance()
            elif ch == "/":
                self._advance()
                if self._match(">"):
                    return Token(TokenKind.JSX_SELF_CLOSE)
            elif ch == ">":
                self._advance()
                return Token(TokenKind.JSX_OPEN_TAG, "".join(tag))
            else:
                break
        return Token(TokenKind.JSX_OPEN)


def tokenize(source: str) -> list[TokenWithSpan]:
    """Tokenize ``source`` in one call."""
    return Lexer(source).tokenize()