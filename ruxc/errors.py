"""Diagnostics raised by the compiler stages."""

from __future__ import annotations

SourceSpan = tuple[int, int]


class CompileError(Exception):
    """A compilation failure pointing at a region of the source text.

    ``span`` is an ``(offset, length)`` pair of byte positions in
    ``source_code``.
    """

    prefix = "Compilation error"
    code = "rux::compile"

    def __init__(
        self,
        message: str,
        source_code: str = "",
        span: SourceSpan = (0, 0),
    ) -> None:
        super().__init__(message)
        self.message = message
        self.source_code = source_code
        self.span = (int(span[0]), int(span[1]))

    @property
    def offset(self) -> int:
        return self.span[0]

    @property
    def length(self) -> int:
        return self.span[1]

    def __str__(self) -> str:
        return f"{self.prefix}: {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, span={self.span!r})"


class LexerError(CompileError):
    """Raised when the source cannot be split into tokens."""

    prefix = "Lexer error"
    code = "rux::lexer"


class ParserError(CompileError):
    """Raised when a token stream does not form a valid program."""

    prefix = "Parser error"
    code = "rux::parser"


class TypeCheckError(CompileError):
    """Raised when a program is not well typed."""

    prefix = "Type error"
    code = "rux::type_check"