"""Toolkit for .rsx component files: lexer, syntax tree, optimizer,
dependency analysis, Rust code generation, file watching and a dev server."""

__version__ = "0.1.0"

__all__ = [
    "analyzer",
    "ast",
    "codegen",
    "codegen_support",
    "dev_server",
    "errors",
    "file_watcher",
    "lexer",
    "optimizer",
]