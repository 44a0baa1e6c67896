# ruxc

`ruxc` works with `.rsx` component files: a small Rust-like language in
which components return JSX-style markup. It provides a tokenizer, a syntax
tree, an optimizer, a dependency analyzer, a generator of Rust source, a file
watcher and a development server.

## Modules

- `ruxc.lexer` – `tokenize(source)` and `Lexer(source).tokenize()` turn
  source text into a list of `TokenWithSpan` (a `Token` of some `TokenKind`
  plus a `Span`). Whitespace and comments (line comments and nested block
  comments) are dropped and the last token is always `TokenKind.EOF`. String
  and character escapes, numbers with fractions and exponents, keywords and
  JSX tags (`<div>`, `</div>`, `/>`) are recognised. `Span.source_span()`
  gives an `(offset, length)` pair.
- `ruxc.errors` – `CompileError` and its kinds `LexerError`, `ParserError`
  and `TypeCheckError`, each carrying `message`, `source_code` and `span`.
  The lexer raises `LexerError`.
- `ruxc.ast` – dataclasses for the syntax tree: items (`Component`,
  `Function`, `Struct`, `Enum`, `Trait`, `Impl`, `Use`, `Mod`,
  `TypeAlias`), statements, expressions, patterns, types and JSX elements,
  collected in `Ast`.
- `ruxc.optimizer` – `Optimizer.optimize(ast)` runs
  `eliminate_dead_code` (drops functions, components, structs and enums that
  nothing refers to) and `fold_constants` (folds `+ - * /` on numbers,
  `&& ||` on booleans, unary `-` and `!`; division by zero is left alone).
  The tree is changed in place and returned.
- `ruxc.analyzer` – `DependencyAnalyzer.analyze(ast)` records the names each
  top-level component and function refers to, JSX tag names included;
  `dependencies_of(name)` returns them (or `None`),
  `track_reactive_dependencies(expr)` returns called names starting with
  `use_`, and `components` lists the components seen.
- `ruxc.codegen` – `CodeGenerator().generate_rust_code(ast)` returns Rust
  source that builds `VirtualNode` values. Components become snake_case
  functions, so `App` is emitted as `pub fn app() -> VirtualNode`.
- `ruxc.codegen_support` – the rendering helpers used by the generator:
  `snake_case`, `escape_string`, `escape_char`, `binary_op_symbol`,
  `unary_op_symbol`, `render_literal`, `render_type` and `format_number`.
- `ruxc.file_watcher` – `FileWatcher` reports created, modified, deleted and
  moved `.rsx` files.
- `ruxc.dev_server` – `DevServer`, an aiohttp server with an index page, a
  WebSocket endpoint and the build output directory.

## Installation

```
pip install ruxc
```

For the test suite:

```
pip install "ruxc[test]"
pytest
```

## Tokenizing

```python
from ruxc.errors import LexerError
from ruxc.lexer import tokenize

for item in tokenize("fn App() -> Element { <div>Hello</div> }"):
    print(item.token, item.span)

try:
    tokenize('let s = "unterminated')
except LexerError as err:
    print(err)  # Lexer error: Unterminated string literal
```

## Analyzing, optimizing and generating code

```python
from ruxc.analyzer import DependencyAnalyzer
from ruxc.ast import Ast, Component, IdentType, JSXExpr, JSXText, JSXWithChildren
from ruxc.codegen import CodeGenerator
from ruxc.optimizer import Optimizer

body = JSXExpr(JSXWithChildren("div", children=[JSXText("Hello")]))
ast = Ast([Component("App", [], IdentType("Element"), body)])

analyzer = DependencyAnalyzer()
analyzer.analyze(ast)
print(analyzer.dependencies_of("App"))  # {'div'}

Optimizer().optimize(ast)
print(CodeGenerator().generate_rust_code(ast))
```

## Watching files

```python
from ruxc.file_watcher import FileWatcher

with FileWatcher() as watcher:
    watcher.watch_directory("src")
    print(watcher.wait_for_change(timeout=5.0))
    print(watcher.check_for_changes())
```

`watch_directory` watches recursively and raises `FileNotFoundError` for a
missing directory; `watch_file` watches the file's directory.
`check_for_changes()` never blocks; `wait_for_change(timeout)` returns an
empty list when the timeout passes or the event concerns no `.rsx` file.

## Development server

From a project directory:

```
ruxc-dev
```

It listens on 127.0.0.1 port 3000 (`--port` to change), serves an index
page at `/`, files from the `dist` directory (`--dist` to change) under
`/dist/`, and accepts WebSocket connections at `/ws`. Responses carry
permissive CORS headers. Run `ruxc-dev --help` for the options.

## What it does not do

- There is no parser and no type checker: tokens are not turned into an
  `Ast`, so trees are built directly from `ruxc.ast` classes.
  `ParserError` and `TypeCheckError` exist but nothing in the package
  raises them.
- There is no build, new-project or check command, and nothing compiles the
  generated Rust source.
- The WebSocket endpoint accepts connections and reads messages but sends no
  reload notices; nothing connects the file watcher to the server.
- The code generator emits nested JSX elements, JSX expression children and
  expression prop values as `"TODO"` placeholders, writes impl blocks as a
  comment, leaves trait and module bodies empty, and renders every match arm
  pattern as `_`.