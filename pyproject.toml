[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ruxc"
version = "0.1.0"
description = "Toolkit for .rsx component files: lexer, syntax tree, optimizer, dependency analysis, Rust code generation, file watching and a development server"
requires-python = ">=3.10"
keywords = ["compiler", "jsx", "rsx", "components", "code-generation", "lexer", "dev-server"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
    "Topic :: Software Development :: Code Generators",
]
dependencies = [
    "aiohttp>=3.9",
    "watchdog>=3.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
    "pytest-asyncio>=0.23",
]

[project.scripts]
ruxc-dev = "ruxc.dev_server:main"

[tool.hatch.build.targets.wheel]
packages = ["ruxc"]

[tool.hatch.build.targets.sdist]
include = ["ruxc", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
