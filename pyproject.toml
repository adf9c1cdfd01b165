[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sqldyngen"
version = "0.1.0"
description = "Conditional SQL lines driven by -- :if annotations, naming and type-mapping helpers for code generators, and typed query helpers for a small example schema"
requires-python = ">=3.10"
dependencies = []
keywords = ["sql", "code-generation", "dynamic-sql", "query-builder", "annotations"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Topic :: Software Development :: Code Generators",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sqldyngen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
