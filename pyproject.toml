[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "grimoire"
version = "0.1.0"
description = "Small utilities: file listing and copying, text end positions, template rendering with error pages, logging setup, date strings, and two minimal language servers."
requires-python = ">=3.10"
keywords = [
    "files",
    "templates",
    "jinja2",
    "logging",
    "language-server",
    "lsp",
    "graphemes",
    "datetime",
]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Utilities",
]
dependencies = [
    "jinja2",
    "regex",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
grimoire-last-position = "grimoire.last_position:main"
grimoire-run-scripts = "grimoire.scripts:main"
grimoire-log-demo = "grimoire.logger:main"
grimoire-dates = "grimoire.date_strings:main"
grimoire-fuse = "grimoire.fuse:main"
grimoire-lsp = "grimoire.lsp.server:main"
grimoire-tower-lsp = "grimoire.lsp.tower_backend:main"

[tool.hatch.build.targets.wheel]
packages = ["grimoire"]

[tool.hatch.build.targets.sdist]
include = [
    "grimoire",
    "tests",
    "pyproject.toml",
]

[tool.pytest.ini_options]
addopts = "-ra"
