[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dalec"
version = "0.1.0"
description = "Package spec model, build client options, target listings and schema fix-ups for declarative package builds"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "packaging",
    "build",
    "rpm",
    "deb",
    "container",
    "buildkit",
    "spec",
    "json-schema",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
    "Topic :: System :: Archiving :: Packaging",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dalec"]

[tool.hatch.build.targets.sdist]
include = ["dalec", "tests", "pyproject.toml", "README.md"]

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
