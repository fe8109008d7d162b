[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nuklite"
version = "0.1.0"
description = "Immediate-mode GUI core helpers: UTF-8 glyphs, MurmurHash3, text measurement and vertex tessellation"
requires-python = ">=3.10"
dependencies = []
keywords = ["gui", "immediate-mode", "tessellation", "utf-8", "vertex-buffer", "murmurhash"]
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
    "Topic :: Software Development :: User Interfaces",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["nuklite"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
