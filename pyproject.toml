[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pagestore"
version = "0.1.0"
description = "Storage-layer building blocks for a page-based database engine: page storage, LRU-K replacement, a buffer pool and catalog types"
requires-python = ">=3.10"
dependencies = []
keywords = ["database", "buffer pool", "lru-k", "pages", "storage engine", "b+ tree"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Database Engines/Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pagestore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
