[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "overworld"
version = "0.1.0"
description = "Chunked heightmap terrain that streams in and out around a moving player, run headlessly"
requires-python = ">=3.10"
dependencies = []
keywords = ["terrain", "heightmap", "chunks", "overworld", "simulation", "mesh", "ron"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
overworld = "overworld.app:main"

[tool.hatch.build.targets.wheel]
packages = ["overworld"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
