[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lbpedit"
version = "0.1.0"
description = "Level model for a layered 2D physics platformer: polygon blocks, triangulation, materials and an editor core"
requires-python = ">=3.10"
dependencies = []
keywords = ["level editor", "polygon", "triangulation", "platformer", "game"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["lbpedit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
