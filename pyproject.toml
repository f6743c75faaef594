[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "swanengine"
version = "0.1.0"
description = "World simulation pieces for a 2D tile-based sandbox game: chunks, lighting, water automata, physics, inventories and image assets"
requires-python = ">=3.11"
keywords = ["game", "sandbox", "tiles", "2d", "lighting", "cellular-automata", "physics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["swanengine"]

[tool.hatch.build.targets.sdist]
include = ["swanengine", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
