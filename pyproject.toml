[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "velecs"
version = "0.1.0"
description = "A small entity-component system with names, parent/child relationships and cached transforms."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["ecs", "entity", "component", "game-engine", "scene-graph", "transform"]
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
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["velecs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
