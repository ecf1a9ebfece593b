[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "genetic-kingdom"
version = "0.1.0"
description = "Tower-defence simulation core whose enemy waves evolve with a genetic algorithm"
requires-python = ">=3.10"
dependencies = []
keywords = ["tower defense", "genetic algorithm", "game", "simulation", "evolution"]
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
    "Topic :: Games/Entertainment :: Real Time Strategy",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["genetic_kingdom"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
