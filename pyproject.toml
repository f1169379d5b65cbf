[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "omnisnake"
version = "0.1.0"
description = "A free-moving snake game whose players are neural networks evolved with NEAT"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["snake", "neat", "neuroevolution", "genetic-algorithm", "neural-network", "game"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
omnisnake = "omnisnake.app:main"

[tool.hatch.build.targets.wheel]
packages = ["omnisnake"]

[tool.pytest.ini_options]
addopts = "-ra"
