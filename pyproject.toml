[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "keyopt"
version = "0.1.0"
description = "Keyboard layout optimiser using simulated annealing and a typing-effort penalty model"
requires-python = ">=3.10"
dependencies = []
keywords = ["keyboard", "layout", "optimisation", "simulated-annealing", "ergonomics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
keyopt = "keyopt.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["keyopt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
