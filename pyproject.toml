[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lambdaset"
version = "0.1.0"
description = "Struct-of-arrays data structures for the intermediate representations of a lambda-set compiler pipeline"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "intermediate-representation", "lambda-sets", "struct-of-arrays", "reference-counting"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["lambdaset"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
