[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zcalcderiv"
version = "0.1.0"
description = "Symbolic differentiation of elementary expressions by rule-based expression-tree rewriting"
requires-python = ">=3.10"
dependencies = []
keywords = ["derivative", "differentiation", "symbolic", "calculus", "expression tree", "rewriting"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
zcd = "zcalcderiv.console:main"

[tool.hatch.build.targets.wheel]
packages = ["zcalcderiv"]

[tool.pytest.ini_options]
addopts = "-ra"
