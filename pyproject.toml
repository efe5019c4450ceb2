[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sigfit"
version = "0.1.0"
description = "Mutational signature fitting with quadratic programming and bootstrap backward elimination"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "mutational signatures",
    "bioinformatics",
    "quadratic programming",
    "bootstrap",
    "cancer genomics",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sigfit = "sigfit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["sigfit"]

[tool.pytest.ini_options]
addopts = "-ra"
