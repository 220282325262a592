[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "aedsim"
version = "0.1.0"
description = "A simulated automated external defibrillator driven by a virtual clock."
requires-python = ">=3.10"
dependencies = []
keywords = ["aed", "defibrillator", "cpr", "simulation", "training", "state-machine"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Healthcare Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: Scientific/Engineering :: Medical Science Apps.",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
aedsim = "aedsim.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["aedsim"]

[tool.pytest.ini_options]
addopts = "-ra"
