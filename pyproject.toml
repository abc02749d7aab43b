[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "contforce"
version = "0.1.0"
description = "Continuity restraint force for particle systems: keeps groups of particles connected"
requires-python = ">=3.10"
dependencies = []
keywords = ["molecular dynamics", "restraint", "continuity", "force field", "simulation"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Chemistry",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["contforce"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
