[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "neurogen"
version = "0.1.0"
description = "Spiking neural network simulation with ion channel models, STDP and dopamine-driven reinforcement learning"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "spiking neural network",
    "hodgkin-huxley",
    "stdp",
    "reinforcement learning",
    "actor-critic",
    "ion channels",
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
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["neurogen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
