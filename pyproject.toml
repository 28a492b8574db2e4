[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bakerysim"
version = "0.1.0"
description = "A bakery simulation with suppliers, chefs, bakers, sellers and customers working on shared stock"
requires-python = ">=3.10"
dependencies = []
keywords = ["simulation", "bakery", "concurrency", "producer-consumer", "threads"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bakerysim = "bakerysim.simulation:main"

[tool.hatch.build.targets.wheel]
packages = ["bakerysim"]

[tool.pytest.ini_options]
addopts = "-ra"
