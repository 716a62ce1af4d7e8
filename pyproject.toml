[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "a2lgen"
version = "0.1.0"
description = "Find C declarations annotated with A2L comments and read the annotations"
requires-python = ">=3.10"
dependencies = []
keywords = ["a2l", "asam", "calibration", "measurement", "embedded", "c"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Programming Language :: C",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
a2lgen = "a2lgen.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["a2lgen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
