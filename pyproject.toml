[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "curve25519"
version = "4.0.0"
description = "Pure-Python group operations on Curve25519 in Edwards and Montgomery form"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "curve25519",
    "ed25519",
    "x25519",
    "edwards",
    "montgomery",
    "elliptic-curve",
    "cryptography",
    "elligator",
    "multiscalar",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["curve25519"]

[tool.hatch.build.targets.sdist]
include = [
    "curve25519",
    "tests",
    "pyproject.toml",
]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
ignore = ["N802", "N803", "N806"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
