[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "efrodokem"
version = "0.1.0"
description = "Ephemeral FrodoKEM: learning-with-errors key encapsulation"
requires-python = ">=3.10"
keywords = ["frodokem", "kem", "lwe", "post-quantum", "key-encapsulation", "cryptography"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
]
dependencies = [
    "numpy",
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["efrodokem"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
