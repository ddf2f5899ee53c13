[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "montrsa"
version = "0.1.0"
description = "Textbook RSA with Montgomery REDC modular exponentiation over 32-bit words"
requires-python = ">=3.10"
dependencies = []
keywords = ["rsa", "montgomery", "redc", "modular-exponentiation", "bigint"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
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
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["montrsa"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
