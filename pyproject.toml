[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "verkle"
version = "0.1.0"
description = "Verkle primitives: Banderwagon group, IPA and multipoint proofs, trie metadata and key-value storage"
requires-python = ">=3.10"
dependencies = []
keywords = ["verkle", "ipa", "banderwagon", "pedersen", "polynomial-commitment", "multiproof"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["verkle"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
