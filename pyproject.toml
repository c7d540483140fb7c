[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kieserver"
version = "0.1.0"
description = "Core of a label-aware key-value configuration service: data models, validation, label matching, configuration and an in-memory prefix-keyed storage layer."
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = [
    "configuration",
    "key-value",
    "config-center",
    "labels",
    "microservices",
    "etcd",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["kieserver"]

[tool.hatch.build.targets.sdist]
include = [
    "kieserver",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"
