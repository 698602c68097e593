[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wisewaste"
version = "0.1.0"
description = "HTTP backend for scheduling and tracking waste pickup requests, backed by SQLite"
requires-python = ">=3.10"
dependencies = [
    "flask",
]
keywords = ["waste", "recycling", "pickup", "rest", "sqlite", "flask"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
wisewaste = "wisewaste.server:main"

[tool.hatch.build.targets.wheel]
packages = ["wisewaste"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
