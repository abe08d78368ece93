[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "envfile"
version = "0.1.0"
description = "Load environment variables from .env files, with quoting, escapes and variable substitution"
requires-python = ">=3.10"
dependencies = []
keywords = ["dotenv", "env", "environment", "configuration", "settings"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
envfile = "envfile.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["envfile"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
