[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fgtparse"
version = "0.1.0"
description = "Parse FortiGate configuration files into nested data, search them, and export tables as CSV, JSON or YAML"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["fortigate", "fortios", "firewall", "configuration", "parser", "csv", "yaml", "json"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Information Technology",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Firewalls",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
fgtparse = "fgtparse.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["fgtparse"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
