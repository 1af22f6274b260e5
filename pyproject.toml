[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cloudless"
version = "0.1.0"
description = "Building blocks for serverless data processing: URL storage, gzip-aware I/O, processing settings and requests, line sorting and writing, event adapters, sync key extraction and API gateway routing."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "serverless",
    "data-processing",
    "etl",
    "lambda",
    "cloud-functions",
    "routing",
    "api-gateway",
]
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
    "Topic :: Software Development :: Libraries :: Application Frameworks",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cloudless"]

[tool.hatch.build.targets.sdist]
include = ["cloudless", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
