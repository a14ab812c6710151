[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nasclient"
version = "0.1.0"
description = "Typed records, request builders and async API wrappers for the TrueNAS middleware"
requires-python = ">=3.10"
dependencies = []
keywords = ["truenas", "nas", "json-rpc", "storage", "asyncio", "middleware"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Typing :: Typed",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
    "websockets",
]

[tool.hatch.build.targets.wheel]
packages = ["nasclient"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
strict = true
