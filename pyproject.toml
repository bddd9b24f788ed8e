[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "originkit"
version = "0.1.0"
description = "Server-side toolkit: cron expressions, timers, queues, object pools, sharded maps, small utilities and thin HTTP and MongoDB clients"
requires-python = ">=3.10"
keywords = ["cron", "timer", "priority-queue", "object-pool", "concurrent-map", "mongodb", "http-client"]
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
    "Topic :: Software Development :: Libraries",
]
dependencies = [
    "cryptography",
    "requests",
    "pymongo>=4.2",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["originkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
