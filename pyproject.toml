[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "servercore"
version = "1.0.0"
description = "Building blocks for a small TCP server (socket helpers, a re-entrant write lock, a task-queue thread pool) and a model of a GUI input backend."
requires-python = ">=3.10"
dependencies = []
keywords = ["server", "tcp", "sockets", "thread-pool", "lock", "networking", "input"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
servercore-server = "servercore.server:main"
servercore-dummy-client = "servercore.dummy_client:main"

[tool.hatch.build.targets.wheel]
packages = ["servercore"]

[tool.pytest.ini_options]
addopts = "-ra"
