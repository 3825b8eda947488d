[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fifosched"
version = "0.1.0"
description = "Data model, failure messages and job selection for a FIFO batch-job scheduler"
requires-python = ">=3.10"
dependencies = []
keywords = ["scheduler", "batch", "jobs", "queues", "fifo", "fair-share"]
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
    "Topic :: System :: Distributed Computing",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fifosched"]

[tool.pytest.ini_options]
addopts = "-ra"
