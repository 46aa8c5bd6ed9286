[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "moondeck"
version = "1.0.0"
description = "Stream helper process and shared utilities for a game streaming companion service"
requires-python = ">=3.10"
dependencies = [
    "filelock",
]
keywords = ["streaming", "steam", "sunshine", "heartbeat", "pairing", "single-instance"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Operating System :: Microsoft :: Windows",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
moondeck-stream = "moondeck.stream:main"

[tool.hatch.build.targets.wheel]
packages = ["moondeck"]

[tool.pytest.ini_options]
addopts = "-ra"
