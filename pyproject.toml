[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "riotty"
version = "0.1.0"
description = "Pseudoterminal spawning and terminal text-grid layout primitives"
requires-python = ">=3.10"
dependencies = []
keywords = ["terminal", "pty", "pseudoterminal", "tty", "layout", "glyph"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Operating System :: POSIX :: Linux",
    "Operating System :: MacOS",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals :: Terminal Emulators/X Terminals",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
riotty = "riotty.cli:main"
riotty-stdin = "riotty.stdin_channel:main"

[tool.hatch.build.targets.wheel]
packages = ["riotty"]

[tool.pytest.ini_options]
addopts = "-ra"
