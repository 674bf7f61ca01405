[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fmsys"
version = "0.1.0"
description = "A multi-threaded file management server and client, with small Unix-style text tools and RISC-V/ELF helpers"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "file server",
    "file management",
    "reader-writer lock",
    "compression",
    "grep",
    "wc",
    "shell parser",
    "elf",
    "risc-v",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
fmsys-server = "fmsys.server:main"
fmsys-client = "fmsys.client:main"
fmsys-grep = "fmsys.tools.grep:main"
fmsys-wc = "fmsys.tools.wc:main"

[tool.hatch.build.targets.wheel]
packages = ["fmsys"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
