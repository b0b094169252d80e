[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "persianpkt"
version = "0.1.0"
description = "A command-line package manager for Debian-style repositories, with repository, cache, mirror and archive helpers"
requires-python = ">=3.11"
keywords = ["package-manager", "debian", "repository", "mirror", "linux"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Software Distribution",
]
dependencies = [
    "requests>=2.28",
    "semver>=3.0",
    "platformdirs>=3.0",
    "tomli-w>=1.0",
    "termcolor>=2.0",
    "tqdm>=4.60",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "responses>=0.23",
]

[project.scripts]
pkt = "persianpkt.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["persianpkt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
