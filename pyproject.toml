[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pycrucible"
version = "0.1.0"
description = "Bundle a uv-managed Python project and the uv tool into a single launcher binary"
requires-python = ">=3.11"
keywords = ["uv", "packaging", "launcher", "bundler", "executable"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]
dependencies = [
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
pycrucible = "pycrucible.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["pycrucible"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
