[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mp4tag"
version = "0.1.0"
description = "Read and write iTunes-style metadata tags in MP4/M4A files"
requires-python = ">=3.10"
dependencies = []
keywords = ["mp4", "m4a", "m4b", "tags", "metadata", "itunes", "audio"]
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
    "Topic :: Multimedia :: Sound/Audio",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mp4tag"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
