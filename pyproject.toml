[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "octstream"
version = "0.1.0"
description = "Plugin interfaces, acquisition buffers, spectral window functions and a file-replaying virtual acquisition system for optical coherence tomography raw data"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "oct",
    "optical coherence tomography",
    "acquisition",
    "window function",
    "ring buffer",
    "plugin",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Medical Science Apps.",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["octstream"]

[tool.pytest.ini_options]
addopts = "-ra"
