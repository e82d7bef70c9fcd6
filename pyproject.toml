[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "plotview"
version = "0.1.0"
description = "Plotting into in-memory image buffers, with views, colour helpers, progress tracking and console tables"
requires-python = ">=3.10"
keywords = ["plot", "chart", "figure", "visualization", "image", "progress", "table"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["plotview"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
