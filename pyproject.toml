[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "image-recovery"
version = "0.3.1"
description = "Total-variation image denoising with an accelerated primal-dual solver."
requires-python = ">=3.10"
keywords = [
    "image",
    "denoising",
    "total variation",
    "primal-dual",
    "chambolle-pock",
    "image processing",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Image Processing",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
image-recovery = "image_recovery.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["image_recovery"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
