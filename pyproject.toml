[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oscope"
version = "0.1.0"
description = "A two-channel oscilloscope that plots samples from a serial port or a built-in signal generator"
requires-python = ">=3.10"
keywords = ["oscilloscope", "serial", "plotting", "waveform", "tkinter", "csv"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
    "Topic :: Terminals :: Serial",
]
dependencies = [
    "pyserial>=3.5",
    "platformdirs>=3.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
oscope = "oscope.app:main"

[tool.hatch.build.targets.wheel]
packages = ["oscope"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
