"""Two-channel oscilloscope for serial data and a built-in signal generator."""

__version__ = "0.1.0"

__all__ = ["__version__"]