"""Internal coding agent: writes batches of generated files into a GitHub repository."""

__version__ = "0.1.0"
