"""Bundle a uv-managed Python project and a uv binary into a single launcher."""

__version__ = "0.1.0"