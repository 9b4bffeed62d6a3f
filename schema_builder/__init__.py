"""JSON Schema Builder: nested field editor with a live JSON preview."""

__version__ = "1.0.0"
