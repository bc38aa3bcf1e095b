"""Shell syntax tree nodes, source positions and brace expansion splitting."""

__version__ = "0.1.0"
__all__ = ["pos", "nodes", "braces"]