"""A small command interpreter with quoting, aliases, variables and builtins."""

__version__ = "0.1.0"
__all__ = ["__version__"]