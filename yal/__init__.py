"""Type system, compile-time values, options and file helpers for the yal compiler."""

__version__ = "1.0.0"
__all__ = ["types", "type_store", "value", "utils"]