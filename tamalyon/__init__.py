"""A virtual pet lion whose needs decay over time, shareable over WebSockets."""

__version__ = "0.1.0"

__all__ = ["__version__"]