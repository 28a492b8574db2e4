"""Bakery simulation: suppliers, chefs, bakers, sellers and customers sharing stock as threads."""

__version__ = "0.1.0"

__all__ = ["__version__"]