"""Tally: materials, products and fulfillment orders."""

__version__ = "0.1.0"
