"""Symbolic differentiation by rule-based expression-tree rewriting."""

__version__ = "0.1.0"