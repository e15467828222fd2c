"""Evaluator helper modules for the estree_ref runtime."""

__all__ = [
    "bind",
    "blocks",
    "common",
    "expr",
    "fn",
    "literals",
]
