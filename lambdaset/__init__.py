"""Struct-of-arrays data structures for a lambda-set compiler's intermediate representations."""

__version__ = "0.1.0"