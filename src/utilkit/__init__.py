"""
utilkit - small, pure data-manipulation utilities

Deep equality and deep merge over arrays, mappings and callables, plus key
transformation, string casing, date/time and byte formatting, ID generation
and static reference tables.
"""

import logging

__version__ = "1.0.0"
__all__ = ["__version__"]

logging.getLogger(__name__).addHandler(logging.NullHandler())
