"""Package initialization for weighted-set.

A seeded container of unique, integer-weighted elements supporting O(log N)
weighted draws with replacement.
"""

from weighted_set.weighted_set import IndexCorruptedError, WeightedSet

__version__ = "0.1.0"
__all__ = ["IndexCorruptedError", "WeightedSet"]
