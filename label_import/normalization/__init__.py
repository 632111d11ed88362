"""
label_import/normalization package marker.
"""

from label_import.normalization.canonicalizer import canonicalize

__all__ = ["canonicalize"]
