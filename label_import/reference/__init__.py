"""
label_import/reference package marker.
"""

from label_import.reference.categories import CATEGORIES, CATEGORY_ALIASES, DEFAULT_CATEGORY_ID, Category
from label_import.reference.chains import CHAIN_ALIASES, CHAINS, Chain, find_chain

__all__ = [
    "CATEGORIES",
    "CATEGORY_ALIASES",
    "CHAINS",
    "CHAIN_ALIASES",
    "Category",
    "Chain",
    "DEFAULT_CATEGORY_ID",
    "find_chain",
]
