"""
label_import/mappers package marker.
"""

from label_import.mappers.header_mapper import HeaderMapper, HeaderMatch, map_headers, mapped_columns

__all__ = [
    "HeaderMapper",
    "HeaderMatch",
    "map_headers",
    "mapped_columns",
]
