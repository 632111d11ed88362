"""
label_import/parsing package marker.
"""

from label_import.parsing.tokenizer import TokenizedLine, has_data_rows, parse_line, tokenize, tokenize_lines

__all__ = [
    "TokenizedLine",
    "has_data_rows",
    "parse_line",
    "tokenize",
    "tokenize_lines",
]
