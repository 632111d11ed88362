"""
label_import/parsing/tokenizer.py

Line-oriented CSV tokenizer.

Records are split on newlines only; quoted cells cannot span lines. An
unterminated quote swallows the rest of its line as literal text instead of
failing the whole file.
"""

from __future__ import annotations

from dataclasses import dataclass

QUOTE = '"'
DELIMITER = ","


@dataclass(frozen=True)
class TokenizedLine:
    """
    One non-blank source line split into cells.
    """

    line_number: int
    cells: list[str]

    @property
    def is_empty(self) -> bool:
        return all(cell == "" for cell in self.cells)


def clean_cell(value: str) -> str:
    """
    Trim a cell and unwrap it if it is still enclosed in double quotes.
    """

    cleaned = value.strip()
    if len(cleaned) >= 2 and cleaned.startswith(QUOTE) and cleaned.endswith(QUOTE):
        cleaned = cleaned[1:-1].replace('""', QUOTE)
    return cleaned


def parse_line(line: str) -> list[str]:
    """
    Split one line on commas outside double-quoted spans.

    ``""`` inside a quoted span is an escaped literal quote.
    """

    cells: list[str] = []
    current: list[str] = []
    in_quotes = False
    index = 0
    length = len(line)

    while index < length:
        char = line[index]
        if char == QUOTE:
            if in_quotes and index + 1 < length and line[index + 1] == QUOTE:
                current.append(QUOTE)
                index += 1
            else:
                in_quotes = not in_quotes
        elif char == DELIMITER and not in_quotes:
            cells.append("".join(current))
            current = []
        else:
            current.append(char)
        index += 1

    cells.append("".join(current))
    return [clean_cell(cell) for cell in cells]


def tokenize_lines(text: str) -> list[TokenizedLine]:
    """
    Split text into non-blank lines, keeping 1-based source line numbers.
    """

    if text.startswith("\ufeff"):
        text = text[1:]

    tokenized: list[TokenizedLine] = []
    for line_number, raw_line in enumerate(text.split("\n"), start=1):
        line = raw_line.strip()
        if not line:
            continue
        tokenized.append(TokenizedLine(line_number=line_number, cells=parse_line(line)))
    return tokenized


def tokenize(text: str) -> list[list[str]]:
    """
    Turn raw CSV text into rows of string cells, skipping blank lines.
    """

    return [line.cells for line in tokenize_lines(text)]


def has_data_rows(text: str) -> bool:
    """True when ``text`` holds a header line and at least one more non-blank line."""
    non_blank = 0
    for raw_line in text.lstrip("\ufeff").split("\n"):
        if raw_line.strip():
            non_blank += 1
            if non_blank >= 2:
                return True
    return False
