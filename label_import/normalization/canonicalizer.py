"""
label_import/normalization/canonicalizer.py

Parse-time canonicalization of boolean and chain cells.
"""

from __future__ import annotations

import logging

from label_import.domain.labels import ConversionRecord, SchemaField
from label_import.reference.chains import find_chain
from label_import.reference.schema import CHAIN_FIELD_ID

logger = logging.getLogger(__name__)

TRUE_LITERALS = frozenset({"1", "true", "yes"})
FALSE_LITERALS = frozenset({"0", "false", "no"})


def canonicalize_boolean(value: str) -> str:
    lowered = value.lower()
    if lowered in TRUE_LITERALS:
        return "true"
    if lowered in FALSE_LITERALS:
        return "false"
    return value


def canonicalize_chain(value: str, *, preserve_unknown: bool = False) -> str:
    """
    Return the CAIP-2 id for a recognizable chain value.

    Unrecognized values become ``""`` so the required check reports them,
    unless ``preserve_unknown`` keeps the raw text for the validator.
    """

    if not value:
        return value
    chain = find_chain(value)
    if chain is not None:
        return chain.caip2
    return value if preserve_unknown else ""


def canonicalize(
    field: SchemaField,
    raw: str,
    row_index: int = 0,
    *,
    preserve_unknown_chain: bool = False,
) -> tuple[str, ConversionRecord | None]:
    """
    Canonicalize one cell value for ``field``.

    Only chain rewrites are recorded; boolean spelling changes are silent.
    Already-canonical input is returned unchanged.
    """

    if field.is_boolean:
        return canonicalize_boolean(raw), None

    if field.id != CHAIN_FIELD_ID:
        return raw, None

    converted = canonicalize_chain(raw, preserve_unknown=preserve_unknown_chain)
    if not raw or converted == raw:
        return converted, None

    if not converted:
        logger.debug("Unrecognized chain value row_index=%s value=%s", row_index, raw)
    return converted, ConversionRecord(
        row_index=row_index,
        field_id=field.id,
        original_value=raw,
        converted_value=converted,
    )
