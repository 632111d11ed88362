"""
label_import/mappers/header_mapper.py

Fuzzy header mapping engine for label CSV uploads.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Sequence

from label_import.domain.labels import Diagnostic, FatalError, HeaderMapping, RowWarning, SchemaField
from label_import.reference.schema import LABEL_FIELDS
from label_import.validators.mapping_validator import HeaderMappingError, MappingValidator
from label_import.validators.similarity import levenshtein

logger = logging.getLogger(__name__)

_STRIP_PATTERN = re.compile(r"[\s_\-]+")

LONG_HEADER_LENGTH = 5
LONG_HEADER_MAX_DISTANCE = 2
SHORT_HEADER_MAX_DISTANCE = 1


def normalize_header(header: str) -> str:
    """
    Normalize a column name for flexible matching.
    """

    return _STRIP_PATTERN.sub("", header.lower())


def max_distance_for(normalized_header: str) -> int:
    if len(normalized_header) > LONG_HEADER_LENGTH:
        return LONG_HEADER_MAX_DISTANCE
    return SHORT_HEADER_MAX_DISTANCE


@dataclass(frozen=True)
class HeaderMatch:
    """
    Best schema candidate for one header cell.
    """

    header: str
    field_id: str | None
    distance: int | None


class HeaderMapper:
    """
    Resolves raw CSV header cells to schema field ids.
    """

    def __init__(
        self,
        *,
        schema: Sequence[SchemaField] = LABEL_FIELDS,
        validator: MappingValidator | None = None,
    ) -> None:
        self._schema = tuple(schema)
        self._fields_by_id = {field.id: field for field in self._schema}
        self._candidates = [
            (field.id, normalize_header(field.id), normalize_header(field.label))
            for field in self._schema
        ]
        self._validator = validator or MappingValidator(schema=self._schema)

    @property
    def schema(self) -> tuple[SchemaField, ...]:
        return self._schema

    def schema_field(self, field_id: str) -> SchemaField:
        return self._fields_by_id[field_id]

    def match_header(self, header: str) -> HeaderMatch:
        """
        Find the schema field closest to ``header`` within the length threshold.

        Ties keep the earlier schema field; within one field the id is
        compared before the label.
        """

        normalized = normalize_header(header)
        if not normalized:
            return HeaderMatch(header=header, field_id=None, distance=None)

        best_field: str | None = None
        best_distance: int | None = None
        for field_id, normalized_id, normalized_label in self._candidates:
            for candidate in (normalized_id, normalized_label):
                distance = levenshtein(normalized, candidate)
                if best_distance is None or distance < best_distance:
                    best_field = field_id
                    best_distance = distance

        if best_distance is None or best_distance > max_distance_for(normalized):
            return HeaderMatch(header=header, field_id=None, distance=best_distance)
        return HeaderMatch(header=header, field_id=best_field, distance=best_distance)

    def map_headers(self, headers: Sequence[str]) -> tuple[HeaderMapping, list[Diagnostic]]:
        """
        Map every header cell and validate the result.

        On a duplicate target or a missing required field the diagnostics
        contain ``FatalError`` entries and callers must not build rows.
        """

        mapping: HeaderMapping = {}
        diagnostics: list[Diagnostic] = []

        for header_index, header in enumerate(headers):
            match = self.match_header(header)
            mapping[header] = match.field_id
            if match.field_id is None and header.strip():
                diagnostics.append(
                    RowWarning(
                        message=f'Column "{header}" was not recognized and will be ignored.',
                        header_index=header_index,
                    )
                )
                logger.debug("Unrecognized header header=%s closest_distance=%s", header, match.distance)

        try:
            self._validator.validate(mapping=mapping, headers=headers)
        except HeaderMappingError as exc:
            logger.info("Header mapping rejected reason=%s", exc.message)
            diagnostics.extend(FatalError(message=error.message) for error in exc.errors)

        return mapping, diagnostics

    def mapped_columns(self, headers: Sequence[str], mapping: HeaderMapping) -> list[SchemaField]:
        """
        Return the mapped schema fields in header order.
        """

        columns: list[SchemaField] = []
        for header in headers:
            field_id = mapping.get(header)
            if field_id is None:
                continue
            field = self._fields_by_id[field_id]
            if field not in columns:
                columns.append(field)
        return columns


def map_headers(
    headers: Sequence[str],
    schema: Sequence[SchemaField] = LABEL_FIELDS,
) -> tuple[HeaderMapping, list[Diagnostic]]:
    return HeaderMapper(schema=schema).map_headers(headers)


def mapped_columns(
    headers: Sequence[str],
    mapping: HeaderMapping,
    schema: Sequence[SchemaField] = LABEL_FIELDS,
) -> list[SchemaField]:
    return HeaderMapper(schema=schema).mapped_columns(headers, mapping)
