"""
label_import/validators/mapping_validator.py

Validation for header-to-field mapping resolution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from label_import.domain.labels import SchemaField


@dataclass(frozen=True)
class MappingErrorDetail:
    """
    Structured mapping error detail.
    """

    code: str
    message: str
    field_id: str | None = None
    headers: tuple[str, ...] = ()
    context: dict[str, Any] | None = None


class HeaderMappingError(ValueError):
    """
    Raised when headers cannot be mapped to the schema safely.
    """

    def __init__(self, *, message: str, errors: Sequence[MappingErrorDetail]) -> None:
        super().__init__(message)
        self.message = message
        self.errors = tuple(errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "errors": [
                {
                    "code": error.code,
                    "message": error.message,
                    "field_id": error.field_id,
                    "headers": list(error.headers),
                    "context": error.context,
                }
                for error in self.errors
            ],
        }


class MappingValidator:
    """
    Validates resolved header-to-field mappings.
    """

    def __init__(self, *, schema: Sequence[SchemaField]) -> None:
        self._schema = tuple(schema)
        self._required_fields = tuple(field for field in self._schema if field.required)

    def validate(self, *, mapping: Mapping[str, str | None], headers: Sequence[str]) -> None:
        """
        Validate mapping and raise structured errors if invalid.

        Duplicate targets are reported first; when any exist the required
        column check is skipped.
        """

        errors: list[MappingErrorDetail] = []

        headers_by_field: dict[str, list[str]] = {}
        for header in headers:
            field_id = mapping.get(header)
            if field_id:
                headers_by_field.setdefault(field_id, []).append(header)

        for field_id, matched_headers in headers_by_field.items():
            if len(matched_headers) > 1:
                errors.append(
                    MappingErrorDetail(
                        code="duplicate_field_mapping",
                        message=(
                            "Duplicate column detected: More than one column maps to "
                            f'the field "{field_id}".'
                        ),
                        field_id=field_id,
                        headers=tuple(matched_headers),
                    )
                )

        if errors:
            raise HeaderMappingError(
                message="Header mapping validation failed. Duplicate columns detected.",
                errors=errors,
            )

        missing = [field for field in self._required_fields if field.id not in headers_by_field]
        if missing:
            labels = ", ".join(field.label for field in missing)
            raise HeaderMappingError(
                message=f"Missing required columns: {labels}",
                errors=[
                    MappingErrorDetail(
                        code="required_field_unmapped",
                        message=f"Missing required columns: {labels}",
                        context={
                            "missing_fields": [field.id for field in missing],
                            "headers": list(headers),
                        },
                    )
                ],
            )
