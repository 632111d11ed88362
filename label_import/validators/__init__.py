"""
label_import/validators package marker.
"""

from label_import.validators.mapping_validator import HeaderMappingError, MappingErrorDetail, MappingValidator

__all__ = [
    "HeaderMappingError",
    "MappingErrorDetail",
    "MappingValidator",
]
