from __future__ import annotations

import unittest

from label_import.reference.schema import LABEL_FIELDS
from label_import.validators.mapping_validator import HeaderMappingError, MappingValidator


class TestMappingValidator(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = MappingValidator(schema=LABEL_FIELDS)

    def test_raises_on_missing_required_fields(self) -> None:
        with self.assertRaises(HeaderMappingError) as ctx:
            self.validator.validate(mapping={"Address": "address"}, headers=("Address",))

        codes = {error.code for error in ctx.exception.errors}
        self.assertEqual(codes, {"required_field_unmapped"})
        self.assertEqual(ctx.exception.message, "Missing required columns: Chain")
        self.assertEqual(ctx.exception.errors[0].context["missing_fields"], ["chain_id"])

    def test_raises_on_duplicate_targets(self) -> None:
        headers = ("Chain", "chain id", "Address")
        with self.assertRaises(HeaderMappingError) as ctx:
            self.validator.validate(
                mapping={"Chain": "chain_id", "chain id": "chain_id", "Address": "address"},
                headers=headers,
            )

        error = ctx.exception.errors[0]
        self.assertEqual(error.code, "duplicate_field_mapping")
        self.assertEqual(error.field_id, "chain_id")
        self.assertEqual(error.headers, ("Chain", "chain id"))

    def test_duplicates_are_reported_before_missing_fields(self) -> None:
        with self.assertRaises(HeaderMappingError) as ctx:
            self.validator.validate(
                mapping={"name": "contract_name", "Contract Name": "contract_name"},
                headers=("name", "Contract Name"),
            )

        codes = {error.code for error in ctx.exception.errors}
        self.assertEqual(codes, {"duplicate_field_mapping"})

    def test_error_serializes_to_dict(self) -> None:
        with self.assertRaises(HeaderMappingError) as ctx:
            self.validator.validate(mapping={}, headers=())

        payload = ctx.exception.to_dict()
        self.assertEqual(payload["message"], "Missing required columns: Chain, Address")
        self.assertEqual(payload["errors"][0]["code"], "required_field_unmapped")

    def test_accepts_complete_mapping(self) -> None:
        self.validator.validate(
            mapping={"Chain": "chain_id", "Address": "address", "Notes": None},
            headers=("Chain", "Address", "Notes"),
        )
