"""
label_import/reference/schema.py

Label schema: the columns a bulk label CSV may carry.
"""

from __future__ import annotations

from functools import partial

from eth_utils import is_address

from label_import.domain.labels import FieldKind, SchemaField
from label_import.validators.format_validators import (
    AddressCheck,
    make_max_length_validator,
    validate_address,
    validate_boolean,
    validate_optional_address,
    validate_tx_hash,
    validate_url,
)

CHAIN_FIELD_ID = "chain_id"
ADDRESS_FIELD_ID = "address"
CATEGORY_FIELD_ID = "usage_category"
PROJECT_FIELD_ID = "owner_project"

BOOLEAN_FIELD_IDS: tuple[str, ...] = (
    "is_contract",
    "is_factory_contract",
    "is_proxy",
    "is_eoa",
    "is_safe_contract",
)


def build_label_schema(
    *,
    contract_name_max_length: int = 40,
    address_check: AddressCheck = is_address,
) -> tuple[SchemaField, ...]:
    """
    Build the ordered label schema.

    Field order matters: header matching breaks distance ties in favour of
    the earlier field.
    """

    address = partial(validate_address, address_check=address_check)
    optional_address = partial(validate_optional_address, address_check=address_check)

    return (
        SchemaField(id=CHAIN_FIELD_ID, label="Chain", kind=FieldKind.ENUM, required=True),
        SchemaField(id=ADDRESS_FIELD_ID, label="Address", kind=FieldKind.ADDRESS_LIKE, required=True, validator=address),
        SchemaField(
            id="contract_name",
            label="Contract Name",
            validator=make_max_length_validator(contract_name_max_length, "Contract name"),
        ),
        SchemaField(id=PROJECT_FIELD_ID, label="Owner Project", kind=FieldKind.ENUM),
        SchemaField(id=CATEGORY_FIELD_ID, label="Usage Category", kind=FieldKind.ENUM),
        SchemaField(id="version", label="Version"),
        SchemaField(id="is_contract", label="Is Contract", kind=FieldKind.BOOLEAN, validator=validate_boolean),
        SchemaField(
            id="is_factory_contract",
            label="Is Factory Contract",
            kind=FieldKind.BOOLEAN,
            validator=validate_boolean,
        ),
        SchemaField(id="is_proxy", label="Is Proxy", kind=FieldKind.BOOLEAN, validator=validate_boolean),
        SchemaField(id="is_eoa", label="Is EOA", kind=FieldKind.BOOLEAN, validator=validate_boolean),
        SchemaField(id="deployment_tx", label="Deployment Transaction", validator=validate_tx_hash),
        SchemaField(
            id="deployer_address",
            label="Deployer Address",
            kind=FieldKind.ADDRESS_LIKE,
            validator=optional_address,
        ),
        SchemaField(id="deployment_date", label="Deployment Date"),
        SchemaField(id="is_safe_contract", label="Is Multisig", kind=FieldKind.BOOLEAN, validator=validate_boolean),
        SchemaField(id="erc_type", label="ERC Type"),
        SchemaField(id="erc20.name", label="ERC20 Name"),
        SchemaField(id="erc20.symbol", label="ERC20 Symbol"),
        SchemaField(id="erc20.decimals", label="ERC20 Decimals"),
        SchemaField(id="erc721.name", label="ERC721 Name"),
        SchemaField(id="erc721.symbol", label="ERC721 Symbol"),
        SchemaField(id="erc1155.name", label="ERC1155 Name"),
        SchemaField(id="erc1155.symbol", label="ERC1155 Symbol"),
        SchemaField(id="audit", label="Audit", validator=validate_url),
        SchemaField(id="contract_monitored", label="Smart Contract Monitoring", validator=validate_url),
        SchemaField(id="source_code_verified", label="Verified Source Code", validator=validate_url),
    )


LABEL_FIELDS: tuple[SchemaField, ...] = build_label_schema()

LABEL_FIELDS_BY_ID: dict[str, SchemaField] = {field.id: field for field in LABEL_FIELDS}
