"""
Mongoose type tables and built-in field overrides for NestJS schemas.
"""

from typing import Tuple

from ...core.types import (
    FieldTemplate,
    OverrideRule,
    TypeMap,
    name_equals,
    name_in_casefold,
)

SCHEMA_TYPES_PREFIX = "mongoose.Schema.Types"

NUMBER = "Number"

# Go primitive type -> Mongoose SchemaType name
MONGOOSE_TYPES = {
    "string": "String",
    "number": NUMBER,
    "bool": "Boolean",
    "float32": NUMBER,
    "float64": NUMBER,
    "int": NUMBER,
    "int8": NUMBER,
    "int16": NUMBER,
    "int32": NUMBER,
    "int64": NUMBER,
    "uint": NUMBER,
    "uint8": NUMBER,
    "uint16": NUMBER,
    "uint32": NUMBER,
    "uint64": NUMBER,
    "Time": "Date",
    "Duration": NUMBER,
    "array": "Array",
}

DEFAULT_TYPE_MAP = TypeMap(MONGOOSE_TYPES)

IDENTITY_TEMPLATE = FieldTemplate(
    schema_type="ObjectId",
    ts_type="mongoose.Types.ObjectId",
    options=(("auto", "true"),),
)

TIMESTAMP_TEMPLATE = FieldTemplate(
    schema_type="Date",
    ts_type="Date",
    options=(("default", "Date.now"),),
)

IDENTITY_RULE = OverrideRule("identity", name_equals("_id"), IDENTITY_TEMPLATE)

TIMESTAMP_RULE = OverrideRule(
    "timestamp", name_in_casefold("createdAt", "updatedAt"), TIMESTAMP_TEMPLATE
)

DEFAULT_RULES: Tuple[OverrideRule, ...] = (IDENTITY_RULE, TIMESTAMP_RULE)


def schema_type_expression(schema_type: str) -> str:
    """Qualify a SchemaType name, e.g. ``String`` -> ``mongoose.Schema.Types.String``."""
    return f"{SCHEMA_TYPES_PREFIX}.{schema_type}"
