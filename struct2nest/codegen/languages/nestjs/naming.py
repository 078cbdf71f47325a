"""
TypeScript naming checks for emitted classes and properties.
"""

import re

# Globals the generated file relies on; a class with one of these names
# would shadow it inside the module.
TS_SHADOWED_GLOBALS = {
    "Array",
    "Boolean",
    "Date",
    "Number",
    "Object",
    "String",
    "Schema",
    "Prop",
    "SchemaFactory",
    "HydratedDocument",
    "mongoose",
}

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def is_identifier(name: str) -> bool:
    """Whether ``name`` can be used bare as a TypeScript identifier."""
    return bool(IDENTIFIER_PATTERN.match(name))


def property_name(name: str) -> str:
    """Property key for a class member; quoted when not an identifier."""
    if is_identifier(name):
        return name
    return "'" + name.replace("\\", "\\\\").replace("'", "\\'") + "'"


def validate_class_name(name: str) -> list[str]:
    """
    Check a struct name for use as an exported TypeScript class.

    Returns:
        List of validation warnings (empty if valid)
    """
    warnings = []
    if not is_identifier(name):
        warnings.append(f"'{name}' is not a valid TypeScript class name")
    if name in TS_SHADOWED_GLOBALS:
        warnings.append(f"Class name '{name}' shadows a name the schema file uses")
    return warnings
