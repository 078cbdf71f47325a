"""
NestJS code generator module.

Generates ``@nestjs/mongoose`` schema classes from tagged Go structs.
"""

from .config import NestConfig
from .generator import (
    NestJSGenerator,
    create_minimal_generator,
    create_nestjs_generator,
)
from .types import (
    DEFAULT_RULES,
    DEFAULT_TYPE_MAP,
    IDENTITY_RULE,
    MONGOOSE_TYPES,
    TIMESTAMP_RULE,
)

__all__ = [
    "NestJSGenerator",
    "NestConfig",
    "create_nestjs_generator",
    "create_minimal_generator",
    "DEFAULT_RULES",
    "DEFAULT_TYPE_MAP",
    "IDENTITY_RULE",
    "MONGOOSE_TYPES",
    "TIMESTAMP_RULE",
]
