"""
Core code generation components.

Provides base classes and utilities used by all target generators.
"""

from .generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .schema import (
    DuplicateFieldError,
    DuplicatePolicy,
    FieldDescriptor,
    FieldEmission,
    SchemaError,
    StructureModel,
    build_structure,
)
from .parser import (
    ParseResult,
    StructBlock,
    TagIssue,
    TagParser,
    find_struct,
    find_structs,
)
from .types import FieldTemplate, OverrideRule, TypeMap
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    # Schema model
    "FieldDescriptor",
    "FieldEmission",
    "StructureModel",
    "build_structure",
    "SchemaError",
    "DuplicateFieldError",
    "DuplicatePolicy",
    # Parsing
    "TagParser",
    "ParseResult",
    "TagIssue",
    "StructBlock",
    "find_struct",
    "find_structs",
    # Type mapping
    "TypeMap",
    "OverrideRule",
    "FieldTemplate",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
