"""
struct2nest Code Generation Module

Generates NestJS Mongoose schema classes from tagged Go structs.
"""

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    list_all_language_info,
    list_supported_languages,
)
from .core.generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .core.schema import FieldDescriptor, FieldEmission, StructureModel, build_structure
from .core.parser import TagParser, find_struct, find_structs
from .core.types import OverrideRule, TypeMap
from .core.config import GeneratorConfig, ConfigManager, load_config
from .batch import ConversionReport, OutcomeStatus, convert_directory, convert_source

__version__ = "0.1.0"


def quick_generate(source, language="nestjs", **options):
    """
    Quick code generation from Go source text.

    Args:
        source: Go source containing at least one struct
        language: Target name
        **options: Generator options

    Returns:
        Generated code for the first struct in ``source``
    """
    generator = get_generator(language, options or None)
    block = find_struct(source)
    if block is None:
        raise GeneratorError("No struct definition found in source")

    result = generate_code(generator, block.name, block.body)
    if result.success:
        return result.code
    raise GeneratorError(result.error_message)


# Export main interfaces
__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    "FieldDescriptor",
    "FieldEmission",
    "StructureModel",
    "build_structure",
    "TagParser",
    "find_struct",
    "find_structs",
    "TypeMap",
    "OverrideRule",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "ConversionReport",
    "OutcomeStatus",
    "convert_directory",
    "convert_source",
    "quick_generate",
    "get_generator",
    "get_language_info",
    "list_all_language_info",
    "list_supported_languages",
]
