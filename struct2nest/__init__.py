"""Convert tagged Go structs into NestJS Mongoose schema classes."""

from .codegen import (
    ConversionReport,
    GenerationResult,
    convert_directory,
    get_generator,
    quick_generate,
)

__version__ = "0.1.0"

__all__ = [
    "ConversionReport",
    "GenerationResult",
    "convert_directory",
    "get_generator",
    "quick_generate",
]
