"""
Target-specific code generators.

This module contains generators for the supported output frameworks.
"""

from .nestjs import NestJSGenerator, create_nestjs_generator

__all__ = ["NestJSGenerator", "create_nestjs_generator"]
