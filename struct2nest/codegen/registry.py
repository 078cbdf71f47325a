"""
Target registry.

Maps target names and their aliases to generator classes and builds
configured generator instances for the CLI and the public API.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from ..logging_config import get_logger
from .core.config import GeneratorConfig, load_config
from .core.generator import CodeGenerator

logger = get_logger(__name__)

ConfigSource = Union[GeneratorConfig, Dict[str, Any], str, Path, None]


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class GeneratorRegistry:
    """Known targets, keyed by lower-cased primary name."""

    def __init__(self):
        self._generators: Dict[str, Type[CodeGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        generator_class: Type[CodeGenerator],
        aliases: Optional[List[str]] = None,
    ):
        """
        Register ``generator_class`` as ``language``.

        Raises:
            RegistryError: If the class is not a CodeGenerator or an alias
                already belongs to another target
        """
        if not (
            isinstance(generator_class, type)
            and issubclass(generator_class, CodeGenerator)
        ):
            raise RegistryError("Generator class must inherit from CodeGenerator")

        primary = language.lower()
        extra = [a.lower() for a in aliases or [] if a.lower() != primary]
        for alias in extra:
            if alias in self._generators:
                owner = alias
            else:
                owner = self._aliases.get(alias, primary)
            if owner != primary:
                raise RegistryError(f"Alias '{alias}' is already taken by '{owner}'")

        self._generators[primary] = generator_class
        self._aliases.update((alias, primary) for alias in extra)
        logger.debug("Registered target %s (aliases: %s)", primary, extra)

    def resolve_name(self, language: str) -> str:
        """Return the primary name for a target name or alias."""
        key = language.lower()
        primary = key if key in self._generators else self._aliases.get(key)
        if primary is None:
            raise RegistryError(
                f"No generator registered for target: {language}. "
                f"Available: {', '.join(self.list_languages())}"
            )
        return primary

    def is_supported(self, language: str) -> bool:
        key = language.lower()
        return key in self._generators or key in self._aliases

    def list_languages(self) -> List[str]:
        return sorted(self._generators)

    def aliases_for(self, language: str) -> List[str]:
        primary = language.lower()
        return sorted(a for a, target in self._aliases.items() if target == primary)

    def create_generator(
        self, language: str, config: ConfigSource = None
    ) -> CodeGenerator:
        """
        Build a generator for ``language``.

        Args:
            language: Target name or alias
            config: GeneratorConfig, override dict, JSON file path or None

        Raises:
            RegistryError: Unknown target or unusable ``config`` argument
            ConfigError: Invalid configuration values
        """
        primary = self.resolve_name(language)

        if isinstance(config, GeneratorConfig):
            final_config = config
        elif isinstance(config, (str, Path)):
            final_config = load_config(primary, config_file=config)
        elif isinstance(config, dict) or config is None:
            final_config = load_config(primary, custom_config=config)
        else:
            raise RegistryError(f"Invalid config type: {type(config).__name__}")

        return self._generators[primary](final_config)

    def describe(self, language: str) -> Dict[str, Any]:
        """Summary of one target for listings."""
        primary = self.resolve_name(language)
        generator = self.create_generator(primary)
        return {
            "name": generator.language_name,
            "class": type(generator).__name__,
            "file_extension": generator.file_extension,
            "aliases": self.aliases_for(primary),
        }


_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Return the process-wide registry with the built-in targets."""
    global _global_registry
    if _global_registry is None:
        from .languages.nestjs import NestJSGenerator

        _global_registry = GeneratorRegistry()
        _global_registry.register(
            "nestjs", NestJSGenerator, aliases=["nest", "mongoose"]
        )
    return _global_registry


def get_generator(
    language: str = "nestjs", config: ConfigSource = None
) -> CodeGenerator:
    """Build a generator from the global registry."""
    return get_registry().create_generator(language, config)


def list_supported_languages() -> List[str]:
    return get_registry().list_languages()


def is_language_supported(language: str) -> bool:
    return get_registry().is_supported(language)


def get_language_info(language: str) -> Dict[str, Any]:
    return get_registry().describe(language)


def list_all_language_info() -> Dict[str, Dict[str, Any]]:
    """Describe every registered target."""
    return {name: get_language_info(name) for name in list_supported_languages()}
