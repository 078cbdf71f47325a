"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ...logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_LANGUAGE = "nestjs"

# Expected JSON types of the generic settings
FIELD_TYPES = {
    "output_dir": str,
    "file_suffix": str,
    "indent_size": int,
    "all_structs": bool,
    "duplicate_fields": str,
    "add_comments": bool,
    "language_config": dict,
}

TYPE_NAMES = {
    str: "a string",
    int: "an integer",
    bool: "true or false",
    dict: "an object",
}


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Base configuration for code generators."""

    # Output settings
    output_dir: str = "out_schemas"
    file_suffix: str = ".schemas.ts"

    # Code style settings
    indent_size: int = 2

    # Input handling
    all_structs: bool = False  # only the first struct per file by default
    duplicate_fields: str = "error"  # error, last_wins

    # Additional metadata
    add_comments: bool = False

    # Language-specific settings
    language_config: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported targets."""
        self._configs["nestjs"] = {
            "output_dir": "out_schemas",
            "file_suffix": ".schemas.ts",
            "indent_size": 2,
            "all_structs": False,
            "duplicate_fields": "error",
            "add_comments": False,
            "language_config": {
                "schema_id": True,
                "timestamps": True,
                "virtuals": True,
                "version_key": False,
                "type_map": {},
            },
        }

    def get_config(
        self,
        language: str = DEFAULT_LANGUAGE,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a target.

        Args:
            language: Target name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the target
        """
        base_config = _deep_copy(self._configs.get(language.lower(), {}))

        if config_file:
            file_config = self._load_config_file(config_file)
            _merge_into(base_config, file_config)

        if custom_config:
            _merge_into(base_config, custom_config)

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(
                f"Invalid JSON in configuration file {path}: {str(e)}"
            ) from e
        except OSError as e:
            raise ConfigError(
                f"Failed to load configuration file {path}: {str(e)}"
            ) from e

        if not isinstance(config, dict):
            raise ConfigError(
                f"Configuration file must contain a JSON object: {path}"
            )

        logger.debug("Loaded configuration file %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        check_types(config_dict)
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        language_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                language_args[key] = value

        # Unknown top-level keys are language settings
        if language_args:
            existing = dict(config_args.get("language_config", {}))
            existing.update(language_args)
            config_args["language_config"] = existing

        return GeneratorConfig(**config_args)

    def list_languages(self) -> List[str]:
        """Get list of targets with default configuration."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings/errors

        Raises:
            ConfigError: If a setting has the wrong type
        """
        check_types(vars(config))
        warnings = []

        if config.duplicate_fields not in {"error", "last_wins"}:
            warnings.append(f"Invalid duplicate_fields: {config.duplicate_fields}")

        if config.indent_size < 1:
            warnings.append(f"Invalid indent_size: {config.indent_size}")

        if not config.file_suffix:
            warnings.append("file_suffix must not be empty")

        type_map = config.language_config.get("type_map", {})
        if not isinstance(type_map, dict):
            warnings.append("type_map must be a JSON object")

        return warnings


def check_types(config_dict: Dict[str, Any]) -> None:
    """
    Reject generic settings whose JSON type is wrong.

    Raises:
        ConfigError: On the first setting with an unexpected type
    """
    for key, expected in FIELD_TYPES.items():
        if key not in config_dict:
            continue
        value = config_dict[key]
        # bool is an int subclass; true is not a valid indent
        if not isinstance(value, expected) or (
            expected is int and isinstance(value, bool)
        ):
            raise ConfigError(
                f"{key} must be {TYPE_NAMES[expected]}, got {value!r}"
            )


def _deep_copy(config: Dict[str, Any]) -> Dict[str, Any]:
    return json.loads(json.dumps(config))


def _merge_into(base: Dict[str, Any], overrides: Dict[str, Any]) -> None:
    """Merge ``overrides`` into ``base``; ``language_config`` merges one level deep."""
    for key, value in overrides.items():
        if key == "language_config" and isinstance(value, dict):
            base.setdefault("language_config", {}).update(value)
        else:
            base[key] = value


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    language: str = DEFAULT_LANGUAGE,
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the target
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)

