"""Tests for the generator registry."""

import pytest

from struct2nest.codegen.core.config import ConfigError, load_config
from struct2nest.codegen.languages.nestjs import NestJSGenerator
from struct2nest.codegen.registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    is_language_supported,
    list_supported_languages,
)


@pytest.fixture
def registry():
    registry = GeneratorRegistry()
    registry.register("nestjs", NestJSGenerator, aliases=["nest", "mongoose"])
    return registry


class TestRegistry:
    def test_resolve_aliases(self, registry):
        assert registry.resolve_name("NestJS") == "nestjs"
        assert registry.resolve_name("mongoose") == "nestjs"
        assert registry.aliases_for("nestjs") == ["mongoose", "nest"]

    def test_unknown_target(self, registry):
        with pytest.raises(RegistryError, match="Available: nestjs"):
            registry.resolve_name("typeorm")

    def test_rejects_non_generator(self, registry):
        with pytest.raises(RegistryError):
            registry.register("bad", dict)

    def test_alias_conflict(self, registry):
        with pytest.raises(RegistryError, match="already taken by 'nestjs'"):
            registry.register("other", NestJSGenerator, aliases=["nest"])
        assert not registry.is_supported("other")

    def test_alias_may_not_shadow_a_target(self, registry):
        with pytest.raises(RegistryError, match="already taken"):
            registry.register("other", NestJSGenerator, aliases=["nestjs"])

    @pytest.mark.parametrize(
        "config",
        [None, {"indent_size": 4}, load_config(custom_config={"indent_size": 4})],
    )
    def test_create_generator(self, registry, config):
        generator = registry.create_generator("nest", config)
        assert isinstance(generator, NestJSGenerator)

    def test_create_generator_from_file(self, registry, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"indent_size": 3}', encoding="utf-8")
        generator = registry.create_generator("nestjs", path)
        assert generator.config.indent_size == 3

    def test_create_generator_bad_config(self, registry):
        with pytest.raises(RegistryError, match="Invalid config type"):
            registry.create_generator("nestjs", 42)

    def test_create_generator_missing_file(self, registry, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            registry.create_generator("nestjs", tmp_path / "missing.json")

    def test_create_generator_bad_option(self, registry):
        with pytest.raises(ConfigError, match="timestamps should be true or false"):
            registry.create_generator("nestjs", {"timestamps": 1})


class TestGlobalRegistry:
    def test_builtin_target(self):
        assert list_supported_languages() == ["nestjs"]
        assert is_language_supported("mongoose")
        assert not is_language_supported("typeorm")

    def test_language_info(self):
        info = get_language_info("nest")
        assert info == {
            "name": "nestjs",
            "class": "NestJSGenerator",
            "file_extension": ".schemas.ts",
            "aliases": ["mongoose", "nest"],
        }

    def test_get_generator_with_options(self):
        generator = get_generator("nestjs", {"timestamps": False})
        assert generator.nest_config.timestamps is False
