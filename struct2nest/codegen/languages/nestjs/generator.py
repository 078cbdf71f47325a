"""
NestJS code generator implementation.

Renders structure models as ``@nestjs/mongoose`` schema classes.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ....logging_config import get_logger
from ...core.config import ConfigError, GeneratorConfig
from ...core.generator import CodeGenerator, GeneratorError
from ...core.parser import TagIssue
from ...core.schema import FieldEmission, StructureModel
from ...core.types import OverrideRule, TypeMap, type_map_from_config
from .config import NestConfig
from .naming import property_name, validate_class_name
from .types import DEFAULT_RULES, DEFAULT_TYPE_MAP, schema_type_expression

logger = get_logger(__name__)

SCHEMA_TEMPLATE = "schema.ts.j2"


class NestJSGenerator(CodeGenerator):
    """Code generator for NestJS Mongoose schema classes."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        type_map: Optional[TypeMap] = None,
        rules: Optional[Sequence[OverrideRule]] = None,
    ):
        """
        Initialize NestJS generator.

        Args:
            config: Generator configuration
            type_map: Replacement for the default Mongoose type table
            rules: Replacement for the built-in identity/timestamp rules

        Raises:
            ConfigError: If a NestJS option has the wrong type
        """
        super().__init__(config)

        self.nest_config = NestConfig.from_dict(self.config.language_config)
        problems = self.nest_config.validate()
        if problems:
            raise ConfigError(f"Invalid NestJS options: {'; '.join(problems)}")

        self._type_map = type_map_from_config(
            type_map if type_map is not None else DEFAULT_TYPE_MAP,
            self.nest_config.type_map,
        )
        self._rules = tuple(rules) if rules is not None else DEFAULT_RULES

    @property
    def language_name(self) -> str:
        """Return the target name."""
        return "nestjs"

    @property
    def type_map(self) -> TypeMap:
        return self._type_map

    @property
    def override_rules(self) -> Sequence[OverrideRule]:
        return self._rules

    def get_template_directory(self) -> Path:
        """Return the NestJS templates directory."""
        return Path(__file__).parent / "templates"

    def generate_single_schema(self, model: StructureModel) -> str:
        """Render one schema class file for ``model``."""
        if not self.template_exists(SCHEMA_TEMPLATE):
            raise GeneratorError(f"{SCHEMA_TEMPLATE} template not found")

        logger.debug(
            "Rendering %s with %d field(s)", model.struct_name, len(model.fields)
        )

        context = {
            "class_name": model.struct_name,
            "description": self._describe(model) if self.config.add_comments else None,
            "schema_options": self.nest_config.schema_options(),
            "fields": [self._generate_field_data(f) for f in model.fields],
            "indent": " " * self.config.indent_size,
        }
        return self.render_template(SCHEMA_TEMPLATE, context)

    def _describe(self, model: StructureModel) -> str:
        return f"Generated from Go struct {model.struct_name}"

    def _generate_field_data(self, emission: FieldEmission) -> Dict[str, Any]:
        """Generate field data for template."""
        options = [("type", schema_type_expression(emission.schema_type))]
        if emission.required:
            options.append(("required", "true"))
        options.extend(emission.options)

        field_data = {
            "name": property_name(emission.name),
            "ts_type": emission.ts_type,
            "options": options,
            "comment": None,
        }

        if self.config.add_comments and emission.source_type:
            field_data["comment"] = f"source type: {emission.source_type}"

        return field_data

    def validate_schema(
        self, model: StructureModel, issues: Sequence[TagIssue] = ()
    ) -> List[str]:
        """Validate a structure for NestJS generation."""
        warnings = super().validate_schema(model, issues)
        warnings.extend(validate_class_name(model.struct_name))
        return warnings


# Factory functions
def create_nestjs_generator(
    config: Optional[GeneratorConfig] = None, **language_options
) -> NestJSGenerator:
    """Create a NestJS generator, optionally overriding language settings."""
    if config is None:
        from ...core.config import load_config

        config = load_config("nestjs", custom_config=language_options or None)
    return NestJSGenerator(config)


def create_minimal_generator() -> NestJSGenerator:
    """Create generator without timestamps or serialized virtuals."""
    return create_nestjs_generator(timestamps=False, virtuals=False)
