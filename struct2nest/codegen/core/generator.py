"""
Base generator interface for all code generation targets.

Defines the contract that all target generators must implement and the
parse -> model -> emit pipeline they share.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ...logging_config import get_logger
from .config import GeneratorConfig, load_config
from .parser import ParseResult, TagIssue, TagParser
from .schema import DuplicatePolicy, StructureModel, build_structure
from .templates import TemplateEngine, create_template_engine
from .types import OverrideRule, TypeMap

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or load_config(self.language_name)
        self.parser = TagParser()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target (e.g., 'nestjs')."""
        pass

    @property
    def file_extension(self) -> str:
        """Return the suffix for generated files (e.g., '.schemas.ts')."""
        return self.config.file_suffix

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None when the generator renders no templates.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @property
    @abstractmethod
    def type_map(self) -> TypeMap:
        """Type lookup used for fields without an override."""
        pass

    @property
    def override_rules(self) -> Sequence[OverrideRule]:
        """Ordered override rules; the first match wins."""
        return ()

    @property
    def duplicate_policy(self) -> DuplicatePolicy:
        try:
            return DuplicatePolicy(self.config.duplicate_fields)
        except ValueError as e:
            raise GeneratorError(
                f"Invalid duplicate_fields setting: {self.config.duplicate_fields}"
            ) from e

    def parse_fields(self, body: str) -> ParseResult:
        """Run the tag parser over a struct body."""
        return self.parser.parse_detailed(body)

    def build_model(self, struct_name: str, parsed: ParseResult) -> StructureModel:
        """Turn parsed descriptors into a structure model."""
        return build_structure(
            struct_name,
            parsed.fields,
            self.type_map,
            self.override_rules,
            self.duplicate_policy,
        )

    @abstractmethod
    def generate_single_schema(self, model: StructureModel) -> str:
        """
        Generate code for a single structure.

        Args:
            model: Structure to generate code for

        Returns:
            Generated source text for this structure only
        """
        pass

    def output_filename(self, model: StructureModel) -> str:
        """File name the artifact for ``model`` is written under."""
        return f"{model.output_name}{self.file_extension}"

    def validate_schema(
        self, model: StructureModel, issues: Sequence[TagIssue] = ()
    ) -> List[str]:
        """
        Validate a structure for basic issues.

        Target generators should override this to add specific validation.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        if not model.fields:
            warnings.append(f"Schema '{model.struct_name}' has no fields")

        for emission in model.fields:
            if emission.is_override:
                continue
            if emission.source_type not in self.type_map:
                warnings.append(
                    f"Unmapped type '{emission.source_type}' in "
                    f"{model.struct_name}.{emission.name}; emitted verbatim"
                )

        for issue in issues:
            warnings.append(f"Skipped field in {model.struct_name}: {issue}")

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply formatting to generated code.

        Strips trailing whitespace, allows at most one blank line in a row
        and ends the text with a single newline.
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        code: str,
        warnings: Optional[List[str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(
        cls, message: str, exception: Optional[Exception] = None
    ) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(
    generator: CodeGenerator, struct_name: str, body: str
) -> GenerationResult:
    """
    Run one struct through parse, model and emit with error handling.

    Args:
        generator: Code generator instance
        struct_name: Name of the source struct
        body: Text between the struct braces

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        parsed = generator.parse_fields(body)
        model = generator.build_model(struct_name, parsed)
        warnings = generator.validate_schema(model, parsed.issues)

        code = generator.format_code(generator.generate_single_schema(model))

        metadata = {
            "language": generator.language_name,
            "struct_name": struct_name,
            "output_file": generator.output_filename(model),
            "field_count": len(model.fields),
            "override_fields": [f.name for f in model.fields if f.is_override],
            "skipped_fields": len(parsed.issues),
        }
        return GenerationResult(code, warnings, metadata)

    except Exception as e:
        logger.debug("Generation failed for %s", struct_name, exc_info=True)
        return GenerationResult.error(
            f"Code generation failed for {struct_name}: {str(e)}", exception=e
        )
