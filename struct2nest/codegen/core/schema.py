"""
Core schema representation for code generation.

Holds the field descriptors produced by the tag parser and the ordered
structure model the emitters consume, plus the builder that turns one into
the other.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple

from ...logging_config import get_logger

if TYPE_CHECKING:
    from .types import OverrideRule, TypeMap

logger = get_logger(__name__)


class SchemaError(Exception):
    """Raised when a structure model cannot be built."""

    pass


class DuplicateFieldError(SchemaError):
    """Raised when two fields of one structure share a name."""

    def __init__(self, struct_name: str, field_name: str):
        super().__init__(
            f"Duplicate field '{field_name}' in structure '{struct_name}'"
        )
        self.struct_name = struct_name
        self.field_name = field_name


class DuplicatePolicy(Enum):
    """How to treat repeated field names within one structure."""

    ERROR = "error"
    LAST_WINS = "last_wins"


@dataclass(frozen=True)
class FieldDescriptor:
    """One recognized field line of a source struct."""

    name: str  # bson name, used as the document key
    source_type: str
    required: bool = True
    go_name: Optional[str] = None
    line: Optional[int] = None


@dataclass(frozen=True)
class FieldEmission:
    """Everything the emitter needs to render one property."""

    name: str
    schema_type: str
    ts_type: str
    required: bool = False
    options: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)
    rule: Optional[str] = None
    source_type: Optional[str] = None

    @property
    def is_override(self) -> bool:
        return self.rule is not None


@dataclass
class StructureModel:
    """Ordered fields of one structure, in source appearance order."""

    struct_name: str
    fields: List[FieldEmission] = field(default_factory=list)

    def add_field(self, emission: FieldEmission) -> None:
        """Append a field to this structure."""
        self.fields.append(emission)

    def get_field(self, name: str) -> Optional[FieldEmission]:
        """Get field by name."""
        for emission in self.fields:
            if emission.name == name:
                return emission
        return None

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    @property
    def output_name(self) -> str:
        """Lower-cased struct name used to key the generated artifact."""
        return self.struct_name.lower()


def build_structure(
    struct_name: str,
    descriptors: Sequence[FieldDescriptor],
    type_map: "TypeMap",
    rules: Sequence["OverrideRule"] = (),
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.ERROR,
) -> StructureModel:
    """
    Build a structure model from parsed field descriptors.

    Each descriptor goes through the override rules first (first match wins)
    and falls back to the type map otherwise.

    Args:
        struct_name: Name of the source struct
        descriptors: Field descriptors in source order
        type_map: Source to target type lookup
        rules: Ordered override rules
        duplicate_policy: What to do with a repeated field name

    Returns:
        StructureModel preserving descriptor order

    Raises:
        DuplicateFieldError: On a repeated name under ``DuplicatePolicy.ERROR``
    """
    from .types import first_matching_rule

    model = StructureModel(struct_name=struct_name)
    positions: Dict[str, int] = {}

    for descriptor in descriptors:
        rule = first_matching_rule(rules, descriptor)
        if rule is not None:
            template = rule.template
            emission = FieldEmission(
                name=descriptor.name,
                schema_type=template.schema_type,
                ts_type=template.ts_type,
                required=descriptor.required,
                options=template.options,
                rule=rule.name,
                source_type=descriptor.source_type,
            )
        else:
            target = type_map.resolve(descriptor.source_type)
            emission = FieldEmission(
                name=descriptor.name,
                schema_type=target,
                ts_type=target,
                required=descriptor.required,
                source_type=descriptor.source_type,
            )

        if descriptor.name in positions:
            if duplicate_policy == DuplicatePolicy.ERROR:
                raise DuplicateFieldError(struct_name, descriptor.name)
            logger.debug(
                "Field %s.%s repeated; keeping the later declaration",
                struct_name,
                descriptor.name,
            )
            model.fields[positions[descriptor.name]] = emission
            continue

        positions[descriptor.name] = len(model.fields)
        model.add_field(emission)

    return model
