"""
NestJS-specific configuration.

Controls the class-level ``@Schema`` options shared by every emitted class and
any extra type mappings.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


@dataclass(frozen=True)
class NestConfig:
    """Settings read from ``GeneratorConfig.language_config``."""

    schema_id: bool = True
    timestamps: bool = True
    virtuals: bool = True
    version_key: bool = False
    type_map: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "NestConfig":
        """Build from a config dict, ignoring keys this target does not use."""
        known = {f for f in cls.__dataclass_fields__}
        return cls(**{k: v for k, v in values.items() if k in known})

    def schema_options(self) -> List[Tuple[str, Any]]:
        """Ordered ``@Schema({...})`` options."""
        serialization = [("virtuals", self.virtuals), ("versionKey", self.version_key)]
        return [
            ("id", self.schema_id),
            ("timestamps", self.timestamps),
            ("toJSON", serialization),
            ("toObject", serialization),
        ]

    def validate(self) -> List[str]:
        warnings = []
        for name in ("schema_id", "timestamps", "virtuals", "version_key"):
            if not isinstance(getattr(self, name), bool):
                warnings.append(f"{name} should be true or false")
        if not isinstance(self.type_map, dict):
            warnings.append("type_map must be an object")
        return warnings
