"""
Type mapping and field override rules.

Both tables are immutable and are handed to the schema builder explicitly,
so a generator can swap or extend them without touching emission logic.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, Iterator, Mapping, Optional, Sequence, Tuple

from .schema import FieldDescriptor


class TypeMap(Mapping[str, str]):
    """Read-only lookup from source primitive type names to target types."""

    def __init__(self, entries: Optional[Mapping[str, str]] = None):
        self._entries = MappingProxyType(dict(entries or {}))

    def resolve(self, source_type: str) -> str:
        """
        Resolve a source type to its target type.

        Unknown types come back unchanged; callers that care can check
        membership with ``source_type in type_map``.
        """
        return self._entries.get(source_type, source_type)

    def extend(self, extra: Mapping[str, str]) -> "TypeMap":
        """Return a new map with ``extra`` entries layered on top."""
        merged = dict(self._entries)
        merged.update(extra)
        return TypeMap(merged)

    def __getitem__(self, key: str) -> str:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"TypeMap({dict(self._entries)!r})"


@dataclass(frozen=True)
class FieldTemplate:
    """Fixed emission template attached by an override rule."""

    schema_type: str
    ts_type: str
    options: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class OverrideRule:
    """Predicate-gated template that supersedes generic type mapping."""

    name: str
    predicate: Callable[[FieldDescriptor], bool]
    template: FieldTemplate

    def matches(self, descriptor: FieldDescriptor) -> bool:
        return bool(self.predicate(descriptor))


def first_matching_rule(
    rules: Sequence[OverrideRule], descriptor: FieldDescriptor
) -> Optional[OverrideRule]:
    """Return the first rule whose predicate accepts the descriptor."""
    for rule in rules:
        if rule.matches(descriptor):
            return rule
    return None


def name_equals(expected: str) -> Callable[[FieldDescriptor], bool]:
    """Predicate: field name is exactly ``expected``."""

    def predicate(descriptor: FieldDescriptor) -> bool:
        return descriptor.name == expected

    return predicate


def name_in_casefold(*names: str) -> Callable[[FieldDescriptor], bool]:
    """Predicate: field name matches any of ``names`` ignoring case."""
    folded = frozenset(n.casefold() for n in names)

    def predicate(descriptor: FieldDescriptor) -> bool:
        return descriptor.name.casefold() in folded

    return predicate


def type_map_from_config(base: TypeMap, extra: Optional[Dict[str, str]]) -> TypeMap:
    """Layer configured entries over ``base`` when there are any."""
    if not extra:
        return base
    if not isinstance(extra, Mapping):
        raise TypeError(f"type_map must be a mapping, got {type(extra).__name__}")
    return base.extend({str(k): str(v) for k, v in extra.items()})
