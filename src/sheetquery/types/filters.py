"""Transient models built while compiling a request into a predicate.

None of these outlive a single request: they are constructed from the
query-string map, used to render clauses and discarded once the statement
has been executed.
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence

from pydantic import Field

from sheetquery.constants import FieldType, NUMERIC_FIELD_MARKER
from sheetquery.types.base import SheetQueryBaseModel


class FieldSpec(SheetQueryBaseModel):
    """Name and value type of one filterable field."""

    name: str
    field_type: FieldType = FieldType.STRING

    @property
    def is_numeric(self) -> bool:
        return self.field_type == FieldType.NUMERIC

    @classmethod
    def infer(cls, name: str, markers: Sequence[str] = (NUMERIC_FIELD_MARKER,)) -> "FieldSpec":
        """Infer the type from the field name alone.

        A name containing any marker (case-insensitive) is numeric; every
        other field is a string. The value never influences the result.
        """
        lowered = name.lower()
        numeric = any(marker.lower() in lowered for marker in markers)
        return cls(name=name, field_type=FieldType.NUMERIC if numeric else FieldType.STRING)


class FieldSpecRegistry:
    """Explicit field type declarations, with name-based inference as fallback.

    Example:
        >>> registry = FieldSpecRegistry([FieldSpec(name="Zip", field_type="string")])
        >>> registry.resolve("Zip").field_type
        'string'
        >>> registry.resolve("Fiscal Year").field_type
        'numeric'
    """

    def __init__(
        self,
        specs: Optional[Iterable[FieldSpec]] = None,
        markers: Sequence[str] = (NUMERIC_FIELD_MARKER,),
    ):
        self._specs: Dict[str, FieldSpec] = {}
        self.markers = tuple(markers)
        for spec in specs or ():
            self.register(spec)

    def register(self, spec: FieldSpec) -> None:
        self._specs[spec.name] = spec

    def declare(self, name: str, field_type: FieldType) -> FieldSpec:
        spec = FieldSpec(name=name, field_type=field_type)
        self.register(spec)
        return spec

    def resolve(self, name: str) -> FieldSpec:
        spec = self._specs.get(name)
        if spec is not None:
            return spec
        return FieldSpec.infer(name, self.markers)

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def __len__(self) -> int:
        return len(self._specs)

    @classmethod
    def from_mapping(
        cls,
        mapping: Dict[str, Any],
        markers: Sequence[str] = (NUMERIC_FIELD_MARKER,),
    ) -> "FieldSpecRegistry":
        """Build a registry from ``{name: "numeric" | "string"}``."""
        return cls(
            (FieldSpec(name=name, field_type=FieldType(value)) for name, value in mapping.items()),
            markers=markers,
        )


class FilterEntry(SheetQueryBaseModel):
    """One field filter after multiplicity has been determined."""

    field: str
    raw_values: List[str] = Field(default_factory=list)
    is_multi_value: bool = False


class ImportIdCandidateSet(SheetQueryBaseModel):
    """Stored partition key values that may hold a file's rows."""

    candidates: List[str] = Field(min_length=1)


class CompiledPredicate(SheetQueryBaseModel):
    """The boolean expression placed after ``WHERE``."""

    sql: str

    def __str__(self) -> str:
        return self.sql


class FilterCondition(SheetQueryBaseModel):
    """One entry of the structured ``filters`` request parameter."""

    field: str
    operator: str
    value: Any = None
    value2: Any = None
    ignore_case: bool = Field(default=False, alias="ignoreCase")
