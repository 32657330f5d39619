"""Field filter clauses built from query-string parameters."""

from typing import Any, Callable, Collection, Iterable, List, Mapping, Optional, Union

from sheetquery.constants import FieldType, RESERVED_PARAMETERS
from sheetquery.logging import get_logger
from sheetquery.query_builder.encoder import ValueEncoder
from sheetquery.query_builder.sanitizer import document_path, sanitize_field_name
from sheetquery.types import FieldSpec, FieldSpecRegistry, FilterEntry

logger = get_logger(__name__)

FieldTypes = Union[FieldSpecRegistry, Mapping[str, Any], Callable[[str], FieldSpec], None]


class FilterClauseBuilder:
    """Turn a flat parameter map into one boolean clause per filtered field.

    Every non-reserved, non-empty parameter becomes either
    ``c["field"] = <literal>`` or ``c["field"] IN (<literal>,...)``. Clauses
    come out in the insertion order of ``params``; they are ANDed by the
    compiler so the order carries no meaning.

    Multiplicity:
        - list/tuple value: multi-value, empty elements dropped
        - string containing ``,``: split, each element trimmed, blanks dropped
        - anything else: single value

    Field types come from ``field_types`` when given, then from the
    builder's registry, falling back to name-based inference.

    Example:
        >>> builder = FilterClauseBuilder()
        >>> builder.build({"Category": "A,B", "Year": "2020,2021", "limit": "10"})
        ['c["Category"] IN (\\'A\\',\\'B\\')', 'c["Year"] IN (2020,2021)']
    """

    def __init__(
        self,
        encoder: Optional[ValueEncoder] = None,
        registry: Optional[FieldSpecRegistry] = None,
    ):
        self.encoder = encoder or ValueEncoder()
        self.registry = registry if registry is not None else FieldSpecRegistry()

    def entries(
        self,
        params: Mapping[str, Any],
        reserved: Collection[str] = RESERVED_PARAMETERS,
    ) -> List[FilterEntry]:
        """Split parameters into filter entries, skipping reserved and empty ones."""
        result: List[FilterEntry] = []

        for raw_field, value in params.items():
            if raw_field in reserved or self.encoder.is_empty(value):
                continue

            field = sanitize_field_name(raw_field)
            if not field:
                logger.debug("Dropping filter with unusable field name", extra={"raw_field": str(raw_field)})
                continue

            if isinstance(value, (list, tuple)):
                values = self._clean_values(value, trim=False)
                multi = True
            elif isinstance(value, str) and "," in value:
                values = self._clean_values(value.split(","), trim=True)
                multi = True
            else:
                values = [value if isinstance(value, str) else str(value)]
                multi = False

            if not values:
                continue

            result.append(FilterEntry(field=field, raw_values=values, is_multi_value=multi))

        return result

    def build(
        self,
        params: Mapping[str, Any],
        reserved: Collection[str] = RESERVED_PARAMETERS,
        field_types: FieldTypes = None,
    ) -> List[str]:
        """Compile ``params`` into clauses.

        Args:
            params: Parsed query-string map; values are strings or lists of strings
            reserved: Parameter names that never act as filters
            field_types: Optional per-request type declarations, either a
                registry, a ``{name: "numeric" | "string"}`` mapping or a
                callable returning a FieldSpec

        Returns:
            One clause per filtered field
        """
        resolve = self._resolver(field_types)
        clauses: List[str] = []

        for entry in self.entries(params, reserved):
            field_type = resolve(entry.field).field_type
            path = document_path(entry.field)

            if entry.is_multi_value:
                clauses.append(f"{path} IN ({self.encoder.encode_many(entry.raw_values, field_type)})")
            else:
                clauses.append(f"{path} = {self.encoder.encode(entry.raw_values[0], field_type)}")

        logger.debug("Built filter clauses", extra={"clause_count": len(clauses)})
        return clauses

    def _resolver(self, field_types: FieldTypes) -> Callable[[str], FieldSpec]:
        if field_types is None:
            return self.registry.resolve
        if isinstance(field_types, FieldSpecRegistry):
            return field_types.resolve
        if isinstance(field_types, Mapping):
            declared = {name: FieldType(kind) for name, kind in field_types.items()}

            def resolve(name: str) -> FieldSpec:
                if name in declared:
                    return FieldSpec(name=name, field_type=declared[name])
                return self.registry.resolve(name)

            return resolve
        return field_types

    @staticmethod
    def _clean_values(values: Iterable[Any], trim: bool) -> List[str]:
        cleaned: List[str] = []
        for value in values:
            if value is None:
                continue
            text = value if isinstance(value, str) else str(value)
            if trim:
                text = text.strip()
            if text == "":
                continue
            cleaned.append(text)
        return cleaned
