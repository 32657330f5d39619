"""Distinct value extraction for filter pickers."""

from typing import Any, Dict, List, Optional, Sequence, Union

from sheetquery.common import SheetQueryError, storage_query_error
from sheetquery.logging import get_logger
from sheetquery.protocols import DocumentStore
from sheetquery.query_builder.compiler import QueryCompiler
from sheetquery.query_builder.sanitizer import sanitize_field_name
from sheetquery.types import CompiledPredicate, FieldSpecRegistry
from sheetquery.utils import coerce_number

logger = get_logger(__name__)

FieldList = Union[str, Sequence[Any]]


def parse_field_list(fields: Optional[FieldList]) -> List[str]:
    """Split and sanitize a field list, dropping empty and repeated names."""
    if fields is None:
        return []
    raw = fields.split(",") if isinstance(fields, str) else list(fields)

    names: List[str] = []
    for item in raw:
        name = sanitize_field_name(item).strip()
        if name and name not in names:
            names.append(name)
    return names


class DistinctValueExtractor:
    """Collect the distinct values of each requested field under a predicate.

    One ``SELECT DISTINCT VALUE`` statement is issued per field, in request
    order. ``None`` and blank strings are dropped. Numeric fields (as
    resolved by the registry, by default any name containing ``year``) have
    their values coerced to numbers, and values that do not parse are
    dropped.

    A storage failure on any field fails the whole extraction; no partial
    result is returned.

    Args:
        store: DocumentStore executing the statements
        compiler: Compiler used to render the DISTINCT statements
        registry: Field type registry deciding which fields are numeric
    """

    def __init__(
        self,
        store: DocumentStore,
        compiler: Optional[QueryCompiler] = None,
        registry: Optional[FieldSpecRegistry] = None,
    ):
        self.store = store
        self.compiler = compiler or QueryCompiler()
        self.registry = registry if registry is not None else FieldSpecRegistry()

    def extract(self, predicate: CompiledPredicate, fields: Optional[FieldList]) -> Dict[str, List[Any]]:
        """Return ``{field: [distinct values]}`` keyed by sanitized field name.

        Raises:
            SheetQueryError: STORAGE_QUERY_ERROR naming the failing field
        """
        result: Dict[str, List[Any]] = {}

        for field in parse_field_list(fields):
            sql = self.compiler.select_distinct_value(predicate, field)
            try:
                values = self.store.execute(sql)
            except SheetQueryError as exc:
                exc.details.setdefault("field", field)
                raise
            except Exception as exc:
                raise storage_query_error(sql, exc, details={"field": field}) from exc

            result[field] = self._clean(field, values)
            logger.debug(
                "Extracted distinct values",
                extra={"field": field, "value_count": len(result[field])},
            )

        return result

    def _clean(self, field: str, values: Sequence[Any]) -> List[Any]:
        numeric = self.registry.resolve(field).is_numeric
        cleaned: List[Any] = []

        for value in values:
            if value is None or (isinstance(value, str) and value.strip() == ""):
                continue
            if numeric:
                number = coerce_number(value)
                if number is None or number in cleaned:
                    continue
                cleaned.append(number)
            else:
                cleaned.append(value)

        return cleaned
