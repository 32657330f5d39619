"""Structured condition filters.

Besides plain ``field=value`` parameters, callers may send a ``filters``
parameter holding a JSON array such as::

    [{"field": "Amount", "operator": ">=", "value": 100},
     {"field": "Region", "operator": "in", "value": "North,South"}]

Values keep their JSON type: numbers and booleans are emitted bare,
strings are quoted. String matching (``contains``, ``!contains``,
``startsWith``, ``endsWith``) is case-sensitive unless the condition sets
``"ignoreCase": true``. Malformed payloads are logged and ignored rather than
rejected, matching how plain filters degrade.
"""

import json
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from sheetquery.constants import FilterOperator
from sheetquery.logging import get_logger
from sheetquery.query_builder.encoder import ValueEncoder
from sheetquery.query_builder.sanitizer import document_path, sanitize_field_name
from sheetquery.types import FilterCondition

logger = get_logger(__name__)

RawConditions = Union[str, Iterable[Union[Dict[str, Any], FilterCondition]], None]

_COMPARISONS = {
    FilterOperator.EQ: "=",
    FilterOperator.EQ_ALIAS: "=",
    FilterOperator.NE: "!=",
    FilterOperator.NE_ALIAS: "!=",
    FilterOperator.GT: ">",
    FilterOperator.GE: ">=",
    FilterOperator.LT: "<",
    FilterOperator.LE: "<=",
}

_STRING_FUNCTIONS = {
    FilterOperator.CONTAINS: "CONTAINS",
    FilterOperator.NOT_CONTAINS: "CONTAINS",
    FilterOperator.LIKE: "CONTAINS",
    FilterOperator.STARTS_WITH: "STARTSWITH",
    FilterOperator.ENDS_WITH: "ENDSWITH",
}

_VALUELESS = {FilterOperator.EMPTY, FilterOperator.NOT_EMPTY}


class ConditionClauseBuilder:
    """Compile structured conditions into clauses."""

    def __init__(self, encoder: Optional[ValueEncoder] = None):
        self.encoder = encoder or ValueEncoder()
        self._handlers: Dict[FilterOperator, Callable[[str, FilterCondition], Optional[str]]] = {
            FilterOperator.IN: self._build_membership,
            FilterOperator.NOT_IN: self._build_membership,
            FilterOperator.BETWEEN: self._build_between,
            FilterOperator.EMPTY: self._build_empty,
            FilterOperator.NOT_EMPTY: self._build_empty,
        }

    def parse(self, raw: RawConditions) -> List[FilterCondition]:
        """Parse the ``filters`` parameter into conditions.

        Accepts a JSON string, a list of dicts or a list of FilterCondition.
        Anything unparseable yields an empty list.
        """
        if raw is None or raw == "":
            return []

        if isinstance(raw, str):
            try:
                raw = json.loads(raw)
            except json.JSONDecodeError as exc:
                logger.warning("Ignoring unparseable filters parameter", extra={"error": str(exc)})
                return []

        if not isinstance(raw, list):
            logger.warning("Ignoring filters parameter that is not a list", extra={"type": type(raw).__name__})
            return []

        conditions: List[FilterCondition] = []
        for item in raw:
            if isinstance(item, FilterCondition):
                conditions.append(item)
                continue
            if not isinstance(item, dict):
                continue
            try:
                conditions.append(FilterCondition(**item))
            except (TypeError, ValidationError):
                logger.warning("Skipping malformed filter condition", extra={"condition": str(item)})
        return conditions

    def build(self, raw: RawConditions) -> List[str]:
        """Compile conditions into clauses, skipping incomplete ones."""
        clauses: List[str] = []

        for condition in self.parse(raw):
            field = sanitize_field_name(condition.field)
            if not field or not condition.operator:
                continue

            operator = FilterOperator.parse(condition.operator)
            if condition.value is None and operator not in _VALUELESS:
                continue

            clause = self._build_one(document_path(field), operator, condition)
            if clause:
                clauses.append(clause)

        return clauses

    def _build_one(self, path: str, operator: FilterOperator, condition: FilterCondition) -> Optional[str]:
        if operator in _COMPARISONS:
            return f"{path} {_COMPARISONS[operator]} {self.encoder.encode_literal(condition.value)}"

        if operator in _STRING_FUNCTIONS:
            return self._build_string_function(path, operator, condition)

        return self._handlers[operator](path, condition)

    def _build_string_function(self, path: str, operator: FilterOperator, condition: FilterCondition) -> str:
        literal = self.encoder.quote_string(condition.value)
        if condition.ignore_case:
            path, literal = f"LOWER(TOSTRING({path}))", f"LOWER({literal})"
        clause = f"{_STRING_FUNCTIONS[operator]}({path}, {literal})"
        return f"NOT {clause}" if operator == FilterOperator.NOT_CONTAINS else clause

    def _build_membership(self, path: str, condition: FilterCondition) -> Optional[str]:
        negate = FilterOperator.parse(condition.operator) == FilterOperator.NOT_IN
        value = condition.value

        if isinstance(value, (list, tuple)):
            values = [v for v in value if v is not None]
        elif isinstance(value, str) and "," in value:
            values = [v.strip() for v in value.split(",")]
        else:
            literal = self.encoder.encode_literal(value)
            return f"{path} {'!=' if negate else '='} {literal}"

        if not values:
            return None

        literals = ",".join(self.encoder.encode_literal(v) for v in values)
        return f"{path} {'NOT IN' if negate else 'IN'} ({literals})"

    def _build_between(self, path: str, condition: FilterCondition) -> Optional[str]:
        if condition.value2 is None:
            logger.warning("'between' requires value2", extra={"field": condition.field})
            return None
        low = self.encoder.encode_literal(condition.value)
        high = self.encoder.encode_literal(condition.value2)
        return f"{path} BETWEEN {low} AND {high}"

    def _build_empty(self, path: str, condition: FilterCondition) -> str:
        if FilterOperator.parse(condition.operator) == FilterOperator.EMPTY:
            return f"(NOT IS_DEFINED({path}) OR {path} = '' OR {path} = null)"
        return f"(IS_DEFINED({path}) AND {path} != '' AND {path} != null)"
