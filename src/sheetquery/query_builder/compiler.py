"""Predicate compilation and statement rendering."""

import re
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from sheetquery.constants import (
    DocumentType,
    DOCUMENT_TYPE_ATTRIBUTE,
    IMPORTS_PARTITION,
    PARTITION_KEY_ATTRIBUTE,
    SORT_DESCENDING_PREFIX,
)
from sheetquery.logging import get_logger
from sheetquery.query_builder.encoder import ValueEncoder
from sheetquery.query_builder.sanitizer import document_path, sanitize_field_name
from sheetquery.types import CompiledPredicate, ImportIdCandidateSet

logger = get_logger(__name__)

_ATTRIBUTE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

ImportCandidates = Union[ImportIdCandidateSet, Iterable[str], None]


class QueryCompiler:
    """Assemble the discriminator, import id and field clauses into one predicate.

    The compiled predicate has the shape::

        c.documentType = '<kind>'
            [AND (c.<import_attribute> = 'a' OR c.<import_attribute> = 'b')]
            [AND <clause> AND <clause> ...]

    The compiler knows nothing about pagination; paged reads are the
    storage adapter's concern.

    Args:
        import_attribute: Attribute the import candidates are matched on.
            ``_partitionKey`` for row documents, ``_importId`` for import
            metadata lookups.
        encoder: Literal encoder for discriminator and candidate values
    """

    def __init__(
        self,
        import_attribute: str = PARTITION_KEY_ATTRIBUTE,
        encoder: Optional[ValueEncoder] = None,
    ):
        self.import_attribute = self._validate_attribute(import_attribute)
        self.encoder = encoder or ValueEncoder()

    def compile(
        self,
        discriminator: Union[DocumentType, str],
        import_candidates: ImportCandidates = None,
        clauses: Sequence[str] = (),
    ) -> CompiledPredicate:
        """Build the predicate.

        Args:
            discriminator: Document kind every result must have
            import_candidates: Import ids ORed together; None omits the
                segment so the query spans all imports. An empty collection
                yields a segment that matches nothing.
            clauses: Field clauses ANDed onto the predicate

        Returns:
            CompiledPredicate
        """
        kind = discriminator.value if isinstance(discriminator, DocumentType) else str(discriminator)
        parts: List[str] = [f"c.{DOCUMENT_TYPE_ATTRIBUTE} = {self.encoder.quote_string(kind)}"]

        if import_candidates is not None:
            parts.append(self._import_segment(import_candidates))

        parts.extend(clause for clause in clauses if clause)

        predicate = CompiledPredicate(sql=" AND ".join(parts))
        logger.debug("Compiled predicate", extra={"predicate": predicate.sql})
        return predicate

    def _import_segment(self, import_candidates: ImportCandidates) -> str:
        if isinstance(import_candidates, ImportIdCandidateSet):
            candidates = list(import_candidates.candidates)
        else:
            candidates = list(import_candidates)

        if not candidates:
            return "false"

        attribute = f"c.{self.import_attribute}"
        ors = " OR ".join(f"{attribute} = {self.encoder.quote_string(c)}" for c in candidates)
        return f"({ors})"

    def imports_predicate(self, clauses: Sequence[str] = ()) -> CompiledPredicate:
        """Predicate over the import metadata partition.

        Field listings read ``headers`` from these records, which are
        addressed by partition rather than by discriminator.
        """
        parts = [f"c.{PARTITION_KEY_ATTRIBUTE} = {self.encoder.quote_string(IMPORTS_PARTITION)}"]
        parts.extend(clause for clause in clauses if clause)
        return CompiledPredicate(sql=" AND ".join(parts))

    def require_fields(self, predicate: CompiledPredicate, fields: Sequence[str]) -> CompiledPredicate:
        """AND an ``IS_DEFINED`` test for every field onto the predicate."""
        tests = [f"IS_DEFINED({document_path(field)})" for field in fields if sanitize_field_name(field)]
        if not tests:
            return predicate
        return CompiledPredicate(sql=" AND ".join([predicate.sql, *tests]))

    def array_contains(self, attribute: str, value: str) -> str:
        return f"ARRAY_CONTAINS(c.{self._validate_attribute(attribute)}, {self.encoder.quote_string(value)})"

    def attribute_in(self, attribute: str, values: Iterable[str]) -> str:
        """``c.<attr> IN (...)``; an empty collection matches nothing."""
        literals = [self.encoder.quote_string(value) for value in values]
        if not literals:
            return "false"
        return f"c.{self._validate_attribute(attribute)} IN ({', '.join(literals)})"

    def select_all(
        self,
        predicate: CompiledPredicate,
        order_by: Optional[str] = None,
        descending: bool = False,
        sort: Optional[str] = None,
    ) -> str:
        """``SELECT * FROM c WHERE <predicate> [ORDER BY ...]``"""
        return self.select_attributes(predicate, None, order_by=order_by, descending=descending, sort=sort)

    def select_attributes(
        self,
        predicate: CompiledPredicate,
        attributes: Optional[Sequence[str]],
        order_by: Optional[str] = None,
        descending: bool = False,
        sort: Optional[str] = None,
    ) -> str:
        """Project fixed document attributes (not user-supplied field names).

        ``sort`` names a user field (``-`` prefix for descending) and wins
        over the fixed ``order_by`` attribute when it sanitizes to a name.
        """
        if attributes:
            projection = ", ".join(f"c.{self._validate_attribute(a)}" for a in attributes)
        else:
            projection = "*"

        sql = f"SELECT {projection} FROM c WHERE {predicate.sql}"
        return sql + self._order_clause(order_by, descending, sort)

    def select_fields(
        self,
        predicate: CompiledPredicate,
        fields: Sequence[str],
        sort: Optional[str] = None,
    ) -> str:
        """Project user-supplied fields: ``SELECT c["a"], c["b"] FROM c ...``.

        Pair with ``require_fields`` so that only documents defining every
        projected field are returned.

        Raises:
            ValueError: If no field survives sanitization
        """
        paths = [document_path(field) for field in fields if sanitize_field_name(field)]
        if not paths:
            raise ValueError("At least one projected field is required")
        sql = f"SELECT {', '.join(paths)} FROM c WHERE {predicate.sql}"
        return sql + self._order_clause(None, False, sort)

    @staticmethod
    def parse_sort(sort: Optional[str]) -> Optional[Tuple[str, bool]]:
        """Split ``Amount`` / ``-Amount`` into the sanitized field and descending flag.

        Returns None when nothing usable remains.
        """
        if not sort or not isinstance(sort, str):
            return None
        raw = sort.strip()
        descending = raw.startswith(SORT_DESCENDING_PREFIX)
        field = sanitize_field_name(raw[len(SORT_DESCENDING_PREFIX):] if descending else raw).strip()
        if not field:
            return None
        return field, descending

    def _order_clause(self, order_by: Optional[str], descending: bool, sort: Optional[str]) -> str:
        parsed = self.parse_sort(sort)
        if parsed is not None:
            field, descending = parsed
            return f" ORDER BY {document_path(field)} {'DESC' if descending else 'ASC'}"
        if order_by:
            return f" ORDER BY c.{self._validate_attribute(order_by)} {'DESC' if descending else 'ASC'}"
        return ""

    def select_distinct_value(self, predicate: CompiledPredicate, field: str) -> str:
        """Distinct values of a user-supplied field among documents that define it."""
        path = document_path(field)
        return f"SELECT DISTINCT VALUE {path} FROM c WHERE {predicate.sql} AND IS_DEFINED({path})"

    def select_distinct_attribute(self, predicate: CompiledPredicate, attribute: str) -> str:
        """Distinct values of a fixed document attribute such as ``_importId``."""
        return f"SELECT DISTINCT VALUE c.{self._validate_attribute(attribute)} FROM c WHERE {predicate.sql}"

    def select_count(self, predicate: CompiledPredicate) -> str:
        return f"SELECT VALUE COUNT(1) FROM c WHERE {predicate.sql}"

    @staticmethod
    def with_pagination(sql: str, offset: int, limit: int) -> str:
        """Append ``OFFSET``/``LIMIT`` to a statement."""
        if offset < 0 or limit < 0:
            raise ValueError(f"Invalid window offset={offset} limit={limit}")
        return f"{sql} OFFSET {int(offset)} LIMIT {int(limit)}"

    @staticmethod
    def _validate_attribute(attribute: str) -> str:
        """Validate a fixed attribute name used with dot notation.

        Raises:
            ValueError: If the name is not a plain identifier
        """
        if not attribute or not _ATTRIBUTE_RE.match(attribute):
            raise ValueError(f"Invalid attribute name: {attribute!r}")
        return attribute
