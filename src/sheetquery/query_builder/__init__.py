"""Query builder module for Cosmos DB predicate generation.

This module turns a caller's flat filter map into the text of a Cosmos DB
NoSQL query over the records container. Builders only generate statement
text; executing it is the job of a ``DocumentStore``.

Architecture:
    - sanitizer.py: field name allow-list and ``c["field"]`` paths
    - encoder.py: literal escaping and numeric rendering
    - import_ids.py: candidate partition keys for a file identifier
    - clauses.py: one clause per ``field=value`` parameter
    - conditions.py: clauses for the structured ``filters`` parameter
    - compiler.py: predicate assembly and statement rendering
    - factory.py: settings-aware construction

Design Principles:
    1. **Text Generation Only**: nothing here performs I/O
    2. **Sanitize Names, Escape Values**: every user-supplied field name is
       stripped to ``[a-zA-Z0-9 _-]`` and every string literal is escaped
    3. **Degrade, Don't Reject**: unusable filters are dropped, never raised
    4. **Stateless**: builders hold configuration only

Example:
    >>> from sheetquery.query_builder import (
    ...     get_clause_builder, get_query_compiler, normalize_import_id,
    ... )
    >>> from sheetquery.constants import DocumentType
    >>>
    >>> clauses = get_clause_builder().build({"Category": "A,B", "Year": "2020,2021"})
    >>> compiler = get_query_compiler()
    >>> predicate = compiler.compile(
    ...     DocumentType.ROW, normalize_import_id("42"), clauses
    ... )
    >>> print(predicate)
    c.documentType = 'excel-row' AND (c._partitionKey = 'import_42') AND c["Category"] IN ('A','B') AND c["Year"] IN (2020,2021)

Security:
    Cosmos DB offers no parameter binding for property paths, so field names
    are protected only by the sanitizer. Values are escaped (backslash first,
    then single quote) and numeric values are emitted only after parsing as a
    finite number.

See Also:
    - sheetquery.results: post-processing of query results
    - sheetquery.storage: query execution
"""

from sheetquery.query_builder.clauses import FilterClauseBuilder
from sheetquery.query_builder.compiler import QueryCompiler
from sheetquery.query_builder.conditions import ConditionClauseBuilder
from sheetquery.query_builder.encoder import ValueEncoder
from sheetquery.query_builder.factory import (
    QueryBuilderFactory,
    get_clause_builder,
    get_condition_builder,
    get_query_compiler,
)
from sheetquery.query_builder.import_ids import normalize_import_id, strip_import_prefixes
from sheetquery.query_builder.sanitizer import document_path, sanitize_field_name

__all__ = [
    "FilterClauseBuilder",
    "QueryCompiler",
    "ConditionClauseBuilder",
    "ValueEncoder",
    "QueryBuilderFactory",
    "get_clause_builder",
    "get_condition_builder",
    "get_query_compiler",
    "normalize_import_id",
    "strip_import_prefixes",
    "document_path",
    "sanitize_field_name",
]
