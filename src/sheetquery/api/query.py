"""Query operations over uploaded spreadsheet data.

Each operation takes the caller's flat parameter map (as parsed from a
query string), compiles it into a Cosmos DB statement and returns plain
models or dicts. Caller mistakes and storage failures surface as
``SheetQueryError``; transport layers map ``error_code`` to a response.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple

from sheetquery.common import missing_parameter_error, resource_not_found_error, validation_error
from sheetquery.constants import (
    CONDITIONS_PARAM,
    FIELDS_PARAM,
    FILE_ID_PARAM,
    FILE_NAME_ATTRIBUTE,
    HEADERS_ATTRIBUTE,
    IMPORT_ID_ATTRIBUTE,
    IMPORT_SUMMARY_ATTRIBUTES,
    IMPORTS_PARTITION,
    LIMIT_PARAM,
    OFFSET_PARAM,
    PAGE_PARAM,
    PAGE_SIZE_PARAM,
    PARTITION_KEY_ATTRIBUTE,
    RESERVED_PARAMETERS,
    SORT_PARAM,
)
from sheetquery.logging import get_logger
from sheetquery.protocols import DocumentStore
from sheetquery.query_builder import (
    get_clause_builder,
    get_condition_builder,
    get_query_compiler,
    normalize_import_id,
)
from sheetquery.results import (
    DistinctValueExtractor,
    paginate_pages,
    parse_field_list,
    parse_int_param,
    sanitize_document,
    sanitize_documents,
)
from sheetquery.settings import get_settings
from sheetquery.storage import get_document_store
from sheetquery.types import CompiledPredicate, FieldInfo, FieldSpecRegistry, FilePage, Page
from sheetquery.utils import traced

logger = get_logger(__name__)

FILES_RESERVED_PARAMETERS = RESERVED_PARAMETERS | {PAGE_PARAM, PAGE_SIZE_PARAM}
SORTED_RESERVED_PARAMETERS = RESERVED_PARAMETERS | {SORT_PARAM}


def _first(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def _require(params: Mapping[str, Any], name: str) -> Any:
    value = params.get(name)
    if isinstance(value, str):
        value = value.strip()
    if value is None or value == "" or value == [] or value == ():
        raise missing_parameter_error(name)
    return value


def _split_conditions(params: Mapping[str, Any]) -> Tuple[Dict[str, Any], Any]:
    """Separate the structured ``filters`` parameter from plain filters."""
    filters = dict(params)
    conditions = filters.pop(CONDITIONS_PARAM, None)
    return filters, conditions


def _row_predicate(
    params: Mapping[str, Any],
    file_id: Any,
    registry: Optional[FieldSpecRegistry],
    reserved=RESERVED_PARAMETERS,
) -> CompiledPredicate:
    settings = get_settings()
    filters, conditions = _split_conditions(params)

    clauses: List[str] = get_clause_builder(registry).build(filters, reserved)
    clauses.extend(get_condition_builder().build(conditions))

    candidates = None
    if file_id is not None:
        candidates = normalize_import_id(_first(file_id), settings.query.match_legacy_double_prefix)

    return get_query_compiler().compile(settings.query.row_document_type, candidates, clauses)


@traced(span_name="sheetquery.api.query_file_rows")
def query_file_rows(
    params: Mapping[str, Any],
    *,
    store: Optional[DocumentStore] = None,
    registry: Optional[FieldSpecRegistry] = None,
) -> Page:
    """Return the rows of one uploaded file that match the filters.

    ``fileId`` is required. ``limit``/``offset`` window the result, which
    is ordered by ``sort`` (``-Field`` for descending) or else by ingestion
    time; without ``limit`` every remaining row is returned. Rows are
    stripped of storage metadata.

    Raises:
        SheetQueryError: MISSING_PARAMETER without ``fileId``,
            INVALID_ARGUMENT for a non-integer ``limit``/``offset``,
            STORAGE_QUERY_ERROR when the query fails
    """
    file_id = _require(params, FILE_ID_PARAM)
    offset = parse_int_param(params, OFFSET_PARAM, default=0)
    limit = parse_int_param(params, LIMIT_PARAM)
    store = store or get_document_store()

    predicate = _row_predicate(params, file_id, registry, reserved=SORTED_RESERVED_PARAMETERS)
    compiler = get_query_compiler()
    items, total = store.fetch_page(
        compiler.select_all(predicate, order_by="_ts", sort=_first(params.get(SORT_PARAM))),
        compiler.select_count(predicate),
        offset=offset,
        limit=limit,
    )

    logger.info(
        "File rows queried",
        extra={"file_id": str(_first(file_id)), "returned": len(items), "total": total},
    )
    return Page(
        items=sanitize_documents(items),
        total=total,
        offset=offset,
        limit=limit,
        has_more=offset + len(items) < total,
    )


@traced(span_name="sheetquery.api.query_rows")
def query_rows(
    params: Mapping[str, Any],
    *,
    store: Optional[DocumentStore] = None,
    registry: Optional[FieldSpecRegistry] = None,
) -> Page:
    """Project the requested fields of matching rows.

    ``fields`` is required; only rows that define every requested field are
    returned, and each item holds just those fields. ``fileId`` optionally
    scopes the query to one import. ``limit`` defaults to the
    ``default_rows_limit`` setting and ``sort`` orders by a field.

    Raises:
        SheetQueryError: MISSING_PARAMETER without ``fields``,
            INVALID_ARGUMENT when no requested field name is usable or
            ``limit``/``offset`` is not an integer,
            STORAGE_QUERY_ERROR when the query fails
    """
    raw_fields = _require(params, FIELDS_PARAM)
    fields = parse_field_list(raw_fields)
    if not fields:
        raise validation_error("fields must name at least one field", field=FIELDS_PARAM, value=raw_fields)

    offset = parse_int_param(params, OFFSET_PARAM, default=0)
    limit = parse_int_param(params, LIMIT_PARAM, default=get_settings().query.default_rows_limit)
    store = store or get_document_store()

    compiler = get_query_compiler()
    predicate = compiler.require_fields(
        _row_predicate(params, params.get(FILE_ID_PARAM) or None, registry, reserved=SORTED_RESERVED_PARAMETERS),
        fields,
    )
    items, total = store.fetch_page(
        compiler.select_fields(predicate, fields, sort=_first(params.get(SORT_PARAM))),
        compiler.select_count(predicate),
        offset=offset,
        limit=limit,
    )

    logger.info(
        "Projected rows queried",
        extra={"fields": fields, "returned": len(items), "total": total},
    )
    return Page(
        items=items,
        total=total,
        offset=offset,
        limit=limit,
        has_more=offset + len(items) < total,
    )


@traced(span_name="sheetquery.api.get_distinct_file_values")
def get_distinct_file_values(
    params: Mapping[str, Any],
    *,
    store: Optional[DocumentStore] = None,
    registry: Optional[FieldSpecRegistry] = None,
) -> Dict[str, List[Any]]:
    """Distinct values per requested field, optionally scoped to one file.

    ``fields`` is required (comma-separated or repeated). ``fileId`` scopes
    the scan to one import; every other parameter filters the rows.
    """
    fields = _require(params, FIELDS_PARAM)
    store = store or get_document_store()

    predicate = _row_predicate(params, params.get(FILE_ID_PARAM) or None, registry)
    values = _extractor(store, registry).extract(predicate, fields)

    logger.info("Distinct file values extracted", extra={"fields": list(values)})
    return values


@traced(span_name="sheetquery.api.get_distinct_values")
def get_distinct_values(
    fields: Any,
    *,
    store: Optional[DocumentStore] = None,
    registry: Optional[FieldSpecRegistry] = None,
) -> Dict[str, List[Any]]:
    """Distinct values per field across every imported row."""
    fields = _require({FIELDS_PARAM: fields}, FIELDS_PARAM)
    store = store or get_document_store()

    compiler = get_query_compiler()
    outside_imports = f"c.{PARTITION_KEY_ATTRIBUTE} != {compiler.encoder.quote_string(IMPORTS_PARTITION)}"
    predicate = compiler.compile(get_settings().query.row_document_type, None, [outside_imports])
    values = _extractor(store, registry).extract(predicate, fields)

    logger.info("Distinct values extracted", extra={"fields": list(values)})
    return values


@traced(span_name="sheetquery.api.get_files_by_filters")
def get_files_by_filters(
    params: Mapping[str, Any],
    *,
    store: Optional[DocumentStore] = None,
    registry: Optional[FieldSpecRegistry] = None,
) -> FilePage:
    """List uploaded files holding at least one row that matches the filters.

    Runs two statements in order: the distinct import ids of matching rows,
    then the metadata records of those imports, newest first. ``page``
    (1-based) and ``pageSize`` window the metadata list; a missing, zero or
    negative ``pageSize`` falls back to the ``default_files_page_size``
    setting.
    """
    settings = get_settings()
    page = parse_int_param(params, PAGE_PARAM, default=1, minimum=1)
    page_size = parse_int_param(params, PAGE_SIZE_PARAM, default=0, minimum=0)
    page_size = page_size or settings.query.default_files_page_size
    store = store or get_document_store()

    row_predicate = _row_predicate(params, None, registry, reserved=FILES_RESERVED_PARAMETERS)
    compiler = get_query_compiler()
    raw_ids = store.execute(compiler.select_distinct_attribute(row_predicate, IMPORT_ID_ATTRIBUTE))

    import_ids = _unique_strings(raw_ids)

    if not import_ids:
        logger.info("No files match filters")
        return FilePage(items=[], total=0, page=page, page_size=page_size, total_pages=0)

    import_compiler = get_query_compiler(IMPORT_ID_ATTRIBUTE)
    import_predicate = import_compiler.compile(settings.query.import_document_type, import_ids)
    records = store.execute(
        import_compiler.select_attributes(
            import_predicate,
            IMPORT_SUMMARY_ATTRIBUTES,
            order_by="processedAt",
            descending=True,
        )
    )

    logger.info(
        "Files matched filters",
        extra={"import_id_count": len(import_ids), "record_count": len(records)},
    )
    return paginate_pages(records, page=page, page_size=page_size)


@traced(span_name="sheetquery.api.get_import_metadata")
def get_import_metadata(
    file_id: Any,
    *,
    store: Optional[DocumentStore] = None,
) -> Dict[str, Any]:
    """Metadata record of one uploaded file.

    Raises:
        SheetQueryError: MISSING_PARAMETER without ``file_id``,
            RESOURCE_NOT_FOUND when no import record matches
    """
    file_id = _first(_require({FILE_ID_PARAM: file_id}, FILE_ID_PARAM))
    settings = get_settings()
    store = store or get_document_store()

    compiler = get_query_compiler(IMPORT_ID_ATTRIBUTE)
    candidates = normalize_import_id(file_id, settings.query.match_legacy_double_prefix)
    predicate = compiler.compile(settings.query.import_document_type, candidates)
    records = store.execute(compiler.select_all(predicate))

    if not records:
        raise resource_not_found_error(
            f"Import {file_id} not found",
            resource_type="import",
            resource_name=str(file_id),
        )
    return sanitize_document(records[0])


@traced(span_name="sheetquery.api.list_fields")
def list_fields(
    related_to: Any = None,
    *,
    store: Optional[DocumentStore] = None,
) -> List[FieldInfo]:
    """Column names found in the headers of uploaded files.

    With ``related_to`` only the headers of files that also contain that
    column are listed. When no file has it, every known column is listed.
    Names keep the order in which they were first seen.
    """
    related = _first(related_to)
    store = store or get_document_store()
    compiler = get_query_compiler()
    predicate = compiler.imports_predicate()

    if isinstance(related, str) and related.strip():
        matches = store.execute(
            compiler.select_attributes(
                compiler.imports_predicate([compiler.array_contains(HEADERS_ATTRIBUTE, related)]),
                [FILE_NAME_ATTRIBUTE, HEADERS_ATTRIBUTE],
            )
        )
        file_names = _unique_strings(
            match.get(FILE_NAME_ATTRIBUTE) for match in matches if isinstance(match, dict)
        )
        if file_names:
            predicate = compiler.imports_predicate([compiler.attribute_in(FILE_NAME_ATTRIBUTE, file_names)])
        else:
            logger.info("No file has the related field; listing all fields", extra={"related_to": related})

    records = store.execute(compiler.select_attributes(predicate, [HEADERS_ATTRIBUTE]))
    headers = _unique_strings(
        header
        for record in records
        if isinstance(record, dict) and isinstance(record.get(HEADERS_ATTRIBUTE), list)
        for header in record[HEADERS_ATTRIBUTE]
    )

    logger.info("Fields listed", extra={"field_count": len(headers), "related_to": related})
    return [FieldInfo.from_header(name) for name in headers]


def _unique_strings(values) -> List[str]:
    seen: List[str] = []
    for value in values:
        if isinstance(value, str) and value and value not in seen:
            seen.append(value)
    return seen


def _extractor(store: DocumentStore, registry: Optional[FieldSpecRegistry]) -> DistinctValueExtractor:
    if registry is None:
        registry = FieldSpecRegistry(markers=get_settings().query.get_numeric_markers())
    return DistinctValueExtractor(store, get_query_compiler(), registry)
