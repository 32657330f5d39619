"""Unit tests for predicate compilation and statement rendering."""

import pytest

from sheetquery.constants import DocumentType
from sheetquery.query_builder import FilterClauseBuilder, QueryCompiler, normalize_import_id
from sheetquery.types import CompiledPredicate


class TestCompile:

    @pytest.fixture
    def compiler(self):
        return QueryCompiler()

    def test_full_predicate(self, compiler):
        clauses = FilterClauseBuilder().build({"Category": "A,B", "Year": "2020,2021"})
        predicate = compiler.compile(DocumentType.ROW, normalize_import_id("42"), clauses)
        assert predicate.sql == (
            "c.documentType = 'excel-row'"
            " AND (c._partitionKey = 'import_42')"
            " AND c[\"Category\"] IN ('A','B')"
            " AND c[\"Year\"] IN (2020,2021)"
        )

    def test_discriminator_only(self, compiler):
        assert str(compiler.compile(DocumentType.ROW)) == "c.documentType = 'excel-row'"

    def test_discriminator_as_string(self, compiler):
        assert compiler.compile("excel-import").sql == "c.documentType = 'excel-import'"

    def test_multiple_candidates_are_ored(self, compiler):
        candidates = normalize_import_id("import_42", match_legacy_double_prefix=True)
        assert compiler.compile(DocumentType.ROW, candidates).sql == (
            "c.documentType = 'excel-row'"
            " AND (c._partitionKey = 'import_42' OR c._partitionKey = 'import_import_42')"
        )

    def test_empty_candidates_match_nothing(self, compiler):
        assert compiler.compile(DocumentType.ROW, []).sql == "c.documentType = 'excel-row' AND false"

    def test_import_attribute_is_configurable(self):
        compiler = QueryCompiler(import_attribute="_importId")
        assert compiler.compile(DocumentType.IMPORT, ["import_1", "import_2"]).sql == (
            "c.documentType = 'excel-import'"
            " AND (c._importId = 'import_1' OR c._importId = 'import_2')"
        )

    def test_candidates_are_escaped(self, compiler):
        assert compiler.compile(DocumentType.ROW, ["import_a'b"]).sql.endswith("(c._partitionKey = 'import_a\\'b')")

    def test_blank_clauses_are_ignored(self, compiler):
        assert compiler.compile(DocumentType.ROW, None, ["", 'c["A"] = 1']).sql == (
            "c.documentType = 'excel-row' AND c[\"A\"] = 1"
        )

    def test_invalid_import_attribute(self):
        with pytest.raises(ValueError, match="Invalid attribute name"):
            QueryCompiler(import_attribute="_importId OR 1=1")


class TestRenderers:

    @pytest.fixture
    def compiler(self):
        return QueryCompiler()

    @pytest.fixture
    def predicate(self):
        return CompiledPredicate(sql="c.documentType = 'excel-row'")

    def test_select_all(self, compiler, predicate):
        assert compiler.select_all(predicate) == "SELECT * FROM c WHERE c.documentType = 'excel-row'"

    def test_select_all_ordered(self, compiler, predicate):
        assert compiler.select_all(predicate, order_by="_ts") == (
            "SELECT * FROM c WHERE c.documentType = 'excel-row' ORDER BY c._ts ASC"
        )

    def test_select_attributes_descending(self, compiler, predicate):
        assert compiler.select_attributes(predicate, ["id", "fileName"], order_by="processedAt", descending=True) == (
            "SELECT c.id, c.fileName FROM c WHERE c.documentType = 'excel-row' ORDER BY c.processedAt DESC"
        )

    def test_select_distinct_value(self, compiler, predicate):
        assert compiler.select_distinct_value(predicate, "Sub Category") == (
            'SELECT DISTINCT VALUE c["Sub Category"] FROM c'
            " WHERE c.documentType = 'excel-row' AND IS_DEFINED(c[\"Sub Category\"])"
        )

    def test_select_distinct_value_sanitizes_field(self, compiler, predicate):
        assert 'c["Year"]' in compiler.select_distinct_value(predicate, 'Year"]')

    def test_select_distinct_attribute(self, compiler, predicate):
        assert compiler.select_distinct_attribute(predicate, "_importId") == (
            "SELECT DISTINCT VALUE c._importId FROM c WHERE c.documentType = 'excel-row'"
        )

    def test_select_count(self, compiler, predicate):
        assert compiler.select_count(predicate) == "SELECT VALUE COUNT(1) FROM c WHERE c.documentType = 'excel-row'"

    def test_with_pagination(self, compiler):
        assert compiler.with_pagination("SELECT * FROM c", 20, 10) == "SELECT * FROM c OFFSET 20 LIMIT 10"

    def test_with_pagination_rejects_negative_window(self, compiler):
        with pytest.raises(ValueError):
            compiler.with_pagination("SELECT * FROM c", -1, 10)

    @pytest.mark.parametrize("attribute", ["", "a b", "c.x", "x;--", "1abc"])
    def test_invalid_attribute_names(self, compiler, predicate, attribute):
        with pytest.raises(ValueError):
            compiler.select_distinct_attribute(predicate, attribute)


class TestProjectionAndSort:

    @pytest.fixture
    def compiler(self):
        return QueryCompiler()

    @pytest.fixture
    def predicate(self):
        return CompiledPredicate(sql="c.documentType = 'excel-row'")

    def test_require_fields_adds_is_defined(self, compiler, predicate):
        assert compiler.require_fields(predicate, ["Name", "Sub Category"]).sql == (
            "c.documentType = 'excel-row'"
            ' AND IS_DEFINED(c["Name"]) AND IS_DEFINED(c["Sub Category"])'
        )

    def test_require_no_fields_keeps_predicate(self, compiler, predicate):
        assert compiler.require_fields(predicate, ["!!"]) is predicate

    def test_select_fields(self, compiler, predicate):
        assert compiler.select_fields(predicate, ["Name", 'Email"]']) == (
            'SELECT c["Name"], c["Email"] FROM c WHERE c.documentType = \'excel-row\''
        )

    def test_select_fields_requires_a_field(self, compiler, predicate):
        with pytest.raises(ValueError):
            compiler.select_fields(predicate, ["", "[]"])

    @pytest.mark.parametrize(
        "sort, expected",
        [
            ("Amount", ("Amount", False)),
            ("-Amount", ("Amount", True)),
            (" -Sub Category ", ("Sub Category", True)),
            ('Name"]', ("Name", False)),
            ("-", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parse_sort(self, sort, expected):
        assert QueryCompiler.parse_sort(sort) == expected

    def test_sort_wins_over_fixed_order(self, compiler, predicate):
        assert compiler.select_all(predicate, order_by="_ts", sort="-Amount") == (
            "SELECT * FROM c WHERE c.documentType = 'excel-row' ORDER BY c[\"Amount\"] DESC"
        )

    def test_unusable_sort_falls_back_to_fixed_order(self, compiler, predicate):
        assert compiler.select_all(predicate, order_by="_ts", sort="-").endswith("ORDER BY c._ts ASC")

    def test_select_fields_sorted(self, compiler, predicate):
        assert compiler.select_fields(predicate, ["Name"], sort="Name").endswith('ORDER BY c["Name"] ASC')


class TestImportsPartition:

    @pytest.fixture
    def compiler(self):
        return QueryCompiler()

    def test_imports_predicate(self, compiler):
        assert compiler.imports_predicate().sql == "c._partitionKey = 'imports'"

    def test_array_contains(self, compiler):
        predicate = compiler.imports_predicate([compiler.array_contains("headers", "O'Brien")])
        assert predicate.sql == "c._partitionKey = 'imports' AND ARRAY_CONTAINS(c.headers, 'O\\'Brien')"

    def test_attribute_in(self, compiler):
        assert compiler.attribute_in("fileName", ["a.xlsx", "b.xlsx"]) == "c.fileName IN ('a.xlsx', 'b.xlsx')"

    def test_attribute_in_empty_matches_nothing(self, compiler):
        assert compiler.attribute_in("fileName", []) == "false"
