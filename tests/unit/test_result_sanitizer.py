"""Unit tests for result document sanitization."""

from sheetquery.results import sanitize_document, sanitize_documents


class TestSanitizeDocument:

    def test_drops_internal_attributes(self):
        document = {"id": "1", "_rid": "x", "documentType": "excel-row", "Name": "A"}
        assert sanitize_document(document) == {"Name": "A"}

    def test_drops_every_underscore_key(self):
        document = {"_partitionKey": "import_1", "_importId": "import_1", "_ts": 1, "_etag": "e", "Year": 2020}
        assert sanitize_document(document) == {"Year": 2020}

    def test_keeps_order_of_retained_keys(self):
        document = {"b": 1, "_x": 0, "a": 2, "id": "9", "c": 3}
        assert list(sanitize_document(document)) == ["b", "a", "c"]

    def test_does_not_mutate_input(self):
        document = {"id": "1", "Name": "A"}
        sanitize_document(document)
        assert document == {"id": "1", "Name": "A"}

    def test_similar_names_are_kept(self):
        document = {"ID": 1, "Id": 2, "document_type": "x", "name_": "y"}
        assert sanitize_document(document) == document

    def test_sanitize_documents(self):
        assert sanitize_documents([{"id": "1", "A": 1}, {"_ts": 2, "B": 2}]) == [{"A": 1}, {"B": 2}]
