"""Unit tests for ast-json serialization of document trees."""

import json

import pytest
from utils import mixed_document

from livefind.ast import Document, Paragraph, Table, TableCell, TableRow, Text, ast_to_dict, ast_to_json, json_to_ast
from livefind.ast.serialization import dict_to_ast
from livefind.exceptions import ParsingError


@pytest.mark.unit
class TestAstToJson:
    """Test serializing trees."""

    def test_schema_version_present(self):
        data = json.loads(ast_to_json(mixed_document()))
        assert data["schema_version"] == 1
        assert data["node_type"] == "Document"

    def test_node_types_tagged(self):
        data = ast_to_dict(Paragraph(content=[Text(content="hi")]))
        assert data["node_type"] == "Paragraph"
        assert data["content"] == [{"node_type": "Text", "content": "hi", "metadata": {}}]

    def test_missing_table_header_omitted(self):
        data = ast_to_dict(Table(rows=[TableRow(cells=[TableCell()])]))
        assert "header" not in data

    def test_roundtrip_preserves_tree(self):
        doc = mixed_document()
        assert json_to_ast(ast_to_json(doc, indent=2)) == doc

    def test_roundtrip_table_header(self):
        header = TableRow(cells=[TableCell(content=[Text(content="h")])], is_header=True)
        doc = Document(children=[Table(header=header, rows=[TableRow(cells=[TableCell()])])])
        restored = json_to_ast(ast_to_json(doc))
        assert restored.children[0].header == header


@pytest.mark.unit
class TestJsonToAst:
    """Test reading trees back."""

    def test_invalid_json(self):
        with pytest.raises(ParsingError) as exc_info:
            json_to_ast("{not json")
        assert exc_info.value.parsing_stage == "json"

    def test_top_level_must_be_document(self):
        with pytest.raises(ParsingError):
            json_to_ast(json.dumps({"node_type": "Paragraph", "content": []}))

    def test_top_level_must_be_object(self):
        with pytest.raises(ParsingError):
            json_to_ast("[1, 2]")

    def test_unsupported_schema_version(self):
        with pytest.raises(ParsingError) as exc_info:
            json_to_ast(json.dumps({"schema_version": 99, "node_type": "Document", "children": []}))
        assert exc_info.value.parsing_stage == "schema"

    def test_missing_schema_version_accepted(self):
        doc = json_to_ast(json.dumps({"node_type": "Document", "children": []}))
        assert doc == Document()

    def test_unknown_node_strict(self):
        payload = {"node_type": "Document", "children": [{"node_type": "Bogus"}]}
        with pytest.raises(ParsingError):
            json_to_ast(json.dumps(payload))

    def test_unknown_node_lenient_dropped(self, caplog):
        payload = {
            "node_type": "Document",
            "children": [{"node_type": "Bogus"}, {"node_type": "Paragraph", "content": []}],
        }
        doc = json_to_ast(json.dumps(payload), strict_mode=False)
        assert doc.children == [Paragraph()]
        assert "Bogus" in caplog.text

    def test_unknown_attribute_strict(self):
        with pytest.raises(ParsingError):
            dict_to_ast({"node_type": "Text", "content": "a", "colour": "red"})

    def test_unknown_attribute_lenient(self):
        node = dict_to_ast({"node_type": "Text", "content": "a", "colour": "red"}, strict_mode=False)
        assert node == Text(content="a")

    def test_missing_required_field(self):
        with pytest.raises(ParsingError) as exc_info:
            dict_to_ast({"node_type": "Text"})
        assert exc_info.value.parsing_stage == "construct"
