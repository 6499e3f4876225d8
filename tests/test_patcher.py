import json

import pytest

from nodeedit.errors import MalformedDocumentError, MissingPathError
from nodeedit.graph_builder import build_graph
from nodeedit.normalizer import normalize_node_rows
from nodeedit.patcher import apply_edits, parse_document, patch_document, serialize_document


def _doc(obj) -> str:
    return json.dumps(obj, indent=2)


class TestPatchDocument:

    def test_merge_not_replace(self):
        text = _doc({"target": {"a": 1, "b": 2}})
        result = patch_document(text, ["target"], {"a": 99})
        assert json.loads(result) == {"target": {"a": 99, "b": 2}}

    def test_end_to_end_document(self):
        text = _doc({"user": {"name": "Al", "age": 30}})
        result = patch_document(text, ["user"], {"name": "Ally", "age": 30})
        assert json.loads(result) == {"user": {"name": "Ally", "age": 30}}

    def test_output_uses_two_space_indent_and_keeps_key_order(self):
        text = '{"z": 1, "a": {"m": 1, "b": 2}}'
        result = patch_document(text, ["a"], {"b": 3})
        assert result == '{\n  "z": 1,\n  "a": {\n    "m": 1,\n    "b": 3\n  }\n}'

    def test_custom_indent(self):
        result = patch_document('{"a": {"b": 1}}', ["a"], {"b": 2}, indent=4)
        assert result == '{\n    "a": {\n        "b": 2\n    }\n}'

    def test_array_element_target(self):
        text = _doc({"items": [{"id": 1, "v": "a"}, {"id": 2, "v": "b"}]})
        result = json.loads(patch_document(text, ["items", 1], {"v": "z"}))
        assert result["items"] == [{"id": 1, "v": "a"}, {"id": 2, "v": "z"}]

    def test_siblings_and_nested_children_untouched(self):
        original = {
            "a": {"x": 1, "child": {"deep": [1, 2, 3]}},
            "b": {"x": 1},
        }
        result = json.loads(patch_document(_doc(original), ["a"], {"x": 2}))
        assert result["a"]["child"] == {"deep": [1, 2, 3]}
        assert result["b"] == {"x": 1}

    def test_non_ascii_text_is_kept(self):
        result = patch_document('{"a": {"name": "x"}}', ["a"], {"name": "café"})
        assert '"café"' in result

    def test_root_path_merges_at_top_level(self):
        text = _doc({"title": "old", "user": {"name": "Al"}})
        result = json.loads(patch_document(text, [], {"title": "new"}))
        assert result == {"title": "new", "user": {"name": "Al"}}

    def test_root_array_with_edits_is_rejected(self):
        with pytest.raises(MissingPathError):
            patch_document("[1, 2]", [], {"a": 1})

    def test_non_object_target_with_edits_is_rejected(self):
        with pytest.raises(MissingPathError):
            patch_document(_doc({"a": [1, 2]}), ["a"], {"x": 1})

    def test_empty_edits_on_array_node_is_a_no_op(self):
        text = _doc({"a": [1, 2]})
        assert patch_document(text, ["a"], {}) == text

    def test_missing_intermediate_raises(self):
        with pytest.raises(MissingPathError) as excinfo:
            patch_document(_doc({"a": {}}), ["nope", "b"], {"x": 1})
        assert excinfo.value.depth == 0

    def test_missing_target_raises(self):
        with pytest.raises(MissingPathError):
            patch_document(_doc({"a": {}}), ["b"], {"x": 1})

    @pytest.mark.parametrize("text", ["{not json", "", '{"a": NaN}', '{"a": Infinity}'])
    def test_malformed_document(self, text):
        with pytest.raises(MalformedDocumentError):
            patch_document(text, ["a"], {"x": 1})

    def test_malformed_document_reports_position(self):
        with pytest.raises(MalformedDocumentError) as excinfo:
            parse_document('{\n  "a": }')
        assert excinfo.value.lineno == 2

    def test_out_of_range_number_is_malformed(self):
        with pytest.raises(MalformedDocumentError):
            parse_document('{"user": {"name": "Al", "big": 1e400}}')

    def test_in_range_floats_still_parse(self):
        assert parse_document('{"a": 1.5e300, "b": -0.25}') == {"a": 1.5e300, "b": -0.25}

    def test_non_finite_edit_value_is_malformed(self):
        with pytest.raises(MalformedDocumentError):
            patch_document(_doc({"a": {"x": 1}}), ["a"], {"x": float("inf")})


class TestRoundTrip:

    DOCUMENT = {
        "user": {"name": "Al", "age": 30, "active": True, "manager": None},
        "fruits": [
            {"name": "Apple", "nutrients": {"calories": 52}},
            {"name": "Banana", "tags": ["yellow", "soft"]},
        ],
        "version": 3,
    }

    def test_patching_each_node_with_its_own_fields_is_a_no_op(self):
        text = serialize_document(self.DOCUMENT)
        G = build_graph(self.DOCUMENT)
        for _, attrs in G.nodes(data=True):
            node = attrs["data"]
            result = patch_document(text, node.path, normalize_node_rows(node.text))
            assert json.loads(result) == self.DOCUMENT
            assert result == text


class TestApplyEdits:

    def test_success(self):
        outcome = apply_edits('{"a": {"b": 1}}', ["a"], {"b": 2})
        assert outcome.ok
        assert json.loads(outcome.document) == {"a": {"b": 2}}
        assert outcome.error is None

    def test_missing_path_outcome_leaves_no_document(self):
        text = _doc({"a": {"b": 1}})
        outcome = apply_edits(text, ["x", "y"], {"b": 2})
        assert not outcome.ok
        assert outcome.missing_path
        assert not outcome.malformed_document
        assert outcome.document is None

    def test_malformed_outcome(self):
        outcome = apply_edits("{oops", ["a"], {"b": 2})
        assert outcome.malformed_document
        assert isinstance(outcome.error, MalformedDocumentError)

    def test_out_of_range_number_is_a_malformed_outcome(self):
        outcome = apply_edits('{"a": {"b": 1, "big": 1e400}}', ["a"], {"b": 2})
        assert outcome.malformed_document
        assert outcome.document is None
