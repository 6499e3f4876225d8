import json

import pytest

from nodeedit.errors import MalformedDocumentError
from nodeedit.paths import get_sample_document_path
from nodeedit.stores import DocumentStore, JsonDocumentStore, SourceBuffer, SourceBufferStore
from nodeedit.workspace import EditorWorkspace


@pytest.fixture
def workspace():
    return EditorWorkspace(json.dumps({"a": {"b": 1}}))


def test_user_edit_updates_document_and_graph(workspace):
    new_text = json.dumps({"a": {"b": 2}, "c": {}})
    workspace.source_buffer.set_contents(new_text)

    assert workspace.last_error is None
    assert workspace.document_store.get_document_text() == new_text
    assert workspace.graph_store.get_node(["c"]) is not None


def test_invalid_user_edit_keeps_last_good_document(workspace):
    before = workspace.document_store.get_document_text()
    workspace.source_buffer.set_contents('{"a": ')

    assert isinstance(workspace.last_error, MalformedDocumentError)
    assert workspace.document_store.get_document_text() == before
    assert workspace.graph_store.get_node(["a"]) is not None
    assert workspace.source_buffer.contents == '{"a": '

    workspace.source_buffer.set_contents('{"z": {}}')
    assert workspace.last_error is None


def test_out_of_range_number_in_user_edit_is_rejected(workspace):
    before = workspace.document_store.get_document_text()
    workspace.source_buffer.set_contents('{"a": {"b": 1e400}}')

    assert isinstance(workspace.last_error, MalformedDocumentError)
    assert workspace.document_store.get_document_text() == before


def test_programmatic_write_does_not_touch_document(workspace):
    before = workspace.document_store.get_document_text()
    workspace.source_buffer.set_contents('{"x": 1}', programmatic=True)
    assert workspace.document_store.get_document_text() == before


def test_user_edit_refreshes_selected_node(workspace):
    workspace.select(["a"])
    workspace.source_buffer.set_contents(json.dumps({"a": {"b": 5}}))
    assert workspace.graph_store.selected_node.text[0].value == 5


def test_user_edit_removing_edited_node_resets_session_before_listeners(workspace):
    workspace.select(["a"])
    workspace.session.enter_edit()
    seen = []
    workspace.graph_store.on(
        "selection_change",
        lambda node: seen.append((node, workspace.session.mode, workspace.session.node)),
    )

    workspace.source_buffer.set_contents(json.dumps({"z": {"b": 1}}))

    assert seen == [(None, "viewing", None)]
    assert workspace.session.save().status == "not_editing"


def test_from_file(tmp_path):
    path = tmp_path / "doc.json"
    path.write_text(json.dumps({"k": {"v": True}}), encoding="utf-8")

    ws = EditorWorkspace.from_file(path)

    assert ws.graph_store.get_node(["k"]) is not None
    assert json.loads(ws.source_buffer.contents) == {"k": {"v": True}}


def test_from_file_rejects_malformed_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{nope", encoding="utf-8")
    with pytest.raises(MalformedDocumentError):
        EditorWorkspace.from_file(path)


def test_bundled_sample_document_loads():
    ws = EditorWorkspace.from_file(get_sample_document_path())
    node = ws.select(["fruits", 0, "nutrients"])
    assert node is not None
    ws.session.enter_edit()
    assert ws.session.values["calories"] == 52


class TestStores:

    def test_document_store_from_file(self, tmp_path):
        path = tmp_path / "doc.json"
        path.write_text('{"a": 1}', encoding="utf-8")

        store = JsonDocumentStore.from_file(path)

        assert isinstance(store, DocumentStore)
        assert store.get_document_text() == '{"a": 1}'

    def test_document_store_rejects_non_text(self):
        with pytest.raises(TypeError):
            JsonDocumentStore().set_document_text({"a": 1})

    def test_source_buffer_events(self):
        buffer = SourceBuffer()
        assert isinstance(buffer, SourceBufferStore)
        changes, user_edits = [], []
        buffer.on("change", lambda text, programmatic: changes.append((text, programmatic)))
        buffer.on("user_edit", user_edits.append)

        buffer.set_contents("typed")
        buffer.set_contents("engine", programmatic=True)

        assert changes == [("typed", False), ("engine", True)]
        assert user_edits == ["typed"]
        assert buffer.contents == "engine"

    def test_source_buffer_off_and_unknown_event(self):
        buffer = SourceBuffer()
        seen = []
        buffer.on("user_edit", seen.append)
        buffer.off("user_edit", seen.append)
        buffer.set_contents("x")
        assert seen == []

        with pytest.raises(ValueError):
            buffer.on("bogus", seen.append)
