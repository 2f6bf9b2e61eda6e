import json

import pytest

from codevault.snippet import CodeTriple, Snippet, create_snippet
from codevault.storage import MemoryBackend, SnippetStore, StorageError


class _BrokenBackend:
    """Backend whose medium is unavailable for reads and writes."""

    def get(self, key):
        raise StorageError("backend unavailable")

    def set(self, key, value):
        raise StorageError("backend unavailable")


class _ReadOnlyBackend(MemoryBackend):
    def set(self, key, value):
        raise StorageError("quota exceeded")


def _snippet(snippet_id: str, *, title: str = "Card", folder: str = "default") -> Snippet:
    return Snippet(
        id=snippet_id,
        title=title,
        folder=folder,
        html="<div></div>",
        css=".card{}",
        js="",
        created_at=1,
        share_token=f"token-{snippet_id}",
    )


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def store(backend):
    return SnippetStore(backend)


def test_list_snippets_empty_when_key_absent(store):
    assert store.list_snippets() == []


def test_save_then_get_round_trips(store):
    snippet = create_snippet(CodeTriple(html="<p>hi</p>", css="p{}", js="let x=1;"), "Hello", "default")

    assert store.save_snippet(snippet) is True

    assert store.get_snippet_by_id(snippet.id) == snippet


def test_save_persists_camel_case_json_array(store, backend):
    store.save_snippet(_snippet("a"))

    stored = json.loads(backend.get("snippets"))

    assert isinstance(stored, list)
    assert stored[0]["id"] == "a"
    assert stored[0]["createdAt"] == 1
    assert stored[0]["shareToken"] == "token-a"


def test_save_upserts_in_place(store):
    for snippet_id in ("a", "b", "c"):
        store.save_snippet(_snippet(snippet_id))

    store.save_snippet(_snippet("b", title="Renamed"))

    snippets = store.list_snippets()
    assert [s.id for s in snippets] == ["a", "b", "c"]
    assert snippets[1].title == "Renamed"


def test_delete_snippet_is_idempotent(store):
    store.save_snippet(_snippet("a"))
    store.save_snippet(_snippet("b"))

    assert store.delete_snippet("a") is True
    assert store.delete_snippet("a") is True
    assert store.delete_snippet("missing") is True

    assert [s.id for s in store.list_snippets()] == ["b"]


def test_delete_snippet_removes_every_duplicate(backend, store):
    records = [_snippet("a").to_record(), _snippet("a").to_record(), _snippet("b").to_record()]
    backend.set("snippets", json.dumps(records))

    store.delete_snippet("a")

    assert [s.id for s in store.list_snippets()] == ["b"]


def test_get_snippet_by_id_absent(store):
    assert store.get_snippet_by_id("nope") is None


def test_get_snippet_by_share_token(store):
    store.save_snippet(_snippet("a"))
    store.save_snippet(_snippet("b"))

    assert store.get_snippet_by_share_token("token-b").id == "b"
    assert store.get_snippet_by_share_token("unknown") is None
    assert store.get_snippet_by_share_token("") is None


def test_list_by_folder_keeps_store_order(store):
    store.save_snippet(_snippet("a", folder="work"))
    store.save_snippet(_snippet("b", folder="default"))
    store.save_snippet(_snippet("c", folder="work"))

    assert [s.id for s in store.list_snippets_by_folder("work")] == ["a", "c"]
    assert store.list_snippets_by_folder("Work") == []


def test_search_matches_title_or_folder_case_insensitively(store):
    store.save_snippet(_snippet("a", title="Login Form", folder="default"))
    store.save_snippet(_snippet("b", title="Navbar", folder="forms-folder"))
    store.save_snippet(_snippet("c", title="Footer", folder="default"))

    assert [s.id for s in store.search("FORM")] == ["a", "b"]
    assert [s.id for s in store.search("")] == ["a", "b", "c"]
    assert store.search("zzz") == []


def test_malformed_json_degrades_to_empty(backend, store):
    backend.set("snippets", "{not json")

    assert store.list_snippets() == []
    assert store.search("") == []
    assert store.list_snippets_by_folder("default") == []
    result = store.list_snippets_result()
    assert not result.ok
    assert result.value == []


def test_non_array_json_degrades_to_empty(backend, store):
    backend.set("snippets", json.dumps({"id": "a"}))

    assert store.list_snippets() == []


def test_malformed_entries_are_skipped(backend, store):
    backend.set("snippets", json.dumps([_snippet("a").to_record(), {"title": "no id"}, 7]))

    assert [s.id for s in store.list_snippets()] == ["a"]


def test_save_over_corrupt_table_starts_fresh(backend, store):
    backend.set("snippets", "garbage")

    assert store.save_snippet(_snippet("a")) is True

    assert [s.id for s in store.list_snippets()] == ["a"]


def test_bytes_payload_is_decoded(backend, store):
    backend.set("snippets", json.dumps([_snippet("a").to_record()]).encode("utf-8"))

    assert store.get_snippet_by_id("a").title == "Card"


def test_list_folders_synthesizes_default(backend, store):
    folders = store.list_folders()

    assert [(f.id, f.name, f.created_at) for f in folders] == [("default", "Default", 0)]
    assert backend.get("folders") is None


def test_list_folders_default_after_corrupt_read(backend, store):
    backend.set("folders", "[[[")

    assert [f.id for f in store.list_folders()] == ["default"]


def test_list_folders_does_not_duplicate_stored_default(backend, store):
    backend.set(
        "folders",
        json.dumps(
            [
                {"id": "work", "name": "Work", "createdAt": 2},
                {"id": "default", "name": "Mine", "createdAt": 1},
            ]
        ),
    )

    folders = store.list_folders()

    assert [f.id for f in folders] == ["work", "default"]
    assert folders[1].name == "Mine"


def test_create_folder_persists_default_alongside(backend, store):
    folder = store.create_folder("Work")

    assert folder.id not in ("default", "error")
    assert folder.name == "Work"
    assert folder.created_at > 0
    stored = json.loads(backend.get("folders"))
    assert [entry["id"] for entry in stored] == ["default", folder.id]


def test_delete_folder_does_not_cascade(store):
    folder = store.create_folder("Work")
    store.save_snippet(_snippet("a", folder=folder.id))

    store.delete_folder(folder.id)

    assert [f.id for f in store.list_folders()] == ["default"]
    assert [s.id for s in store.list_snippets_by_folder(folder.id)] == ["a"]


def test_delete_default_folder_at_store_level_is_resynthesized(store):
    store.delete_folder("default")

    assert [f.id for f in store.list_folders()] == ["default"]


def test_unavailable_backend_never_raises():
    store = SnippetStore(_BrokenBackend())

    assert store.list_snippets() == []
    assert store.search("x") == []
    assert store.get_snippet_by_id("a") is None
    assert store.save_snippet(_snippet("a")) is False
    assert store.delete_snippet("a") is False
    assert store.delete_folder("x") is False
    assert [f.id for f in store.list_folders()] == ["default"]


def test_create_folder_returns_sentinel_on_write_failure():
    store = SnippetStore(_ReadOnlyBackend())

    folder = store.create_folder("Work")

    assert folder.id == "error"
    assert folder.name == "Work"
    assert folder.created_at == 0
    result = store.create_folder_result("Work")
    assert not result.ok
    assert "quota exceeded" in result.error


def test_failed_save_leaves_state_unchanged():
    backend = _ReadOnlyBackend({"snippets": json.dumps([_snippet("a").to_record()])})
    store = SnippetStore(backend)

    result = store.save_snippet_result(_snippet("b"))

    assert result.value is False
    assert result.error == "quota exceeded"
    assert [s.id for s in store.list_snippets()] == ["a"]
