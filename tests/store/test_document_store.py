"""
Tests for store.document_store

Test Coverage:
- create_or_update(): append vs. update in place
- Identifier uniqueness and stability
- page(): fixed-size paging with clamping
- Snapshots
"""
import pytest

from doc_toolkit.core.models import Document
from doc_toolkit.store import DocumentStore, page_documents


@pytest.fixture
def frozen_clock_store():
    """Store whose clock never advances."""
    return DocumentStore(clock=lambda: 5000)


class TestCreateOrUpdate:
    """Tests for create_or_update()."""

    def test_create_then_update_keeps_single_document(self):
        store = DocumentStore()

        _, index = store.create_or_update(None, "X")
        original_id = store.get(index).id
        docs, index2 = store.create_or_update(index, "Y")

        assert len(docs) == 1
        assert index2 == index
        assert docs[0].content == "Y"
        assert docs[0].id == original_id

    def test_new_document_index_is_previous_length(self, sample_documents):
        store = DocumentStore(sample_documents)

        docs, index = store.create_or_update(None, "new")

        assert index == 3
        assert docs[3].content == "new"

    def test_out_of_range_index_appends(self, sample_documents):
        store = DocumentStore(sample_documents)

        docs, index = store.create_or_update(10, "new")

        assert index == 3
        assert len(docs) == 4

    def test_negative_index_appends(self, sample_documents):
        store = DocumentStore(sample_documents)

        _, index = store.create_or_update(-1, "new")

        assert index == 3
        assert store.get(2).content == "<p>Third</p>"

    def test_update_preserves_position(self, sample_documents):
        store = DocumentStore(sample_documents)

        store.create_or_update(1, "changed")

        assert [d.id for d in store.list()] == [1000, 1001, 1002]
        assert store.get(1).content == "changed"

    def test_ids_distinct_when_clock_stalls(self, frozen_clock_store):
        for i in range(3):
            frozen_clock_store.create_or_update(None, f"doc {i}")

        ids = [d.id for d in frozen_clock_store.list()]
        assert ids == [5000, 5001, 5002]

    def test_ids_never_reuse_existing(self, sample_documents):
        store = DocumentStore(sample_documents, clock=lambda: 1)

        _, index = store.create_or_update(None, "new")

        assert store.get(index).id == 1003

    def test_returned_list_is_a_copy(self):
        store = DocumentStore()
        docs, _ = store.create_or_update(None, "X")

        docs.clear()

        assert len(store) == 1


class TestQueries:
    """Tests for list(), get() and page()."""

    def test_duplicate_initial_ids_rejected(self):
        with pytest.raises(ValueError):
            DocumentStore([Document(1, "a"), Document(1, "b")])

    def test_get_out_of_range_raises(self):
        with pytest.raises(IndexError):
            DocumentStore().get(0)

    def test_page_returns_original_indices_5_to_9(self):
        store = DocumentStore([Document(i, f"doc {i}") for i in range(12)])

        page = store.page(1, 5)

        assert [d.id for d in page] == [5, 6, 7, 8, 9]

    def test_last_page_is_partial(self):
        store = DocumentStore([Document(i, "x") for i in range(12)])

        assert [d.id for d in store.page(2, 5)] == [10, 11]

    @pytest.mark.parametrize("page_index", [3, 100, -1])
    def test_out_of_range_page_is_empty(self, page_index):
        store = DocumentStore([Document(i, "x") for i in range(12)])

        assert store.page(page_index, 5) == []

    def test_page_size_must_be_positive(self):
        with pytest.raises(ValueError):
            page_documents([], 0, 0)

    def test_page_count(self):
        store = DocumentStore([Document(i, "x") for i in range(12)])

        assert store.page_count(5) == 3
        assert DocumentStore().page_count(5) == 0


class TestSnapshots:
    """Tests for snapshot save/load."""

    def test_snapshot_round_trip(self, tmp_path, sample_documents):
        path = tmp_path / "docs.json"
        DocumentStore(sample_documents).save_snapshot(path)

        restored = DocumentStore.from_snapshot(path)

        assert restored.list() == sample_documents

    def test_restored_store_continues_ids(self, tmp_path, sample_documents):
        path = tmp_path / "docs.json"
        DocumentStore(sample_documents).save_snapshot(path)

        restored = DocumentStore.from_snapshot(path, clock=lambda: 0)
        _, index = restored.create_or_update(None, "new")

        assert restored.get(index).id == 1003
