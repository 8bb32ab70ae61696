import pytest

from paged_content.objects.models import BOOK_PAGE, Relationship, RepositoryObject
from paged_content.pages.enumerator import PageEnumerator, parse_sequence_number
from paged_content.relationships.relations import (
    FEDORA_RELS_EXT,
    IS_MEMBER_OF,
    IS_SEQUENCE_NUMBER,
    ISLANDORA_RELS_EXT,
)
from paged_content.store.memory_store import InMemoryRepositoryStore


def _add_page(
    store: InMemoryRepositoryStore,
    page_id: str,
    sequence: str | None,
    parent: str = "book:1",
) -> None:
    store.save_object(RepositoryObject(id=page_id, label=f"Label {page_id}", models=frozenset({BOOK_PAGE})))
    store.add_relationship(Relationship(page_id, FEDORA_RELS_EXT, IS_MEMBER_OF, parent, False))
    if sequence is not None:
        store.add_relationship(
            Relationship(page_id, ISLANDORA_RELS_EXT, IS_SEQUENCE_NUMBER, sequence)
        )


class TestGetPages:
    def test_orders_by_sequence_number(self) -> None:
        store = InMemoryRepositoryStore()
        for page_id, sequence in (("c", "3"), ("a", "1"), ("b", "2")):
            _add_page(store, page_id, sequence)

        pages = PageEnumerator(store).get_pages("book:1")

        assert [page.sequence_number for page in pages] == [1, 2, 3]
        assert [page.id for page in pages] == ["a", "b", "c"]

    def test_orders_numerically_not_lexically(self) -> None:
        store = InMemoryRepositoryStore()
        for page_id, sequence in (("ten", "10"), ("two", "2")):
            _add_page(store, page_id, sequence)

        pages = PageEnumerator(store).get_pages("book:1")

        assert [page.id for page in pages] == ["two", "ten"]

    def test_unnumbered_pages_sort_first_and_keep_input_order(self) -> None:
        store = InMemoryRepositoryStore()
        _add_page(store, "numbered", "1")
        _add_page(store, "missing", None)
        _add_page(store, "garbage", "abc")

        pages = PageEnumerator(store).get_pages("book:1")

        assert [page.id for page in pages] == ["missing", "garbage", "numbered"]
        assert pages[0].sequence_number == 0

    def test_entries_carry_label_and_parent(self) -> None:
        store = InMemoryRepositoryStore()
        _add_page(store, "a", "1")

        [page] = PageEnumerator(store).get_pages("book:1")

        assert page.label == "Label a"
        assert page.parent_id == "book:1"

    def test_duplicate_ids_collapse_to_one_entry(self) -> None:
        store = InMemoryRepositoryStore()
        _add_page(store, "a", "1")
        store.add_relationship(Relationship("a", FEDORA_RELS_EXT, IS_MEMBER_OF, "book:1", False))

        pages = PageEnumerator(store).get_pages("book:1")

        assert [page.id for page in pages] == ["a"]

    def test_skips_members_that_no_longer_exist(self) -> None:
        store = InMemoryRepositoryStore()
        store.add_relationship(Relationship("ghost", FEDORA_RELS_EXT, IS_MEMBER_OF, "book:1", False))

        assert PageEnumerator(store).get_pages("book:1") == []

    def test_ignores_pages_of_other_objects(self) -> None:
        store = InMemoryRepositoryStore()
        _add_page(store, "a", "1")
        _add_page(store, "x", "1", parent="book:2")

        assert [page.id for page in PageEnumerator(store).get_pages("book:1")] == ["a"]


class TestPageProgression:
    def test_defaults_to_left_to_right(self) -> None:
        assert PageEnumerator(InMemoryRepositoryStore()).get_page_progression("book:1") == "lr"

    def test_round_trips_right_to_left(self) -> None:
        enumerator = PageEnumerator(InMemoryRepositoryStore())

        enumerator.set_page_progression("book:1", "rl")

        assert enumerator.get_page_progression("book:1") == "rl"

    def test_rejects_unknown_progression(self) -> None:
        with pytest.raises(ValueError, match="Unknown page progression"):
            PageEnumerator(InMemoryRepositoryStore()).set_page_progression("book:1", "tb")


class TestSetPageNumber:
    def test_moves_page_to_new_position(self) -> None:
        store = InMemoryRepositoryStore()
        enumerator = PageEnumerator(store)
        _add_page(store, "a", "1")
        _add_page(store, "b", "2")

        enumerator.set_page_number("a", "book:1", 3)

        assert [page.id for page in enumerator.get_pages("book:1")] == ["b", "a"]

    def test_rejects_non_positive_numbers(self) -> None:
        with pytest.raises(ValueError):
            PageEnumerator(InMemoryRepositoryStore()).set_page_number("a", "book:1", 0)

    def test_first_page(self, book: RepositoryObject, store: InMemoryRepositoryStore) -> None:
        first = PageEnumerator(store).first_page(book.id)
        assert first is not None
        assert first.id == "book:1-p1"


class TestParseSequenceNumber:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("7", 7), (" 12 ", 12), (None, 0), ("", 0), ("3.5", 0), ("iv", 0)],
    )
    def test_parses_or_defaults_to_zero(self, raw: str | None, expected: int) -> None:
        assert parse_sequence_number(raw) == expected
