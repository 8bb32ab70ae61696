from paged_content.logging.logger import Log
from paged_content.objects.models import PageEntry
from paged_content.relationships.relations import (
    FEDORA_RELS_EXT,
    HAS_PAGE_PROGRESSION,
    IS_MEMBER_OF,
    IS_PAGE_NUMBER,
    IS_PAGE_OF,
    IS_SEQUENCE_NUMBER,
    ISLANDORA_RELS_EXT,
    RelationshipAdapter,
)
from paged_content.store.base import BaseRepositoryStore
from paged_content.store.exceptions import ObjectNotFoundError

LEFT_TO_RIGHT = "lr"
RIGHT_TO_LEFT = "rl"
PAGE_PROGRESSIONS = (LEFT_TO_RIGHT, RIGHT_TO_LEFT)


def parse_sequence_number(raw: str | None) -> int:
    """Parse a stored sequence literal. Missing or non-numeric values are 0."""
    if raw is None:
        return 0
    try:
        return int(raw.strip())
    except ValueError:
        return 0


class PageEnumerator:
    """Finds and orders the member pages of a paged content object."""

    def __init__(self, store: BaseRepositoryStore) -> None:
        self._store = store
        self._relations = RelationshipAdapter(store)

    def get_pages(self, object_id: str) -> list[PageEntry]:
        """Return member pages sorted by sequence number, ascending.

        Pages sharing a sequence number (including unnumbered pages, which
        count as 0) keep the order the store returned them in. A page id
        reported more than once appears once, with its last reported values.
        """
        pages: dict[str, PageEntry] = {}
        for page_id in self._relations.subjects_with(FEDORA_RELS_EXT, IS_MEMBER_OF, object_id):
            try:
                label = self._store.get_label(page_id)
            except ObjectNotFoundError:
                Log.warning(f"Member {page_id} of {object_id} no longer exists")
                continue
            sequence = self._relations.get_literal(
                page_id, ISLANDORA_RELS_EXT, IS_SEQUENCE_NUMBER
            )
            pages[page_id] = PageEntry(
                id=page_id,
                label=label,
                sequence_number=parse_sequence_number(sequence),
                parent_id=object_id,
            )
        return sorted(pages.values(), key=lambda page: page.sequence_number)

    def first_page(self, object_id: str) -> PageEntry | None:
        pages = self.get_pages(object_id)
        return pages[0] if pages else None

    def get_page_progression(self, object_id: str) -> str:
        progression = self._relations.get_literal(
            object_id, ISLANDORA_RELS_EXT, HAS_PAGE_PROGRESSION
        )
        return progression if progression is not None else LEFT_TO_RIGHT

    def set_page_progression(self, object_id: str, progression: str) -> None:
        if progression not in PAGE_PROGRESSIONS:
            raise ValueError(
                f"Unknown page progression '{progression}'. Choose from: {list(PAGE_PROGRESSIONS)}"
            )
        self._relations.set_literal(
            object_id, ISLANDORA_RELS_EXT, HAS_PAGE_PROGRESSION, progression
        )

    def set_page_number(self, page_id: str, parent_id: str, sequence_number: int) -> None:
        """Record ``page_id`` as page ``sequence_number`` of ``parent_id``."""
        if sequence_number < 1:
            raise ValueError(f"Sequence numbers start at 1, got {sequence_number}")
        self._relations.set_resource(page_id, FEDORA_RELS_EXT, IS_MEMBER_OF, parent_id)
        self._relations.set_resource(page_id, ISLANDORA_RELS_EXT, IS_PAGE_OF, parent_id)
        self._relations.set_literal(
            page_id, ISLANDORA_RELS_EXT, IS_SEQUENCE_NUMBER, str(sequence_number)
        )
        self._relations.set_literal(
            page_id, ISLANDORA_RELS_EXT, IS_PAGE_NUMBER, str(sequence_number)
        )
