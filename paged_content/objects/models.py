from dataclasses import dataclass, field

BOOK = "book"
NEWSPAPER = "newspaper"
PAGE = "page"
BOOK_PAGE = "book-page"
NEWSPAPER_PAGE = "newspaper-page"

PAGED_CONTENT_MODELS = frozenset({BOOK, NEWSPAPER})
PAGE_MODELS = frozenset({PAGE, BOOK_PAGE, NEWSPAPER_PAGE})
RECOGNIZED_MODELS = PAGED_CONTENT_MODELS | PAGE_MODELS

MANAGED = "M"
INLINE = "X"


@dataclass
class Datastream:
    """A named binary part attached to a repository object."""

    id: str
    content: bytes = b""
    mime_type: str = "application/octet-stream"
    label: str = ""
    control_group: str = MANAGED


@dataclass
class RepositoryObject:
    """Snapshot of a repository object and the datastreams it carries."""

    id: str
    label: str = ""
    models: frozenset[str] = frozenset()
    datastreams: dict[str, Datastream] = field(default_factory=dict)

    def has_datastream(self, dsid: str) -> bool:
        return dsid in self.datastreams

    def is_paged_content(self) -> bool:
        return bool(self.models & PAGED_CONTENT_MODELS)


@dataclass(frozen=True)
class Relationship:
    """A subject-predicate-object assertion stored against an object."""

    subject: str
    namespace: str
    predicate: str
    value: str
    is_literal: bool = True


@dataclass(frozen=True)
class PageEntry:
    """A member page of a paged content object, as seen by one enumeration."""

    id: str
    label: str
    sequence_number: int
    parent_id: str
