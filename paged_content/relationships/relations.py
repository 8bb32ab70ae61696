"""Typed access to the relationship assertions attached to objects."""

from paged_content.objects.models import Relationship
from paged_content.store.base import BaseRepositoryStore

FEDORA_RELS_EXT = "info:fedora/fedora-system:def/relations-external#"
ISLANDORA_RELS_EXT = "http://islandora.ca/ontology/relsext#"

IS_MEMBER_OF = "isMemberOf"
IS_PAGE_OF = "isPageOf"
IS_SEQUENCE_NUMBER = "isSequenceNumber"
IS_PAGE_NUMBER = "isPageNumber"
HAS_PAGE_PROGRESSION = "hasPageProgression"
HAS_LANGUAGE = "hasLanguage"
PREPROCESS = "preprocess"


class RelationshipAdapter:
    """Reads and writes subject-predicate-object assertions through the store."""

    def __init__(self, store: BaseRepositoryStore) -> None:
        self._store = store

    def get_values(self, subject: str, namespace: str, predicate: str) -> list[str]:
        return [
            rel.value for rel in self._store.get_relationships(subject, namespace, predicate)
        ]

    def get_literal(self, subject: str, namespace: str, predicate: str) -> str | None:
        """Return the first recorded value for the predicate, or None."""
        values = self.get_values(subject, namespace, predicate)
        return values[0] if values else None

    def set_literal(self, subject: str, namespace: str, predicate: str, value: str) -> None:
        """Replace every assertion for the predicate with a single literal."""
        self._store.replace_relationships(
            Relationship(subject, namespace, predicate, value, is_literal=True)
        )

    def set_resource(self, subject: str, namespace: str, predicate: str, target: str) -> None:
        """Replace every assertion for the predicate with a single object reference."""
        self._store.replace_relationships(
            Relationship(subject, namespace, predicate, target, is_literal=False)
        )

    def add(
        self,
        subject: str,
        namespace: str,
        predicate: str,
        value: str,
        is_literal: bool = True,
    ) -> None:
        self._store.add_relationship(
            Relationship(subject, namespace, predicate, value, is_literal=is_literal)
        )

    def remove(
        self,
        subject: str,
        namespace: str,
        predicate: str,
        value: str | None = None,
    ) -> int:
        return self._store.remove_relationships(subject, namespace, predicate, value)

    def subjects_with(self, namespace: str, predicate: str, value: str) -> list[str]:
        return self._store.find_subjects(namespace, predicate, value)
