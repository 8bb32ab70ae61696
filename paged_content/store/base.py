from abc import ABC, abstractmethod

from paged_content.objects.models import Datastream, Relationship, RepositoryObject


class BaseRepositoryStore(ABC):
    """Contract for the digital repository the pipeline reads from and writes to."""

    @abstractmethod
    def get_object(self, object_id: str) -> RepositoryObject:
        """Load an object with all of its datastreams.

        Raises:
            ObjectNotFoundError: if the id is unknown.
        """

    def get_label(self, object_id: str) -> str:
        """Return only the object's label.

        Raises:
            ObjectNotFoundError: if the id is unknown.
        """
        return self.get_object(object_id).label

    @abstractmethod
    def save_object(self, obj: RepositoryObject) -> None:
        """Create or replace an object's id, label and content models.

        Datastreams carried by ``obj`` are written as well.
        """

    @abstractmethod
    def read_datastream(self, object_id: str, dsid: str) -> Datastream:
        """Read a single datastream.

        Raises:
            DatastreamNotFoundError: if the object has no such datastream.
        """

    @abstractmethod
    def write_datastream(self, object_id: str, datastream: Datastream) -> None:
        """Create the datastream, or overwrite content, label and MIME type."""

    @abstractmethod
    def get_relationships(
        self,
        subject: str,
        namespace: str | None = None,
        predicate: str | None = None,
    ) -> list[Relationship]:
        """Return assertions about ``subject`` in insertion order."""

    @abstractmethod
    def add_relationship(self, relationship: Relationship) -> None:
        """Append an assertion. Existing assertions are left untouched."""

    @abstractmethod
    def remove_relationships(
        self,
        subject: str,
        namespace: str,
        predicate: str,
        value: str | None = None,
    ) -> int:
        """Remove matching assertions and return how many were removed."""

    @abstractmethod
    def find_subjects(self, namespace: str, predicate: str, value: str) -> list[str]:
        """Return subjects asserting ``predicate`` = ``value``, in insertion order."""

    def replace_relationships(self, relationship: Relationship) -> None:
        """Make ``relationship`` the only assertion for its subject and predicate.

        Stores that can do so apply the removal and the addition atomically.
        """
        self.remove_relationships(
            relationship.subject, relationship.namespace, relationship.predicate
        )
        self.add_relationship(relationship)
