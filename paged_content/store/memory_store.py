"""Dict-backed repository store for local runs and tests."""

from dataclasses import replace

from paged_content.objects.models import Datastream, Relationship, RepositoryObject
from paged_content.store.base import BaseRepositoryStore
from paged_content.store.exceptions import DatastreamNotFoundError, ObjectNotFoundError


class InMemoryRepositoryStore(BaseRepositoryStore):
    """Keeps objects, datastreams and relationships in process memory."""

    def __init__(self) -> None:
        self._objects: dict[str, RepositoryObject] = {}
        self._relationships: list[Relationship] = []

    def get_object(self, object_id: str) -> RepositoryObject:
        obj = self._objects.get(object_id)
        if obj is None:
            raise ObjectNotFoundError(f"Object {object_id} not found")
        return replace(
            obj,
            datastreams={dsid: replace(ds) for dsid, ds in obj.datastreams.items()},
        )

    def save_object(self, obj: RepositoryObject) -> None:
        existing = self._objects.get(obj.id)
        datastreams = dict(existing.datastreams) if existing else {}
        datastreams.update({dsid: replace(ds) for dsid, ds in obj.datastreams.items()})
        self._objects[obj.id] = replace(obj, datastreams=datastreams)

    def read_datastream(self, object_id: str, dsid: str) -> Datastream:
        obj = self._require(object_id)
        datastream = obj.datastreams.get(dsid)
        if datastream is None:
            raise DatastreamNotFoundError(f"Object {object_id} has no {dsid} datastream")
        return replace(datastream)

    def write_datastream(self, object_id: str, datastream: Datastream) -> None:
        obj = self._require(object_id)
        existing = obj.datastreams.get(datastream.id)
        if existing is None:
            obj.datastreams[datastream.id] = replace(datastream)
            return
        # Control group is fixed at creation.
        existing.content = datastream.content
        existing.label = datastream.label
        existing.mime_type = datastream.mime_type

    def get_relationships(
        self,
        subject: str,
        namespace: str | None = None,
        predicate: str | None = None,
    ) -> list[Relationship]:
        return [
            rel
            for rel in self._relationships
            if rel.subject == subject
            and (namespace is None or rel.namespace == namespace)
            and (predicate is None or rel.predicate == predicate)
        ]

    def add_relationship(self, relationship: Relationship) -> None:
        self._relationships.append(relationship)

    def remove_relationships(
        self,
        subject: str,
        namespace: str,
        predicate: str,
        value: str | None = None,
    ) -> int:
        kept = [
            rel
            for rel in self._relationships
            if not (
                rel.subject == subject
                and rel.namespace == namespace
                and rel.predicate == predicate
                and (value is None or rel.value == value)
            )
        ]
        removed = len(self._relationships) - len(kept)
        self._relationships = kept
        return removed

    def find_subjects(self, namespace: str, predicate: str, value: str) -> list[str]:
        return [
            rel.subject
            for rel in self._relationships
            if rel.namespace == namespace and rel.predicate == predicate and rel.value == value
        ]

    def _require(self, object_id: str) -> RepositoryObject:
        obj = self._objects.get(object_id)
        if obj is None:
            raise ObjectNotFoundError(f"Object {object_id} not found")
        return obj
