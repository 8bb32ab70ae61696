from paged_content.database.models import DatastreamRecord, ObjectRecord
from paged_content.database.repositories.object_repository import ObjectRepository
from paged_content.database.repositories.relationship_repository import (
    RelationshipRepository,
)
from paged_content.objects.models import Datastream, Relationship, RepositoryObject
from paged_content.store.base import BaseRepositoryStore
from paged_content.store.exceptions import DatastreamNotFoundError


class PostgresRepositoryStore(BaseRepositoryStore):
    """Repository store backed by Postgres tables through the shared pool."""

    def __init__(
        self,
        object_repo: ObjectRepository | None = None,
        relationship_repo: RelationshipRepository | None = None,
    ) -> None:
        self._object_repo = object_repo or ObjectRepository()
        self._relationship_repo = relationship_repo or RelationshipRepository()

    def get_object(self, object_id: str) -> RepositoryObject:
        record = self._object_repo.find_by_id(object_id)
        datastreams = {
            ds.dsid: _to_datastream(ds)
            for ds in self._object_repo.list_datastreams(object_id)
        }
        return RepositoryObject(
            id=record.id,
            label=record.label,
            models=frozenset(record.models),
            datastreams=datastreams,
        )

    def get_label(self, object_id: str) -> str:
        return self._object_repo.find_by_id(object_id).label

    def save_object(self, obj: RepositoryObject) -> None:
        self._object_repo.upsert(
            ObjectRecord(id=obj.id, label=obj.label, models=sorted(obj.models))
        )
        for datastream in obj.datastreams.values():
            self.write_datastream(obj.id, datastream)

    def read_datastream(self, object_id: str, dsid: str) -> Datastream:
        record = self._object_repo.find_datastream(object_id, dsid)
        if record is None:
            raise DatastreamNotFoundError(f"Object {object_id} has no {dsid} datastream")
        return _to_datastream(record)

    def write_datastream(self, object_id: str, datastream: Datastream) -> None:
        self._object_repo.upsert_datastream(
            DatastreamRecord(
                object_id=object_id,
                dsid=datastream.id,
                content=datastream.content,
                mime_type=datastream.mime_type,
                label=datastream.label,
                control_group=datastream.control_group,
            )
        )

    def get_relationships(
        self,
        subject: str,
        namespace: str | None = None,
        predicate: str | None = None,
    ) -> list[Relationship]:
        return [
            Relationship(
                subject=row.subject,
                namespace=row.namespace,
                predicate=row.predicate,
                value=row.value,
                is_literal=row.is_literal,
            )
            for row in self._relationship_repo.find_by_subject(subject, namespace, predicate)
        ]

    def add_relationship(self, relationship: Relationship) -> None:
        self._relationship_repo.insert(
            relationship.subject,
            relationship.namespace,
            relationship.predicate,
            relationship.value,
            relationship.is_literal,
        )

    def remove_relationships(
        self,
        subject: str,
        namespace: str,
        predicate: str,
        value: str | None = None,
    ) -> int:
        return self._relationship_repo.delete(subject, namespace, predicate, value)

    def replace_relationships(self, relationship: Relationship) -> None:
        self._relationship_repo.replace(
            relationship.subject,
            relationship.namespace,
            relationship.predicate,
            relationship.value,
            relationship.is_literal,
        )

    def find_subjects(self, namespace: str, predicate: str, value: str) -> list[str]:
        return self._relationship_repo.find_subjects(namespace, predicate, value)


def _to_datastream(record: DatastreamRecord) -> Datastream:
    return Datastream(
        id=record.dsid,
        content=record.content,
        mime_type=record.mime_type,
        label=record.label,
        control_group=record.control_group,
    )
