from dataclasses import dataclass
from datetime import datetime


@dataclass
class ObjectRecord:
    """Represents a row from the repository_objects table."""

    id: str
    label: str
    models: list[str]
    created_at: datetime | None = None


@dataclass
class DatastreamRecord:
    """Represents a row from the datastreams table."""

    object_id: str
    dsid: str
    content: bytes
    mime_type: str
    label: str
    control_group: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class RelationshipRecord:
    """Represents a row from the relationships table."""

    id: int
    subject: str
    namespace: str
    predicate: str
    value: str
    is_literal: bool
