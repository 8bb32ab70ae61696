from psycopg.rows import dict_row

from paged_content.database.connection import get_connection
from paged_content.database.models import DatastreamRecord, ObjectRecord
from paged_content.store.exceptions import ObjectNotFoundError


class ObjectRepository:
    """Database operations for the repository_objects and datastreams tables."""

    def find_by_id(self, object_id: str) -> ObjectRecord:
        """Find an object row by id.

        Raises:
            ObjectNotFoundError: if no object with this id exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, label, models, created_at
                    FROM repository_objects
                    WHERE id = %s
                    """,
                    (object_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise ObjectNotFoundError(f"Object {object_id} not found")

        return ObjectRecord(
            id=row["id"],
            label=row["label"] or "",
            models=list(row["models"] or []),
            created_at=row["created_at"],
        )

    def upsert(self, record: ObjectRecord) -> None:
        with get_connection() as conn:
            conn.execute(
                """
                INSERT INTO repository_objects (id, label, models, created_at)
                VALUES (%s, %s, %s, NOW())
                ON CONFLICT (id) DO UPDATE
                SET label = EXCLUDED.label, models = EXCLUDED.models
                """,
                (record.id, record.label, record.models),
            )
            conn.commit()

    def list_datastreams(self, object_id: str) -> list[DatastreamRecord]:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT object_id, dsid, content, mime_type, label, control_group,
                           created_at, updated_at
                    FROM datastreams
                    WHERE object_id = %s
                    ORDER BY created_at, dsid
                    """,
                    (object_id,),
                )
                rows = cur.fetchall()
        return [_to_datastream_record(row) for row in rows]

    def find_datastream(self, object_id: str, dsid: str) -> DatastreamRecord | None:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT object_id, dsid, content, mime_type, label, control_group,
                           created_at, updated_at
                    FROM datastreams
                    WHERE object_id = %s AND dsid = %s
                    """,
                    (object_id, dsid),
                )
                row = cur.fetchone()
        return _to_datastream_record(row) if row is not None else None

    def upsert_datastream(self, record: DatastreamRecord) -> None:
        """Insert a datastream, or overwrite its content, label and MIME type.

        The control group of an existing datastream is never changed.

        Raises:
            ObjectNotFoundError: if the owning object does not exist.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "SELECT 1 FROM repository_objects WHERE id = %s",
                    (record.object_id,),
                )
                if cur.fetchone() is None:
                    raise ObjectNotFoundError(f"Object {record.object_id} not found")
                cur.execute(
                    """
                    INSERT INTO datastreams
                        (object_id, dsid, content, mime_type, label, control_group,
                         created_at, updated_at)
                    VALUES (%s, %s, %s, %s, %s, %s, NOW(), NOW())
                    ON CONFLICT (object_id, dsid) DO UPDATE
                    SET content = EXCLUDED.content,
                        mime_type = EXCLUDED.mime_type,
                        label = EXCLUDED.label,
                        updated_at = NOW()
                    """,
                    (
                        record.object_id,
                        record.dsid,
                        record.content,
                        record.mime_type,
                        record.label,
                        record.control_group,
                    ),
                )
            conn.commit()


def _to_datastream_record(row: dict) -> DatastreamRecord:  # type: ignore[type-arg]
    return DatastreamRecord(
        object_id=row["object_id"],
        dsid=row["dsid"],
        content=bytes(row["content"] or b""),
        mime_type=row["mime_type"],
        label=row["label"] or "",
        control_group=row["control_group"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
