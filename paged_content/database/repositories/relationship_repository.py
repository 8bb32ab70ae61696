from psycopg.rows import dict_row

from paged_content.database.connection import get_connection
from paged_content.database.models import RelationshipRecord


class RelationshipRepository:
    """Database operations for the relationships table."""

    def find_by_subject(
        self,
        subject: str,
        namespace: str | None = None,
        predicate: str | None = None,
    ) -> list[RelationshipRecord]:
        """Return a subject's assertions in insertion order, optionally filtered."""
        query = """
            SELECT id, subject, namespace, predicate, value, is_literal
            FROM relationships
            WHERE subject = %s
        """
        params: list[str] = [subject]
        if namespace is not None:
            query += " AND namespace = %s"
            params.append(namespace)
        if predicate is not None:
            query += " AND predicate = %s"
            params.append(predicate)
        query += " ORDER BY id"

        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, params)
                rows = cur.fetchall()
        return [_to_record(row) for row in rows]

    def find_subjects(self, namespace: str, predicate: str, value: str) -> list[str]:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT subject
                    FROM relationships
                    WHERE namespace = %s AND predicate = %s AND value = %s
                    ORDER BY id
                    """,
                    (namespace, predicate, value),
                )
                rows = cur.fetchall()
        return [row[0] for row in rows]

    def insert(
        self,
        subject: str,
        namespace: str,
        predicate: str,
        value: str,
        is_literal: bool,
    ) -> None:
        with get_connection() as conn:
            conn.execute(
                """
                INSERT INTO relationships (subject, namespace, predicate, value, is_literal)
                VALUES (%s, %s, %s, %s, %s)
                """,
                (subject, namespace, predicate, value, is_literal),
            )
            conn.commit()

    def replace(
        self,
        subject: str,
        namespace: str,
        predicate: str,
        value: str,
        is_literal: bool,
    ) -> None:
        """Swap every assertion for the predicate for one value in a single transaction."""
        with get_connection() as conn:
            with conn.transaction():
                conn.execute(
                    "SELECT pg_advisory_xact_lock(hashtext(%s))",
                    (f"{subject}|{namespace}{predicate}",),
                )
                conn.execute(
                    """
                    DELETE FROM relationships
                    WHERE subject = %s AND namespace = %s AND predicate = %s
                    """,
                    (subject, namespace, predicate),
                )
                conn.execute(
                    """
                    INSERT INTO relationships (subject, namespace, predicate, value, is_literal)
                    VALUES (%s, %s, %s, %s, %s)
                    """,
                    (subject, namespace, predicate, value, is_literal),
                )

    def delete(
        self,
        subject: str,
        namespace: str,
        predicate: str,
        value: str | None = None,
    ) -> int:
        """Delete matching assertions and return the number of rows removed."""
        query = """
            DELETE FROM relationships
            WHERE subject = %s AND namespace = %s AND predicate = %s
        """
        params: list[str] = [subject, namespace, predicate]
        if value is not None:
            query += " AND value = %s"
            params.append(value)

        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, params)
                removed = cur.rowcount
            conn.commit()
        return removed


def _to_record(row: dict) -> RelationshipRecord:  # type: ignore[type-arg]
    return RelationshipRecord(
        id=row["id"],
        subject=row["subject"],
        namespace=row["namespace"],
        predicate=row["predicate"],
        value=row["value"],
        is_literal=row["is_literal"],
    )
