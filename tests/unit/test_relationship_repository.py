from unittest.mock import MagicMock, patch

from paged_content.database.repositories.relationship_repository import (
    RelationshipRepository,
)


def _mock_connection(mock_get_conn: MagicMock) -> tuple[MagicMock, MagicMock]:
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    mock_get_conn.return_value.__enter__ = MagicMock(return_value=mock_conn)
    mock_get_conn.return_value.__exit__ = MagicMock(return_value=False)
    return mock_conn, mock_cursor


class TestFindBySubject:
    @patch("paged_content.database.repositories.relationship_repository.get_connection")
    def test_adds_filters_and_orders_by_id(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchall.return_value = [
            {
                "id": 4,
                "subject": "p1",
                "namespace": "ns#",
                "predicate": "hasLanguage",
                "value": "fra",
                "is_literal": True,
            }
        ]

        records = RelationshipRepository().find_by_subject("p1", "ns#", "hasLanguage")

        sql, params = mock_cursor.execute.call_args.args
        assert "AND namespace = %s" in sql
        assert "AND predicate = %s" in sql
        assert sql.rstrip().endswith("ORDER BY id")
        assert params == ["p1", "ns#", "hasLanguage"]
        assert records[0].value == "fra"


class TestDelete:
    @patch("paged_content.database.repositories.relationship_repository.get_connection")
    def test_returns_rowcount_and_commits(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 3

        removed = RelationshipRepository().delete("p1", "ns#", "hasLanguage")

        assert removed == 3
        mock_conn.commit.assert_called_once()

    @patch("paged_content.database.repositories.relationship_repository.get_connection")
    def test_value_filter_is_optional(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)

        RelationshipRepository().delete("p1", "ns#", "tag", "a")

        sql, params = mock_cursor.execute.call_args.args
        assert "AND value = %s" in sql
        assert params == ["p1", "ns#", "tag", "a"]


class TestReplace:
    @patch("paged_content.database.repositories.relationship_repository.get_connection")
    def test_delete_and_insert_share_one_locked_transaction(
        self, mock_get_conn: MagicMock
    ) -> None:
        mock_conn, _cursor = _mock_connection(mock_get_conn)

        RelationshipRepository().replace("p1", "ns#", "hasLanguage", "fra", True)

        mock_conn.transaction.assert_called_once_with()
        lock, delete, insert = (call.args for call in mock_conn.execute.call_args_list)
        assert "pg_advisory_xact_lock" in lock[0]
        assert lock[1] == ("p1|ns#hasLanguage",)
        assert delete[0].strip().startswith("DELETE FROM relationships")
        assert delete[1] == ("p1", "ns#", "hasLanguage")
        assert "INSERT INTO relationships" in insert[0]
        assert insert[1] == ("p1", "ns#", "hasLanguage", "fra", True)
