"""DDL for the tables backing the Postgres repository store."""

from typing import Any

import psycopg

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS repository_objects (
    id TEXT PRIMARY KEY,
    label TEXT NOT NULL DEFAULT '',
    models TEXT[] NOT NULL DEFAULT '{}',
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS datastreams (
    object_id TEXT NOT NULL REFERENCES repository_objects (id) ON DELETE CASCADE,
    dsid TEXT NOT NULL,
    content BYTEA NOT NULL,
    mime_type TEXT NOT NULL,
    label TEXT NOT NULL DEFAULT '',
    control_group CHAR(1) NOT NULL DEFAULT 'M',
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    PRIMARY KEY (object_id, dsid)
);

CREATE TABLE IF NOT EXISTS relationships (
    id BIGSERIAL PRIMARY KEY,
    subject TEXT NOT NULL,
    namespace TEXT NOT NULL,
    predicate TEXT NOT NULL,
    value TEXT NOT NULL,
    is_literal BOOLEAN NOT NULL DEFAULT TRUE
);

CREATE INDEX IF NOT EXISTS relationships_subject_idx
    ON relationships (subject, namespace, predicate);
CREATE INDEX IF NOT EXISTS relationships_value_idx
    ON relationships (namespace, predicate, value);
"""


def create_schema(conn: psycopg.Connection[Any]) -> None:
    """Create the store tables if they do not exist yet."""
    conn.execute(SCHEMA_SQL)
    conn.commit()
