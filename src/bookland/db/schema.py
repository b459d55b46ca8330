# ABOUTME: SQL DDL statements for the Bookland library database schema.
# ABOUTME: Defines the books table, its indexes, and schema versioning.

SCHEMA_V1 = """
-- Core book catalog table
CREATE TABLE books (
    id          TEXT PRIMARY KEY,
    title       TEXT NOT NULL,
    author      TEXT NOT NULL DEFAULT '',
    cover_path  TEXT,
    file_path   TEXT NOT NULL,
    file_size   INTEGER NOT NULL DEFAULT 0,
    file_type   TEXT NOT NULL DEFAULT 'epub',
    added_at    TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f', 'now'))
);

-- At most one entry per file on disk
CREATE UNIQUE INDEX idx_books_file_path ON books(file_path);
CREATE INDEX idx_books_added_at ON books(added_at DESC);

-- Schema versioning for future migrations
CREATE TABLE schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version) VALUES (1);
"""
