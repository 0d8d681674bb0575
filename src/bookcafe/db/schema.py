# ABOUTME: SQL DDL statements for the bookcafe library database schema.
# ABOUTME: Defines catalog tables, the FTS5 search index, its sync triggers, and migrations.

SCHEMA_V1 = """
-- Core book catalog table
CREATE TABLE books (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    title         TEXT NOT NULL,
    isbn          TEXT,
    description   TEXT,
    price         REAL,
    date_added    TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now')),
    date_modified TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

CREATE UNIQUE INDEX idx_books_isbn ON books(isbn) WHERE isbn IS NOT NULL;
CREATE INDEX idx_books_title ON books(title);

-- Authors, shared across books
CREATE TABLE authors (
    id   INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE COLLATE NOCASE
);

CREATE TABLE book_authors (
    book_id   INTEGER NOT NULL REFERENCES books(id) ON DELETE CASCADE,
    author_id INTEGER NOT NULL REFERENCES authors(id) ON DELETE CASCADE,
    position  INTEGER NOT NULL DEFAULT 0,
    PRIMARY KEY (book_id, author_id)
);

CREATE INDEX idx_book_authors_author ON book_authors(author_id);

-- Categories, used for listing only
CREATE TABLE categories (
    id   INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE COLLATE NOCASE
);

CREATE TABLE book_categories (
    book_id     INTEGER NOT NULL REFERENCES books(id) ON DELETE CASCADE,
    category_id INTEGER NOT NULL REFERENCES categories(id) ON DELETE CASCADE,
    PRIMARY KEY (book_id, category_id)
);

CREATE INDEX idx_book_categories_category ON book_categories(category_id);

-- Schema versioning for future migrations
CREATE TABLE schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version) VALUES (1);
"""

# Space-joined author names of the book whose id is the {book_id} expression.
_AUTHOR_NAMES_SQL = """coalesce((
        SELECT group_concat(a.name, ' ') FROM book_authors ba
        JOIN authors a ON a.id = ba.author_id
        WHERE ba.book_id = {book_id}
    ), '')"""

# FTS5 index over title, ISBN, and aggregated author names, keyed by book id.
# Idempotent so it can also repair a database whose index was dropped.
SEARCH_INDEX_DDL = f"""
CREATE VIRTUAL TABLE IF NOT EXISTS books_fts USING fts5(
    title, isbn, authors,
    tokenize = 'unicode61 remove_diacritics 2'
);

CREATE TRIGGER IF NOT EXISTS books_fts_ai AFTER INSERT ON books BEGIN
    INSERT INTO books_fts(rowid, title, isbn, authors)
    VALUES (new.id, new.title, coalesce(new.isbn, ''), {_AUTHOR_NAMES_SQL.format(book_id='new.id')});
END;

CREATE TRIGGER IF NOT EXISTS books_fts_ad AFTER DELETE ON books BEGIN
    DELETE FROM books_fts WHERE rowid = old.id;
END;

CREATE TRIGGER IF NOT EXISTS books_fts_au AFTER UPDATE OF title, isbn ON books BEGIN
    UPDATE books_fts SET title = new.title, isbn = coalesce(new.isbn, '')
    WHERE rowid = new.id;
END;

CREATE TRIGGER IF NOT EXISTS book_authors_fts_ai AFTER INSERT ON book_authors BEGIN
    UPDATE books_fts SET authors = {_AUTHOR_NAMES_SQL.format(book_id='new.book_id')}
    WHERE rowid = new.book_id;
END;

CREATE TRIGGER IF NOT EXISTS book_authors_fts_ad AFTER DELETE ON book_authors BEGIN
    UPDATE books_fts SET authors = {_AUTHOR_NAMES_SQL.format(book_id='old.book_id')}
    WHERE rowid = old.book_id;
END;
"""

# Refresh the indexed author names of the book bound as :book_id.
SEARCH_INDEX_REFRESH_AUTHORS = f"""
UPDATE books_fts SET authors = {_AUTHOR_NAMES_SQL.format(book_id=':book_id')}
WHERE rowid = :book_id
"""

# Repopulate the index from the live tables.
SEARCH_INDEX_REBUILD = f"""
DELETE FROM books_fts;
INSERT INTO books_fts(rowid, title, isbn, authors)
    SELECT b.id, b.title, coalesce(b.isbn, ''), {_AUTHOR_NAMES_SQL.format(book_id='b.id')}
    FROM books b;
"""

# V2: full-text search index over title, ISBN, and author names.
MIGRATION_V2 = (
    SEARCH_INDEX_DDL
    + SEARCH_INDEX_REBUILD
    + """
INSERT INTO schema_version (version) VALUES (2);
"""
)

# Ordered list of (version, sql) migrations. Each migration's SQL must
# insert its own version number into schema_version.
MIGRATIONS: list[tuple[int, str]] = [
    (2, MIGRATION_V2),
]
