"""SQLite (aiosqlite) storage."""
