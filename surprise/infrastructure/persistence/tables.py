"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import Column, DateTime, Index, MetaData, String, Table, Text

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# SURPRISES TABLE
# ============================================================================
surprises_table = Table(
    "surprises",
    metadata,
    Column("id", String, primary_key=True),
    Column("slug", String(64), nullable=False, unique=True),
    Column("filename", Text, nullable=False),  # Blob reference (filename or URL)
    Column("original_name", Text, nullable=False),
    Column("mime_type", String(255), nullable=False),
    Column("message", Text, nullable=False),
    Column("password", Text, nullable=True),  # Password hash, never plaintext
    Column("created_at", DateTime(timezone=True), nullable=False),
)

Index("idx_surprises_created_at", surprises_table.c.created_at)
