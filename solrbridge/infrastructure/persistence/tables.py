"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import Column, Integer, MetaData, String, Table, Text, UniqueConstraint

metadata = MetaData()

# ============================================================================
# DIRTY CLASSES TABLE
# ============================================================================
dirty_classes_table = Table(
    "dirty_classes",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("class_name", String(255), nullable=False),
    Column("type", String(16), nullable=False),  # OperationType as string
    Column("ids", Text, nullable=True),  # JSON-encoded list of object IDs
    UniqueConstraint("class_name", "type", name="uq_dirty_classes_class_type"),
)
