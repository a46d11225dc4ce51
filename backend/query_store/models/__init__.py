"""ORM Models — SQLAlchemy tables for the SQL storage backend."""
