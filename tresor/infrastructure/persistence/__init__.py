"""Persistence: SQLAlchemy engine, ORM models and the SQL entry store."""
