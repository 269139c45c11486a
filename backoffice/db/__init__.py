"""Relational persistence: SQLAlchemy models, sessions and repositories."""
