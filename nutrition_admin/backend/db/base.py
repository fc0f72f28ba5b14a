"""Declarative base for the externally owned n8n tables."""

from __future__ import annotations

from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase


# jsonb в PostgreSQL, обычный JSON в тестовой SQLite
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    """Root declarative base."""
