"""SQLAlchemy ORM models for the tables written by the n8n workflow.

The admin panel never writes to these tables; the mappings exist so that
queries are built from column objects instead of string fragments.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import BigInteger, Boolean, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, JSONDocument


class UserNutrition(Base):
    __tablename__ = "users_nutrition"

    chat_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    username: Mapped[Optional[str]] = mapped_column(String(255))
    first_name: Mapped[Optional[str]] = mapped_column(String(255))
    sex: Mapped[Optional[str]] = mapped_column(String(16))
    age: Mapped[Optional[int]] = mapped_column(Integer)
    weight: Mapped[Optional[float]] = mapped_column(Float)
    height: Mapped[Optional[float]] = mapped_column(Float)
    activity_level: Mapped[Optional[str]] = mapped_column(String(32))
    goal: Mapped[Optional[str]] = mapped_column(String(32))
    allergies: Mapped[Optional[str]] = mapped_column(Text)
    excluded_foods: Mapped[Optional[str]] = mapped_column(Text)
    calories: Mapped[Optional[int]] = mapped_column(Integer)
    protein: Mapped[Optional[int]] = mapped_column(Integer)
    fats: Mapped[Optional[int]] = mapped_column(Integer)
    carbs: Mapped[Optional[int]] = mapped_column(Integer)
    # Этап воронки продаж (0..5)
    funnel_stage: Mapped[Optional[int]] = mapped_column(Integer)
    is_buyer: Mapped[Optional[bool]] = mapped_column(Boolean)
    get_food: Mapped[Optional[bool]] = mapped_column(Boolean)
    language: Mapped[Optional[str]] = mapped_column(String(8))
    created_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))


class ChatHistory(Base):
    __tablename__ = "n8n_chat_histories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # chat_id пользователя в виде строки
    session_id: Mapped[str] = mapped_column(String(255), index=True)
    message: Mapped[Optional[Any]] = mapped_column(JSONDocument)


class UserEvent(Base):
    __tablename__ = "user_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    chat_id: Mapped[int] = mapped_column(BigInteger, index=True)
    event_type: Mapped[Optional[str]] = mapped_column(String(64))
    event_data: Mapped[Optional[str]] = mapped_column(Text)
    language: Mapped[Optional[str]] = mapped_column(String(8))
    workflow_name: Mapped[Optional[str]] = mapped_column(String(128))
    created_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
