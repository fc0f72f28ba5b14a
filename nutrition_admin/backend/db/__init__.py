"""Database models for the admin panel."""

from .base import Base
from .models import ChatHistory, UserEvent, UserNutrition

__all__ = ["Base", "ChatHistory", "UserEvent", "UserNutrition"]
