# -*- coding: utf-8 -*-
"""
Pydantic модели (схемы) для админ-панели.

Содержит:
- user: Пользователи бота
- chat: История чата и события
- stats: Статистика
- system: Health check и ошибки
"""

from nutrition_admin.backend.models.user import UserRow, UserDetail
from nutrition_admin.backend.models.chat import ChatMessage, UserEventResponse
from nutrition_admin.backend.models.stats import GoalBucket, FunnelBucket, StatsResponse
from nutrition_admin.backend.models.system import HealthResponse, ApiInfoResponse, ErrorResponse

__all__ = [
    # User
    "UserRow",
    "UserDetail",
    # Chat
    "ChatMessage",
    "UserEventResponse",
    # Stats
    "GoalBucket",
    "FunnelBucket",
    "StatsResponse",
    # System
    "HealthResponse",
    "ApiInfoResponse",
    "ErrorResponse",
]
