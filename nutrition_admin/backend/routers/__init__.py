# -*- coding: utf-8 -*-
"""
API роутеры админ-панели.

Содержит:
- system: Health check и информация об API
- users: Пользователи бота
- chat: История чата
- events: События пользователя
- stats: Статистика
"""

from nutrition_admin.backend.routers import system, users, chat, events, stats

__all__ = [
    "system",
    "users",
    "chat",
    "events",
    "stats",
]
