# -*- coding: utf-8 -*-
"""
Pydantic схемы истории чата и событий пользователя.
"""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """Сообщение из истории диалога с ботом."""
    id: int = Field(..., description="ID строки n8n_chat_histories")
    type: str = Field("unknown", description="Автор: human / ai / tool")
    content: Any = Field("", description="Текст сообщения")
    tool_calls: Any = Field(default_factory=list, description="Вызовы инструментов AI-агента")


class UserEventResponse(BaseModel):
    """Событие пользователя (нажатие кнопки, шаг воронки)."""
    id: int = Field(..., description="ID события")
    chat_id: int = Field(..., description="Telegram chat ID")
    event_type: Optional[str] = Field(None, description="Тип события")
    event_data: Optional[str] = Field(None, description="Данные события")
    language: Optional[str] = Field(None, description="Язык")
    workflow_name: Optional[str] = Field(None, description="Воркфлоу n8n")
    created_at: Optional[datetime] = Field(None, description="Время события")

    class Config:
        from_attributes = True
