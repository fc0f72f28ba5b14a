# -*- coding: utf-8 -*-
"""
Приведение сообщений n8n_chat_histories к единому виду.
"""

import json
from typing import Any, Optional


def _as_document(message: Any) -> dict:
    """jsonb приходит словарём; строку пробуем декодировать, остальное считаем пустым."""
    if isinstance(message, dict):
        return message
    if isinstance(message, (str, bytes)):
        try:
            decoded = json.loads(message)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return {}
        return decoded if isinstance(decoded, dict) else {}
    return {}


def normalize_chat_message(row_id: int, message: Optional[Any]) -> dict:
    """
    Возвращает {id, type, content, tool_calls} для строки истории чата.

    Пустые и отсутствующие поля заменяются значениями по умолчанию:
    type -> "unknown", content -> "", tool_calls -> [].
    """
    doc = _as_document(message)
    return {
        "id": row_id,
        "type": doc.get("type") or "unknown",
        "content": doc.get("content") or "",
        "tool_calls": doc.get("tool_calls") or [],
    }
