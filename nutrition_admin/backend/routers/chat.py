# -*- coding: utf-8 -*-
"""
API роутер истории чата.

Эндпоинты:
- GET /{session_id} - История диалога пользователя с ботом
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from nutrition_admin.backend.database import get_db_session
from nutrition_admin.backend.db.models import ChatHistory
from nutrition_admin.backend.models.chat import ChatMessage
from nutrition_admin.backend.utils.chat import normalize_chat_message

router = APIRouter()
logger = logging.getLogger("admin.routers.chat")


@router.get("/{session_id}", response_model=List[ChatMessage])
async def get_chat_history(
    session_id: str,
    db: AsyncSession = Depends(get_db_session),
):
    """
    История чата в хронологическом порядке.

    session_id в n8n совпадает с chat_id пользователя, но хранится строкой.
    """
    try:
        result = await db.execute(
            select(ChatHistory.id, ChatHistory.message)
            .where(ChatHistory.session_id == session_id)
            .order_by(ChatHistory.id.asc())
        )
        return [normalize_chat_message(row.id, row.message) for row in result]
    except Exception as e:
        logger.error(f"Ошибка получения истории чата {session_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch chat history",
        )
