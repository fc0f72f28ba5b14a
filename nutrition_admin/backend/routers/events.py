# -*- coding: utf-8 -*-
"""
API роутер событий пользователя (нажатия кнопок, шаги воронки).

Эндпоинты:
- GET /{chat_id} - События пользователя, опционально по типу
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from nutrition_admin.backend.database import get_db_session
from nutrition_admin.backend.db.models import UserEvent
from nutrition_admin.backend.models.chat import UserEventResponse
from nutrition_admin.backend.utils.params import parse_chat_id

router = APIRouter()
logger = logging.getLogger("admin.routers.events")


@router.get("/{chat_id}", response_model=List[UserEventResponse])
async def get_user_events(
    chat_id: str,
    event_type: Optional[str] = Query(None, alias="type", description="Фильтр по event_type"),
    db: AsyncSession = Depends(get_db_session),
):
    """
    События пользователя по возрастанию времени.
    """
    chat_id_value = parse_chat_id(chat_id)
    if chat_id_value is None:
        return []

    query = select(
        UserEvent.id,
        UserEvent.chat_id,
        UserEvent.event_type,
        UserEvent.event_data,
        UserEvent.language,
        UserEvent.workflow_name,
        UserEvent.created_at,
    ).where(UserEvent.chat_id == chat_id_value)

    if event_type:
        query = query.where(UserEvent.event_type == event_type)

    query = query.order_by(UserEvent.created_at.asc())

    try:
        result = await db.execute(query)
        return [dict(row) for row in result.mappings()]
    except Exception as e:
        logger.error(f"Ошибка получения событий пользователя {chat_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch user events",
        )
