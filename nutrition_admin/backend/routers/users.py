# -*- coding: utf-8 -*-
"""
API роутер пользователей бота.

Эндпоинты:
- GET / - Список пользователей с фильтрами и сортировкой
- GET /recent - Последние зарегистрированные пользователи
- GET /{chat_id} - Карточка пользователя
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import String, cast, or_, select

from nutrition_admin.backend.database import get_db_session
from nutrition_admin.backend.db.models import UserNutrition
from nutrition_admin.backend.models.user import UserRow, UserDetail
from nutrition_admin.backend.utils.params import clamp_int, parse_chat_id, parse_leading_int

router = APIRouter()
logger = logging.getLogger("admin.routers.users")

# Колонки списка пользователей
LIST_COLUMNS = (
    UserNutrition.chat_id,
    UserNutrition.username,
    UserNutrition.first_name,
    UserNutrition.sex,
    UserNutrition.age,
    UserNutrition.weight,
    UserNutrition.height,
    UserNutrition.goal,
    UserNutrition.calories,
    UserNutrition.protein,
    UserNutrition.fats,
    UserNutrition.carbs,
    UserNutrition.funnel_stage,
    UserNutrition.is_buyer,
    UserNutrition.get_food,
    UserNutrition.created_at,
)

# Карточка: те же колонки плюс анкета
DETAIL_COLUMNS = LIST_COLUMNS + (
    UserNutrition.activity_level,
    UserNutrition.allergies,
    UserNutrition.excluded_foods,
    UserNutrition.language,
)

# Разрешённые значения ?sort= и соответствующие колонки.
# Имя колонки никогда не берётся из запроса напрямую.
SORT_COLUMNS = {
    "name": UserNutrition.first_name,
    "calories": UserNutrition.calories,
    "funnel": UserNutrition.funnel_stage,
    "age": UserNutrition.age,
    "weight": UserNutrition.weight,
}

RECENT_DEFAULT_DAYS = 7
RECENT_MAX_DAYS = 365
RECENT_DEFAULT_LIMIT = 20
RECENT_MAX_LIMIT = 100


def build_user_filters(
    search: Optional[str] = None,
    status_filter: Optional[str] = None,
    goal: Optional[str] = None,
    funnel_stage: Optional[str] = None,
) -> List[Any]:
    """Собирает условия WHERE для списка пользователей."""
    conditions: List[Any] = []

    # Поиск по имени, username, chat_id
    if search and search.strip():
        pattern = f"%{search.strip()}%"
        conditions.append(or_(
            UserNutrition.first_name.ilike(pattern),
            UserNutrition.username.ilike(pattern),
            cast(UserNutrition.chat_id, String).ilike(pattern),
        ))

    # Статус: покупатель / лид
    if status_filter == "buyer":
        conditions.append(UserNutrition.is_buyer.is_(True))
    elif status_filter == "lead":
        conditions.append(UserNutrition.is_buyer.is_(False))

    if goal and goal.strip():
        conditions.append(UserNutrition.goal == goal.strip())

    # Этап воронки: нечисловое значение игнорируется
    stage = parse_leading_int(funnel_stage)
    if stage is not None:
        conditions.append(UserNutrition.funnel_stage == stage)

    return conditions


def build_user_order(sort: Optional[str] = None, order: Optional[str] = None) -> List[Any]:
    """
    Собирает ORDER BY для списка пользователей.

    Без sort: сначала покупатели, затем по этапу воронки и имени.
    Неизвестный sort сортирует по этапу воронки в заданном направлении.
    """
    ascending = order == "asc"

    def directed(column):
        return (column.asc() if ascending else column.desc()).nulls_last()

    if not sort:
        return [
            UserNutrition.is_buyer.desc(),
            UserNutrition.funnel_stage.desc(),
            UserNutrition.first_name,
        ]

    column = SORT_COLUMNS.get(sort)
    if column is None:
        return [UserNutrition.is_buyer.desc(), directed(UserNutrition.funnel_stage)]
    return [directed(column)]


@router.get("", response_model=List[UserRow])
async def list_users(
    search: Optional[str] = Query(None, description="Поиск по имени, username или chat_id"),
    status_filter: Optional[str] = Query(None, alias="status", description="buyer / lead"),
    goal: Optional[str] = Query(None, description="Цель"),
    funnel_stage: Optional[str] = Query(None, description="Этап воронки"),
    sort: Optional[str] = Query(None, description="name / calories / funnel / age / weight"),
    order: Optional[str] = Query(None, description="asc / desc"),
    db: AsyncSession = Depends(get_db_session),
):
    """
    Список пользователей с фильтрацией и сортировкой.
    """
    query = (
        select(*LIST_COLUMNS)
        .where(*build_user_filters(search, status_filter, goal, funnel_stage))
        .order_by(*build_user_order(sort, order))
    )

    try:
        result = await db.execute(query)
        return [dict(row) for row in result.mappings()]
    except Exception as e:
        logger.error(f"Ошибка получения пользователей: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch users",
        )


@router.get("/recent", response_model=List[UserRow])
async def list_recent_users(
    days: Optional[str] = Query(None, description="За сколько дней (1-365)"),
    limit: Optional[str] = Query(None, description="Максимум записей (1-100)"),
    db: AsyncSession = Depends(get_db_session),
):
    """
    Последние зарегистрированные пользователи, новые сверху.

    Некорректные days/limit не дают 422: берётся значение по умолчанию,
    числа зажимаются в допустимый диапазон.
    """
    days_value = clamp_int(days, RECENT_DEFAULT_DAYS, 1, RECENT_MAX_DAYS)
    limit_value = clamp_int(limit, RECENT_DEFAULT_LIMIT, 1, RECENT_MAX_LIMIT)
    since = datetime.now(timezone.utc) - timedelta(days=days_value)

    logger.info(f"[users.recent] Запрос новых пользователей: days={days_value}, limit={limit_value}")

    query = (
        select(*LIST_COLUMNS)
        .where(UserNutrition.created_at >= since)
        .order_by(UserNutrition.created_at.desc())
        .limit(limit_value)
    )

    try:
        result = await db.execute(query)
        rows = [dict(row) for row in result.mappings()]
    except Exception as e:
        logger.error(f"[users.recent] Ошибка: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch recent users",
        )

    logger.info(f"[users.recent] Найдено пользователей: {len(rows)}")
    return rows


@router.get("/{chat_id}", response_model=UserDetail)
async def get_user(
    chat_id: str,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Карточка пользователя по chat_id.
    """
    chat_id_value = parse_chat_id(chat_id)

    row = None
    if chat_id_value is not None:
        try:
            result = await db.execute(
                select(*DETAIL_COLUMNS).where(UserNutrition.chat_id == chat_id_value)
            )
            row = result.mappings().one_or_none()
        except Exception as e:
            logger.error(f"Ошибка получения пользователя {chat_id}: {e}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to fetch user",
            )

    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    return dict(row)
