# -*- coding: utf-8 -*-
"""
API роутер статистики.

Эндпоинты:
- GET / - Сводная статистика: итоги, распределение по целям и этапам воронки
"""

import asyncio
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy import Integer, cast, desc, func, select

from nutrition_admin.backend.database import get_session_factory
from nutrition_admin.backend.db.models import UserNutrition
from nutrition_admin.backend.models.stats import StatsResponse

router = APIRouter()
logger = logging.getLogger("admin.routers.stats")


def _rounded_avg(column):
    return cast(func.round(func.avg(column)), Integer)


TOTALS_QUERY = select(
    func.count().label("total_users"),
    func.count().filter(UserNutrition.is_buyer.is_(True)).label("buyers"),
    func.count().filter(UserNutrition.is_buyer.is_(False)).label("leads"),
    _rounded_avg(UserNutrition.calories).label("avg_calories"),
    _rounded_avg(UserNutrition.protein).label("avg_protein"),
    _rounded_avg(UserNutrition.fats).label("avg_fats"),
    _rounded_avg(UserNutrition.carbs).label("avg_carbs"),
).select_from(UserNutrition)

GOAL_DISTRIBUTION_QUERY = (
    select(
        func.coalesce(UserNutrition.goal, "unknown").label("goal"),
        func.count().label("count"),
    )
    .group_by(UserNutrition.goal)
    .order_by(desc("count"))
)

_stage = func.coalesce(UserNutrition.funnel_stage, 0).label("stage")

FUNNEL_DISTRIBUTION_QUERY = (
    select(_stage, func.count().label("count"))
    .group_by(UserNutrition.funnel_stage)
    .order_by(_stage)
)


async def _fetch_one(session_factory: async_sessionmaker[AsyncSession], query) -> dict[str, Any]:
    async with session_factory() as session:
        result = await session.execute(query)
        return dict(result.mappings().one())


async def _fetch_all(session_factory: async_sessionmaker[AsyncSession], query) -> list[dict[str, Any]]:
    async with session_factory() as session:
        result = await session.execute(query)
        return [dict(row) for row in result.mappings()]


@router.get("", response_model=StatsResponse)
async def get_stats(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
):
    """
    Сводная статистика для Dashboard.

    Три агрегата независимы и выполняются параллельно,
    каждый в своей сессии.
    """
    try:
        totals, goal_distribution, funnel_distribution = await asyncio.gather(
            _fetch_one(session_factory, TOTALS_QUERY),
            _fetch_all(session_factory, GOAL_DISTRIBUTION_QUERY),
            _fetch_all(session_factory, FUNNEL_DISTRIBUTION_QUERY),
        )
    except Exception as e:
        logger.error(f"Ошибка получения статистики: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch stats",
        )

    return {
        **totals,
        "goal_distribution": goal_distribution,
        "funnel_distribution": funnel_distribution,
    }
