# -*- coding: utf-8 -*-
"""
Pydantic схемы для статистики.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


class GoalBucket(BaseModel):
    """Количество пользователей с данной целью."""
    goal: str = Field(..., description="Цель ('unknown' если не указана)")
    count: int = Field(..., description="Количество пользователей")


class FunnelBucket(BaseModel):
    """Количество пользователей на этапе воронки."""
    stage: int = Field(..., description="Этап воронки (0 если не указан)")
    count: int = Field(..., description="Количество пользователей")


class StatsResponse(BaseModel):
    """Сводная статистика для Dashboard."""
    total_users: int = Field(0, description="Всего пользователей")
    buyers: int = Field(0, description="Покупатели")
    leads: int = Field(0, description="Лиды")
    avg_calories: Optional[int] = Field(None, description="Средняя норма калорий")
    avg_protein: Optional[int] = Field(None, description="Средняя норма белка")
    avg_fats: Optional[int] = Field(None, description="Средняя норма жиров")
    avg_carbs: Optional[int] = Field(None, description="Средняя норма углеводов")
    goal_distribution: List[GoalBucket] = Field(default_factory=list)
    funnel_distribution: List[FunnelBucket] = Field(default_factory=list)
