# -*- coding: utf-8 -*-
"""
Pydantic схемы пользователей бота.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class UserRow(BaseModel):
    """Строка списка пользователей."""
    chat_id: int = Field(..., description="Telegram chat ID")
    username: Optional[str] = Field(None, description="Telegram username")
    first_name: Optional[str] = Field(None, description="Имя")
    sex: Optional[str] = Field(None, description="Пол (male/female)")
    age: Optional[int] = Field(None, description="Возраст")
    weight: Optional[float] = Field(None, description="Вес, кг")
    height: Optional[float] = Field(None, description="Рост, см")
    goal: Optional[str] = Field(None, description="Цель (weight_loss, muscle_gain, ...)")
    calories: Optional[int] = Field(None, description="Суточная норма калорий")
    protein: Optional[int] = Field(None, description="Белки, г")
    fats: Optional[int] = Field(None, description="Жиры, г")
    carbs: Optional[int] = Field(None, description="Углеводы, г")
    funnel_stage: Optional[int] = Field(None, description="Этап воронки")
    is_buyer: Optional[bool] = Field(None, description="Купил программу")
    get_food: Optional[bool] = Field(None, description="Получил план питания")
    created_at: Optional[datetime] = Field(None, description="Дата регистрации")

    class Config:
        from_attributes = True


class UserDetail(UserRow):
    """Карточка пользователя."""
    activity_level: Optional[str] = Field(None, description="Уровень активности")
    allergies: Optional[str] = Field(None, description="Аллергии")
    excluded_foods: Optional[str] = Field(None, description="Исключённые продукты")
    language: Optional[str] = Field(None, description="Язык общения")
