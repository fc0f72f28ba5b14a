# -*- coding: utf-8 -*-
"""
Модуль работы с базой данных для админ-панели.

Таблицы принадлежат n8n-воркфлоу, админка их только читает.
Предоставляет асинхронные сессии для FastAPI.
"""

import logging
from typing import Any, AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy import text

from nutrition_admin.backend.config import admin_settings

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict[str, Any]:
    """Параметры движка: размер пула имеет смысл только для PostgreSQL."""
    options: dict[str, Any] = {
        "echo": admin_settings.DEBUG,
        "pool_pre_ping": True,  # Проверка соединения перед использованием
    }
    if make_url(url).get_backend_name() == "postgresql":
        options["pool_size"] = admin_settings.DB_POOL_SIZE
        options["max_overflow"] = admin_settings.DB_MAX_OVERFLOW
    return options


engine = create_async_engine(
    admin_settings.database_url,
    **_engine_options(admin_settings.database_url),
)

# Фабрика асинхронных сессий
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency для получения сессии БД в FastAPI.

    Yields:
        AsyncSession: Асинхронная сессия SQLAlchemy
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception as e:
            logger.error(f"Ошибка в сессии БД: {e}")
            await session.rollback()
            raise


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Dependency, отдающая фабрику сессий.

    Нужна там, где запросы выполняются параллельно: одна AsyncSession
    не допускает конкурентных execute().
    """
    return async_session_factory


async def init_db() -> None:
    """
    Проверяет доступность базы данных при старте приложения.
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Подключение к базе данных установлено")
    except Exception as e:
        logger.error(f"Не удалось подключиться к базе данных: {e}")
        raise


async def close_db() -> None:
    """
    Закрытие подключения к БД.

    Вызывается при остановке приложения.
    """
    await engine.dispose()
    logger.info("Подключение к базе данных закрыто")
