# -*- coding: utf-8 -*-
"""
Системные эндпоинты (без авторизации).

Эндпоинты:
- GET /health - Проверка работоспособности
- GET /api - Информация об API
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from nutrition_admin.backend.config import admin_settings
from nutrition_admin.backend.models.system import HealthResponse, ApiInfoResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Проверка работоспособности сервиса."""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
    }


@router.get("/api", response_model=ApiInfoResponse)
async def api_info():
    """Информация об API."""
    return {
        "name": admin_settings.APP_NAME,
        "version": admin_settings.APP_VERSION,
        "docs": "/api/docs" if admin_settings.DEBUG else None,
    }
