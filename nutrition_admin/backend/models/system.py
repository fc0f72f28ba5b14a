# -*- coding: utf-8 -*-
"""
Pydantic схемы системных эндпоинтов.
"""

from typing import Optional
from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Ответ /health."""
    status: str
    timestamp: str


class ApiInfoResponse(BaseModel):
    """Ответ /api."""
    name: str
    version: str
    docs: Optional[str] = None


class ErrorResponse(BaseModel):
    """Тело любой ошибки API."""
    error: str
