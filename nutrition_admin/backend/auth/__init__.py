# -*- coding: utf-8 -*-
"""
Модуль аутентификации админ-панели.

Проверка подписанного initData Telegram Mini App.
"""

from nutrition_admin.backend.auth.telegram import (
    InitData,
    InitDataError,
    InitDataUser,
    validate_init_data,
)
from nutrition_admin.backend.auth.dependencies import require_init_data

__all__ = [
    "InitData",
    "InitDataError",
    "InitDataUser",
    "validate_init_data",
    "require_init_data",
]
