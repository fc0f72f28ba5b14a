# -*- coding: utf-8 -*-
"""
FastAPI зависимости для авторизации в админ-панели.

Mini App передаёт подписанный Telegram initData в заголовке
`Authorization: tma <initData>`.
"""

import logging
from typing import Optional

from fastapi import Header, HTTPException, status

from nutrition_admin.backend.config import admin_settings
from nutrition_admin.backend.auth.telegram import (
    InitData,
    InitDataError,
    init_data_as_dict,
    parse_authorization_header,
    validate_init_data,
)

logger = logging.getLogger("admin.auth")

MISSING_HEADER_MESSAGE = "Unauthorized: Missing or invalid authorization header"
INVALID_INIT_DATA_MESSAGE = "Invalid init data"


async def require_init_data(
    authorization: Optional[str] = Header(None),
) -> Optional[InitData]:
    """
    Проверяет initData из заголовка Authorization.

    Без BOT_TOKEN проверка отключена (локальная разработка),
    зависимость возвращает None.

    Raises:
        HTTPException: 401 при отсутствии заголовка или невалидной подписи
    """
    if not admin_settings.auth_enabled:
        return None

    raw_init_data = parse_authorization_header(authorization)
    if raw_init_data is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=MISSING_HEADER_MESSAGE,
        )

    try:
        init_data = validate_init_data(
            raw_init_data,
            admin_settings.BOT_TOKEN,
            expires_in=admin_settings.INIT_DATA_EXPIRES_IN,
        )
    except InitDataError as e:
        logger.warning(f"Ошибка проверки initData: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_INIT_DATA_MESSAGE,
        )

    logger.debug(f"initData принят: {init_data_as_dict(init_data)}")
    return init_data
