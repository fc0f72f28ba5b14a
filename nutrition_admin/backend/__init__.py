# -*- coding: utf-8 -*-
"""
FastAPI бэкенд для админ-панели (Telegram Mini App).

Модули:
- auth: Проверка initData Telegram Mini App
- db: ORM-модели внешних таблиц (только чтение)
- routers: API эндпоинты
- models: Pydantic схемы
- utils: Разбор параметров и нормализация сообщений
"""
