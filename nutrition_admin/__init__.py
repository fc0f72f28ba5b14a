# -*- coding: utf-8 -*-
"""
Админ-панель бота-нутрициолога.

Пакеты:
- backend: REST API поверх базы, которую наполняет n8n
"""
