# -*- coding: utf-8 -*-
"""
Разбор числовых query-параметров.

Фронтенд передаёт параметры как есть из URL, поэтому мусор
не должен приводить к 422: берём ведущее целое, как parseInt в JS.
"""

import re
from typing import Optional

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_CHAT_ID = re.compile(r"-?\d+")


def parse_leading_int(raw: Optional[str]) -> Optional[int]:
    """
    Возвращает ведущее целое из строки или None.

    >>> parse_leading_int("30")
    30
    >>> parse_leading_int(" 12days")
    12
    >>> parse_leading_int("abc") is None
    True
    """
    if raw is None:
        return None
    match = _LEADING_INT.match(raw)
    if not match:
        return None
    return int(match.group(1))


def clamp_int(raw: Optional[str], default: int, minimum: int, maximum: int) -> int:
    """
    Разбирает параметр и зажимает его в [minimum, maximum].

    Нечисловое значение заменяется на default (default тоже зажимается).
    """
    value = parse_leading_int(raw)
    if value is None:
        value = default
    return min(max(value, minimum), maximum)


def parse_chat_id(raw: str) -> Optional[int]:
    """
    Строгий разбор chat_id из пути: только целое (групповые чаты отрицательные).
    """
    raw = raw.strip()
    if not _CHAT_ID.fullmatch(raw):
        return None
    return int(raw)
