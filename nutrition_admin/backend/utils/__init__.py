# -*- coding: utf-8 -*-
"""
Утилиты админ-панели.
"""

from nutrition_admin.backend.utils.chat import normalize_chat_message
from nutrition_admin.backend.utils.params import clamp_int, parse_chat_id, parse_leading_int

__all__ = [
    "normalize_chat_message",
    "clamp_int",
    "parse_chat_id",
    "parse_leading_int",
]
