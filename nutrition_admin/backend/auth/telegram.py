"""
Валидация initData Telegram Mini App согласно официальной спецификации.

https://core.telegram.org/bots/webapps#validating-data-received-via-the-mini-app
"""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl


class InitDataError(Exception):
    """
    Исключение при некорректных подписи, сроке или структуре initData.
    """


@dataclass(frozen=True)
class InitDataUser:
    """
    Пользователь Telegram, открывший Mini App.
    """

    id: int
    first_name: str
    last_name: str | None
    username: str | None
    language_code: str | None


@dataclass(frozen=True)
class InitData:
    """
    Разобранный и проверенный initData.
    """

    auth_date: int
    query_id: str | None
    user: InitDataUser | None
    raw: Dict[str, str]


def _build_check_string(data: Dict[str, str]) -> str:
    """
    Формирует строку для вычисления подписи.
    """
    pairs = [f"{key}={value}" for key, value in sorted(data.items())]
    return "\n".join(pairs)


def sign_init_data(data: Dict[str, str], bot_token: str) -> str:
    """
    Вычисляет hash для набора полей initData.
    """
    secret_key = hmac.new(b"WebAppData", bot_token.encode("utf-8"), hashlib.sha256).digest()
    return hmac.new(secret_key, _build_check_string(data).encode("utf-8"), hashlib.sha256).hexdigest()


def _parse_user(payload: str) -> InitDataUser:
    try:
        user_dict = json.loads(payload)
        return InitDataUser(
            id=int(user_dict["id"]),
            first_name=user_dict.get("first_name", ""),
            last_name=user_dict.get("last_name"),
            username=user_dict.get("username"),
            language_code=user_dict.get("language_code"),
        )
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as exc:
        raise InitDataError("не удалось разобрать user из initData") from exc


def validate_init_data(
    init_data: str,
    bot_token: str,
    expires_in: int = 3600,
    now: Optional[float] = None,
) -> InitData:
    """
    Проверяет подпись и срок действия initData.

    Алгоритм:
    1. Разбираем query-string, извлекаем hash
    2. data-check-string: остальные поля `key=value`, отсортированные, через `\\n`
    3. secret_key = HMAC-SHA256(key="WebAppData", msg=bot_token)
    4. Сравниваем HMAC-SHA256(secret_key, data-check-string) с hash
    5. auth_date не старше expires_in секунд (0 отключает проверку)

    Raises:
        InitDataError: если данные не прошли проверку
    """
    if not init_data:
        raise InitDataError("initData отсутствует")

    items = dict(parse_qsl(init_data, keep_blank_values=True))
    received_hash = items.pop("hash", None)
    if not received_hash:
        raise InitDataError("hash отсутствует в initData")

    expected_hash = sign_init_data(items, bot_token)
    if not hmac.compare_digest(received_hash, expected_hash):
        raise InitDataError("подпись initData невалидна")

    auth_date_raw = items.get("auth_date")
    if not auth_date_raw:
        raise InitDataError("auth_date отсутствует в initData")
    try:
        auth_date = int(auth_date_raw)
    except ValueError as exc:
        raise InitDataError("auth_date повреждена") from exc

    current = time.time() if now is None else now
    if expires_in > 0 and current - auth_date > expires_in:
        raise InitDataError("initData устарела")

    user_payload = items.get("user")
    user = _parse_user(user_payload) if user_payload else None

    return InitData(
        auth_date=auth_date,
        query_id=items.get("query_id"),
        user=user,
        raw=items,
    )


def parse_authorization_header(header: Optional[str]) -> Optional[str]:
    """
    Извлекает initData из заголовка `Authorization: tma <initData>`.

    Возвращает None, если схема не `tma` или данные пустые.
    """
    if not header:
        return None
    auth_type, _, auth_data = header.partition(" ")
    if auth_type != "tma" or not auth_data.strip():
        return None
    return auth_data.strip()


def init_data_as_dict(init_data: InitData) -> Dict[str, Any]:
    """
    Сериализуемое представление initData для логов.
    """
    return {
        "auth_date": init_data.auth_date,
        "query_id": init_data.query_id,
        "user_id": init_data.user.id if init_data.user else None,
        "username": init_data.user.username if init_data.user else None,
    }
