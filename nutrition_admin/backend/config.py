# -*- coding: utf-8 -*-
"""
Конфигурация админ-панели.

Настройки загружаются из переменных окружения.
Использует Pydantic Settings для валидации.
"""

from functools import lru_cache
from urllib.parse import quote_plus
from pydantic_settings import BaseSettings, SettingsConfigDict


class AdminSettings(BaseSettings):
    """
    Настройки админ-панели.

    Переменные окружения читаются без учёта регистра, .env поддерживается.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # === Основные настройки ===

    APP_NAME: str = "Nutrition Bot Admin"
    APP_VERSION: str = "1.0.0"

    # Режим отладки (включает /api/docs)
    DEBUG: bool = False

    # === Сервер ===

    ADMIN_HOST: str = "0.0.0.0"
    PORT: int = 3001

    # CORS разрешённые домены (через запятую).
    # Пусто = отражаем любой Origin (Mini App открывается с домена Telegram)
    ADMIN_CORS_ORIGINS: str = ""

    # Собранный фронтенд Mini App (npm run build), раздаётся если существует
    FRONTEND_DIST: str = "public"

    # === База данных ===

    # Таблицы наполняет n8n, админка только читает.
    # Поддерживаем оба варианта:
    # - DATABASE_URL (если задан явно)
    # - либо сборка из POSTGRES_HOST/DB/USER/PASSWORD/PORT
    DATABASE_URL: str = ""

    POSTGRES_HOST: str = "localhost"
    POSTGRES_DB: str = "n8n"
    POSTGRES_USER: str = "n8n"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_PORT: int = 5432

    # Настройки пула соединений
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    # === Telegram ===

    # Токен бота для проверки подписи initData.
    # Пустой токен отключает проверку (локальная разработка)
    BOT_TOKEN: str = ""

    # Срок жизни initData в секундах (0 = без ограничения)
    INIT_DATA_EXPIRES_IN: int = 3600

    # === Логирование ===

    ADMIN_LOG_LEVEL: str = "INFO"
    ADMIN_LOG_FILE: str = "logs/admin.log"
    ADMIN_LOG_MAX_SIZE_MB: int = 50
    ADMIN_LOG_BACKUP_COUNT: int = 3

    @property
    def cors_origins_list(self) -> list[str]:
        """Возвращает список разрешённых CORS origins."""
        return [origin.strip() for origin in self.ADMIN_CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def auth_enabled(self) -> bool:
        """Проверка initData включена только при заданном BOT_TOKEN."""
        return bool(self.BOT_TOKEN.strip())

    @property
    def database_url(self) -> str:
        """
        Возвращает итоговый URL подключения к PostgreSQL.

        Приоритет:
        1) DATABASE_URL (если задан)
        2) Сборка из POSTGRES_*

        Логин и пароль кодируются через URL-encoding, чтобы спецсимволы
        (`@`, `&`, `:`) не ломали строку подключения. Кавычки вокруг
        значений из .env убираются.
        """
        if self.DATABASE_URL and self.DATABASE_URL.strip():
            return self.DATABASE_URL.strip()

        user = (self.POSTGRES_USER or "").strip().strip('"').strip("'")
        password_raw = (self.POSTGRES_PASSWORD or "").strip()
        password_raw = password_raw.strip('"').strip("'")

        user_enc = quote_plus(user)
        password_enc = quote_plus(password_raw)

        host = (self.POSTGRES_HOST or "localhost").strip()
        db = (self.POSTGRES_DB or "").strip()
        port = int(self.POSTGRES_PORT or 5432)

        return f"postgresql+asyncpg://{user_enc}:{password_enc}@{host}:{port}/{db}"


@lru_cache()
def get_admin_settings() -> AdminSettings:
    """
    Получает singleton экземпляр настроек.

    Кэшируется для производительности.
    """
    return AdminSettings()


# Глобальный экземпляр настроек
admin_settings = get_admin_settings()
